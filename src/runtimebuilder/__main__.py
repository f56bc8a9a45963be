"""
Runtime Builder - Main entry point

Allows `python -m runtimebuilder`, delegating to cli.py.
"""

from .cli import main

if __name__ == "__main__":
    main()
