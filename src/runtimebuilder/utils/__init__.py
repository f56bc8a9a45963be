"""
Runtime Builder Utils Module

- logger: Logging setup and configuration
- merge: Deep merge for dictionaries and precedence layers
- util: Key normalisation and KEY=VALUE parsing

Usage:
    from runtimebuilder.utils import setup_logger, deep_merge, merge_layers
"""

from .logger import setup_logger, parse_module_levels
from .merge import deep_merge, merge_layers
from .util import to_snake, parse_pairs

__all__ = [
    'setup_logger',
    'parse_module_levels',
    'deep_merge',
    'merge_layers',
    'to_snake',
    'parse_pairs',
]
