"""
Some utils for RuntimeBuilder
"""

from typing import Dict, Iterable
import re

from ..exceptions import ConfigValidationError

# ----------------------
#
#  Name Converting
#
# ----------------------

s_pattern = re.compile(r'^[a-z0-9]+(_[a-z0-9]+)*$')
cpn = re.compile(r'(?<!^)(?=[A-Z])')
cp_pattern = re.compile(r'^[a-zA-Z][a-zA-Z0-9]*$')


def to_snake(name: str) -> str:
    """
    Convert camelCase or PascalCase to snake_case, leaving snake_case untouched.
    """
    if s_pattern.fullmatch(name):
        return name
    if not cp_pattern.fullmatch(name):
        raise ConfigValidationError(f"Only snake_case, PascalCase and camelCase keys are supported, but '{name}' got.")
    return cpn.sub('_', name).lower()


# ----------------------
#
#  KEY=VALUE pairs
#
# ----------------------

def parse_pairs(items: Iterable[str], what: str = "option") -> Dict[str, str]:
    """
    Turn ["key=value", ...] into a dict. Later duplicates win.
    """
    parsed: Dict[str, str] = {}
    for item in items:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ConfigValidationError(f"Invalid {what} '{item}', expected KEY=VALUE.")
        parsed[key] = value.strip()
    return parsed
