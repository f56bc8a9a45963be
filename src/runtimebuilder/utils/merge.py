import copy
import logging
from typing import Dict, Any

logger = logging.getLogger(__name__)


def deep_merge(parent: Dict[str, Any], child: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merges a child dictionary into a parent dictionary.
        - Dictionaries are merged recursively.
        - All other types from the child overwrite the parent.
        - Keys absent from the child keep the parent's value.

    Neither argument is modified.
    """
    merged = copy.deepcopy(parent)
    for key, child_value in child.items():
        parent_value = merged.get(key)
        if isinstance(parent_value, dict) and isinstance(child_value, dict):
            merged[key] = deep_merge(parent_value, child_value)
        else:
            if key in merged:
                logger.debug(f"Overriding '{key}': {parent_value!r} -> {child_value!r}")
            merged[key] = copy.deepcopy(child_value)
    return merged


def merge_layers(*layers: Dict[str, Any]) -> Dict[str, Any]:
    """Merge layers in increasing precedence: each later layer wins over the earlier ones."""
    merged: Dict[str, Any] = {}
    for layer in layers:
        if layer:
            merged = deep_merge(merged, layer)
    return merged
