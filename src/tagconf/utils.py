"""Utility functions for tagconf."""

from typing import Any


def deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Merge settings mappings, letting overlay win.

    Nested mappings are merged key by key. Anything else in overlay,
    including lists of override tags, replaces the base value outright.
    Neither argument is modified.

    Examples:
        >>> user = {"overrides": {"active": ["ubuntu"]}, "editor": "vim"}
        >>> local = {"overrides": {"active": ["production"]}}
        >>> deep_merge(user, local)
        {'overrides': {'active': ['production']}, 'editor': 'vim'}

        >>> deep_merge({}, {"overrides": {}})
        {'overrides': {}}
    """
    merged = dict(base)

    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value

    return merged
