"""Flatten nested mappings into dotted keys and back."""

from collections.abc import Mapping
from typing import Any

DEFAULT_SEPARATOR = "."


def flatten_object(obj: Any, separator: str = DEFAULT_SEPARATOR) -> dict[str, Any]:
    """Collapse nested mappings into a single-level dict of joined keys.

    ``{"foo": "bar", "baz": {"foo": "bar"}}`` becomes
    ``{"foo": "bar", "baz.foo": "bar"}``. Lists and scalars are leaves,
    empty mappings vanish, and non-mapping input is treated as ``{}``.
    """
    if not isinstance(obj, Mapping):
        return {}
    flat: dict[str, Any] = {}
    for key, value in obj.items():
        if isinstance(value, Mapping):
            for sub_key, sub_value in flatten_object(value, separator).items():
                flat[f"{key}{separator}{sub_key}"] = sub_value
        else:
            flat[str(key)] = value
    return flat


def unflatten_object(obj: Any, separator: str = DEFAULT_SEPARATOR) -> dict[str, Any]:
    """Expand joined keys back into nested dicts.

    When a leaf and a deeper key claim the same position, the deeper key
    wins and the leaf is dropped.
    """
    if not isinstance(obj, Mapping):
        return {}
    nested: dict[str, Any] = {}
    for key, value in obj.items():
        *parents, leaf = str(key).split(separator)
        node = nested
        for part in parents:
            child = node.get(part)
            if not isinstance(child, dict):
                child = node[part] = {}
            node = child
        if isinstance(node.get(leaf), dict) and not isinstance(value, Mapping):
            continue
        node[leaf] = value
    return nested
