"""Deep merge and namespace nesting for resource trees.

Merge semantics:
- Mappings merge recursively; keys present in both are merged again.
- Every other value (strings, numbers, lists, None) is atomic: the later
  source replaces the earlier one. Lists are never concatenated.
- The result shares no mutable state with any source, so a published
  dictionary cannot be changed through the mappings it was built from.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from i18nstore.constants import DEFAULT_NAMESPACE

__all__ = [
    "deep_merge",
    "nest_namespace",
]


def _clone(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _clone(item) for key, item in value.items()}
    return copy.deepcopy(value)


def _merge_into(target: dict[str, Any], source: Mapping[str, Any]) -> None:
    for key, value in source.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            _merge_into(current, value)
        else:
            target[key] = _clone(value)


def deep_merge(*sources: Mapping[str, Any] | None) -> dict[str, Any]:
    """Deep-merge mappings left to right into a new dict.

    Later sources win on conflicting leaves. None sources are skipped.

    Args:
        *sources: Mappings in increasing precedence

    Returns:
        New merged dict

    Example:
        >>> deep_merge({"a": {"x": 1, "y": 1}}, {"a": {"y": 2}, "b": 3})
        {'a': {'x': 1, 'y': 2}, 'b': 3}
    """
    merged: dict[str, Any] = {}
    for source in sources:
        if source:
            _merge_into(merged, source)
    return merged


def nest_namespace(namespace: str, data: Any) -> Any:
    """Wrap parsed content under its dotted namespace path.

    Args:
        namespace: Namespace captured from the file path
        data: Parsed file content

    Returns:
        ``data`` unchanged for the default namespace, otherwise nested
        mappings, e.g. ``"a.b"`` -> ``{"a": {"b": data}}``
    """
    if namespace == DEFAULT_NAMESPACE:
        return data
    for part in reversed(namespace.split(".")):
        data = {part: data}
    return data
