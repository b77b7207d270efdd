"""Fallback-chain resolution over a dictionary snapshot.

Resolution walks languages, then namespaces, then keys, and returns the
first value found:

    for language in language_candidates(...):
        for namespace in namespace_candidates(...):
            for key in keys:
                lookup(dictionary[language], namespaced path of key)

A key matching in a lower-priority language never beats any key matching
in a higher-priority one; keys are only alternatives within one
language/namespace pair.

Everything here is pure and read-only: no I/O, no shared mutable state,
never raises for missing data. Safe to call from any number of threads.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from i18nstore.constants import DEFAULT_NAMESPACE
from i18nstore.locale_utils import primary_subtag

if TYPE_CHECKING:
    from i18nstore.localization.types import Dictionary

__all__ = [
    "as_list",
    "is_present",
    "language_candidates",
    "lookup",
    "namespace_candidates",
    "namespaced_path",
    "resolve",
]


def as_list(value: str | Iterable[str] | None) -> list[str]:
    """Normalize a single value, an iterable or None to a list."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


def language_candidates(
    requested: str | Iterable[str] | None, fallback: Iterable[str] = ()
) -> list[str]:
    """Build the ordered language candidate list.

    Requested languages come first in the order given, each followed by its
    primary subtag when region-qualified; configured fallback languages come
    last. Duplicates keep their first position.

    Args:
        requested: Requested language(s), highest priority first
        fallback: Configured fallback languages

    Returns:
        De-duplicated list of language codes

    Example:
        >>> language_candidates(["en-GB", "en-US"], ["en", "fr"])
        ['en-GB', 'en', 'en-US', 'fr']
    """
    languages = list(fallback)
    for language in reversed(as_list(requested)):
        primary = primary_subtag(language)
        if primary is not None:
            languages.insert(0, primary)
        languages.insert(0, language)
    # dict.fromkeys() removes duplicates while maintaining insertion order
    return list(dict.fromkeys(languages))


def namespace_candidates(
    requested: str | Iterable[str] | None, fallback: Iterable[str] = ()
) -> list[str]:
    """Build the ordered namespace candidate list.

    Args:
        requested: Requested namespace(s), highest priority first
        fallback: Configured fallback namespaces

    Returns:
        Requested namespaces then fallback namespaces, de-duplicated

    Example:
        >>> namespace_candidates("errors", ["default"])
        ['errors', 'default']
    """
    return list(dict.fromkeys([*as_list(requested), *fallback]))


def namespaced_path(namespace: str, key: str) -> str:
    """Return the dotted lookup path of key inside namespace."""
    if namespace == DEFAULT_NAMESPACE:
        return key
    return f"{namespace}.{key}"


def lookup(tree: Any, path: str) -> Any:
    """Traverse a nested structure along a dotted path.

    Mapping segments are looked up by key; digit segments index into lists.
    A top-level key spelled exactly like the whole path wins over traversal,
    so flat files with dotted keys resolve too.

    Args:
        tree: Nested mappings/lists
        path: Dotted path (e.g., "errors.required", "steps.0.title")

    Returns:
        Value at path, or None if any segment is missing
    """
    if isinstance(tree, Mapping) and path in tree:
        return tree[path]
    current = tree
    for part in path.split("."):
        if isinstance(current, Mapping):
            if part not in current:
                return None
            current = current[part]
        elif isinstance(current, Sequence) and not isinstance(current, str) and part.isdigit():
            index = int(part)
            if index >= len(current):
                return None
            current = current[index]
        else:
            return None
    return current


def is_present(value: Any) -> bool:
    """Check if a looked-up value counts as a translation (not None, not "")."""
    return value is not None and value != ""


def resolve(
    dictionary: Dictionary,
    keys: str | Iterable[str],
    *,
    languages: Iterable[str],
    namespaces: Iterable[str],
    default: Any = None,
    fallback_to_key: bool = True,
) -> Any:
    """Resolve the first available value across the fallback chain.

    Args:
        dictionary: Dictionary snapshot keyed by language
        keys: Candidate key or keys, in priority order
        languages: Language candidates (see language_candidates)
        namespaces: Namespace candidates (see namespace_candidates)
        default: Value returned when nothing resolves
        fallback_to_key: Return the first key when nothing resolves and no
            default is given

    Returns:
        Resolved string or structured value; otherwise default, the first
        key, or None

    Example:
        >>> data = {"en": {"errors": {"required": "Required"}}}
        >>> resolve(data, "required", languages=["fr", "en"], namespaces=["errors", "default"])
        'Required'
        >>> resolve(data, "missing.key", languages=["en"], namespaces=["default"])
        'missing.key'
    """
    key_list = as_list(keys)
    namespace_list = list(namespaces)

    for language in languages:
        tree = dictionary.get(language)
        if tree is None:
            continue
        for namespace in namespace_list:
            for key in key_list:
                value = lookup(tree, namespaced_path(namespace, key))
                if is_present(value):
                    return value

    if default is not None:
        return default
    if fallback_to_key and key_list:
        return key_list[0]
    return None
