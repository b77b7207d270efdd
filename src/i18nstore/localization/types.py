"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the localization package
and by user code when annotating Translator call sites.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping
from typing import Any

__all__ = [
    "Dictionary",
    "LanguageCode",
    "Namespace",
    "ResourceTree",
    "TranslationKey",
]

type LanguageCode = str
"""Language code as found in resource paths (e.g., 'en', 'en-GB', 'zh_Hant')."""

type Namespace = str
"""Dotted namespace prefix (e.g., 'errors', 'forms.address'); 'default' is the root."""

type TranslationKey = str
"""Dotted path to a value inside a namespace (e.g., 'title', 'fields.name')."""

type ResourceTree = Mapping[str, Any]
"""Arbitrarily nested mapping of keys to strings or structured content."""

type Dictionary = dict[LanguageCode, dict[str, Any]]
"""Merged resources keyed by language code."""
