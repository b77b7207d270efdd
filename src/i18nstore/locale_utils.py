"""Language code utilities.

Centralizes the small amount of language-tag handling the fallback chain and
the HTTP adapters need: primary subtag extraction, BCP-47 to POSIX
conversion for Babel, and Babel-backed text direction lookup.

Python 3.13+.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

from i18nstore.constants import LANGUAGE_SEPARATOR

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "normalize_locale",
    "primary_subtag",
    "text_direction",
]


def primary_subtag(language: str) -> str | None:
    """Return the primary subtag of a region-qualified language code.

    Args:
        language: Language code (e.g., "en-GB", "zh-Hans-CN", "fr")

    Returns:
        Text before the first separator, or None if the code has no separator
        or nothing precedes it.

    Example:
        >>> primary_subtag("en-GB")
        'en'
        >>> primary_subtag("fr") is None
        True
    """
    head, sep, _ = language.partition(LANGUAGE_SEPARATOR)
    if not sep or not head:
        return None
    return head


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).

    Args:
        locale_code: BCP-47 locale code (e.g., "en-US", "pt-BR")

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Thread-safe via lru_cache internal locking.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def text_direction(locale_code: str, default: str = "ltr") -> str:
    """Return the script direction ("ltr" or "rtl") for a language code.

    Used to fill the ``dir`` attribute next to ``lang`` in rendered HTML.

    Args:
        locale_code: Language code (e.g., "ar", "he-IL", "en-GB")
        default: Direction returned for codes Babel does not know

    Returns:
        "ltr" or "rtl"

    Example:
        >>> text_direction("ar")
        'rtl'
        >>> text_direction("en-GB")
        'ltr'
    """
    from babel import UnknownLocaleError  # noqa: PLC0415

    try:
        return get_babel_locale(locale_code).text_direction
    except (UnknownLocaleError, ValueError, TypeError):
        return default
