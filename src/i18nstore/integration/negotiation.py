"""Request language negotiation.

Framework-independent: callers pass plain mappings for the query string,
the cookies and the headers. The HTTP middleware is a thin adapter over
detect_languages().

Sources are consulted in fixed precedence, first non-empty wins:
    1. Query parameter (when NegotiationConfig.query names one)
    2. Language cookie (when NegotiationConfig.cookie_name names one)
    3. Accept-Language header (only when detection is on, and never "*")

Each comma-separated entry is reduced to its leading language tag, so
quality parameters ("fr;q=0.8") are stripped. Header order is kept as sent;
quality values are not used for sorting.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from i18nstore.constants import LANGUAGE_LIST_SEPARATOR, WILDCARD_LANGUAGE
from i18nstore.enums import LanguageSource

__all__ = [
    "Negotiation",
    "NegotiationConfig",
    "detect_languages",
    "filter_allowed",
    "parse_language_list",
    "select_languages",
]

_LANGUAGE_TAG = re.compile(r"^\s*([a-zA-Z-]+)")

ACCEPT_LANGUAGE_HEADER = "accept-language"


@dataclass(frozen=True, slots=True)
class NegotiationConfig:
    """Where to look for the request language.

    Attributes:
        query: Query parameter name (e.g., "lang"); None disables it
        cookie_name: Cookie name to read and write; None disables it
        detect: Fall back to the Accept-Language header
        allowed_langs: Allow-list; None allows every language
    """

    query: str | None = None
    cookie_name: str | None = None
    detect: bool = False
    allowed_langs: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        """Normalize allowed_langs to a tuple."""
        if isinstance(self.allowed_langs, str):
            object.__setattr__(self, "allowed_langs", (self.allowed_langs,))
        elif self.allowed_langs is not None:
            object.__setattr__(self, "allowed_langs", tuple(self.allowed_langs))


@dataclass(frozen=True, slots=True)
class Negotiation:
    """Outcome of detect_languages().

    Attributes:
        languages: Detected languages, highest priority first
        source: Where they were found
    """

    languages: tuple[str, ...]
    source: LanguageSource


def parse_language_list(value: str | Iterable[str] | None) -> list[str]:
    """Reduce a language list to bare language tags.

    Args:
        value: Comma-separated string ("en-GB,fr;q=0.8") or sequence of entries

    Returns:
        Language tags in input order; entries without a tag are dropped

    Example:
        >>> parse_language_list("en-GB, fr;q=0.8, *;q=0.1")
        ['en-GB', 'fr']
    """
    if value is None:
        return []
    entries = value.split(LANGUAGE_LIST_SEPARATOR) if isinstance(value, str) else value
    languages: list[str] = []
    for entry in entries:
        match = _LANGUAGE_TAG.match(entry)
        if match is not None:
            languages.append(match.group(1))
    return languages


def filter_allowed(
    languages: Iterable[str], allowed: Iterable[str] | None
) -> list[str]:
    """Intersect detected languages with an allow-list, keeping detected order.

    Args:
        languages: Detected languages
        allowed: Allow-list; None keeps every language

    Returns:
        Languages present in the allow-list, without duplicates

    Example:
        >>> filter_allowed(["fr", "es", "de", "it"], ["de", "en"])
        ['de']
    """
    if allowed is None:
        return list(languages)
    permitted = set(allowed)
    return list(dict.fromkeys(language for language in languages if language in permitted))


def select_languages(
    value: str | Iterable[str] | None, allowed: Iterable[str] | None = None
) -> list[str]:
    """Parse a language list and apply the allow-list."""
    return filter_allowed(parse_language_list(value), allowed)


def detect_languages(
    query: Mapping[str, str],
    cookies: Mapping[str, str],
    headers: Mapping[str, str],
    config: NegotiationConfig,
) -> Negotiation:
    """Detect the request languages.

    Args:
        query: Query parameters
        cookies: Request cookies
        headers: Request headers; Accept-Language is read as "accept-language"
        config: Negotiation settings

    Returns:
        Negotiation with the filtered language list and its source

    Example:
        >>> config = NegotiationConfig(query="lang", cookie_name="lang")
        >>> detect_languages({"lang": "fr,en"}, {"lang": "de"}, {}, config)
        Negotiation(languages=('fr', 'en'), source=<LanguageSource.QUERY: 'query'>)
    """
    raw: str | None = None
    source = LanguageSource.NONE

    if config.query and query.get(config.query):
        raw, source = query[config.query], LanguageSource.QUERY
    elif config.cookie_name and cookies.get(config.cookie_name):
        raw, source = cookies[config.cookie_name], LanguageSource.COOKIE
    elif config.detect:
        header = headers.get(ACCEPT_LANGUAGE_HEADER)
        if header and header.strip() != WILDCARD_LANGUAGE:
            raw, source = header, LanguageSource.HEADER

    languages = select_languages(raw, config.allowed_langs)
    return Negotiation(tuple(languages), source)
