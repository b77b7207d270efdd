"""Enumerations for i18nstore type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class ResourceFormat(StrEnum):
    """Serialization format of a resource file, keyed by file extension.

    StrEnum provides automatic string conversion: str(ResourceFormat.JSON) == "json"
    """

    JSON = "json"
    """Strict JSON document"""

    YAML = "yaml"
    """YAML document (PyYAML safe loader)"""

    YML = "yml"
    """Short extension for YAML documents"""

    @property
    def is_yaml(self) -> bool:
        """True for both YAML spellings."""
        return self in (ResourceFormat.YAML, ResourceFormat.YML)


class LanguageSource(StrEnum):
    """Where a request's language list was detected.

    StrEnum provides automatic string conversion: str(LanguageSource.QUERY) == "query"
    """

    QUERY = "query"
    """Query string parameter: ?lang=fr"""

    COOKIE = "cookie"
    """Language cookie written by a previous response"""

    HEADER = "header"
    """Accept-Language request header"""

    NONE = "none"
    """Nothing detected; fallback languages apply"""


__all__ = [
    "LanguageSource",
    "ResourceFormat",
]
