"""i18nstore exception hierarchy.

Configuration problems are raised synchronously at construction time.
Load problems (syntax errors, unknown formats) abort the whole load so no
partial dictionary is ever published. Filesystem errors are not wrapped:
OSError propagates unchanged.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

__all__ = [
    "ConfigurationError",
    "I18nError",
    "ResourceSyntaxError",
    "UnknownFormatError",
    "WatcherError",
]


class I18nError(Exception):
    """Base exception for all i18nstore errors."""


class ConfigurationError(I18nError, ValueError):
    """Invalid configuration detected at construction time.

    Examples:
    - Path template missing a placeholder or repeating one
    - Unknown option name passed to TranslatorConfig.from_options
    - Backend without a callable load method

    Subclasses ValueError so callers validating input generically still catch it.
    """


class ResourceSyntaxError(I18nError):
    """A resource file could not be parsed.

    Aborts the load that encountered it. The original parser exception is
    chained as ``__cause__``.

    Attributes:
        path: Absolute path of the offending file
        detail: Underlying parser message
    """

    def __init__(self, path: str, detail: str) -> None:
        """Initialize ResourceSyntaxError.

        Args:
            path: Absolute path of the offending file
            detail: Underlying parser message
        """
        super().__init__(f"Localisation file syntax error: {path}: {detail}")
        self.path = path
        self.detail = detail


class UnknownFormatError(I18nError):
    """A resource file reached parsing with an extension no parser handles.

    Unreachable through the compiled globs, which only match known extensions.

    Attributes:
        path: Absolute path of the offending file
    """

    def __init__(self, path: str) -> None:
        """Initialize UnknownFormatError.

        Args:
            path: Absolute path of the offending file
        """
        super().__init__(f"Unknown localisation file format: {path}")
        self.path = path


class WatcherError(I18nError):
    """Live reload could not be set up; the watcher stays disabled."""
