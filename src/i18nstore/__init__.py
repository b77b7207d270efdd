"""i18nstore - File-backed translation dictionaries with fallback chains.

Loads JSON and YAML resource files laid out by a path template such as
``locales/{lang}/{namespace}.{ext}``, merges them into one dictionary per
language and resolves keys through language and namespace fallback chains.
Optional live reload and a Starlette middleware are included.

Public API:
    Translator - Owns the dictionary snapshot and answers lookups
    TranslatorConfig - Immutable translator configuration
    FileSystemBackend - Glob-based JSON/YAML loader
    Backend - Protocol for custom dictionary backends

Exceptions:
    I18nError - Base exception class
    ConfigurationError - Invalid template, options or backend
    ResourceSyntaxError - Malformed resource file
    UnknownFormatError - Resource extension with no parser
    WatcherError - Live reload could not be set up

Submodules:
    i18nstore.localization - Path templates, loading and the Translator
    i18nstore.runtime - Resolution engine, readiness gate, resource watcher
    i18nstore.integration - Language negotiation, middleware, localized views
    i18nstore.locale_utils - Language tag helpers (Babel text direction)
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

# Essential Public API - Minimal exports for clean namespace
from .errors import (
    ConfigurationError,
    I18nError,
    ResourceSyntaxError,
    UnknownFormatError,
    WatcherError,
)
# localization imports config itself; importing config first would be circular
from .localization import Backend, FileSystemBackend, Translator
from .config import TranslatorConfig  # isort: skip

# Version information - Auto-populated from package metadata
try:
    __version__ = _get_version("i18nstore")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "Backend",
    "ConfigurationError",
    "FileSystemBackend",
    "I18nError",
    "ResourceSyntaxError",
    "Translator",
    "TranslatorConfig",
    "UnknownFormatError",
    "WatcherError",
    "__version__",
]
