"""Localization package for Translator.

Provides the full loading stack: type aliases, the path template compiler,
project root discovery, resource loading and the translator orchestrator.

Submodules:
    types        - PEP 695 type aliases (LanguageCode, Namespace, Dictionary)
    template     - PathTemplate (placeholder parsing, glob and regex compilation)
    discovery    - Project root and base directory resolution
    merge        - Deep merge and namespace nesting
    loading      - Backend protocol, FileSystemBackend, ResourceFile
    orchestrator - Translator (snapshot ownership and lookups)

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from i18nstore.localization.loading import Backend, FileSystemBackend, ResourceFile
from i18nstore.localization.orchestrator import Translator
from i18nstore.localization.template import PathTemplate, TemplateMatch
from i18nstore.localization.types import (
    Dictionary,
    LanguageCode,
    Namespace,
    ResourceTree,
    TranslationKey,
)

__all__ = [
    # Main orchestrator
    "Translator",
    # Backend protocol and implementations
    "Backend",
    "FileSystemBackend",
    "ResourceFile",
    # Path template
    "PathTemplate",
    "TemplateMatch",
    # Type aliases for user code type annotations
    "Dictionary",
    "LanguageCode",
    "Namespace",
    "ResourceTree",
    "TranslationKey",
]
