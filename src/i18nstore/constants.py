"""Shared constants for i18nstore.

This module provides centralized configuration constants used across the
localization, runtime and integration packages. Placing constants here avoids
circular imports and provides a single source of truth.

Constants are grouped by domain:
- Resource layout: default path template, placeholders, file extensions
- Fallback chains: default fallback language and namespace
- Project discovery: manifest files marking a project root
- Live reload: watcher polling interval
- Negotiation: language tag syntax and cookie separator

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Resource layout
    "DEFAULT_PATH_TEMPLATE",
    "PLACEHOLDER_LANG",
    "PLACEHOLDER_NAMESPACE",
    "PLACEHOLDER_EXT",
    "PLACEHOLDERS",
    "SUPPORTED_EXTENSIONS",
    # Fallback chains
    "DEFAULT_NAMESPACE",
    "DEFAULT_FALLBACK_LANG",
    "DEFAULT_FALLBACK_NAMESPACE",
    "LANGUAGE_SEPARATOR",
    # Project discovery
    "PROJECT_MANIFESTS",
    # Live reload
    "DEFAULT_WATCH_INTERVAL",
    # Negotiation
    "LANGUAGE_LIST_SEPARATOR",
    "WILDCARD_LANGUAGE",
]

# ============================================================================
# RESOURCE LAYOUT
# ============================================================================

# Template placeholders. Each must appear exactly once in a path template.
PLACEHOLDER_LANG: str = "lang"
PLACEHOLDER_NAMESPACE: str = "namespace"
PLACEHOLDER_EXT: str = "ext"
PLACEHOLDERS: tuple[str, ...] = (PLACEHOLDER_LANG, PLACEHOLDER_NAMESPACE, PLACEHOLDER_EXT)

DEFAULT_PATH_TEMPLATE: str = "locales/{lang}/{namespace}.{ext}"

# Order matters only for glob expansion; merge order is decided by sorting.
SUPPORTED_EXTENSIONS: tuple[str, ...] = ("json", "yaml", "yml")

# ============================================================================
# FALLBACK CHAINS
# ============================================================================

# Sentinel namespace: content merges at the language root, keys get no prefix.
DEFAULT_NAMESPACE: str = "default"

DEFAULT_FALLBACK_LANG: tuple[str, ...] = ("en",)
DEFAULT_FALLBACK_NAMESPACE: tuple[str, ...] = (DEFAULT_NAMESPACE,)

# Separates the primary subtag from the region subtag (en-GB -> en).
LANGUAGE_SEPARATOR: str = "-"

# ============================================================================
# PROJECT DISCOVERY
# ============================================================================

# Files marking the root of the consuming project, checked in this order.
PROJECT_MANIFESTS: tuple[str, ...] = ("pyproject.toml", "setup.cfg", "setup.py")

# ============================================================================
# LIVE RELOAD
# ============================================================================

# Seconds between two polls of the resource tree.
DEFAULT_WATCH_INTERVAL: float = 1.0

# ============================================================================
# NEGOTIATION
# ============================================================================

LANGUAGE_LIST_SEPARATOR: str = ","
WILDCARD_LANGUAGE: str = "*"
