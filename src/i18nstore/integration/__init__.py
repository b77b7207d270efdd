"""Web integration package.

Submodules:
    negotiation - Request language detection (framework-independent)
    middleware  - Starlette middleware binding a Translator to requests
    views       - Localized template selection and rendering

Python 3.13+.
"""

from .middleware import CookieOptions, I18nMiddleware
from .negotiation import (
    Negotiation,
    NegotiationConfig,
    detect_languages,
    filter_allowed,
    parse_language_list,
)
from .views import LocalizedRenderer, LocalizedTemplateResolver

__all__ = [
    "CookieOptions",
    "I18nMiddleware",
    "LocalizedRenderer",
    "LocalizedTemplateResolver",
    "Negotiation",
    "NegotiationConfig",
    "detect_languages",
    "filter_allowed",
    "parse_language_list",
]
