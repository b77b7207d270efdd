"""Starlette middleware binding a Translator to each request.

For every request the middleware:
    1. Detects the language list (query, cookie, Accept-Language)
    2. Stores it on ``request.state`` together with the values templates need
    3. Waits for the translator's first load, in a worker thread
    4. Calls the endpoint
    5. Writes the language cookie with the final language list

Request state set:
    lang            - list of language codes, highest priority first
    language_source - LanguageSource the list came from
    html_lang       - first language, or the first fallback language
    html_dir        - "ltr" or "rtl" for html_lang (Babel CLDR data)
    translate       - translate(keys, ...) defaulting to the request languages
    set_language    - set_language(value) re-runs parsing and the allow-list

Example:
    >>> app = Starlette(routes=routes)
    >>> app.add_middleware(
    ...     I18nMiddleware,
    ...     translator=Translator(),
    ...     negotiation=NegotiationConfig(query="lang", cookie_name="lang", detect=True),
    ... )

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import PlainTextResponse

from i18nstore.constants import LANGUAGE_LIST_SEPARATOR
from i18nstore.integration.negotiation import (
    NegotiationConfig,
    detect_languages,
    select_languages,
)
from i18nstore.locale_utils import text_direction

if TYPE_CHECKING:
    from collections.abc import Iterable

    from starlette.middleware.base import RequestResponseEndpoint
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

    from i18nstore.localization.orchestrator import Translator

__all__ = ["CookieOptions", "I18nMiddleware"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CookieOptions:
    """Attributes of the language cookie written on responses.

    The cookie name itself lives in NegotiationConfig.cookie_name, since it
    is read during detection too.
    """

    max_age: int | None = None
    path: str = "/"
    domain: str | None = None
    secure: bool = False
    httponly: bool = False
    samesite: Literal["lax", "strict", "none"] | None = "lax"


class I18nMiddleware(BaseHTTPMiddleware):
    """Per-request language detection and translation helpers.

    Attributes:
        translator: Shared Translator
        negotiation: Detection settings
        cookie: Language cookie attributes
        ready_timeout: Seconds to wait for the first load; None waits forever
    """

    def __init__(
        self,
        app: ASGIApp,
        translator: Translator,
        *,
        negotiation: NegotiationConfig | None = None,
        cookie: CookieOptions | None = None,
        ready_timeout: float | None = None,
    ) -> None:
        super().__init__(app)
        self.translator = translator
        self.negotiation = negotiation if negotiation is not None else NegotiationConfig()
        self.cookie = cookie if cookie is not None else CookieOptions()
        self.ready_timeout = ready_timeout

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Detect languages, wait for readiness, then call the endpoint."""
        detected = detect_languages(
            request.query_params, request.cookies, request.headers, self.negotiation
        )
        self._apply(request, detected.languages)
        request.state.language_source = detected.source
        request.state.set_language = functools.partial(self._set_language, request)
        request.state.translate = functools.partial(self._translate, request)

        if not self.translator.is_ready:
            # wait_ready() blocks; keep it off the event loop
            ready = await asyncio.to_thread(self.translator.wait_ready, self.ready_timeout)
            if not ready:
                logger.warning(
                    "Translator not ready after %ss; rejecting %s",
                    self.ready_timeout,
                    request.url.path,
                )
                return PlainTextResponse("Translations are loading", status_code=503)

        response = await call_next(request)
        self._save_language(request, response)
        return response

    def _apply(self, request: Request, languages: Iterable[str]) -> None:
        lang = list(languages)
        fallback = self.translator.config.fallback_lang
        html_lang = lang[0] if lang else (fallback[0] if fallback else None)
        request.state.lang = lang
        request.state.html_lang = html_lang
        request.state.html_dir = text_direction(html_lang) if html_lang else "ltr"

    def _set_language(self, request: Request, value: str | Iterable[str] | None) -> list[str]:
        languages = select_languages(value, self.negotiation.allowed_langs)
        self._apply(request, languages)
        return languages

    def _translate(
        self,
        request: Request,
        keys: str | Iterable[str],
        *,
        lang: str | Iterable[str] | None = None,
        namespace: str | Iterable[str] | None = None,
        default: Any = None,
        fallback_to_key: bool = True,
    ) -> Any:
        if lang is None:
            lang = request.state.lang
        if namespace is None:
            namespace = getattr(request.state, "namespace", None)
        return self.translator.translate(
            keys,
            lang=lang,
            namespace=namespace,
            default=default,
            fallback_to_key=fallback_to_key,
        )

    def _save_language(self, request: Request, response: Response) -> None:
        name = self.negotiation.cookie_name
        languages: list[str] = request.state.lang
        if not name or not languages:
            return
        response.set_cookie(
            key=name,
            value=LANGUAGE_LIST_SEPARATOR.join(languages),
            max_age=self.cookie.max_age,
            path=self.cookie.path,
            domain=self.cookie.domain,
            secure=self.cookie.secure,
            httponly=self.cookie.httponly,
            samesite=self.cookie.samesite,
        )
