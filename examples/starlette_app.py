"""Starlette application using I18nMiddleware.

Run with any ASGI server, for example:

    uvicorn examples.starlette_app:app

Then try:

    curl localhost:8000 -H "Accept-Language: fr"
    curl "localhost:8000/?lang=en"
"""

import contextlib
import logging
from collections.abc import AsyncIterator

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from i18nstore import Translator, TranslatorConfig
from i18nstore.integration import CookieOptions, I18nMiddleware, NegotiationConfig

logging.basicConfig(level=logging.INFO)

translator = Translator(TranslatorConfig(watch=True), autoload=False)
translator.load_in_background()


async def homepage(request: Request) -> JSONResponse:
    # translate() defaults to the languages detected for this request
    translate = request.state.translate
    return JSONResponse(
        {
            "greeting": f"{translate('greeting')} {translate('name.first')}",
            "lang": request.state.html_lang,
            "dir": request.state.html_dir,
        }
    )


@contextlib.asynccontextmanager
async def lifespan(app: Starlette) -> AsyncIterator[None]:
    yield
    translator.close()


app = Starlette(routes=[Route("/", homepage)], lifespan=lifespan)
app.add_middleware(
    I18nMiddleware,
    translator=translator,
    negotiation=NegotiationConfig(query="lang", cookie_name="lang", detect=True),
    cookie=CookieOptions(max_age=60 * 60 * 24 * 365),
)
