from __future__ import annotations

from fastapi import FastAPI, Request

from content_i18n.i18n.context import reset_language, set_language
from content_i18n.utils.language import get_accept_language, text_direction


def install_i18n_middleware(app: FastAPI) -> None:
    """
    Install request-scoped language.

    This middleware guarantees:
    - request language is available via ContextVar (content_i18n.i18n.get_language)
    - responses carry `Content-Language` and `X-Text-Direction` headers so the
      frontend can set `lang`/`dir` on the document
    """

    @app.middleware("http")
    async def _i18n_middleware(request: Request, call_next):
        lang = get_accept_language(request)
        token = set_language(lang)
        try:
            response = await call_next(request)
        finally:
            reset_language(token)

        response.headers.setdefault("Content-Language", lang)
        response.headers.setdefault("X-Text-Direction", text_direction(lang))
        return response
