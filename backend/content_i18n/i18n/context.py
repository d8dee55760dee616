from __future__ import annotations

import asyncio
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Dict, Iterator, Optional

from content_i18n.utils.language import get_default_language, normalize_language

_LANGUAGE: ContextVar[str] = ContextVar("content_language", default=get_default_language())

# Per-request memo of in-flight single-field translations, keyed by cache key.
_TRANSLATION_MEMO: ContextVar[Optional[Dict[str, "asyncio.Future[str]"]]] = ContextVar(
    "content_translation_memo", default=None
)


def set_language(lang: Optional[str]) -> object:
    return _LANGUAGE.set(normalize_language(lang))


def reset_language(token: object) -> None:
    _LANGUAGE.reset(token)


def get_language() -> str:
    return _LANGUAGE.get()


def get_translation_memo() -> Optional[Dict[str, "asyncio.Future[str]"]]:
    return _TRANSLATION_MEMO.get()


@contextmanager
def translation_scope() -> Iterator[Dict[str, "asyncio.Future[str]"]]:
    """
    Share single-field translations across one render pass.

    Within the scope, every FieldTranslator asking for the same literal in the
    same locale awaits one shared task instead of starting its own.
    """
    memo: Dict[str, "asyncio.Future[str]"] = {}
    token = _TRANSLATION_MEMO.set(memo)
    try:
        yield memo
    finally:
        _TRANSLATION_MEMO.reset(token)
