"""
Dynamic content translation router.

Frontends post whatever JSON they got from the content API and get back the
same shape with eligible strings translated into the requested locale.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from content_i18n.dependencies.providers import PayloadTranslatorDep, RequestLanguageDep
from content_i18n.i18n.catalog import get_messages, localize_data_with_paths
from content_i18n.utils.language import (
    get_default_language,
    get_language_name,
    get_supported_languages,
    text_direction,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/i18n", tags=["Translation"])


class TranslatePayloadRequest(BaseModel):
    """Request model for translating a JSON payload"""

    payload: Any = Field(None, description="Any JSON value")
    target_locale: Optional[str] = Field(None, description="Target locale (defaults to request language)")
    source_locale: Optional[str] = Field(None, description="Source locale hint (defaults to auto)")
    min_length: Optional[int] = Field(None, ge=0, description="Minimum string length to translate")
    localize: bool = Field(
        default=False,
        description="Resolve {en, so, ar} objects and category keys before machine translation",
    )


class TranslatePayloadResponse(BaseModel):
    target_locale: str
    direction: str
    payload: Any = None


class TranslateTextRequest(BaseModel):
    text: str = Field(..., description="Text to translate")
    target_locale: Optional[str] = Field(None, description="Target locale (defaults to request language)")


class TranslateTextResponse(BaseModel):
    text: str
    translated: bool


@router.post("/translate", response_model=TranslatePayloadResponse)
async def translate_payload(
    request: TranslatePayloadRequest,
    translator: PayloadTranslatorDep,
    request_language: RequestLanguageDep,
) -> TranslatePayloadResponse:
    target = request.target_locale or request_language
    payload = request.payload
    skip_paths = None
    logger.debug(f"Translate request: target={target}, localize={request.localize}")
    if request.localize:
        # Leaves already in the target locale never go to machine translation
        payload, skip_paths = localize_data_with_paths(payload, target)

    translated = await translator.translate_payload(
        payload,
        target,
        min_length=request.min_length,
        source_locale=request.source_locale,
        skip_paths=skip_paths,
    )
    return TranslatePayloadResponse(target_locale=target, direction=text_direction(target), payload=translated)


@router.post("/translate-text", response_model=TranslateTextResponse)
async def translate_text(
    request: TranslateTextRequest,
    translator: PayloadTranslatorDep,
    request_language: RequestLanguageDep,
) -> TranslateTextResponse:
    target = request.target_locale or request_language
    text = await translator.translate_text(request.text, target)
    return TranslateTextResponse(text=text, translated=text != request.text)


@router.get("/languages")
async def list_languages() -> Dict[str, Any]:
    languages: List[Dict[str, str]] = [
        {"code": code, "name": get_language_name(code), "direction": text_direction(code)}
        for code in get_supported_languages()
    ]
    return {"default": get_default_language(), "languages": languages}


@router.get("/messages")
async def list_messages(request_language: RequestLanguageDep) -> Dict[str, Any]:
    return {
        "language": request_language,
        "direction": text_direction(request_language),
        "messages": get_messages(request_language),
    }
