"""
Service Providers for Dependency Injection

FastAPI dependency functions that resolve services from the process
ServiceContainer instead of module globals.
"""

from typing import Annotated

from fastapi import Depends

from content_i18n.dependencies.container import ServiceContainer, get_container
from content_i18n.i18n.context import get_language
from content_i18n.i18n.payload_translator import PayloadTranslator
from content_i18n.services.translation_cache import TranslationCache


async def get_translation_cache(
    container: ServiceContainer = Depends(get_container),
) -> TranslationCache:
    return await container.get(TranslationCache)


async def get_payload_translator(
    container: ServiceContainer = Depends(get_container),
) -> PayloadTranslator:
    return await container.get(PayloadTranslator)


async def get_request_language() -> str:
    """Language resolved by the i18n middleware for the current request."""
    return get_language()


TranslationCacheDep = Annotated[TranslationCache, Depends(get_translation_cache)]
PayloadTranslatorDep = Annotated[PayloadTranslator, Depends(get_payload_translator)]
RequestLanguageDep = Annotated[str, Depends(get_request_language)]
