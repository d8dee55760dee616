from .container import ServiceContainer, get_container, set_container
from .providers import (
    PayloadTranslatorDep,
    RequestLanguageDep,
    TranslationCacheDep,
)

__all__ = [
    "PayloadTranslatorDep",
    "RequestLanguageDep",
    "ServiceContainer",
    "TranslationCacheDep",
    "get_container",
    "set_container",
]
