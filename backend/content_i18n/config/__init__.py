"""
Unified configuration access point.

    from content_i18n.config import get_settings

    settings = get_settings()
    settings.translation.translation_min_length
"""

from .settings import (
    ApplicationSettings,
    CacheSettings,
    Environment,
    ServiceSettings,
    TranslationSettings,
    get_settings,
    reload_settings,
)

__all__ = [
    "ApplicationSettings",
    "CacheSettings",
    "Environment",
    "ServiceSettings",
    "TranslationSettings",
    "get_settings",
    "reload_settings",
]
