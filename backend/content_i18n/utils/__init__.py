"""
Utility functions for the content translation service
"""

from .app_logger import configure_logging
from .language import (
    canonical_language,
    get_default_language,
    get_supported_languages,
    normalize_language,
    text_direction,
)
from .text_hash import derive_cache_key, fnv1a_32

__all__ = [
    "canonical_language",
    "configure_logging",
    "derive_cache_key",
    "fnv1a_32",
    "get_default_language",
    "get_supported_languages",
    "normalize_language",
    "text_direction",
]
