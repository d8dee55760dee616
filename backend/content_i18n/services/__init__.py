"""
Services for the content translation engine: cache tiers, durable stores,
the HTTP transport and the Redis client.
"""

from .translation_cache import TranslationCache
from .translation_store import DurableStore, RedisTranslationStore, SqliteTranslationStore
from .translation_transport import (
    CancellationToken,
    TranslationResult,
    TranslationStatus,
    TranslationTransport,
)

__all__ = [
    "CancellationToken",
    "DurableStore",
    "RedisTranslationStore",
    "SqliteTranslationStore",
    "TranslationCache",
    "TranslationResult",
    "TranslationStatus",
    "TranslationTransport",
]
