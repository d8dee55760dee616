"""
Two-tier translation cache.

Fast tier: an in-process dict, gone on restart.
Durable tier: an optional DurableStore (Redis, SQLite) that survives restarts.

Reads go fast -> durable (backfilling fast on a durable hit); writes go to
both. Durable failures are logged and swallowed, so a set() followed by a
get() always returns the written value even when the durable tier is down.
Entries are never invalidated: a source string in a given locale always
maps to the same translation.
"""

import logging
from typing import Any, Dict, Optional

from content_i18n.services.translation_store import DurableStore
from content_i18n.utils.text_hash import DEFAULT_KEY_PREFIX, derive_cache_key

logger = logging.getLogger(__name__)


class TranslationCache:
    """Process-wide translation cache shared by every translator."""

    def __init__(self, durable: Optional[DurableStore] = None, *, prefix: str = DEFAULT_KEY_PREFIX):
        self._memory: Dict[str, str] = {}
        self._durable = durable
        self.prefix = prefix
        self._stats = {
            "memory_hits": 0,
            "durable_hits": 0,
            "misses": 0,
            "sets": 0,
            "durable_errors": 0,
        }

    @property
    def has_durable_tier(self) -> bool:
        return self._durable is not None

    def key_for(self, text: str, locale: str) -> str:
        return derive_cache_key(text, locale, self.prefix)

    def peek(self, key: str) -> Optional[str]:
        """Fast-tier lookup only; never suspends."""
        value = self._memory.get(key)
        if value is not None:
            self._stats["memory_hits"] += 1
        return value

    async def get(self, key: str) -> Optional[str]:
        value = self.peek(key)
        if value is not None:
            return value

        if self._durable is not None:
            try:
                value = await self._durable.get(key)
            except Exception as e:
                self._stats["durable_errors"] += 1
                logger.debug(f"Translation cache durable read failed (non-fatal): {e}")
                value = None
            if value is not None:
                self._stats["durable_hits"] += 1
                self._memory[key] = value
                return value

        self._stats["misses"] += 1
        return None

    async def set(self, key: str, value: str) -> None:
        self._memory[key] = value
        self._stats["sets"] += 1

        if self._durable is None:
            return
        try:
            await self._durable.set(key, value)
        except Exception as e:
            self._stats["durable_errors"] += 1
            logger.debug(f"Translation cache durable write failed (non-fatal): {e}")

    def clear_memory(self) -> None:
        """Drop the fast tier (the durable tier is left alone)."""
        self._memory.clear()

    def get_stats(self) -> Dict[str, Any]:
        lookups = self._stats["memory_hits"] + self._stats["durable_hits"] + self._stats["misses"]
        hits = self._stats["memory_hits"] + self._stats["durable_hits"]
        hit_rate = (hits / lookups * 100) if lookups > 0 else 0
        return {
            **self._stats,
            "lookups": lookups,
            "hit_rate": round(hit_rate, 2),
            "memory_size": len(self._memory),
            "durable_tier": type(self._durable).__name__ if self._durable else None,
        }
