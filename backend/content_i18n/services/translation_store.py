"""
Durable tier backends for the translation cache.

A durable store survives process restarts. Stores may raise on any
operation; TranslationCache treats every failure as "durable tier absent".
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING, AsyncIterator, Optional, Protocol

import aiosqlite

from content_i18n.services.redis_service import RedisService

if TYPE_CHECKING:
    from content_i18n.config.settings import ApplicationSettings

logger = logging.getLogger(__name__)


class DurableStore(Protocol):
    async def get(self, key: str) -> Optional[str]:
        ...

    async def set(self, key: str, value: str) -> None:
        ...


class RedisTranslationStore:
    """Durable tier backed by Redis; keys are stored as-is, values are raw strings."""

    def __init__(self, redis_service: RedisService, ttl: Optional[int] = None):
        self.redis_service = redis_service
        self.ttl = ttl

    async def get(self, key: str) -> Optional[str]:
        return await self.redis_service.get(key)

    async def set(self, key: str, value: str) -> None:
        await self.redis_service.set(key, value, ttl=self.ttl)


class SqliteTranslationStore:
    """
    Device-local durable tier in a single SQLite file.

    The table is created lazily on first use.
    """

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._init_flag = False
        self._init_lock = asyncio.Lock()

    @asynccontextmanager
    async def _get_connection(self) -> AsyncIterator[aiosqlite.Connection]:
        conn = await aiosqlite.connect(self.db_path)
        try:
            yield conn
        finally:
            await conn.close()

    async def _init_database(self) -> None:
        if self._init_flag:
            return

        async with self._init_lock:
            # Re-check once the lock is held
            if self._init_flag:
                return

            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            async with self._get_connection() as conn:
                await conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS translation_cache (
                        cache_key TEXT PRIMARY KEY,
                        value TEXT NOT NULL,
                        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                    )
                    """
                )
                await conn.commit()
            self._init_flag = True

    async def get(self, key: str) -> Optional[str]:
        await self._init_database()
        async with self._get_connection() as conn:
            async with conn.execute(
                "SELECT value FROM translation_cache WHERE cache_key = ?", (key,)
            ) as cursor:
                row = await cursor.fetchone()
        return row[0] if row else None

    async def set(self, key: str, value: str) -> None:
        await self._init_database()
        async with self._get_connection() as conn:
            await conn.execute(
                """
                INSERT INTO translation_cache (cache_key, value) VALUES (?, ?)
                ON CONFLICT(cache_key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (key, value),
            )
            await conn.commit()


def create_durable_store(
    settings: "ApplicationSettings",
    redis_service: Optional[RedisService] = None,
) -> Optional[DurableStore]:
    """
    Build the durable tier selected by ``translation_cache_backend``.

    Returns None for the ``memory`` backend (fast tier only).
    """
    backend = settings.cache.translation_cache_backend
    if backend in {"memory", "none", ""}:
        return None
    if backend == "redis":
        if redis_service is None:
            raise ValueError("redis cache backend requires a RedisService")
        return RedisTranslationStore(redis_service, ttl=settings.cache.translation_cache_ttl)
    if backend == "sqlite":
        return SqliteTranslationStore(settings.cache.translation_cache_sqlite_path)
    raise ValueError(f"Unsupported translation cache backend: {backend}")
