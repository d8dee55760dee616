"""
Redis client for the durable translation cache tier.

Holds one pooled async connection. Values are plain strings (responses are
decoded), so a cached translation round-trips unchanged.
"""

import logging
from typing import TYPE_CHECKING, Optional

import redis.asyncio as redis
from redis.asyncio.connection import ConnectionPool
from redis.exceptions import RedisError

if TYPE_CHECKING:
    from content_i18n.config.settings import ApplicationSettings

logger = logging.getLogger(__name__)


class RedisService:
    """Pooled async Redis client; ``connect()`` must succeed before use."""

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6379,
        password: Optional[str] = None,
        db: int = 0,
        *,
        max_connections: int = 10,
        timeout_s: float = 2.0,
    ):
        self.host = host
        self.port = port
        self.password = password
        self.db = db
        self.pool = ConnectionPool(
            host=host,
            port=port,
            password=password,
            db=db,
            decode_responses=True,
            max_connections=max_connections,
            socket_timeout=timeout_s,
            socket_connect_timeout=timeout_s,
            health_check_interval=30,
        )
        self._client: Optional[redis.Redis] = None

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}/{self.db}"

    @property
    def client(self) -> redis.Redis:
        if self._client is None:
            raise RuntimeError("Redis client not connected. Call connect() first.")
        return self._client

    async def connect(self) -> None:
        """Open the client and verify the server answers PING."""
        self._client = redis.Redis(connection_pool=self.pool)
        try:
            await self._client.ping()
        except RedisError as e:
            logger.error(f"Redis at {self.address} is unreachable: {e}")
            raise
        logger.info(f"Translation cache connected to Redis at {self.address}")

    async def disconnect(self) -> None:
        client, self._client = self._client, None
        try:
            if client is not None:
                await client.aclose()
            await self.pool.disconnect()
        except RedisError as e:
            logger.error(f"Error disconnecting from Redis: {e}")

    async def shutdown(self) -> None:
        await self.disconnect()

    async def get(self, key: str) -> Optional[str]:
        return await self.client.get(key)

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> bool:
        """Store ``value``; with ``ttl`` the key expires after that many seconds."""
        return bool(await self.client.set(key, value, ex=ttl or None))

    async def ping(self) -> bool:
        try:
            return bool(await self.client.ping())
        except (RedisError, RuntimeError):
            return False


def create_redis_service(settings: "ApplicationSettings") -> RedisService:
    """Build an unconnected RedisService from ``settings.cache``."""
    cfg = settings.cache
    return RedisService(
        host=cfg.redis_host,
        port=cfg.redis_port,
        password=cfg.redis_password,
        db=cfg.redis_db,
    )
