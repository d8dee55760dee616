"""
Dependency Injection Container for the content translation service

One container per process holds the shared translation cache and everything
built on it, so the payload translator and every single-field translator
read and write the same cache instance.

Features:
- Singleton service management with lazy, settings-driven factories
- Explicit instance registration for services with dependencies
- Lifecycle management (initialize / shutdown)
- Test-friendly: build a container with your own settings or instances
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Type, TypeVar

from redis.exceptions import RedisError

from content_i18n.config.settings import ApplicationSettings
from content_i18n.i18n.payload_translator import PayloadTranslator, create_payload_translator
from content_i18n.services.redis_service import RedisService, create_redis_service
from content_i18n.services.translation_cache import TranslationCache
from content_i18n.services.translation_store import create_durable_store
from content_i18n.services.translation_transport import TranslationTransport, create_translation_transport

logger = logging.getLogger(__name__)

T = TypeVar('T')


@dataclass
class ServiceRegistration:
    """Service registration information"""
    service_type: Type
    instance: Optional[Any] = None
    factory: Optional[Callable[[ApplicationSettings], Any]] = None
    initialized: bool = False


class ServiceContainer:
    """
    Dependency injection container

    Replaces module-level globals with an explicit, constructible owner of
    the service instances.
    """

    def __init__(self, settings: ApplicationSettings):
        self.settings = settings
        self._services: Dict[str, ServiceRegistration] = {}
        self._lock = asyncio.Lock()
        self._initialized = False

    @property
    def is_initialized(self) -> bool:
        """Check if container is initialized"""
        return self._initialized

    def register_singleton(
        self,
        service_type: Type[T],
        factory: Callable[[ApplicationSettings], T]
    ) -> None:
        """
        Register a singleton service with a factory function

        Args:
            service_type: The service class/type
            factory: Factory function that creates the service
        """
        service_name = service_type.__name__
        if service_name in self._services:
            logger.warning(f"Service {service_name} is already registered, overriding")

        self._services[service_name] = ServiceRegistration(
            service_type=service_type,
            factory=factory,
        )
        logger.debug(f"Registered singleton service: {service_name}")

    def register_instance(self, service_type: Type[T], instance: T) -> None:
        """
        Register a service instance directly

        Args:
            service_type: The service class/type
            instance: Pre-created service instance
        """
        service_name = service_type.__name__
        if service_name in self._services:
            logger.warning(f"Service {service_name} is already registered, overriding")

        self._services[service_name] = ServiceRegistration(
            service_type=service_type,
            instance=instance,
            initialized=True
        )
        logger.debug(f"Registered service instance: {service_name}")

    async def get(self, service_type: Type[T]) -> T:
        """
        Get a service instance

        Raises:
            ValueError: If service is not registered
            RuntimeError: If service creation fails
        """
        service_name = service_type.__name__

        if service_name not in self._services:
            raise ValueError(f"Service {service_name} is not registered")

        registration = self._services[service_name]
        if registration.instance is not None:
            return registration.instance

        async with self._lock:
            # Double-check: another coroutine may have created it meanwhile
            if registration.instance is not None:
                return registration.instance

            if registration.factory is None:
                raise RuntimeError(f"No factory function registered for {service_name}")

            try:
                logger.debug(f"Creating service instance: {service_name}")
                instance = registration.factory(self.settings)
                if hasattr(instance, 'initialize'):
                    await instance.initialize()
                registration.instance = instance
                registration.initialized = True
                return instance
            except Exception as e:
                logger.error(f"Failed to create service {service_name}: {e}")
                raise RuntimeError(f"Service creation failed for {service_name}: {e}") from e

    def has(self, service_type: Type[T]) -> bool:
        return service_type.__name__ in self._services

    async def initialize_translation_services(self) -> None:
        """
        Build the translation stack: durable store -> cache -> transport -> translator.

        An unreachable Redis does not stop startup; the cache then runs on its
        fast tier only.
        """
        if self._initialized:
            return

        redis_service: Optional[RedisService] = None
        if self.settings.cache.translation_cache_backend == "redis":
            redis_service = create_redis_service(self.settings)
            try:
                await redis_service.connect()
                self.register_instance(RedisService, redis_service)
            except (RedisError, OSError) as e:
                logger.warning(f"Redis unavailable, translation cache runs memory-only: {e}")
                await redis_service.disconnect()
                redis_service = None

        durable = None
        if self.settings.cache.translation_cache_backend != "redis" or redis_service is not None:
            durable = create_durable_store(self.settings, redis_service)

        cache = TranslationCache(durable, prefix=self.settings.cache.translation_cache_prefix)
        self.register_instance(TranslationCache, cache)

        if not self.has(TranslationTransport):
            self.register_singleton(TranslationTransport, create_translation_transport)
        transport = await self.get(TranslationTransport)

        self.register_instance(PayloadTranslator, create_payload_translator(self.settings, cache, transport))
        self._initialized = True
        logger.info(
            f"Translation services ready (provider={transport.provider}, "
            f"durable_tier={type(durable).__name__ if durable else None})"
        )

    async def shutdown_all(self) -> None:
        """
        Shutdown all created services gracefully
        """
        logger.info("Shutting down all services")

        for service_name, registration in self._services.items():
            if registration.instance is None:
                continue
            try:
                if hasattr(registration.instance, 'shutdown'):
                    await registration.instance.shutdown()
                    logger.debug(f"Service {service_name} shut down successfully")
            except Exception as e:
                logger.error(f"Error shutting down service {service_name}: {e}")

        for registration in self._services.values():
            registration.instance = None
            registration.initialized = False

        self._initialized = False
        logger.info("All services shut down")


_container: Optional[ServiceContainer] = None


def set_container(container: Optional[ServiceContainer]) -> None:
    global _container
    _container = container


async def get_container() -> ServiceContainer:
    """
    FastAPI dependency returning the process container.

    Raises:
        RuntimeError: If the application lifespan has not created one
    """
    if _container is None:
        raise RuntimeError("Service container is not initialized")
    return _container
