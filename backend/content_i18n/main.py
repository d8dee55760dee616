"""
Content translation service

FastAPI application exposing the dynamic translation engine to frontends.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from content_i18n.config.settings import ApplicationSettings, get_settings
from content_i18n.dependencies.container import ServiceContainer, set_container
from content_i18n.dependencies.providers import TranslationCacheDep
from content_i18n.i18n.middleware import install_i18n_middleware
from content_i18n.routers import translation_router
from content_i18n.utils.app_logger import configure_logging

logger = logging.getLogger(__name__)

SERVICE_VERSION = "1.0.0"


def create_app(
    settings: Optional[ApplicationSettings] = None,
    container: Optional[ServiceContainer] = None,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        settings: Settings to use (defaults to the global settings)
        container: Pre-built container, e.g. with a fake transport registered
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        service_container = container or ServiceContainer(settings)
        await service_container.initialize_translation_services()
        set_container(service_container)
        logger.info(f"{settings.service.service_name} service started")
        try:
            yield
        finally:
            await service_container.shutdown_all()
            set_container(None)
            logger.info(f"{settings.service.service_name} service stopped")

    app = FastAPI(
        title="Content Translation Service",
        description="Dynamic translation and caching of CMS content",
        version=SERVICE_VERSION,
        debug=settings.debug,
        # Interactive docs are not served in production
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
        lifespan=lifespan,
    )

    origins = settings.service.cors_origin_list
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    install_i18n_middleware(app)
    app.include_router(translation_router)

    @app.get("/health", tags=["Health"])
    async def health(cache: TranslationCacheDep) -> Dict[str, Any]:
        return {
            "service": settings.service.service_name,
            "version": SERVICE_VERSION,
            "status": "healthy",
            "cache": cache.get_stats(),
        }

    return app


def main() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.service.host, port=settings.service.port)


if __name__ == "__main__":
    main()
