"""
Centralized Configuration System for the content translation service

Type-safe configuration using Pydantic Settings. Every tunable of the
translation engine (transport, cache tiers, thresholds) is bound to an
environment variable here and nowhere else.

Features:
- Environment variable binding with defaults
- Hierarchical configuration structure
- Test-friendly configuration isolation via reload_settings()
"""

import os
from enum import Enum
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment types"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TEST = "test"


class TranslationSettings(BaseSettings):
    """Machine translation transport and engine settings"""

    model_config = SettingsConfigDict(
        env_file=".env" if not os.getenv("DOCKER_CONTAINER") else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    translation_provider: str = Field(
        default="libretranslate",
        description="Transport provider: libretranslate, mymemory or disabled"
    )
    translation_endpoint_url: str = Field(
        default="https://libretranslate.de/translate",
        description="Machine translation endpoint URL"
    )
    translation_api_key: Optional[str] = Field(
        default=None,
        description="API key sent to the translation endpoint (LibreTranslate only)"
    )
    translation_timeout_seconds: float = Field(
        default=10.0,
        description="Per-request timeout for the translation endpoint"
    )
    translation_default_locale: str = Field(
        default="en",
        description="Authoring locale; translating into it is always a no-op"
    )
    translation_source_locale: str = Field(
        default="auto",
        description="Source locale hint sent with each request"
    )
    translation_min_length: int = Field(
        default=3,
        ge=0,
        description="Strings shorter than this are never translated"
    )
    translation_max_concurrency: int = Field(
        default=8,
        ge=1,
        description="Maximum in-flight transport calls per payload"
    )
    translation_pin_failures: bool = Field(
        default=True,
        description="Cache the original text when the transport fails"
    )

    @field_validator("translation_endpoint_url", mode="before")
    @classmethod
    def get_translation_endpoint_url(cls, v):
        return os.getenv("LIBRE_TRANSLATE_URL", v or "https://libretranslate.de/translate").strip()

    @field_validator("translation_provider", mode="before")
    @classmethod
    def normalize_provider(cls, v):
        return str(v or "libretranslate").strip().lower()


class CacheSettings(BaseSettings):
    """Translation cache tier settings"""

    model_config = SettingsConfigDict(
        env_file=".env" if not os.getenv("DOCKER_CONTAINER") else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    translation_cache_backend: str = Field(
        default="memory",
        description="Durable tier backend: memory (none), redis or sqlite"
    )
    translation_cache_prefix: str = Field(
        default="dyn_tr_v1_",
        description="Namespace prefix for cache keys"
    )
    translation_cache_ttl: Optional[int] = Field(
        default=None,
        description="Durable tier TTL in seconds (redis only, None keeps entries)"
    )
    translation_cache_sqlite_path: str = Field(
        default="data/translation_cache.db",
        description="SQLite file used by the sqlite backend"
    )

    # Redis Configuration
    redis_host: str = Field(
        default="localhost",
        description="Redis host"
    )
    redis_port: int = Field(
        default=6379,
        description="Redis port"
    )
    redis_password: Optional[str] = Field(
        default=None,
        description="Redis password"
    )
    redis_db: int = Field(
        default=0,
        description="Redis database index"
    )

    @field_validator("translation_cache_backend", mode="before")
    @classmethod
    def normalize_backend(cls, v):
        return str(v or "memory").strip().lower()


class ServiceSettings(BaseSettings):
    """HTTP service settings"""

    model_config = SettingsConfigDict(
        env_file=".env" if not os.getenv("DOCKER_CONTAINER") else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    service_name: str = Field(
        default="content-i18n",
        description="Service name used in logs and health output"
    )
    host: str = Field(
        default="0.0.0.0",
        description="Bind host"
    )
    port: int = Field(
        default=8010,
        description="Bind port"
    )
    cors_origins: str = Field(
        default="",
        description="Comma separated list of allowed CORS origins"
    )

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


class ApplicationSettings(BaseSettings):
    """Main application settings - aggregates all other settings"""

    model_config = SettingsConfigDict(
        env_file=".env" if not os.getenv("DOCKER_CONTAINER") else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level"
    )

    # Nested settings
    translation: TranslationSettings = Field(default_factory=TranslationSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    service: ServiceSettings = Field(default_factory=ServiceSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode"""
        return self.environment == Environment.PRODUCTION


settings = ApplicationSettings()


def get_settings() -> ApplicationSettings:
    """
    Get the global settings instance

    Can be used with FastAPI's Depends() for dependency injection.

    Returns:
        ApplicationSettings: The global settings instance
    """
    return settings


def reload_settings() -> ApplicationSettings:
    """
    Reload settings from environment (useful for testing)

    Returns:
        ApplicationSettings: New settings instance with reloaded values
    """
    global settings
    settings = ApplicationSettings()
    return settings
