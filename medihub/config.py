"""
Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""
    
    # ==========================================================================
    # Environment
    # ==========================================================================
    
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"
    
    # ==========================================================================
    # API Server
    # ==========================================================================
    
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: str = "http://localhost:3000,http://localhost:5173"
    
    # Error tracking (empty disables Sentry)
    sentry_dsn: str = ""
    
    # ==========================================================================
    # Translation service (Google Cloud Translation v2)
    # ==========================================================================
    
    google_translate_api_key: str = ""
    google_translate_base_url: str = "https://translation.googleapis.com/language/translate/v2"
    translate_timeout: float = 10.0
    translate_retry_attempts: int = 3
    
    # Remote client cache bound (oldest half dropped on overflow)
    translation_cache_max_size: int = 1000
    
    # ==========================================================================
    # Dispatch
    # ==========================================================================
    
    translation_debounce_ms: int = 300
    translation_pending_timeout: float = 15.0
    
    # ==========================================================================
    # Language preferences
    # ==========================================================================
    
    default_language: str = "en"
    # Empty keeps preferences in memory only
    preferences_path: str = ""
    
    # ==========================================================================
    # Helpers
    # ==========================================================================
    
    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
    
    @property
    def is_production(self) -> bool:
        return self.environment == "production"
    
    @property
    def has_translate_credentials(self) -> bool:
        """Whether remote translation can be attempted at all."""
        return bool(self.google_translate_api_key.strip())
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Configure root logging from settings."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
