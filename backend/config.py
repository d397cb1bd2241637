"""
Configuration management for the marketplace orders backend.

Loads settings from .env via pydantic-settings.
"""
import logging
from datetime import tzinfo
from typing import List, Optional
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict

from domain.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # ── Database ────────────────────────────────────────────────────
    database_url: str = "sqlite:///./data/marketplace.db"

    # ── Application ─────────────────────────────────────────────────
    environment: str = "development"

    # ── Auth (JWT) ──────────────────────────────────────────────────
    # Tokens are issued by the identity service; we only verify them.
    jwt_secret: str = ""
    jwt_issuer: str = "marketplace-api"
    jwt_access_ttl_minutes: int = 60

    # ── Orders ──────────────────────────────────────────────────────
    # IANA zone used for the "today" window; empty = server local time
    business_timezone: str = ""
    order_id_max_attempts: int = 5
    default_page_size: int = DEFAULT_PAGE_SIZE
    max_page_size: int = MAX_PAGE_SIZE

    # ── CORS ────────────────────────────────────────────────────────
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def business_tz(self) -> Optional[tzinfo]:
        """Time zone for day-bounded queries (None means the server's local zone)."""
        if not self.business_timezone:
            return None
        return ZoneInfo(self.business_timezone)

    def validate_production_settings(self):
        """
        Validate settings for production safety.

        Called during app startup.
        """
        if self.environment == "production":
            if "*" in self.cors_origins:
                raise ValueError(
                    "CORS_ORIGINS must not contain '*' in production. "
                    "Set explicit allowed origins."
                )
            if not self.jwt_secret:
                raise ValueError(
                    "JWT_SECRET must be set in production. "
                    "It is used to verify customer and vendor access tokens."
                )
            logger.info("Production settings validated")
        else:
            if "*" in self.cors_origins:
                logger.warning("CORS_ORIGINS contains '*' (open access)")
            if not self.jwt_secret:
                logger.warning("JWT_SECRET is empty; authenticated endpoints will reject every request")


# Global settings instance
settings = Settings()
