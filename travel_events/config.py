# travel_events/config.py

from __future__ import annotations

import logging
from typing import List, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

log = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Project configuration. Reads environment variables only.
    Pydantic v2 + pydantic-settings.
    """
    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
    )

    ENVIRONMENT: Literal["dev", "test", "prod"] = Field("dev", description="Application environment (dev, test, prod)")
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field("INFO", description="Root log level")

    # --- Database ---
    DATABASE_URL: str = Field(..., description="Async database URL (postgresql+asyncpg://... or sqlite+aiosqlite://...)")
    DB_ECHO: bool = Field(False, description="Echo SQL statements")
    DB_POOL_SIZE: int = Field(5, ge=1, description="Permanent connections in the pool")
    DB_MAX_OVERFLOW: int = Field(10, ge=0, description="Extra connections allowed temporarily")

    # --- HTTP ---
    CORS_ORIGINS: str = Field("*", description="Allowed CORS origins, comma separated")

    # --- Attachments (QR codes) ---
    ATTACHMENT_STORE: str = Field("local", description="Attachment store ('local', 'memory')")
    QR_CODE_DIR: str = Field("public/qr-codes", description="Directory where uploaded QR codes are written")
    QR_CODE_URL_PREFIX: str = Field("/qr-codes", description="Public path prefix stored QR codes are served from")
    MAX_UPLOAD_MB: int = Field(5, ge=1, description="Largest accepted attachment, in megabytes")

    @field_validator("QR_CODE_URL_PREFIX")
    @classmethod
    def _normalize_prefix(cls, v: str) -> str:
        return "/" + v.strip("/")

    @property
    def cors_origins(self) -> List[str]:
        # "a, b ,c" -> ["a", "b", "c"]
        return [s.strip() for s in self.CORS_ORIGINS.split(",") if s.strip()]

    @property
    def max_upload_bytes(self) -> int:
        return self.MAX_UPLOAD_MB * 1024 * 1024


try:
    settings = Settings()
    log.info("Settings loaded successfully for ENVIRONMENT=%s", settings.ENVIRONMENT)
    log.debug(
        "Loaded settings: DB URL=%s..., attachment store=%s, QR dir=%s",
        settings.DATABASE_URL[:25],
        settings.ATTACHMENT_STORE,
        settings.QR_CODE_DIR,
    )
except Exception:
    log.exception("Failed to instantiate Settings.")
    raise
