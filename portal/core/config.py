from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment."""

    app_name: str = Field(default="Asesmen Portal Core", validation_alias="APP_NAME")
    environment: str = Field(default="local", validation_alias="APP_ENV")
    version: str = Field(default="0.1.0")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    jwt_secret: str = Field(default="replace-with-secure-secret", validation_alias="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256")
    access_token_ttl_seconds: int = Field(default=3600)
    allowed_roles: tuple[str, ...] = Field(
        default=(
            "Admin LSP",
            "Direktur LSP",
            "Manajer Sertifikasi",
            "Admin TUK",
            "Asesor",
            "Asesi",
            "Komtek",
        ),
        validation_alias="ALLOWED_ROLES",
    )

    # Vite dev and preview servers of the portal front-end
    cors_origins: tuple[str, ...] = Field(
        default=("http://localhost:5173", "http://127.0.0.1:5173", "http://localhost:4173"),
        validation_alias="CORS_ORIGINS",
    )

    # Schedules arrive without an offset; the portal shows them as WIB
    schedule_timezone: str = Field(default="Asia/Jakarta", validation_alias="SCHEDULE_TIMEZONE")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="allow")


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""
    return Settings()
