from __future__ import annotations

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = Field("sqlite+aiosqlite:///./daily_checklist.db", alias="DATABASE_URL")
    backend_session_secret: str = Field(..., alias="BACKEND_SESSION_SECRET")

    app_timezone: str = Field("Asia/Jakarta", alias="APP_TIMEZONE")

    image_dir: str = Field("./images", alias="IMAGE_DIR")
    public_base_url: str = Field("", alias="PUBLIC_BASE_URL")
    max_image_bytes: int = Field(5 * 1024 * 1024, alias="MAX_IMAGE_BYTES")

    public_feed_limit: int = Field(100, alias="PUBLIC_FEED_LIMIT")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    def image_url(self, file_name: str) -> str:
        base = self.public_base_url.rstrip("/")
        return f"{base}/v1/images/{file_name}"


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None


# For local dev convenience only.
if os.getenv("BACKEND_DEBUG_SETTINGS"):
    print(get_settings())
