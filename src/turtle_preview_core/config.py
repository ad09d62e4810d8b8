from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    site_domain: str = Field(default="pencilcode.net", alias="PREVIEW_SITE_DOMAIN")
    checker_image_url: str = Field(default="/image/checker.png", alias="PREVIEW_CHECKER_IMAGE_URL")


def load_settings() -> Settings:
    return Settings()
