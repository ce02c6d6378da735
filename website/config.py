"""Application configuration via environment variables."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Personal Website"
    local: bool = False  # LOCAL=1 bypasses the page cache and shows hidden posts
    base_url: str = "https://example.com"
    project_base: Path = Path(__file__).resolve().parent.parent

    # Site identity
    site_name: str = "Tim MacDonald"
    site_description: str = (
        "Developing engaging and performant web applications with Laravel and PHP. "
        "Love building for the web."
    )
    author_name: str = "Tim MacDonald"
    author_uri: str = "https://x.com/timacdonald87"
    theme_color: str = "#5f40f6"
    timezone: str = "Australia/Melbourne"

    # Caching
    cache_collections: bool = True

    @property
    def production(self) -> bool:
        return not self.local

    @property
    def views_root(self) -> Path:
        return self.project_base / "resources" / "views"

    @property
    def public_root(self) -> Path:
        return self.project_base / "public"

    @property
    def assets_root(self) -> Path:
        return self.public_root / "assets"

    @property
    def cache_root(self) -> Path:
        return self.project_base / "cache"

    @property
    def error_log(self) -> Path:
        return self.project_base / "error.log"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
