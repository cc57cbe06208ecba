"""Application configuration models."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or a .env file."""

    app_name: str = Field(default="MovieFinder", alias="APP_NAME")
    server_host: str = Field(default="0.0.0.0", alias="HOST")
    server_port: int = Field(default=3000, alias="PORT")

    tmdb_api_key: str | None = Field(default=None, alias="TMDB_API_KEY")
    tmdb_base_url: HttpUrl = Field(
        default="https://api.themoviedb.org/3", alias="TMDB_BASE_URL"
    )
    tmdb_image_base_url: HttpUrl = Field(
        default="https://image.tmdb.org/t/p", alias="TMDB_IMAGE_BASE_URL"
    )

    use_mock_data: bool = Field(default=False, alias="USE_MOCK_DATA")
    mock_latency_scale: float = Field(default=1.0, alias="MOCK_LATENCY_SCALE", ge=0)

    database_url: str = Field(
        default="sqlite:///./moviefinder.db", alias="DATABASE_URL"
    )
    favorites_key: str = Field(default="movieFavorites", alias="FAVORITES_KEY")

    environment: Literal["development", "production"] = Field(
        default="development", alias="ENVIRONMENT"
    )

    @field_validator("tmdb_api_key", mode="before")
    @classmethod
    def _blank_api_key(cls, value: object) -> object:
        """Treat an empty API key as missing."""

        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def api_base_url(self) -> str:
        """TMDB API root without a trailing slash."""

        return str(self.tmdb_base_url).rstrip("/")

    @property
    def image_base_url(self) -> str:
        """TMDB image host root without a trailing slash."""

        return str(self.tmdb_image_base_url).rstrip("/")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", frozen=True
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()  # type: ignore[call-arg]


settings = get_settings()
