"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AnyHttpUrl, BaseModel, Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CatalogSettings(BaseModel):
    latency_min_ms: int = Field(default=500, ge=0, description="Lower bound of simulated lookup delay.")
    latency_max_ms: int = Field(default=1500, ge=0, description="Upper bound of simulated lookup delay.")

    @model_validator(mode="after")
    def _check_bounds(self) -> "CatalogSettings":
        if self.latency_max_ms < self.latency_min_ms:
            raise ValueError("latency_max_ms must be >= latency_min_ms")
        return self


class SearchApiSettings(BaseModel):
    url: AnyHttpUrl | None = Field(default=None, description="JSON search endpoint used by HttpSearchLookup.")
    query_param: str = Field(default="q", min_length=1)
    api_token: SecretStr | None = None
    request_timeout_seconds: int = Field(default=10, ge=1, le=60)


class ResolverSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="RESOLVER_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    debounce_ms: int = Field(default=300, ge=0)
    history_limit: int = Field(default=10, ge=1)
    case_sensitive: bool = False
    discard_stale_results: bool = True
    error_message: str = Field(default="Search failed. Please try again.", min_length=1)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    search_api: SearchApiSettings = Field(default_factory=SearchApiSettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value


@lru_cache
def get_settings() -> ResolverSettings:
    """Return cached settings instance."""

    return ResolverSettings()


__all__ = [
    "CatalogSettings",
    "ResolverSettings",
    "SearchApiSettings",
    "get_settings",
]
