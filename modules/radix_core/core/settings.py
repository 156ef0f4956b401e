from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CUSTOM_DIGITS_",
        env_file=None,
        extra="ignore",
    )

    # arithmetic
    backend: str = Field(default="gmp")
    use_unicode: bool = Field(default=True)

    # randomness
    allow_non_crypto_random: bool = Field(default=False)

    # per-converter memo tables
    cache_max_entries: int = Field(default=100, ge=1)
    cache_trim_chunk: int = Field(default=10, ge=1)

    # tool limits
    max_random_digits: int = Field(default=4096, ge=1)
    max_random_count: int = Field(default=100, ge=1)

    # logging
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=True)

    @field_validator("backend", mode="before")
    @classmethod
    def _normalize_backend(cls, v):
        if v is None:
            return "gmp"
        return str(v).strip().lower() or "gmp"

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, v):
        if v is None:
            return "INFO"
        return str(v).strip().upper() or "INFO"


@lru_cache()
def get_settings() -> Settings:
    """Settings read from ``CUSTOM_DIGITS_*`` environment variables, cached."""
    return Settings()
