"""Application configuration utilities."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Root logger level")
    json_logs: bool = Field(default=True, description="Enable JSON formatted logs")


class QRConfig(BaseModel):
    error_correction: Literal["L", "M", "Q", "H"] = Field(default="M")
    box_size: int = Field(default=10, ge=1, le=50)
    border: int = Field(default=4, ge=0, le=20)
    default_output: Literal["svg", "png"] = Field(default="svg")


class Settings(BaseSettings):
    """Central settings loaded from ``PIXCODE_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PIXCODE_",
        env_nested_delimiter="__",
        env_file=(Path(__file__).resolve().parent.parent / ".env"),
        env_file_encoding="utf-8",
    )

    app_name: str = Field(default="pixcode")
    default_merchant_name: str | None = Field(default=None)
    default_merchant_city: str | None = Field(default=None)
    qr: QRConfig = Field(default_factory=QRConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return memoized application settings."""

    return Settings()

