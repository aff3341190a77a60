"""
Environment-driven settings for batchheap.

Values come from ``BATCHHEAP_*`` environment variables or a ``.env`` file in
the working directory.

Example:
    >>> from batchheap.core.settings import get_settings
    >>> get_settings().default_batch_size
    1000
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BatchHeapSettings(BaseSettings):
    """Settings shared by the processor and logging setup.

    Fields
    ──────
    log_level           : Structlog log level
    log_format          : ``console`` or ``json`` rendering
    default_batch_size  : Batch size used when a caller passes none
    trace               : Write per-batch trace lines to the processor sink
    """

    model_config = SettingsConfigDict(
        env_prefix="BATCHHEAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["console", "json"] = "console"
    trace: bool = False

    # ── Processing ───────────────────────────────────────────────
    default_batch_size: int = Field(
        default=1000,
        ge=1,
        description="Batch size used when perform() is called without one",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @field_validator("log_format", mode="before")
    @classmethod
    def _lower_format(cls, value: object) -> object:
        return value.lower() if isinstance(value, str) else value


_settings: BatchHeapSettings | None = None


def get_settings() -> BatchHeapSettings:
    """Get or create the cached settings instance."""
    global _settings
    if _settings is None:
        _settings = BatchHeapSettings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings (for testing)."""
    global _settings
    _settings = None
