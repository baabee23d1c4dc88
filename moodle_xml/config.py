"""
Configuration settings for moodle-xml.

Uses Pydantic Settings so the fraction domain and answer cap can be
overridden from MOODLE_XML_* environment variables or a .env file.
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MOODLE_XML_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Answer validation
    # ========================================
    min_fraction: int = Field(
        default=-100,
        description="Lowest answer fraction accepted for short-answer and multi-choice questions",
    )
    max_fraction: int = Field(
        default=100,
        description="Highest answer fraction accepted for short-answer and multi-choice questions",
    )
    max_answers: int | None = Field(
        default=None,
        ge=1,
        description="Answer cap per question (None = unlimited)",
    )

    # ========================================
    # Output
    # ========================================
    indent: int = Field(
        default=2,
        ge=0,
        description="Spaces per nesting level in the rendered document",
    )

    @model_validator(mode="after")
    def _check_fraction_domain(self) -> "Settings":
        if self.min_fraction > self.max_fraction:
            raise ValueError("min_fraction must not exceed max_fraction")
        # A fully correct answer is always expressible.
        if self.max_fraction < 100:
            raise ValueError("max_fraction must be at least 100")
        return self

    def allows_fraction(self, fraction: int) -> bool:
        """Check whether a fraction lies inside the configured domain."""
        return self.min_fraction <= fraction <= self.max_fraction


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
