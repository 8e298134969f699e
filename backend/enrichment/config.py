"""
Enrichment engine configuration.
Uses LP_ENRICHMENT_ prefix; database URLs come from shared.config.
"""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from shared.models.enums import League


class EnrichmentSettings(BaseSettings):
    """Engine-specific settings; use get_settings() for the databases."""

    model_config = SettingsConfigDict(
        env_prefix="LP_ENRICHMENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    source_timeout_s: float = Field(
        default=8.0,
        gt=0,
        description="Timeout for each prediction source fetch; a slow source degrades to no candidates",
    )
    enabled_leagues: list[League] = Field(
        default_factory=lambda: list(League),
        description="Leagues whose prediction source is queried",
    )


def get_enrichment_settings() -> EnrichmentSettings:
    return EnrichmentSettings()
