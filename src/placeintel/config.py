"""Library configuration and settings management."""

from typing import Any, Literal

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="PLACEINTEL_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    cluster_radius_meters: float = Field(
        default=50.0,
        gt=0.0,
        description="Maximum distance from a cluster seed for a visit to join it.",
    )
    min_visits_for_place: int = Field(
        default=2,
        ge=1,
        description="Smallest cluster size that is materialized as a frequent place.",
    )
    timezone: str = Field(
        default="UTC",
        description="IANA zone used to split trips into calendar days.",
    )
    categorizer_timezone: str = Field(
        default="UTC",
        description="IANA zone used by the heuristic categorizer for time-of-day patterns.",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")

    @field_validator("timezone", "categorizer_timezone", mode="before")
    @classmethod
    def _validate_zone_name(cls, value: Any) -> str:
        name = str(value).strip()
        try:
            ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown time zone '{name}'.") from exc
        return name

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Any) -> str:
        return str(value).strip().upper()


settings = Settings()
