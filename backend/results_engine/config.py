"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator, ConfigDict

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    debug: bool = Field(default=False, description="Enable debug logging")
    log_level: str = Field(default="INFO", description="Logging level")

    # === Reconciliation ===
    auto_merge_confidence: int = Field(
        default=85,
        ge=0,
        le=100,
        description="Minimum match confidence for a clean (unflagged) merge"
    )

    # === Athlete matching ===
    auto_link_confidence: int = Field(
        default=90,
        ge=0,
        le=100,
        description="Minimum confidence to auto-link a result to an athlete"
    )
    candidate_name_threshold: float = Field(
        default=0.6,
        gt=0,
        le=1,
        description="Maximum raw name distance for suggested candidates"
    )
    auto_match_name_threshold: float = Field(
        default=0.3,
        gt=0,
        le=1,
        description="Maximum raw name distance considered by auto-match"
    )
    roster_search_limit: int = Field(
        default=50,
        gt=0,
        description="Maximum roster entries returned by the coarse name search"
    )

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Upper-case and check the logging level name."""
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
