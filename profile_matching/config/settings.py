"""Configuration settings for profile-matching."""

from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class GapStrategyName(str, Enum):
    """Continuous gap strategies selectable from the environment."""

    STANDARD = "standard"
    SIMPLE = "simple"


class NormalizationMethod(str, Enum):
    """How raw criteria values are rescaled before gap computation."""

    NONE = "none"
    GLOBAL = "global"
    LOCAL = "local"


class WeightHandling(str, Enum):
    """How criterion weights are interpreted."""

    DIRECT = "direct"
    NORMALIZED = "normalized"


class Settings(BaseSettings):
    """Settings loaded from environment variables.

    All settings have sensible defaults and can be overridden via
    environment variables with `PROFILE_MATCHING_` prefix or a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="PROFILE_MATCHING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Factor weights (must sum to 1.0)
    core_factor_weight: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.6,
        description="Weight of the core factor score in the final score",
    )
    secondary_factor_weight: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.4,
        description="Weight of the secondary factor score in the final score",
    )

    # Scoring behaviour
    gap_strategy: GapStrategyName = Field(
        default=GapStrategyName.STANDARD,
        description="Default continuous gap strategy: 'standard' or 'simple'",
    )
    normalization: NormalizationMethod = Field(
        default=NormalizationMethod.NONE,
        description="Input normalization: 'none', 'global' or 'local'",
    )
    weight_handling: WeightHandling = Field(
        default=WeightHandling.DIRECT,
        description="Weight handling: 'direct' (advisory 100% check) or 'normalized'",
    )

    # Score range used by reports and analysis
    score_min: float = Field(default=0.0, description="Lower bound of the score range")
    score_max: float = Field(default=5.0, description="Upper bound of the score range")
    strength_threshold: float = Field(
        default=4.0,
        description="Gap score at or above which a criterion counts as a strength",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a known level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()

    @field_validator(
        "gap_strategy", "normalization", "weight_handling", mode="before"
    )
    @classmethod
    def lowercase_choices(cls, v: object) -> object:
        """Accept choice values in any case."""
        if isinstance(v, str):
            return v.lower().strip()
        return v

    @model_validator(mode="after")
    def validate_settings(self) -> Settings:
        """Ensure factor weights sum to 1.0 and the score range is ordered."""
        weight_sum = self.core_factor_weight + self.secondary_factor_weight
        if abs(weight_sum - 1.0) >= 0.001:
            raise ValueError(
                "Factor weights must sum to 1.0. "
                f"Got {weight_sum:.6f} "
                f"(core={self.core_factor_weight}, "
                f"secondary={self.secondary_factor_weight})."
            )
        if self.score_min >= self.score_max:
            raise ValueError(
                f"score_min must be below score_max "
                f"(got {self.score_min} >= {self.score_max})"
            )
        return self


# Singleton instance for easy import
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the settings singleton."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset the settings singleton (useful for testing)."""
    global _settings
    _settings = None
