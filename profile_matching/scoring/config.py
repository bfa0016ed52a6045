"""Scoring configuration for the Profile Matching engine."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

from profile_matching.config.settings import (
    NormalizationMethod,
    Settings,
    WeightHandling,
    get_settings,
)
from profile_matching.scoring.models import ScoreRange, read_only_mapping
from profile_matching.scoring.strategies import (
    PERFECT_SCORE,
    DiscreteGapStrategy,
    GapStrategy,
    HandlingMethod,
    NearestNeighbor,
    StandardGapStrategy,
    asymmetric_mapping,
    create_discrete_mapping,
    symmetric_mapping,
)

FACTOR_WEIGHT_TOLERANCE = 0.001


class ScoringConfiguration(BaseModel):
    """Immutable settings bundle shared by every evaluation in a run.

    The factor weights are validated at construction: a configuration whose
    core and secondary weights do not sum to 1.0 cannot exist.
    """

    model_config = ConfigDict(frozen=True)

    strategy: GapStrategy = Field(
        default_factory=StandardGapStrategy,
        description="Gap scoring strategy",
    )
    core_factor_weight: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.6,
        description="Weight of the core factor score in the final score",
    )
    secondary_factor_weight: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.4,
        description="Weight of the secondary factor score in the final score",
    )
    normalization: NormalizationMethod = Field(
        default=NormalizationMethod.NONE,
        description="Input normalization applied before gap computation",
    )
    weight_handling: WeightHandling = Field(
        default=WeightHandling.DIRECT,
        description="'direct' runs the advisory 100% weight check",
    )
    score_range: ScoreRange = Field(
        default_factory=ScoreRange,
        description="Score bounds used by reports and analysis",
    )
    criteria_ranges: Mapping[str, ScoreRange] = Field(
        default_factory=dict,
        validate_default=True,
        description="Raw input range per criterion, used by 'global' normalization",
    )

    @field_validator("strategy", mode="before")
    @classmethod
    def parse_strategy(cls, v: Any) -> Any:
        """Accept a bare strategy name such as ``"simple"``."""
        if isinstance(v, str):
            return {"type": v.strip().lower()}
        return v

    @field_validator("normalization", "weight_handling", mode="before")
    @classmethod
    def lowercase_choices(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("criteria_ranges")
    @classmethod
    def freeze_criteria_ranges(
        cls, v: Mapping[str, ScoreRange]
    ) -> Mapping[str, ScoreRange]:
        return read_only_mapping(v)

    @field_serializer("criteria_ranges")
    def serialize_criteria_ranges(
        self, v: Mapping[str, ScoreRange]
    ) -> dict[str, ScoreRange]:
        return dict(v)

    @model_validator(mode="after")
    def validate_factor_weights(self) -> ScoringConfiguration:
        """Ensure core and secondary factor weights sum to 1.0."""
        weight_sum = self.core_factor_weight + self.secondary_factor_weight
        if abs(weight_sum - 1.0) >= FACTOR_WEIGHT_TOLERANCE:
            raise ValueError(
                "Core factor weight and secondary factor weight must sum to 1.0. "
                f"Got {weight_sum:.6f} "
                f"(core={self.core_factor_weight}, "
                f"secondary={self.secondary_factor_weight})."
            )
        return self

    @classmethod
    def standard(cls) -> ScoringConfiguration:
        """Standard strategy, 60/40 factor weights, no normalization."""
        return cls()

    @classmethod
    def from_settings(cls, settings: Settings) -> ScoringConfiguration:
        """Build a configuration from environment-driven settings."""
        return cls(
            strategy={"type": settings.gap_strategy.value},
            core_factor_weight=settings.core_factor_weight,
            secondary_factor_weight=settings.secondary_factor_weight,
            normalization=settings.normalization,
            weight_handling=settings.weight_handling,
            score_range=ScoreRange(min=settings.score_min, max=settings.score_max),
        )

    @classmethod
    def discrete_mapping(
        cls,
        gap_to_score: Mapping[float, float],
        handling: HandlingMethod | str | None = None,
        core_factor_weight: float = 0.6,
        secondary_factor_weight: float = 0.4,
    ) -> ScoringConfiguration:
        """Discrete strategy built from a ``{gap: score}`` mapping."""
        return cls(
            strategy=DiscreteGapStrategy(
                mapping=create_discrete_mapping(gap_to_score),
                handling=handling or NearestNeighbor(),
            ),
            core_factor_weight=core_factor_weight,
            secondary_factor_weight=secondary_factor_weight,
        )

    @classmethod
    def discrete_symmetric(
        cls,
        perfect_match_score: float = PERFECT_SCORE,
        max_gap: int = 5,
        max_score: float = PERFECT_SCORE,
        handling: HandlingMethod | str | None = None,
    ) -> ScoringConfiguration:
        """Discrete table losing one point per unit of gap either way."""
        return cls(
            strategy=DiscreteGapStrategy(
                mapping=symmetric_mapping(perfect_match_score, max_gap),
                handling=handling or NearestNeighbor(),
            ),
            score_range=ScoreRange(min=0.0, max=max_score),
        )

    @classmethod
    def discrete_asymmetric(
        cls,
        perfect_match_score: float = PERFECT_SCORE,
        max_gap: int = 5,
        exceed_penalty: float = 0.5,
        below_penalty: float = 1.0,
        max_score: float = PERFECT_SCORE,
        handling: HandlingMethod | str | None = None,
    ) -> ScoringConfiguration:
        """Discrete table with separate penalties above and below target."""
        return cls(
            strategy=DiscreteGapStrategy(
                mapping=asymmetric_mapping(
                    perfect_match_score, max_gap, exceed_penalty, below_penalty
                ),
                handling=handling or NearestNeighbor(),
            ),
            score_range=ScoreRange(min=0.0, max=max_score),
        )


# Singleton instance for easy import
_scoring_configuration: ScoringConfiguration | None = None


def get_scoring_configuration() -> ScoringConfiguration:
    """Get the scoring configuration singleton built from settings."""
    global _scoring_configuration
    if _scoring_configuration is None:
        _scoring_configuration = ScoringConfiguration.from_settings(get_settings())
    return _scoring_configuration


def reset_scoring_configuration() -> None:
    """Reset the scoring configuration singleton (useful for testing)."""
    global _scoring_configuration
    _scoring_configuration = None
