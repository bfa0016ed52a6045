"""Data models for the Profile Matching engine."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)


def read_only_mapping(values: Mapping[str, Any]) -> Mapping[str, Any]:
    """Copy `values` into a mapping that rejects item assignment."""
    return MappingProxyType(dict(values))


class FactorKind(str, Enum):
    """Criterion category. Core criteria are penalised more steeply."""

    CORE = "core"
    SECONDARY = "secondary"


class Criterion(BaseModel):
    """A single weighted criterion of the ideal profile."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Unique key within a criteria set")
    target_value: float = Field(..., description="Ideal value for this criterion")
    kind: FactorKind = Field(..., description="Core or secondary factor")
    weight: float = Field(
        ...,
        description="Percentage-like weight, relative to criteria of the same kind",
    )

    def to_dict(self) -> dict:
        """Serialize to a dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> Criterion:
        """Deserialize from a dictionary."""
        return cls.model_validate(data)


class Alternative(BaseModel):
    """An option being scored against the ideal profile."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Unique within an evaluation batch")
    name: str = Field(..., description="Display label")
    criteria_values: Mapping[str, float] = Field(
        default_factory=dict,
        validate_default=True,
        description="Actual value per criterion name; missing criteria are skipped",
    )

    @field_validator("criteria_values")
    @classmethod
    def freeze_criteria_values(cls, v: Mapping[str, float]) -> Mapping[str, float]:
        return read_only_mapping(v)

    @field_serializer("criteria_values")
    def serialize_criteria_values(self, v: Mapping[str, float]) -> dict[str, float]:
        return dict(v)

    def to_dict(self) -> dict:
        """Serialize to a dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> Alternative:
        """Deserialize from a dictionary."""
        return cls.model_validate(data)


class ScoreRange(BaseModel):
    """Inclusive (min, max) score bounds."""

    model_config = ConfigDict(frozen=True)

    min: float = 0.0
    max: float = 5.0

    @model_validator(mode="before")
    @classmethod
    def accept_pairs(cls, data: Any) -> Any:
        """Allow `(min, max)` tuples and lists."""
        if isinstance(data, (tuple, list)):
            if len(data) != 2:
                raise ValueError(f"Score range needs exactly two values (got {data!r})")
            return {"min": data[0], "max": data[1]}
        return data

    @model_validator(mode="after")
    def validate_order(self) -> ScoreRange:
        """Ensure the range is not empty."""
        if self.min >= self.max:
            raise ValueError(
                f"Score range min must be below max (got {self.min} >= {self.max})"
            )
        return self

    @property
    def span(self) -> float:
        return self.max - self.min

    @property
    def midpoint(self) -> float:
        return self.min + self.span / 2.0


class GapScorePair(BaseModel):
    """One entry of a discrete gap-to-score table."""

    model_config = ConfigDict(frozen=True)

    gap: float = Field(..., description="Gap value (actual - target)")
    score: float = Field(..., ge=0.0, description="Score assigned to this gap")


@dataclass(frozen=True)
class MatchingResult:
    """Scores produced for one alternative by a single evaluation."""

    alternative: Alternative
    final_score: float
    core_factor_score: float
    secondary_factor_score: float
    gap_details: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "gap_details", read_only_mapping(self.gap_details))

    @property
    def candidate(self) -> Alternative:
        """Alias of `alternative`."""
        return self.alternative

    def to_dict(self) -> dict:
        """Serialize to a JSON-ready dictionary."""
        return {
            "alternative": self.alternative.to_dict(),
            "final_score": self.final_score,
            "core_factor_score": self.core_factor_score,
            "secondary_factor_score": self.secondary_factor_score,
            "gap_details": dict(self.gap_details),
        }


@dataclass(frozen=True)
class WeightDiagnostic:
    """Advisory finding about criterion weights within one kind group."""

    kind: FactorKind
    weight_sum: float
    expected: float = 100.0

    @property
    def message(self) -> str:
        label = "Core" if self.kind is FactorKind.CORE else "Secondary"
        return (
            f"{label} factor weights sum to {self.weight_sum:g}, "
            f"not {self.expected:g}%"
        )
