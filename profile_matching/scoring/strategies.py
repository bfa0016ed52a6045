"""Gap scoring strategies.

A strategy turns the gap between an alternative's actual value and the
criterion's target (``gap = actual - target``) into a bounded score.

Two families are supported:

- Continuous strategies use closed-form formulas (``standard``,
  ``simple`` and ``custom``).
- The discrete strategy looks gaps up in a sorted ``(gap, score)`` table
  and resolves gaps missing from the table with a handling method
  (``interpolation``, ``nearest_neighbor``, ``threshold`` or
  ``default_value``). ``basic`` is accepted as an alias of
  ``nearest_neighbor``.

Both families are closed sets of pydantic models tagged by a
discriminator field, so configurations round-trip through YAML/JSON.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from profile_matching.scoring.models import FactorKind, GapScorePair

PERFECT_SCORE = 5.0


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


# ---------------------------------------------------------------------------
# Continuous strategies
# ---------------------------------------------------------------------------


class StandardGapStrategy(BaseModel):
    """Kind-sensitive piecewise formula on a fixed 0-5 scale.

    Core criteria lose a full point per unit of shortfall and are capped at
    4.5 when they exceed the target. Secondary criteria lose 0.75 per unit
    of shortfall and 0.25 per unit of excess, without the cap.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["standard"] = "standard"

    def score(self, gap: float, kind: FactorKind) -> float:
        if gap == 0:
            return PERFECT_SCORE
        if kind is FactorKind.CORE:
            if gap > 0:
                return max(0.0, min(4.5, PERFECT_SCORE - 0.5 * gap))
            return max(0.0, PERFECT_SCORE + gap)
        if gap > 0:
            return max(0.0, min(PERFECT_SCORE, PERFECT_SCORE - 0.25 * gap))
        return max(0.0, PERFECT_SCORE + 0.75 * gap)


class SimpleGapStrategy(BaseModel):
    """Symmetric linear penalty: ``5 - min(5, |gap|)``."""

    model_config = ConfigDict(frozen=True)

    type: Literal["simple"] = "simple"

    def score(self, gap: float, kind: FactorKind) -> float:
        return PERFECT_SCORE - min(PERFECT_SCORE, abs(gap))


class CustomGapStrategy(BaseModel):
    """Standard formula with caller-chosen slopes and ceiling."""

    model_config = ConfigDict(frozen=True)

    type: Literal["custom"] = "custom"
    perfect_match_score: float = Field(..., ge=0.0)
    exceeds_penalty: float = Field(..., description="Score lost per unit above target")
    below_penalty: float = Field(..., description="Score lost per unit below target")
    max_score: float = Field(..., ge=0.0)

    def score(self, gap: float, kind: FactorKind) -> float:
        if gap == 0:
            return self.perfect_match_score
        if gap > 0:
            raw = self.perfect_match_score - self.exceeds_penalty * gap
        else:
            raw = self.perfect_match_score + self.below_penalty * gap
        return _clamp(raw, 0.0, self.max_score)


# ---------------------------------------------------------------------------
# Discrete handling methods
# ---------------------------------------------------------------------------


class Interpolation(BaseModel):
    """Linear interpolation between adjacent table entries.

    Gaps outside the table take the nearest boundary entry's score.
    """

    model_config = ConfigDict(frozen=True)

    method: Literal["interpolation"] = "interpolation"

    def resolve(self, table: tuple[GapScorePair, ...], gap: float) -> float:
        first, last = table[0], table[-1]
        if gap <= first.gap:
            return first.score
        if gap >= last.gap:
            return last.score

        for lower, upper in zip(table, table[1:]):
            if lower.gap <= gap <= upper.gap:
                fraction = (gap - lower.gap) / (upper.gap - lower.gap)
                return lower.score + (upper.score - lower.score) * fraction

        return last.score


class NearestNeighbor(BaseModel):
    """Score of the closest table gap; ties go to the lower gap."""

    model_config = ConfigDict(frozen=True)

    method: Literal["nearest_neighbor"] = "nearest_neighbor"

    def resolve(self, table: tuple[GapScorePair, ...], gap: float) -> float:
        nearest = min(table, key=lambda pair: (abs(gap - pair.gap), pair.gap))
        return nearest.score


class Threshold(BaseModel):
    """Each table gap opens the range ``[gap, next_gap)``.

    Gaps below the smallest entry use the smallest entry's score.
    """

    model_config = ConfigDict(frozen=True)

    method: Literal["threshold"] = "threshold"

    def resolve(self, table: tuple[GapScorePair, ...], gap: float) -> float:
        chosen = table[0]
        for pair in table:
            if pair.gap > gap:
                break
            chosen = pair
        return chosen.score


class DefaultValue(BaseModel):
    """Fixed score for every gap missing from the table."""

    model_config = ConfigDict(frozen=True)

    method: Literal["default_value"] = "default_value"
    score: float = Field(..., ge=0.0)

    def resolve(self, table: tuple[GapScorePair, ...], gap: float) -> float:
        return self.score


HandlingMethod = Annotated[
    Union[Interpolation, NearestNeighbor, Threshold, DefaultValue],
    Field(discriminator="method"),
]

_HANDLING_ALIASES = {
    "basic": "nearest_neighbor",
    "nearestneighbor": "nearest_neighbor",
    "defaultvalue": "default_value",
}


def _canonical_method(name: str) -> str:
    value = name.strip().lower().replace("-", "_")
    return _HANDLING_ALIASES.get(value, value)


# ---------------------------------------------------------------------------
# Discrete strategy
# ---------------------------------------------------------------------------


class DiscreteGapStrategy(BaseModel):
    """Table lookup with a policy for gaps the table does not define.

    An exact table match always wins, whatever the handling method.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["discrete"] = "discrete"
    mapping: tuple[GapScorePair, ...] = Field(default_factory=tuple)
    handling: HandlingMethod = Field(default_factory=NearestNeighbor)

    @field_validator("mapping", mode="before")
    @classmethod
    def parse_mapping(cls, v: Any) -> Any:
        """Accept a ``{gap: score}`` mapping as well as a list of pairs."""
        if isinstance(v, Mapping):
            return [{"gap": float(gap), "score": score} for gap, score in v.items()]
        return v

    @field_validator("mapping")
    @classmethod
    def sort_mapping(cls, v: tuple[GapScorePair, ...]) -> tuple[GapScorePair, ...]:
        """Sort by gap and reject duplicate gaps."""
        ordered = tuple(sorted(v, key=lambda pair: pair.gap))
        for previous, current in zip(ordered, ordered[1:]):
            if previous.gap == current.gap:
                raise ValueError(f"Duplicate gap value in mapping: {current.gap}")
        return ordered

    @field_validator("handling", mode="before")
    @classmethod
    def parse_handling(cls, v: Any) -> Any:
        """Accept plain method names and resolve the ``basic`` alias."""
        if isinstance(v, str):
            return {"method": _canonical_method(v)}
        if isinstance(v, Mapping) and isinstance(v.get("method"), str):
            return {**v, "method": _canonical_method(v["method"])}
        return v

    @model_validator(mode="after")
    def validate_table(self) -> DiscreteGapStrategy:
        """An empty table only makes sense with a default value."""
        if not self.mapping and not isinstance(self.handling, DefaultValue):
            raise ValueError(
                "Discrete mapping is empty; an empty table requires the "
                "'default_value' handling method"
            )
        return self

    def score(self, gap: float, kind: FactorKind) -> float:
        for pair in self.mapping:
            if pair.gap == gap:
                return pair.score
        return self.handling.resolve(self.mapping, gap)


GapStrategy = Annotated[
    Union[
        StandardGapStrategy, SimpleGapStrategy, CustomGapStrategy, DiscreteGapStrategy
    ],
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Mapping factories
# ---------------------------------------------------------------------------


def create_discrete_mapping(
    gap_to_score: Mapping[float, float],
) -> tuple[GapScorePair, ...]:
    """Build a table sorted by gap from a ``{gap: score}`` mapping."""
    return tuple(
        sorted(
            (GapScorePair(gap=gap, score=score) for gap, score in gap_to_score.items()),
            key=lambda pair: pair.gap,
        )
    )


def symmetric_mapping(
    perfect_match_score: float = PERFECT_SCORE, max_gap: int = 5
) -> tuple[GapScorePair, ...]:
    """Table losing one point per unit of gap in either direction."""
    if max_gap < 1:
        raise ValueError(f"max_gap must be at least 1 (got {max_gap})")

    gap_to_score = {0.0: perfect_match_score}
    for step in range(1, max_gap + 1):
        score = max(0.0, perfect_match_score - step)
        gap_to_score[float(step)] = score
        gap_to_score[float(-step)] = score
    return create_discrete_mapping(gap_to_score)


def asymmetric_mapping(
    perfect_match_score: float = PERFECT_SCORE,
    max_gap: int = 5,
    exceed_penalty: float = 0.5,
    below_penalty: float = 1.0,
) -> tuple[GapScorePair, ...]:
    """Table with separate per-unit penalties above and below the target."""
    if max_gap < 1:
        raise ValueError(f"max_gap must be at least 1 (got {max_gap})")

    gap_to_score = {0.0: perfect_match_score}
    for step in range(1, max_gap + 1):
        exceeds = perfect_match_score - step * exceed_penalty
        below = perfect_match_score - step * below_penalty
        gap_to_score[float(step)] = max(0.0, exceeds)
        gap_to_score[float(-step)] = max(0.0, below)
    return create_discrete_mapping(gap_to_score)
