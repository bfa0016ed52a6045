"""Normalization utilities for criteria values and scores."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence

from profile_matching.config.settings import NormalizationMethod
from profile_matching.scoring.models import Criterion, ScoreRange

DEFAULT_RANGE = ScoreRange(min=0.0, max=5.0)


def normalize(
    value: float,
    original_min: float,
    original_max: float,
    target_min: float = 0.0,
    target_max: float = 5.0,
) -> float:
    """Min-max rescale `value` into the target range, clamped.

    A degenerate original range (``max <= min``) maps everything to
    `target_min`.
    """
    if original_max <= original_min:
        return target_min

    scaled = (value - original_min) / (original_max - original_min)
    rescaled = scaled * (target_max - target_min) + target_min
    return min(max(rescaled, target_min), target_max)


def normalize_values(
    values: Sequence[float], target_min: float = 0.0, target_max: float = 5.0
) -> list[float]:
    """Rescale a collection using its own min and max."""
    if not values:
        return []

    lowest = min(values)
    highest = max(values)
    return [
        normalize(value, lowest, highest, target_min, target_max) for value in values
    ]


def normalize_criteria_values(
    criteria_values: Mapping[str, float],
    criteria_ranges: Mapping[str, ScoreRange],
    target_min: float = 0.0,
    target_max: float = 5.0,
) -> dict[str, float]:
    """Rescale each criterion value through its own input range.

    Criteria without a configured range are assumed to be on a 0-5 scale.
    """
    normalized: dict[str, float] = {}
    for name, value in criteria_values.items():
        value_range = criteria_ranges.get(name, DEFAULT_RANGE)
        normalized[name] = normalize(
            value, value_range.min, value_range.max, target_min, target_max
        )
    return normalized


def normalize_to_z_scores(scores: Mapping[str, float]) -> dict[str, float]:
    """Convert scores to population z-scores.

    When every score is identical all z-scores are 0.
    """
    if not scores:
        return {}

    values = list(scores.values())
    mean = sum(values) / len(values)
    variance = sum((value - mean) ** 2 for value in values) / len(values)
    std_dev = math.sqrt(variance)

    if std_dev == 0:
        return {key: 0.0 for key in scores}
    return {key: (score - mean) / std_dev for key, score in scores.items()}


def normalize_input_values(
    criteria_values: Mapping[str, float],
    method: NormalizationMethod,
    criteria: Iterable[Criterion],
    criteria_ranges: Mapping[str, ScoreRange] | None = None,
) -> dict[str, float]:
    """Prepare an alternative's raw values for gap computation.

    Contract for every method: input is the raw values plus the configured
    per-criterion ranges, output is values in the same key space.

    - ``none`` returns the values unchanged.
    - ``global`` rescales every value from its configured range (0-5 when
      none is configured) onto the 0-5 scale.
    - ``local`` keeps only the values of known criteria, unscaled.
    """
    if method is NormalizationMethod.NONE:
        return dict(criteria_values)

    if method is NormalizationMethod.GLOBAL:
        return normalize_criteria_values(criteria_values, criteria_ranges or {})

    # TODO: rescale per criterion across the alternatives being ranked once
    # the engine receives the whole batch before evaluating.
    names = {criterion.name for criterion in criteria}
    return {name: value for name, value in criteria_values.items() if name in names}
