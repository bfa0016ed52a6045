"""Weighted aggregation of per-criterion gap scores into factor scores."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from profile_matching.scoring.models import Criterion


def aggregate_factor_score(
    criteria: Sequence[Criterion], gap_scores: Mapping[str, float]
) -> float:
    """Combine the gap scores of one kind group into a factor score.

    Weights are percentages (``60`` means 0.6). Criteria without a gap score
    (no value on the alternative) drop out of both the numerator and the
    denominator. A group of one returns that criterion's score unweighted.
    """
    if not criteria:
        return 0.0

    if len(criteria) == 1:
        return gap_scores.get(criteria[0].name, 0.0)

    total_weight = 0.0
    weighted_sum = 0.0
    for criterion in criteria:
        score = gap_scores.get(criterion.name)
        if score is None:
            continue
        weight = criterion.weight / 100.0
        weighted_sum += weight * score
        total_weight += weight

    if total_weight == 0:
        return 0.0
    return weighted_sum / total_weight
