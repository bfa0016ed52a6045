"""Post-hoc analysis of matching results."""

from __future__ import annotations

from collections.abc import Sequence

from profile_matching.scoring.models import MatchingResult, ScoreRange


def find_most_influential_criteria(
    results: Sequence[MatchingResult], score_range: ScoreRange | None = None
) -> dict[str, float]:
    """Average distance of each criterion's gap score from the range midpoint.

    The total distance is divided by the number of results, including
    results where the criterion had no value.
    """
    if not results:
        return {}

    midpoint = (score_range or ScoreRange()).midpoint
    influence: dict[str, float] = {}
    for result in results:
        for name, score in result.gap_details.items():
            influence[name] = influence.get(name, 0.0) + abs(score - midpoint)

    return {name: total / len(results) for name, total in influence.items()}


def calculate_criteria_differentiation_power(
    results: Sequence[MatchingResult],
) -> dict[str, float]:
    """Population variance of each criterion's gap scores across results."""
    if len(results) < 2:
        return {}

    scores_by_criterion: dict[str, list[float]] = {}
    for result in results:
        for name, score in result.gap_details.items():
            scores_by_criterion.setdefault(name, []).append(score)

    power: dict[str, float] = {}
    for name, scores in scores_by_criterion.items():
        mean = sum(scores) / len(scores)
        power[name] = sum((score - mean) ** 2 for score in scores) / len(scores)
    return power


def identify_strengths_and_weaknesses(
    result: MatchingResult,
    threshold: float = 4.0,
    score_range: ScoreRange | None = None,
) -> tuple[list[str], list[str]]:
    """Split a result's criteria into strengths and weaknesses.

    Strengths score at or above `threshold`. Weaknesses score at or below
    ``score_range.max - threshold``. Strengths are ordered best first,
    weaknesses worst first.
    """
    upper = (score_range or ScoreRange()).max
    gap_details = result.gap_details

    strengths: list[str] = []
    weaknesses: list[str] = []
    for name, score in gap_details.items():
        if score >= threshold:
            strengths.append(name)
        elif score <= upper - threshold:
            weaknesses.append(name)

    strengths.sort(key=lambda name: gap_details[name], reverse=True)
    weaknesses.sort(key=lambda name: gap_details[name])
    return strengths, weaknesses
