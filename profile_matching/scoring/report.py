"""Ranking reports: score formatting and text summaries."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Literal

from profile_matching.scoring.models import MatchingResult, ScoreRange

STAR = "⭐"


@dataclass(frozen=True)
class ScoreFormat:
    """How scores are presented: raw, percentage, or a star rating."""

    kind: Literal["raw", "percentage", "stars"] = "raw"
    max_stars: int = 5

    def __post_init__(self) -> None:
        if self.kind not in {"raw", "percentage", "stars"}:
            raise ValueError(
                f"score format must be one of: raw, percentage, stars (got {self.kind})"
            )
        if self.max_stars < 1:
            raise ValueError(f"max_stars must be at least 1 (got {self.max_stars})")

    @classmethod
    def raw(cls) -> ScoreFormat:
        return cls("raw")

    @classmethod
    def percentage(cls) -> ScoreFormat:
        return cls("percentage")

    @classmethod
    def stars(cls, max_stars: int = 5) -> ScoreFormat:
        return cls("stars", max_stars)


@dataclass(frozen=True)
class RankingReport:
    """Ranked results plus the formatting used to present them."""

    ranked_results: list[MatchingResult]
    score_format: ScoreFormat = field(default_factory=ScoreFormat)
    score_range: ScoreRange = field(default_factory=ScoreRange)

    def format_score(self, score: float) -> str:
        """Format a raw score according to the report's format."""
        if self.score_format.kind == "raw":
            return f"{score:.2f}"

        fraction = (score - self.score_range.min) / self.score_range.span
        if self.score_format.kind == "percentage":
            return f"{fraction * 100.0:.1f}%"

        max_stars = self.score_format.max_stars
        # Half-way values round up.
        stars = math.floor(fraction * max_stars + 0.5)
        return STAR * max(0, min(max_stars, stars))

    def generate_text_summary(self) -> str:
        """Multi-line summary of the ranking."""
        lines: list[str] = ["Profile Matching Ranking Results:", "=" * 35, ""]

        for rank, result in enumerate(self.ranked_results, start=1):
            alternative = result.alternative
            lines.append(f"Rank #{rank}: {alternative.name} (ID: {alternative.id})")
            lines.append(f"Overall Score: {self.format_score(result.final_score)}")
            lines.append(
                f"Core Factor Score: {self.format_score(result.core_factor_score)}"
            )
            lines.append(
                "Secondary Factor Score: "
                f"{self.format_score(result.secondary_factor_score)}"
            )
            lines.append("Criteria Scores:")
            for name, score in sorted(
                result.gap_details.items(), key=lambda item: item[1], reverse=True
            ):
                lines.append(f"  - {name}: {self.format_score(score)}")
            lines.append("")

        return "\n".join(lines) + "\n"


def create_report(
    results: Sequence[MatchingResult],
    score_format: ScoreFormat | None = None,
    score_range: ScoreRange | None = None,
    limit: int | None = None,
) -> RankingReport:
    """Build a report from already-ranked results, optionally truncated."""
    ranked = list(results)
    if limit is not None:
        if limit < 0:
            raise ValueError(f"limit must be non-negative (got {limit})")
        ranked = ranked[:limit]

    return RankingReport(
        ranked_results=ranked,
        score_format=score_format or ScoreFormat(),
        score_range=score_range or ScoreRange(),
    )
