"""Profile Matching engine: evaluate and rank alternatives."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from profile_matching.config.settings import WeightHandling
from profile_matching.scoring.aggregation import aggregate_factor_score
from profile_matching.scoring.config import (
    ScoringConfiguration,
    get_scoring_configuration,
)
from profile_matching.scoring.models import (
    Alternative,
    Criterion,
    FactorKind,
    MatchingResult,
    WeightDiagnostic,
)
from profile_matching.scoring.normalization import normalize_input_values

logger = logging.getLogger(__name__)

WEIGHT_SUM_TOLERANCE = 0.01


class MatchingEngine:
    """Scores alternatives against a fixed set of weighted criteria.

    The engine holds only the criteria and the configuration, both
    read-only, so every call is independent and deterministic.
    """

    def __init__(
        self,
        criteria: Iterable[Criterion],
        config: ScoringConfiguration | None = None,
    ) -> None:
        self.config = config or get_scoring_configuration()
        self.criteria: tuple[Criterion, ...] = tuple(criteria)

        seen: set[str] = set()
        for criterion in self.criteria:
            if criterion.name in seen:
                raise ValueError(f"Duplicate criterion name: {criterion.name}")
            seen.add(criterion.name)

        self.core_criteria = tuple(
            c for c in self.criteria if c.kind is FactorKind.CORE
        )
        self.secondary_criteria = tuple(
            c for c in self.criteria if c.kind is FactorKind.SECONDARY
        )

        self.diagnostics: tuple[WeightDiagnostic, ...] = ()
        if self.config.weight_handling is WeightHandling.DIRECT:
            self.diagnostics = tuple(self.validate_weights())

    def validate_weights(self) -> list[WeightDiagnostic]:
        """Check that each non-empty kind group's weights sum to 100.

        Advisory only: mismatches are logged and returned, never raised.
        """
        diagnostics: list[WeightDiagnostic] = []
        for kind, group in (
            (FactorKind.CORE, self.core_criteria),
            (FactorKind.SECONDARY, self.secondary_criteria),
        ):
            if not group:
                continue
            weight_sum = sum(criterion.weight for criterion in group)
            if abs(weight_sum - 100.0) > WEIGHT_SUM_TOLERANCE:
                diagnostic = WeightDiagnostic(kind=kind, weight_sum=weight_sum)
                logger.warning(diagnostic.message)
                diagnostics.append(diagnostic)
        return diagnostics

    def score_gaps(self, alternative: Alternative) -> dict[str, float]:
        """Gap score per criterion present on the alternative."""
        values = normalize_input_values(
            alternative.criteria_values,
            self.config.normalization,
            self.criteria,
            self.config.criteria_ranges,
        )

        gap_details: dict[str, float] = {}
        for criterion in self.criteria:
            actual = values.get(criterion.name)
            if actual is None:
                continue
            gap = actual - criterion.target_value
            gap_details[criterion.name] = self.config.strategy.score(
                gap, criterion.kind
            )
        return gap_details

    def evaluate(self, alternative: Alternative) -> MatchingResult:
        """Score one alternative."""
        gap_details = self.score_gaps(alternative)

        # A lone criterion has nothing to weigh against: its gap score is
        # the final score.
        if len(self.criteria) == 1 and self.criteria[0].name in gap_details:
            criterion = self.criteria[0]
            score = gap_details[criterion.name]
            is_core = criterion.kind is FactorKind.CORE
            return MatchingResult(
                alternative=alternative,
                final_score=score,
                core_factor_score=score if is_core else 0.0,
                secondary_factor_score=0.0 if is_core else score,
                gap_details=gap_details,
            )

        core_factor_score = aggregate_factor_score(self.core_criteria, gap_details)
        secondary_factor_score = aggregate_factor_score(
            self.secondary_criteria, gap_details
        )

        if not self.core_criteria:
            final_score = secondary_factor_score
        elif not self.secondary_criteria:
            final_score = core_factor_score
        else:
            final_score = (
                self.config.core_factor_weight * core_factor_score
                + self.config.secondary_factor_weight * secondary_factor_score
            )

        logger.debug(
            "Evaluated %s: final=%.4f core=%.4f secondary=%.4f",
            alternative.id,
            final_score,
            core_factor_score,
            secondary_factor_score,
        )

        return MatchingResult(
            alternative=alternative,
            final_score=final_score,
            core_factor_score=core_factor_score,
            secondary_factor_score=secondary_factor_score,
            gap_details=gap_details,
        )

    def rank(self, alternatives: Sequence[Alternative]) -> list[MatchingResult]:
        """Evaluate every alternative and order by final score, best first.

        The sort is stable: equal scores keep their input order.
        """
        results = [self.evaluate(alternative) for alternative in alternatives]
        return sorted(results, key=lambda result: result.final_score, reverse=True)
