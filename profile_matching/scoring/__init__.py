"""Profile Matching scoring engine.

This module scores alternatives against an ideal profile of weighted
criteria and ranks them by their final score.

Public API:
    - MatchingEngine: Evaluate and rank alternatives
    - ScoringConfiguration: Strategy, factor weights and score range
    - Criterion, Alternative, MatchingResult: Engine data models
    - Gap strategies: Standard, Simple, Custom and Discrete
    - ProblemService: Load problem files (YAML/JSON)
"""

from profile_matching.scoring.config import (
    ScoringConfiguration,
    get_scoring_configuration,
    reset_scoring_configuration,
)
from profile_matching.scoring.engine import MatchingEngine
from profile_matching.scoring.models import (
    Alternative,
    Criterion,
    FactorKind,
    GapScorePair,
    MatchingResult,
    ScoreRange,
    WeightDiagnostic,
)
from profile_matching.scoring.problem import MatchingProblem, ProblemService
from profile_matching.scoring.strategies import (
    CustomGapStrategy,
    DefaultValue,
    DiscreteGapStrategy,
    Interpolation,
    NearestNeighbor,
    SimpleGapStrategy,
    StandardGapStrategy,
    Threshold,
    create_discrete_mapping,
)

__all__ = [
    "MatchingEngine",
    "ScoringConfiguration",
    "get_scoring_configuration",
    "reset_scoring_configuration",
    "Alternative",
    "Criterion",
    "FactorKind",
    "GapScorePair",
    "MatchingResult",
    "ScoreRange",
    "WeightDiagnostic",
    "MatchingProblem",
    "ProblemService",
    "StandardGapStrategy",
    "SimpleGapStrategy",
    "CustomGapStrategy",
    "DiscreteGapStrategy",
    "Interpolation",
    "NearestNeighbor",
    "Threshold",
    "DefaultValue",
    "create_discrete_mapping",
]
