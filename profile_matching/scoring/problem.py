"""Problem file loading and validation utilities."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, model_validator

from profile_matching.scoring.config import ScoringConfiguration
from profile_matching.scoring.engine import MatchingEngine
from profile_matching.scoring.models import Alternative, Criterion

logger = logging.getLogger(__name__)


class MatchingProblem(BaseModel):
    """Criteria, alternatives and an optional configuration, as one document."""

    criteria: list[Criterion] = Field(..., min_length=1, description="Ideal profile")
    alternatives: list[Alternative] = Field(
        default_factory=list, description="Alternatives to rank"
    )
    configuration: ScoringConfiguration | None = Field(
        default=None, description="Scoring configuration (settings when omitted)"
    )

    @model_validator(mode="after")
    def validate_unique_keys(self) -> MatchingProblem:
        """Criterion names and alternative ids must be unique."""
        names = [criterion.name for criterion in self.criteria]
        if len(names) != len(set(names)):
            raise ValueError("Criterion names must be unique")
        ids = [alternative.id for alternative in self.alternatives]
        if len(ids) != len(set(ids)):
            raise ValueError("Alternative ids must be unique")
        return self

    def build_engine(
        self, default_config: ScoringConfiguration | None = None
    ) -> MatchingEngine:
        """Create an engine for this problem's criteria and configuration.

        `default_config` is used when the problem carries no configuration.
        """
        return MatchingEngine(self.criteria, self.configuration or default_config)


class ProblemService:
    """Service for loading and validating matching problems."""

    def load_problem(self, path: Path | str) -> MatchingProblem:
        """Load and validate a problem from YAML or JSON."""
        problem_path = Path(path)
        if not problem_path.exists():
            raise FileNotFoundError(f"Problem file not found: {problem_path}")

        raw = problem_path.read_text(encoding="utf-8")
        suffix = problem_path.suffix.lower()
        if suffix in {".yaml", ".yml"}:
            data = self._parse_yaml(raw, problem_path, "Invalid YAML problem file")
        elif suffix == ".json":
            data = self._parse_json(raw, problem_path)
        else:
            data = self._parse_unknown(raw, problem_path)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Problem file must be a mapping/dict: {problem_path}")

        problem = MatchingProblem.model_validate(data)
        logger.info(
            "Loaded problem %s: %d criteria, %d alternatives",
            problem_path,
            len(problem.criteria),
            len(problem.alternatives),
        )
        return problem

    def validate_problem(self, problem: MatchingProblem) -> list[str]:
        """Return warnings for problems that will score oddly."""
        warnings: list[str] = []

        if not problem.alternatives:
            warnings.append("No alternatives to rank")

        names = {criterion.name for criterion in problem.criteria}
        for alternative in problem.alternatives:
            missing = sorted(names - alternative.criteria_values.keys())
            if missing:
                warnings.append(
                    f"Alternative '{alternative.id}' has no value for: "
                    f"{', '.join(missing)}"
                )
            unknown = sorted(alternative.criteria_values.keys() - names)
            if unknown:
                warnings.append(
                    f"Alternative '{alternative.id}' has values for unknown "
                    f"criteria: {', '.join(unknown)}"
                )

        return warnings

    def _parse_yaml(self, raw: str, path: Path, error: str) -> Any:
        try:
            return yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ValueError(f"{error}: {path}") from e

    def _parse_json(self, raw: str, path: Path) -> Any:
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON problem file: {path}") from e

    def _parse_unknown(self, raw: str, path: Path) -> Any:
        """Sniff the format when the file extension is unknown.

        Content that opens like JSON and parses as JSON is JSON; anything
        else is read as YAML.
        """
        if raw.lstrip().startswith(("{", "[")):
            try:
                return json.loads(raw)
            except json.JSONDecodeError:
                pass
        return self._parse_yaml(raw, path, "Invalid problem file format")
