"""Command-line entry point for profile-matching."""

import argparse
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from profile_matching import __version__
from profile_matching.config.settings import Settings
from profile_matching.scoring.config import ScoringConfiguration
from profile_matching.utils.logging import configure_logging


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("value must be at least 1")
    return number


def _write_json(path: Path, payload: object) -> None:
    def _default(value: object):
        to_dict = getattr(value, "to_dict", None)
        if callable(to_dict):
            return to_dict()
        model_dump = getattr(value, "model_dump", None)
        if callable(model_dump):
            return model_dump(mode="json")
        return str(value)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(payload, indent=2, ensure_ascii=False, default=_default),
        encoding="utf-8",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="profile-matching",
        description="Rank alternatives against an ideal profile (Profile Matching)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m profile_matching rank problem.yaml
  python -m profile_matching rank problem.yaml --format stars --limit 3
  python -m profile_matching analyze problem.json --threshold 4.5
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set the log level (overrides settings)",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        description="Available commands",
    )

    rank_parser = subparsers.add_parser(
        "rank",
        help="Rank the alternatives of a problem file",
    )
    rank_parser.add_argument(
        "problem",
        type=Path,
        help="Path to a YAML or JSON problem file",
    )
    rank_parser.add_argument(
        "--format",
        dest="score_format",
        choices=["raw", "percentage", "stars"],
        default="raw",
        help="How scores are displayed (default: raw)",
    )
    rank_parser.add_argument(
        "--max-stars",
        type=_positive_int,
        default=5,
        help="Number of stars for a perfect score with --format stars",
    )
    rank_parser.add_argument(
        "--limit",
        type=_positive_int,
        default=None,
        help="Only show the top N alternatives",
    )
    rank_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Also write the ranked results as JSON to this path",
    )

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Show influence, differentiation power, strengths and weaknesses",
    )
    analyze_parser.add_argument(
        "problem",
        type=Path,
        help="Path to a YAML or JSON problem file",
    )
    analyze_parser.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="Strength threshold (overrides settings)",
    )

    return parser


def _run_rank(parsed: argparse.Namespace, problem, settings: Settings) -> int:
    from profile_matching.scoring.report import ScoreFormat, create_report

    engine = problem.build_engine(ScoringConfiguration.from_settings(settings))
    results = engine.rank(problem.alternatives)

    report = create_report(
        results,
        score_format=ScoreFormat(parsed.score_format, parsed.max_stars),
        score_range=engine.config.score_range,
        limit=parsed.limit,
    )
    print(report.generate_text_summary(), end="")

    if parsed.output is not None:
        _write_json(
            parsed.output,
            {
                "results": [result.to_dict() for result in report.ranked_results],
                "configuration": engine.config.model_dump(mode="json"),
            },
        )
        print(f"Wrote results to {parsed.output}")

    return 0


def _run_analyze(parsed: argparse.Namespace, problem, settings: Settings) -> int:
    from profile_matching.scoring.analysis import (
        calculate_criteria_differentiation_power,
        find_most_influential_criteria,
        identify_strengths_and_weaknesses,
    )

    engine = problem.build_engine(ScoringConfiguration.from_settings(settings))
    results = engine.rank(problem.alternatives)
    score_range = engine.config.score_range
    threshold = parsed.threshold
    if threshold is None:
        threshold = settings.strength_threshold

    influence = find_most_influential_criteria(results, score_range)
    print("Criteria influence:")
    ranked_influence = sorted(influence.items(), key=lambda item: item[1], reverse=True)
    for name, value in ranked_influence:
        print(f"  - {name}: {value:.2f}")

    power = calculate_criteria_differentiation_power(results)
    print("Differentiation power:")
    if not power:
        print("  (needs at least two alternatives)")
    for name, value in sorted(power.items(), key=lambda item: item[1], reverse=True):
        print(f"  - {name}: {value:.2f}")

    print("Strengths and weaknesses:")
    for result in results:
        strengths, weaknesses = identify_strengths_and_weaknesses(
            result, threshold=threshold, score_range=score_range
        )
        print(f"  {result.alternative.name} (ID: {result.alternative.id})")
        print(f"    Strengths: {', '.join(strengths) or '-'}")
        print(f"    Weaknesses: {', '.join(weaknesses) or '-'}")

    return 0


def main(args: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        args: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    try:
        settings = Settings()
    except ValidationError as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    log_level = parsed.log_level or settings.log_level
    logger = configure_logging(level=log_level)

    if parsed.command is None:
        parser.print_help()
        return 0

    logger.debug(f"profile-matching v{__version__} running {parsed.command}")

    from profile_matching.scoring.problem import ProblemService

    service = ProblemService()
    try:
        problem = service.load_problem(parsed.problem)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for warning in service.validate_problem(problem):
        logger.warning(warning)

    if parsed.command == "rank":
        return _run_rank(parsed, problem, settings)
    if parsed.command == "analyze":
        return _run_analyze(parsed, problem, settings)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
