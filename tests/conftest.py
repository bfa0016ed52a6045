"""Pytest configuration and shared fixtures."""

import os

import pytest


@pytest.fixture(autouse=True)
def _reset_singletons(monkeypatch):
    """Isolate tests from the environment and from each other."""
    from profile_matching.config.settings import reset_settings
    from profile_matching.scoring.config import reset_scoring_configuration
    from profile_matching.utils.logging import reset_logging

    for name in list(os.environ):
        if name.upper().startswith("PROFILE_MATCHING_"):
            monkeypatch.delenv(name, raising=False)

    reset_settings()
    reset_scoring_configuration()
    reset_logging()
    yield
    reset_settings()
    reset_scoring_configuration()
    reset_logging()


@pytest.fixture
def employee_criteria():
    """Two core and two secondary criteria, weights summing to 100 per kind."""
    from profile_matching.scoring.models import Criterion, FactorKind

    return [
        Criterion(name="Experience", target_value=4.0, kind=FactorKind.CORE, weight=60),
        Criterion(name="Education", target_value=5.0, kind=FactorKind.CORE, weight=40),
        Criterion(
            name="Communication",
            target_value=3.0,
            kind=FactorKind.SECONDARY,
            weight=70,
        ),
        Criterion(
            name="Teamwork", target_value=4.0, kind=FactorKind.SECONDARY, weight=30
        ),
    ]


@pytest.fixture
def employee_alternatives():
    """Two alternatives scored against `employee_criteria`."""
    from profile_matching.scoring.models import Alternative

    return [
        Alternative(
            id="C001",
            name="John Doe",
            criteria_values={
                "Experience": 5.0,
                "Education": 5.0,
                "Communication": 4.0,
                "Teamwork": 5.0,
            },
        ),
        Alternative(
            id="C002",
            name="Jane Smith",
            criteria_values={
                "Experience": 3.0,
                "Education": 5.0,
                "Communication": 5.0,
                "Teamwork": 3.0,
            },
        ),
    ]
