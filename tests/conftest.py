"""
Pytest configuration and shared fixtures for the life plan tests.
"""

import os
from datetime import date
from unittest.mock import patch

import pytest

from lifeplan import create_app
from lifeplan.config import reset_global_settings
from lifeplan.models.household import HouseholdSnapshot

# The planner turns 30 on 1996-01-15, so on TODAY the current age is 30.
TODAY = date(2026, 4, 1)
BIRTH_DATE = "1996-01-15"


def build_snapshot(**sections) -> HouseholdSnapshot:
    """Build a snapshot for a 30-year-old planner simulated to age 85."""
    settings = {
        "birth_date": BIRTH_DATE,
        "simulation_end_age": 85,
        "current_savings": 0,
    }
    settings.update(sections.pop("user_settings", {}))
    return HouseholdSnapshot.model_validate({"user_settings": settings, **sections})


@pytest.fixture
def today():
    """Fixed reference date for reproducible projections."""
    return TODAY


@pytest.fixture
def make_snapshot():
    """Factory for snapshots with a default planner."""
    return build_snapshot


@pytest.fixture
def app():
    """Create a Flask app configured for testing."""
    reset_global_settings()
    with patch.dict(
        os.environ,
        {"APP_ENV": "testing", "SECRET_KEY": "test-secret-key-123"},
        clear=True,
    ):
        application = create_app()
        yield application
    reset_global_settings()


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()
