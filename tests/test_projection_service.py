"""
Tests for the projection service.
"""

import logging
from datetime import date

import pytest

from lifeplan.config import Settings
from lifeplan.services.projection_service import (
    ProjectionInputError,
    ProjectionService,
)

TODAY = date(2026, 4, 1)


@pytest.fixture
def settings():
    return Settings(_env_file=None, SECRET_KEY="service-test-secret")


@pytest.fixture
def service(settings):
    return ProjectionService(settings)


def payload(**settings):
    user_settings = {"birth_date": "1996-01-15", "simulation_end_age": 35}
    user_settings.update(settings)
    return {
        "user_settings": user_settings,
        "incomes": [{"name": "Salary", "start_age": 30, "end_age": 65, "amount": 400.4}],
        "expenses": [{"name": "Living", "start_age": 30, "end_age": 95, "amount": 250}],
    }


class TestParseSnapshot:
    """Test snapshot validation."""

    def test_valid_payload(self, service):
        snapshot = service.parse_snapshot(payload())
        assert snapshot.incomes[0].name == "Salary"

    def test_non_object_payload(self, service):
        with pytest.raises(ProjectionInputError, match="JSON object"):
            service.parse_snapshot([1, 2, 3])

    def test_structurally_invalid_payload(self, service):
        with pytest.raises(ProjectionInputError, match="Invalid snapshot"):
            service.parse_snapshot({"incomes": "salary"})

    def test_end_age_beyond_maximum(self, service):
        with pytest.raises(ProjectionInputError, match="must not exceed 120"):
            service.parse_snapshot(payload(simulation_end_age=150))


class TestRunProjection:
    """Test full projection runs."""

    def test_result_shape(self, service):
        result = service.run_projection(payload(retirement_age=33), today=TODAY)

        assert result["current_age"] == 30
        assert result["start_year"] == 2026
        assert result["end_age"] == 35
        assert len(result["records"]) == 6
        assert result["metrics"]["years_projected"] == 6
        assert result["metrics"]["savings_at_target_age"] is not None

    def test_rounded_by_default(self, service):
        result = service.run_projection(payload(), today=TODAY)
        record = result["records"][0]

        assert record["income"] == 400
        assert record["breakdown"]["income"] == [{"label": "Salary", "amount": 400}]

    def test_raw_amounts(self, service):
        result = service.run_projection(payload(), today=TODAY, rounded=False)
        assert result["records"][0]["income"] == pytest.approx(400.4)

    def test_default_end_age_from_settings(self):
        settings = Settings(
            _env_file=None, SECRET_KEY="service-test-secret", DEFAULT_SIMULATION_END_AGE=40
        )
        result = ProjectionService(settings).run_projection(
            payload(simulation_end_age=None), today=TODAY
        )

        assert result["end_age"] == 40

    def test_missing_birth_date_logs_warning(self, service, caplog):
        with caplog.at_level(logging.WARNING):
            result = service.run_projection(payload(birth_date=None), today=TODAY)

        assert result["records"] == []
        assert result["current_age"] is None
        assert result["metrics"]["years_projected"] == 0
        assert "no birth date" in caplog.text

    def test_end_before_current_logs_warning(self, service, caplog):
        with caplog.at_level(logging.WARNING):
            result = service.run_projection(payload(simulation_end_age=20), today=TODAY)

        assert result["records"] == []
        assert "before current age" in caplog.text
