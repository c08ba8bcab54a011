"""
Tests for the projection API endpoints.
"""

from unittest.mock import patch

import pytest


def household(**settings):
    user_settings = {"birth_date": "1996-01-15", "simulation_end_age": 32}
    user_settings.update(settings)
    return {
        "userSettings": user_settings,
        "incomes": [{"name": "Salary", "start_age": 30, "end_age": 65, "amount": 400.4}],
        "lifeEvents": [{"name": "Wedding", "age": 31, "cost": 300}],
    }


class TestCreateProjection:
    """Test cases for POST /api/projections."""

    def test_projection(self, client):
        response = client.post("/api/projections?today=2026-04-01", json=household())

        assert response.status_code == 200
        data = response.get_json()
        assert [record["age"] for record in data["records"]] == [30, 31, 32]
        assert data["records"][0]["income"] == 400
        assert data["records"][1]["event_summary"] == "Wedding"
        assert data["metrics"]["final_savings"] == pytest.approx(901.2)

    def test_raw_amounts(self, client):
        response = client.post(
            "/api/projections?today=2026-04-01&rounded=false", json=household()
        )

        assert response.status_code == 200
        assert response.get_json()["records"][0]["income"] == 400.4

    def test_body_must_be_object(self, client):
        response = client.post("/api/projections", json=[1, 2])

        assert response.status_code == 400
        assert "JSON object" in response.get_json()["error"]

    def test_missing_body(self, client):
        response = client.post("/api/projections", data="not json")
        assert response.status_code == 400

    def test_invalid_today(self, client):
        response = client.post("/api/projections?today=April", json=household())

        assert response.status_code == 400
        assert "today" in response.get_json()["error"]

    def test_invalid_snapshot(self, client):
        response = client.post("/api/projections", json={"incomes": "salary"})

        assert response.status_code == 400
        assert "Invalid snapshot" in response.get_json()["error"]

    def test_end_age_over_maximum(self, client):
        response = client.post(
            "/api/projections", json=household(simulation_end_age=200)
        )
        assert response.status_code == 400

    def test_nothing_to_project(self, client):
        response = client.post(
            "/api/projections?today=2026-04-01", json=household(birth_date=None)
        )

        assert response.status_code == 422
        assert response.get_json()["records"] == []

    def test_unexpected_error(self, client):
        with patch(
            "lifeplan.blueprints.projection.ProjectionService.run_projection",
            side_effect=RuntimeError("boom"),
        ):
            response = client.post("/api/projections", json=household())

        assert response.status_code == 500
        assert response.get_json() == {"error": "Internal server error"}


class TestSnapshotSchemaEndpoint:
    """Test cases for GET /api/projections/schema."""

    def test_get_schema(self, client):
        response = client.get("/api/projections/schema")

        assert response.status_code == 200
        assert response.get_json()["title"] == "Household Snapshot Schema v1"
