"""Tests for the health check endpoint."""

import json


def test_healthz_ok(client):
    """Test that the health endpoint returns 200 with the service status."""
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.content_type == "application/json"

    data = json.loads(response.data)
    assert data == {
        "status": "ok",
        "service": "lifeplan",
        "default_simulation_end_age": 85,
    }
