"""
Projection blueprint for household cash-flow projections.

This module provides API endpoints for running a projection over a household
snapshot posted as JSON, and for publishing the snapshot JSON schema.
"""

from datetime import date
from typing import Any

from flask import Blueprint, current_app, jsonify, request

from lifeplan.config import get_global_settings
from lifeplan.models.schema_generator import generate_snapshot_schema
from lifeplan.services.projection_service import (
    ProjectionInputError,
    ProjectionService,
)

projection_bp = Blueprint("projection", __name__, url_prefix="/api")


@projection_bp.route("/projections", methods=["POST"])
def create_projection() -> Any:
    """Run a projection for the posted household snapshot.

    Query Args:
        rounded: "false" to return raw amounts instead of whole units
        today: ISO date (YYYY-MM-DD) to pin "now" for a reproducible run

    Returns:
        JSON response with ledger records and summary metrics
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Request body must be a JSON object"}), 400

    rounded = request.args.get("rounded", "true").lower() != "false"

    today = None
    today_arg = request.args.get("today")
    if today_arg:
        try:
            today = date.fromisoformat(today_arg)
        except ValueError:
            return jsonify({"error": "today must be an ISO date (YYYY-MM-DD)"}), 400

    try:
        service = ProjectionService(get_global_settings())
        result = service.run_projection(data, today=today, rounded=rounded)
    except ProjectionInputError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        current_app.logger.error(f"Error running projection: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500

    if not result["records"]:
        return (
            jsonify(
                {
                    "error": "Not enough information to project: a birth date is "
                    "required and the end age must not be before the current age",
                    "records": [],
                }
            ),
            422,
        )

    return jsonify(result)


@projection_bp.route("/projections/schema", methods=["GET"])
def get_snapshot_schema() -> Any:
    """Get the household snapshot JSON schema.

    Returns:
        JSON schema document
    """
    return jsonify(generate_snapshot_schema())
