"""Health check blueprint."""

from flask import Blueprint, Response, current_app, jsonify

health_bp = Blueprint("health", __name__)


@health_bp.route("/healthz")
def health_check() -> Response:
    """Health check endpoint.

    Returns:
        JSON response with the service name and projection defaults
    """
    return jsonify(
        {
            "status": "ok",
            "service": "lifeplan",
            "default_simulation_end_age": current_app.config[
                "DEFAULT_SIMULATION_END_AGE"
            ],
        }
    )
