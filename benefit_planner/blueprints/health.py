"""Health check blueprint."""

from flask import Blueprint, Response, jsonify

from benefit_planner.models.ssa_rules import MAX_BENEFIT_BY_YEAR

health_bp = Blueprint("health", __name__)


@health_bp.route("/healthz")
def health_check() -> Response:
    """Health check endpoint.

    Reports the latest year covered by the maximum-benefit table so stale
    reference data is visible.

    Returns:
        JSON response with status information
    """
    return jsonify({"status": "ok", "rules_year": max(MAX_BENEFIT_BY_YEAR)})
