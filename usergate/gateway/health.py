"""Health endpoints of the gateway.

- GET /health - Liveness of the gateway process
- GET /health/ready - Readiness, including the authentication service
"""

import logging

from flask import Blueprint, current_app, jsonify

from ..exceptions import UserGateError
from ..utils import isodatetime

logger = logging.getLogger(__name__)

health_bp = Blueprint("health", __name__)


@health_bp.get("")
def health():
    """Liveness check; does not contact the authentication service."""
    return jsonify({
        "status": "ok",
        "service": "gateway",
        "timestamp": isodatetime.now(),
    })


@health_bp.get("/ready")
def ready():
    """
    Readiness check.

    Returns 200 when the authentication service answers with status ok,
    503 with status "degraded" otherwise.
    """
    try:
        result = current_app.extensions["auth_client"].health_check() or {}
        auth_status = result.get("status", "down")
    except UserGateError as e:
        logger.warning(f"Authentication service health check failed: {e.message}")
        auth_status = "down"

    healthy = auth_status == "ok"
    body = {
        "status": "ok" if healthy else "degraded",
        "timestamp": isodatetime.now(),
        "services": {
            "gateway": "up",
            "authentication": auth_status,
        },
    }
    return jsonify(body), 200 if healthy else 503
