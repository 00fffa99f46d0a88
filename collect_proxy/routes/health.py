from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify


bp = Blueprint("health", __name__)


@bp.get("/health")
def health():
    return jsonify({
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": current_app.config.get("APP_ENV"),
        "api_environment": current_app.config.get("API_ENVIRONMENT", "dev"),
    }), 200
