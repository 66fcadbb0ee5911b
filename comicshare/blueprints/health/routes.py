import logging

from flask import jsonify

from comicshare.blueprints.health import health_bp
from comicshare.store import ping

logger = logging.getLogger(__name__)


@health_bp.route("/health", methods=["GET"])
def health():
    try:
        ping()
    except Exception as exc:
        logger.warning("Health check failed: %s", exc)
        return jsonify({"status": "ERROR", "database": "disconnected", "error": str(exc)}), 500
    return jsonify({"status": "OK", "database": "connected"}), 200
