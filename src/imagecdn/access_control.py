import logging
from flask import jsonify, request
from flask_cors import CORS

logger = logging.getLogger("imagecdn.access_control")


def origin_allowed(origin, allowed_origins):
    # server-to-server calls carry no Origin header
    return not origin or origin in allowed_origins


def install_access_control(app, settings):
    """
    Rejects cross-origin requests from origins outside the allow-list before
    any route runs, and lets flask-cors add the response headers for the rest.
    """
    allowed = list(settings.allowed_origins)
    CORS(app, origins=allowed, supports_credentials=True)

    @app.before_request
    def _check_origin():
        origin = request.headers.get("Origin")
        if origin_allowed(origin, allowed):
            return None
        logger.warning(f"Rejected origin {origin} for {request.method} {request.path}")
        return jsonify({"success": False, "message": "Not allowed by CORS"}), 400
