from flask import Blueprint, send_from_directory
from imagecdn.config import get_settings

static_bp = Blueprint("static_files", __name__)

CACHE_MAX_AGE = 60 * 24 * 60 * 60  # 60 days


@static_bp.route("/uploads/<path:filename>", methods=["GET"])
def serve_upload(filename):
    """
    Stored files are never rewritten under the same name, so responses can be
    cached as immutable.
    """
    settings = get_settings()
    response = send_from_directory(settings.upload_dir, filename, max_age=CACHE_MAX_AGE, etag=True)
    response.headers["Cache-Control"] = f"public, max-age={CACHE_MAX_AGE}, immutable"
    return response
