from flask import Blueprint, jsonify
import logging
from imagecdn.config import get_settings
from imagecdn.services.storage import delete_stored_file, list_stored_files
from imagecdn.observability.metrics import inc
from imagecdn.observability.request_context import current_request_id

images_bp = Blueprint("images", __name__)

logger = logging.getLogger("imagecdn.images")


@images_bp.route("/images", methods=["GET"])
def list_images():
    settings = get_settings()
    try:
        files = list_stored_files(settings.upload_dir)
    except OSError as e:
        logger.error(f"[{current_request_id()}] Listing {settings.upload_dir} failed: {e}")
        return jsonify({"success": False, "message": str(e)}), 500

    images = [settings.public_url(name) for name in files]
    return jsonify({"success": True, "images": images})


@images_bp.route("/images/<filename>", methods=["DELETE"])
def delete_image(filename):
    settings = get_settings()
    try:
        delete_stored_file(settings.upload_dir, filename)
    except OSError as e:
        inc("deletion_misses")
        logger.info(f"[{current_request_id()}] Delete of {filename} failed: {e}")
        return jsonify({"success": False, "message": "File not found or already deleted"}), 404

    inc("deletions")
    logger.info(f"[{current_request_id()}] Deleted {filename}")
    return jsonify({"success": True, "message": "Deleted successfully"})
