from flask import Blueprint, jsonify
import logging
from imagecdn.config import get_settings
from imagecdn.intake import UploadRejected, collect_uploads
from imagecdn.services.compression.image_compress import compress_image_to_storage
from imagecdn.services.naming import stored_filename
from imagecdn.observability.metrics import inc
from imagecdn.observability.request_context import current_request_id

upload_bp = Blueprint("upload", __name__)

logger = logging.getLogger("imagecdn.upload")


def rejection_response(message, code):
    inc("upload_rejections")
    logger.info(f"[{current_request_id()}] Upload rejected ({code}): {message}")
    return jsonify({"success": False, "code": code, "message": message}), 400


def _store(upload, settings):
    filename = stored_filename(upload.filename)
    compress_image_to_storage(upload.data, filename, settings.upload_dir)
    return settings.public_url(filename)


@upload_bp.route("/upload/single", methods=["POST"])
def upload_single():
    settings = get_settings()
    inc("upload_batches")
    try:
        uploads = collect_uploads("file", settings)
    except UploadRejected as err:
        return rejection_response(err.message, err.code)

    inc("upload_files_total")
    try:
        url = _store(uploads[0], settings)
    except Exception as e:
        inc("upload_failures")
        logger.exception(f"[{current_request_id()}] Processing failed for {uploads[0].filename}")
        return jsonify({"success": False, "message": str(e)}), 500

    logger.info(f"[{current_request_id()}] Stored {url}")
    return jsonify({"success": True, "url": url})


@upload_bp.route("/upload/multiple", methods=["POST"])
def upload_multiple():
    settings = get_settings()
    inc("upload_batches")
    try:
        uploads = collect_uploads("files", settings, multiple=True)
    except UploadRejected as err:
        return rejection_response(err.message, err.code)

    inc("upload_files_total", len(uploads))
    urls = []
    for upload in uploads:
        try:
            urls.append(_store(upload, settings))
        except Exception as e:
            # files stored before this one stay on disk
            inc("upload_failures")
            logger.exception(f"[{current_request_id()}] Processing failed for {upload.filename} after {len(urls)} stored")
            return jsonify({"success": False, "message": str(e)}), 500

    logger.info(f"[{current_request_id()}] Stored batch of {len(urls)} files")
    return jsonify({"success": True, "urls": urls})
