import io
from typing import List, NamedTuple

from flask import Request, request

MULTIPART_OVERHEAD = 1024 * 1024

INVALID_TYPE = "invalid_type"
TOO_LARGE = "too_large"
NO_FILE = "no_file"
TOO_MANY_FILES = "too_many_files"


class UploadRejected(Exception):
    """Client-side upload problem, reported as HTTP 400 with a machine-readable code."""

    def __init__(self, message, code):
        super().__init__(message)
        self.message = message
        self.code = code


class UploadedImage(NamedTuple):
    filename: str
    data: bytes


class InMemoryRequest(Request):
    """Keeps multipart file parts in memory instead of spooling them to disk."""

    def _get_file_stream(self, total_content_length, content_type, filename=None, content_length=None):
        return io.BytesIO()


def format_size(num_bytes):
    mib = 1024 * 1024
    if num_bytes >= mib and num_bytes % mib == 0:
        return f"{num_bytes // mib}MB"
    if num_bytes >= 1024 and num_bytes % 1024 == 0:
        return f"{num_bytes // 1024}KB"
    return f"{num_bytes} bytes"


def too_large_message(settings, multiple):
    limit = format_size(settings.max_file_size)
    if multiple:
        return f"Each file must be under {limit}"
    return f"File too large (max {limit})"


def max_content_length(settings):
    return settings.max_files * settings.max_file_size + MULTIPART_OVERHEAD


def collect_uploads(field, settings, multiple=False) -> List[UploadedImage]:
    """
    Reads every file part under `field` into memory and validates all of them
    before returning, so nothing is written when any part is rejected.
    """
    parts = [f for f in request.files.getlist(field) if f.filename]
    if not parts:
        raise UploadRejected("No file uploaded", NO_FILE)

    if not multiple and len(parts) > 1:
        raise UploadRejected("Only one file allowed per upload", TOO_MANY_FILES)
    if len(parts) > settings.max_files:
        raise UploadRejected(f"Maximum {settings.max_files} files allowed per upload", TOO_MANY_FILES)

    uploads = []
    for f in parts:
        if f.mimetype not in settings.allowed_types:
            raise UploadRejected(f"Invalid file type ({', '.join(settings.allowed_types)} only).", INVALID_TYPE)

        data = f.stream.read(settings.max_file_size + 1)
        if len(data) > settings.max_file_size:
            raise UploadRejected(too_large_message(settings, multiple), TOO_LARGE)

        uploads.append(UploadedImage(f.filename, data))
    return uploads
