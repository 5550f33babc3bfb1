import io

import pytest
from PIL import Image

from imagecdn.app import create_app
from imagecdn.config import Settings
from imagecdn.observability import metrics

BASE_URL = "http://cdn.test/uploads"
ALLOWED_ORIGIN = "https://app.example.com"


def make_image_bytes(fmt, mode="RGB", size=(64, 48), color=(200, 30, 90)):
    if mode == "RGBA":
        color = color + (128,)
    elif mode in ("L", "P"):
        color = 120
    img = Image.new(mode, size, color)
    buf = io.BytesIO()
    img.save(buf, fmt)
    return buf.getvalue()


@pytest.fixture
def settings(tmp_path):
    return Settings(
        port=4000,
        upload_dir=str(tmp_path / "uploads"),
        public_base_url=BASE_URL,
        allowed_origins=(ALLOWED_ORIGIN,),
        max_files=3,
        max_file_size=256 * 1024,
    )


@pytest.fixture
def app(settings):
    metrics.reset()
    app = create_app(settings)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def upload_dir(settings):
    return settings.upload_dir
