from flask import Flask, request
from dotenv import load_dotenv
from werkzeug.exceptions import RequestEntityTooLarge
from imagecdn.access_control import install_access_control
from imagecdn.config import Settings
from imagecdn.intake import TOO_LARGE, InMemoryRequest, max_content_length, too_large_message
from imagecdn.observability.logging_setup import init_logging
from imagecdn.observability.request_context import start_request, end_request
from imagecdn.routes.image_upload import rejection_response, upload_bp
from imagecdn.routes.images import images_bp
from imagecdn.routes.metrics import metrics_bp
from imagecdn.routes.static_files import static_bp
from imagecdn.services.storage import ensure_storage_dir

INDEX_HTML = """
    <h1>CDN Server is Live!</h1>
    <p>Stored images: <a href="/images">/images</a></p>
"""


def create_app(settings=None):
    if settings is None:
        settings = Settings.from_env()

    app = Flask(__name__, static_folder=None)
    app.request_class = InMemoryRequest
    app.config["SETTINGS"] = settings
    app.config["MAX_CONTENT_LENGTH"] = max_content_length(settings)

    logger = init_logging(settings)
    ensure_storage_dir(settings.upload_dir)

    @app.before_request
    def _before():
        start_request()

    install_access_control(app, settings)

    app.register_blueprint(upload_bp)
    app.register_blueprint(images_bp)
    app.register_blueprint(static_bp)
    app.register_blueprint(metrics_bp)

    @app.route("/")
    def index():
        return INDEX_HTML

    @app.errorhandler(RequestEntityTooLarge)
    def _too_large(e):
        multiple = request.path.endswith("/multiple")
        return rejection_response(too_large_message(settings, multiple), TOO_LARGE)

    @app.after_request
    def _after(response):
        return end_request(response)

    logger.info(f"Serving {settings.upload_dir} as {settings.public_base_url}")
    return app


def main():
    load_dotenv()
    settings = Settings.from_env()
    app = create_app(settings)
    app.run(host=settings.host, port=settings.port, threaded=True)


if __name__ == "__main__":
    main()
