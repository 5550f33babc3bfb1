from flask import Blueprint, jsonify
from imagecdn.observability.metrics import snapshot

metrics_bp = Blueprint("metrics", __name__)

@metrics_bp.route("/metrics", methods=["GET"])
def metrics():
    return jsonify(snapshot())

@metrics_bp.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok"})
