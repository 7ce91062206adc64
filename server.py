"""
Forklift Advisor — Chat API Backend
Relays chat turns to the remote assistant service and serves the catalog.

Usage:
    python server.py

Endpoints:
    POST /api/chat/start
    GET  /api/chat/status?threadId=...&runId=...
    GET  /api/chat/result?threadId=...&runId=...
    GET  /api/chat/thread-messages?threadId=...
    POST /api/chat/upload
    GET  /api/products
    GET  /api/products/<id>
    GET  /health
"""

from datetime import datetime, timezone

from dotenv import load_dotenv

load_dotenv()

from flask import Flask, request, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from app_config import PORT, DEBUG, MAX_UPLOAD_MB, get_api_key, get_assistant_id
from catalog import catalog
from chat_logger import get_logger
from exceptions import RelayError, RemoteServiceError
from routes.chat import chat_bp
from routes.products import products_bp

logger = get_logger("advisor_chat")


# ═══════════════════════════════════════════
# FLASK APP
# ═══════════════════════════════════════════

app = Flask(__name__)
app.config["MAX_CONTENT_LENGTH"] = MAX_UPLOAD_MB * 1024 * 1024
CORS(app, resources={r"/*": {"origins": "*"}}, methods=["GET", "POST", "OPTIONS"])

app.register_blueprint(chat_bp)
app.register_blueprint(products_bp)


# ═══════════════════════════════════════════
# ERROR HANDLING
# ═══════════════════════════════════════════

@app.errorhandler(RemoteServiceError)
def handle_remote_error(e: RemoteServiceError):
    logger.error(
        f"{request.method} {request.path} | remote error | remote_status={e.remote_status} | "
        f"error={e.remote_message}"
    )
    return jsonify({"error": e.remote_message}), e.status_code


@app.errorhandler(RelayError)
def handle_relay_error(e: RelayError):
    logger.warning(f"{request.method} {request.path} | {type(e).__name__} | {e.message}")
    return jsonify({"error": e.message}), e.status_code


@app.errorhandler(Exception)
def handle_unexpected_error(e: Exception):
    if isinstance(e, HTTPException):
        return jsonify({"error": e.description}), e.code
    logger.error(f"{request.method} {request.path} | unexpected error | {e}", exc_info=True)
    return jsonify({"error": str(e) or "Unknown error"}), 500


@app.route("/health", methods=["GET"])
def health():
    """Health check endpoint."""
    return jsonify({
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "catalog": {"products_loaded": len(catalog)},
        "assistant_configured": bool(get_api_key() and get_assistant_id()),
    })


if __name__ == "__main__":
    print("=" * 60)
    print("  Forklift Advisor — Chat API Server")
    print("=" * 60)
    print()
    print(f"🚀 Starting server on http://localhost:{PORT}")
    print(f"   POST http://localhost:{PORT}/api/chat/start")
    print(f"   GET  http://localhost:{PORT}/api/chat/status")
    print(f"   GET  http://localhost:{PORT}/api/chat/result")
    print(f"   GET  http://localhost:{PORT}/api/products")
    print(f"   GET  http://localhost:{PORT}/health")
    print()

    app.run(
        host="0.0.0.0",
        port=PORT,
        debug=DEBUG,
        threaded=True,
    )
