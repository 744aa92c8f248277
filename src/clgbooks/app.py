from __future__ import annotations
import os
from flask import Flask, jsonify, request, g
from flask import current_app
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
import logging
from logging.handlers import RotatingFileHandler
from .config import Settings
from .db import health_ok
from .routes.chat import bp as chat_bp
from .init_db import build_db

def _setup_logging(app: Flask) -> None:
    Settings.ensure_dirs()
    target = os.path.abspath(Settings.LOG_PATH)
    app.logger.setLevel(logging.INFO)
    # app.logger is shared by every app built in this process
    kept = False
    for existing in list(app.logger.handlers):
        if not isinstance(existing, RotatingFileHandler):
            continue
        if existing.baseFilename == target and not kept:
            kept = True
            continue
        app.logger.removeHandler(existing)
        existing.close()
    if kept:
        return
    handler = RotatingFileHandler(Settings.LOG_PATH, maxBytes=5_000_000, backupCount=3, encoding="utf-8")
    handler.setLevel(logging.INFO)
    formatter = logging.Formatter('%(asctime)s %(levelname)s %(message)s')
    handler.setFormatter(formatter)
    app.logger.addHandler(handler)

def create_app() -> Flask:
    app = Flask(__name__)
    app.config["ENV"] = Settings.ENV
    app.config["DEBUG"] = Settings.DEBUG
    app.json.sort_keys = False

    _setup_logging(app)
    try:
        build_db(force=False)
    except Exception:
        app.logger.exception("Failed to initialize database")

    # Set CLG_CORS_ORIGINS to a comma-separated list, e.g. "http://localhost:5173,http://127.0.0.1:3000"
    if Settings.CORS_ORIGINS:
        CORS(app, resources={r"/api/*": {"origins": Settings.CORS_ORIGINS}})

    @app.before_request
    def _attach_request_id():
        g.reqid = request.headers.get("X-Request-Id")

    @app.errorhandler(HTTPException)
    def client_error(err):
        code = err.code or 400
        return jsonify({"ok": False, "error": {"code": "HTTP_" + str(code), "message": err.description}}), code

    @app.errorhandler(Exception)
    def server_error(err):
        current_app.logger.exception("Unhandled error (request id %s)", g.get("reqid"))
        return jsonify({"ok": False, "error": {"code": "SERVER_ERROR", "message": "Internal server error"}}), 500

    app.register_blueprint(chat_bp)

    @app.get("/api/health")
    def health():
        return {"ok": True, "db": health_ok()}

    return app

if __name__ == "__main__":
    app = create_app()
    port = int(os.environ.get("PORT", 5000))
    app.run(host="0.0.0.0", port=port, debug=Settings.DEBUG)
