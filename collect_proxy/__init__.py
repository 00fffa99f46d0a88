from flask import Flask, jsonify, request, g
import time
import logging
from flask_cors import CORS

from .src.config import Config
from .src.errors import AuthError, UnauthorizedError, UpstreamError, ValidationError
from .src.services.data_client import DataClient
from .routes.health import bp as health_bp
from .routes.plan import bp as plan_bp
from .routes.collect import bp as collect_bp


def _register_error_handlers(app):
    @app.errorhandler(ValidationError)
    def _validation_error(exc):
        return jsonify({"error": exc.message}), 400

    @app.errorhandler(AuthError)
    def _auth_error(exc):
        logging.error("Error refreshing token: %s", exc.message)
        return jsonify({"error": "Authentication failed"}), 401

    @app.errorhandler(UnauthorizedError)
    def _unauthorized(exc):
        return jsonify({"error": exc.message}), 401

    @app.errorhandler(UpstreamError)
    def _upstream_error(exc):
        return jsonify({"error": exc.message}), 500


def create_app(config=Config, client=None):
    app = Flask(__name__)
    app.config.from_object(config)

    origins = app.config.get("CORS_ORIGINS", "*")
    CORS(app, resources={r"/*": {"origins": origins}}, supports_credentials=True)

    app.extensions["data_client"] = client or DataClient.from_config(config)

    app.register_blueprint(health_bp)
    app.register_blueprint(plan_bp, url_prefix="/api")
    app.register_blueprint(collect_bp, url_prefix="/api")
    _register_error_handlers(app)

    # Logging simple de todas las peticiones entrantes
    logging.basicConfig(level=logging.DEBUG if app.config.get("DEBUG", True) else logging.INFO)

    @app.before_request
    def _log_start():
        g._start_time = time.time()

    @app.after_request
    def _log_request(resp):
        started = getattr(g, '_start_time', None)
        dur_ms = int((time.time() - started) * 1000) if started else -1
        logging.info(
            "%s %s -> %s (%d ms) ip=%s",
            request.method,
            request.path,
            resp.status_code,
            dur_ms,
            request.headers.get('X-Forwarded-For', request.remote_addr),
        )
        return resp

    @app.get("/")
    def root():
        return jsonify({"name": "collect_proxy", "status": "ok"}), 200

    return app
