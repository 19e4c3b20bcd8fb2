"""
App factory: create_app()

- Loads config (env)
- Sets up logging
- Wires DI container (stores, services)
- Registers blueprints from routes/*
- Installs error handlers mapping roster errors to HTTP statuses
"""

from __future__ import annotations
from typing import Any, Dict

from flask import Flask, jsonify

from app.config import Settings, load_settings
from app.logging_setup import configure_logging
from app.container import Container
from service.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    StorageError,
    ValidationError,
)


def _register_blueprints(app: Flask) -> None:
    # Lazy imports to avoid circulars
    from routes.health_routes import bp as health_bp
    from routes.students_routes import bp as students_bp
    from routes.audit_routes import bp as audit_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(students_bp)
    app.register_blueprint(audit_bp)


def _install_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def invalid(err):
        return jsonify({"error": "validation_error", "message": str(err)}), 400

    @app.errorhandler(AuthorizationError)
    def forbidden(err):
        return jsonify({"error": "forbidden", "message": err.reason}), 403

    @app.errorhandler(NotFoundError)
    def missing(err):
        return jsonify({"error": "not_found", "message": str(err)}), 404

    @app.errorhandler(ConflictError)
    def conflict(err):
        return jsonify({"error": "conflict", "message": str(err)}), 409

    @app.errorhandler(StorageError)
    def storage_failed(err):
        app.logger.error(f"Storage failure: {err}")
        return jsonify({"error": "storage_error", "message": str(err)}), 500

    @app.errorhandler(404)
    def not_found(err):
        return jsonify({"error": "not_found"}), 404

    @app.errorhandler(405)
    def not_allowed(err):
        return jsonify({"error": "method_not_allowed"}), 405


def create_app(config_override: Dict[str, Any] | None = None) -> Flask:
    # Settings & logging
    settings: Settings = load_settings(config_override)
    configure_logging(settings)

    app = Flask(__name__, static_folder=None)
    app.config["SECRET_KEY"] = settings.SECRET_KEY
    app.config["SETTINGS"] = settings

    # Dependency container (stores, services)
    container = Container(settings)
    app.container = container  # type: ignore[attr-defined]

    _register_blueprints(app)
    _install_error_handlers(app)

    app.logger.info(
        f"App started STUDENTS={settings.STUDENTS_CSV_PATH} AUDIT={settings.AUDIT_LOG_PATH}"
    )
    return app
