"""Application factory."""

import json
import logging
import os
import uuid
from http import HTTPStatus
from typing import Callable

from flask import Flask, jsonify, g, request
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException

from config import Config
from mail import EmailSender, build_email_sender
from models import db
from recognition import EmbeddingService, FaceProcessService
from routes.auth import auth_bp
from routes.recognition import API_V1, recognition_bp
from routes.users import users_bp
from services import UserServiceError

migrate = Migrate()
jwt = JWTManager()
limiter = Limiter(key_func=get_remote_address)


def create_app(
    config_class: type[Config] = Config,
    *,
    email_sender: EmailSender | None = None,
    face_process_service: FaceProcessService | None = None,
    embedding_service: EmbeddingService | None = None,
    registration_token_factory: Callable[[], str] | None = None,
) -> Flask:
    """Create and configure the Flask application.

    Collaborators that are not passed in fall back to configuration: the mail
    backend comes from the ``MAIL_*`` settings, and the recognition endpoints
    answer 503 until an engine is supplied.
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    _configure_logging(app)

    # Core subsystems
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    # CORS
    CORS(
        app,
        resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}},
        supports_credentials=True,
    )

    # Rate limiting
    storage_uri = app.config.get("RATELIMIT_STORAGE_URI", "memory://")
    headers_enabled = app.config.get("RATELIMIT_HEADERS_ENABLED", True)
    key_prefix = app.config.get("RATELIMIT_KEY_PREFIX") or str(uuid.uuid4())

    global limiter
    limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[lambda: app.config.get("RATE_LIMIT", "60 per minute")],
        storage_uri=storage_uri,
        headers_enabled=headers_enabled,
        key_prefix=key_prefix,
    )
    limiter.init_app(app)
    app.config["RATELIMIT_KEY_PREFIX"] = key_prefix

    # Collaborators
    app.extensions["email_sender"] = email_sender or build_email_sender(app.config)
    app.extensions["face_process_service"] = face_process_service
    app.extensions["embedding_service"] = embedding_service
    app.extensions["registration_token_factory"] = registration_token_factory

    # Blueprints
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(users_bp, url_prefix="/users")
    app.register_blueprint(recognition_bp, url_prefix=API_V1)

    # Health
    @app.route("/health", methods=["GET"])
    def health_check():
        return jsonify({"status": "ok"})

    # Errors
    _register_error_handlers(app)

    return app


def _configure_logging(app: Flask) -> None:
    level = logging.getLevelName(str(app.config.get("LOG_LEVEL", "INFO")).upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    app.logger.setLevel(level)


def _error_payload(error: str, detail: str, request_id: str) -> dict:
    return {"error": error, "detail": detail, "request_id": request_id}


def _register_error_handlers(app: Flask) -> None:
    """Register JSON error handlers with request IDs."""

    @app.before_request
    def _assign_request_id():  # pragma: no cover
        g.request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    @app.after_request
    def _add_request_id_header(response):  # pragma: no cover
        request_id = g.get("request_id")
        if request_id:
            response.headers.setdefault("X-Request-ID", request_id)
        return response

    @app.errorhandler(HTTPException)
    def _handle_http_exception(error: HTTPException):
        request_id = g.get("request_id") or str(uuid.uuid4())
        response = error.get_response()
        payload = _error_payload(
            getattr(error, "name", "Error"), error.description, request_id
        )
        response.data = json.dumps(payload)
        response.content_type = "application/json"
        response.headers.setdefault("X-Request-ID", request_id)
        return response

    @app.errorhandler(UserServiceError)
    def _handle_user_service_error(error: UserServiceError):
        request_id = g.get("request_id") or str(uuid.uuid4())
        status = HTTPStatus(error.status_code)
        app.logger.info("%s: %s", type(error).__name__, error.message)
        response = jsonify(_error_payload(status.phrase, error.message, request_id))
        response.status_code = status
        response.headers.setdefault("X-Request-ID", request_id)
        return response

    @app.errorhandler(Exception)
    def _handle_unexpected(error: Exception):  # pragma: no cover
        request_id = g.get("request_id") or str(uuid.uuid4())
        app.logger.exception("Unhandled application error", exc_info=error)
        payload = _error_payload(
            "Internal Server Error", "An unexpected error occurred.", request_id
        )
        response = jsonify(payload)
        response.status_code = 500
        response.headers.setdefault("X-Request-ID", request_id)
        return response


if __name__ == "__main__":
    application = create_app()
    application.run(host="0.0.0.0", port=int(os.environ.get("PORT", 5000)))
