"""Shared pytest fixtures for the application tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app import create_app  # noqa: E402
from config import Config  # noqa: E402
from mail import EmailSender  # noqa: E402
from models import db  # noqa: E402


class _BaseTestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JWT_SECRET_KEY = "test-jwt-secret-key-with-enough-length-for-hs256"
    RATE_LIMIT = "1000 per minute"
    APP_BASE_URL = "https://frs.example.com"
    MAIL_SERVER = ""
    PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"


class RecordingEmailSender(EmailSender):
    """Keeps sent messages in memory instead of delivering them."""

    def __init__(self):
        self.messages: list[dict[str, str]] = []

    def send_mail(self, to: str, subject: str, body: str) -> None:
        self.messages.append({"to": to, "subject": subject, "body": body})


@pytest.fixture()
def outbox() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture()
def app(outbox: RecordingEmailSender) -> Flask:
    """Create a Flask application instance for tests."""

    application = create_app(_BaseTestConfig, email_sender=outbox)

    with application.app_context():
        db.create_all()

    yield application

    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def db_session(app: Flask):
    """Push an app context and yield the scoped session."""

    with app.app_context():
        yield db.session


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a test client for the Flask app."""

    return app.test_client()
