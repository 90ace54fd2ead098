"""Tests for the authenticated account endpoints."""

from __future__ import annotations

import pytest
from flask import Flask
from flask.testing import FlaskClient
from flask_jwt_extended import create_access_token

from models import db
from models.user import User
from services import CreateUserRequest, get_user_service


def _active_user(app: Flask, email: str = "me@example.com") -> tuple[int, str]:
    """Create a confirmed user and return their ID along with an access token."""

    with app.app_context():
        service = get_user_service()
        user = service.create_user(
            CreateUserRequest(
                email=email, password="secret123", first_name="Me", last_name="Myself"
            )
        )
        service.confirm_registration(user.registration_token)
        token = create_access_token(identity=str(user.id))
        return user.id, token


def _auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def test_me_requires_jwt(client: FlaskClient):
    assert client.get("/users/me").status_code == 401


def test_get_me_returns_profile(app: Flask, client: FlaskClient):
    user_id, token = _active_user(app)

    response = client.get("/users/me", headers=_auth(token))

    assert response.status_code == 200
    assert response.get_json()["id"] == user_id
    assert response.get_json()["email"] == "me@example.com"


def test_update_me_changes_password_and_names(app: Flask, client: FlaskClient):
    user_id, token = _active_user(app)
    with app.app_context():
        old_hash = db.session.get(User, user_id).password_hash

    response = client.put(
        "/users/me",
        json={"password": "n3w-secret", "first_name": "New", "last_name": "Name"},
        headers=_auth(token),
    )

    assert response.status_code == 204
    with app.app_context():
        user = db.session.get(User, user_id)
        assert user.first_name == "New"
        assert user.last_name == "Name"
        assert user.email == "me@example.com"
        assert user.password_hash not in {old_hash, "n3w-secret"}

    login = client.post(
        "/auth/login", json={"email": "me@example.com", "password": "n3w-secret"}
    )
    assert login.status_code == 200


def test_update_me_requires_all_fields(app: Flask, client: FlaskClient):
    _, token = _active_user(app)

    response = client.put(
        "/users/me", json={"first_name": "Only"}, headers=_auth(token)
    )

    assert response.status_code == 400
    assert "last_name" in response.get_json()["detail"]


@pytest.mark.parametrize(
    "overrides",
    [{"first_name": ["x"]}, {"last_name": {"a": 1}}, {"password": 12345678}],
)
def test_update_me_rejects_non_string_fields(app: Flask, client: FlaskClient, overrides):
    user_id, token = _active_user(app)
    payload = dict(
        {"password": "n3w-secret", "first_name": "New", "last_name": "Name"}, **overrides
    )

    response = client.put("/users/me", json=payload, headers=_auth(token))

    assert response.status_code == 400
    assert "must be strings" in response.get_json()["detail"]
    with app.app_context():
        assert db.session.get(User, user_id).first_name != "New"


def test_delete_me_is_idempotent(app: Flask, client: FlaskClient):
    user_id, token = _active_user(app)

    assert client.delete("/users/me", headers=_auth(token)).status_code == 204
    assert client.delete("/users/me", headers=_auth(token)).status_code == 204

    with app.app_context():
        assert db.session.get(User, user_id) is None
    assert client.get("/users/me", headers=_auth(token)).status_code == 404


def test_get_user_by_id(app: Flask, client: FlaskClient):
    _, token = _active_user(app)
    other_id, _ = _active_user(app, "other@example.com")

    found = client.get(f"/users/{other_id}", headers=_auth(token))
    missing = client.get("/users/9999", headers=_auth(token))

    assert found.status_code == 200
    assert found.get_json()["email"] == "other@example.com"
    assert missing.status_code == 404
    assert missing.get_json()["error"] == "Not Found"
