"""Tests for UserService and UserRepository against the SQLite database."""

from __future__ import annotations

import uuid

import pytest
from sqlalchemy.exc import IntegrityError

from models.user import User
from repositories.user_repository import UserRepository
from services import (
    CreateUserRequest,
    EmailAlreadyRegistered,
    UserDoesNotExist,
    get_user_service,
)

ENABLED_USER_EMAIL = "enabled_user@email.com"
DISABLED_USER_EMAIL = "disabled_user@email.com"


def _create_user(service, email: str):
    return service.create_user(
        CreateUserRequest(
            email=email,
            password="password",
            first_name="first_name",
            last_name="last_name",
        )
    )


def _create_and_enable_user(service, email: str) -> None:
    reg_token = str(uuid.uuid4())
    service.token_factory = lambda: reg_token
    _create_user(service, email)
    service.confirm_registration(reg_token)


def test_get_enabled_user_by_email_returns_active_user(db_session):
    service = get_user_service()
    _create_and_enable_user(service, ENABLED_USER_EMAIL)

    enabled_user = service.get_enabled_user_by_email(ENABLED_USER_EMAIL)

    assert enabled_user is not None
    assert enabled_user.enabled is True
    assert enabled_user.registration_token is None


def test_get_enabled_user_by_email_rejects_disabled_user(db_session):
    service = get_user_service()
    _create_user(service, DISABLED_USER_EMAIL)

    disabled_user = UserRepository(db_session).find_by_email(DISABLED_USER_EMAIL)
    assert disabled_user is not None
    assert disabled_user.enabled is False

    with pytest.raises(UserDoesNotExist):
        service.get_enabled_user_by_email(DISABLED_USER_EMAIL)


def test_duplicate_email_in_any_case_is_rejected(db_session):
    service = get_user_service()
    _create_user(service, "taken@example.com")

    with pytest.raises(EmailAlreadyRegistered):
        _create_user(service, "TAKEN@example.com")


def test_unique_index_rejects_second_insert(db_session):
    repository = UserRepository(db_session)
    repository.save(
        User(email="dup@example.com", password_hash="h", first_name="a", last_name="b")
    )

    with pytest.raises(IntegrityError):
        repository.save(
            User(email="dup@example.com", password_hash="h", first_name="c", last_name="d")
        )

    assert repository.exists_by_email("dup@example.com") is True


def test_repository_lookups_and_delete(db_session):
    repository = UserRepository(db_session)
    user = repository.save(
        User(
            email="lookup@example.com",
            password_hash="h",
            first_name="a",
            last_name="b",
            registration_token="tok-1",
        )
    )

    assert user.id is not None
    assert user.enabled is False
    assert repository.find_by_id(user.id) is user
    assert repository.find_by_registration_token("tok-1") is user
    assert repository.exists_by_email("missing@example.com") is False

    repository.delete_by_id(user.id)
    db_session.expire_all()

    assert repository.find_by_id(user.id) is None
    repository.delete_by_id(user.id)


def test_created_user_is_persisted_with_hash(db_session, outbox):
    service = get_user_service()
    user = _create_user(service, "Persisted@Example.com")

    stored = UserRepository(db_session).find_by_id(user.id)
    assert stored.email == "persisted@example.com"
    assert stored.password_hash != "password"
    assert service.verify_password(stored, "password")
    assert len(outbox.messages) == 1
    assert outbox.messages[0]["to"] == "persisted@example.com"
