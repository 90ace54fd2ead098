"""Service layer and its Flask wiring."""

from flask import current_app

from models import db
from repositories.user_repository import UserRepository

from .exceptions import (
    EmailAlreadyRegistered,
    EmptyRequiredField,
    InvalidEmail,
    RegistrationTokenExpired,
    UserDoesNotExist,
    UserServiceError,
)
from .password_hasher import PasswordHasher
from .user_service import (
    CreateUserRequest,
    UpdateUserRequest,
    UserService,
    UserServiceSettings,
)

__all__ = [
    "CreateUserRequest",
    "EmailAlreadyRegistered",
    "EmptyRequiredField",
    "InvalidEmail",
    "PasswordHasher",
    "RegistrationTokenExpired",
    "UpdateUserRequest",
    "UserDoesNotExist",
    "UserService",
    "UserServiceError",
    "UserServiceSettings",
    "get_user_service",
]


def get_user_service() -> UserService:
    """Build a ``UserService`` bound to the current app and request session."""

    config = current_app.config
    settings = UserServiceSettings(
        base_url=config["APP_BASE_URL"],
        confirm_path=config["REGISTRATION_CONFIRM_PATH"],
        mail_subject=config["REGISTRATION_MAIL_SUBJECT"],
    )
    return UserService(
        UserRepository(db.session),
        PasswordHasher(config["PASSWORD_HASH_METHOD"]),
        current_app.extensions["email_sender"],
        settings,
        token_factory=current_app.extensions.get("registration_token_factory"),
    )
