"""Account lifecycle: registration, confirmation, update and deletion."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Callable

from email_validator import EmailNotValidError, validate_email
from sqlalchemy.exc import IntegrityError

from mail import EmailDeliveryError, EmailSender
from models.user import User
from repositories.user_repository import UserRepository

from .exceptions import (
    EmailAlreadyRegistered,
    EmptyRequiredField,
    InvalidEmail,
    RegistrationTokenExpired,
    UserDoesNotExist,
)
from .password_hasher import PasswordHasher

logger = logging.getLogger(__name__)


@dataclass
class CreateUserRequest:
    email: str | None
    password: str | None
    first_name: str | None
    last_name: str | None


@dataclass
class UpdateUserRequest:
    password: str
    first_name: str
    last_name: str


@dataclass(frozen=True)
class UserServiceSettings:
    """Values the service needs to build confirmation mails."""

    base_url: str
    confirm_path: str = "/auth/registration/confirm"
    mail_subject: str = "Confirm your registration"

    def confirmation_link(self, token: str) -> str:
        return f"{self.base_url.rstrip('/')}{self.confirm_path}?token={token}"


def normalize_email(raw_email: str | None) -> str:
    """Normalize an email string by stripping whitespace and lowering case."""
    return str(raw_email or "").strip().lower()


def _is_blank(value: str | None) -> bool:
    return value is None or not str(value).strip()


def _default_token() -> str:
    return str(uuid.uuid4())


class UserService:
    """Validated state transitions on ``User`` records."""

    REQUIRED_CREATE_FIELDS = ("email", "password", "first_name", "last_name")

    def __init__(
        self,
        repository: UserRepository,
        password_hasher: PasswordHasher,
        email_sender: EmailSender,
        settings: UserServiceSettings,
        token_factory: Callable[[], str] | None = None,
    ):
        self.repository = repository
        self.password_hasher = password_hasher
        self.email_sender = email_sender
        self.settings = settings
        self.token_factory = token_factory or _default_token

    def get_user(self, user_id: int) -> User:
        user = self.repository.find_by_id(user_id)
        if user is None:
            raise UserDoesNotExist(user_id)
        return user

    def get_enabled_user_by_email(self, email: str) -> User:
        """Return the active user for ``email``.

        Pending users are reported exactly like missing ones so the lookup
        cannot be used to probe which addresses have signed up.
        """

        normalized = normalize_email(email)
        user = self.repository.find_by_email(normalized)
        if user is None or not user.enabled:
            raise UserDoesNotExist(normalized)
        return user

    def create_user(self, request: CreateUserRequest) -> User:
        """Register a pending user and mail them a confirmation link.

        Raises ``EmptyRequiredField``, ``InvalidEmail`` or
        ``EmailAlreadyRegistered``, checked in that order.
        """

        for field in self.REQUIRED_CREATE_FIELDS:
            if _is_blank(getattr(request, field)):
                raise EmptyRequiredField(field)

        email = normalize_email(request.email)
        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError as exc:
            raise InvalidEmail(request.email) from exc

        if self.repository.exists_by_email(email):
            raise EmailAlreadyRegistered(email)

        user = User(
            email=email,
            password_hash=self.password_hasher.hash(request.password),
            first_name=request.first_name,
            last_name=request.last_name,
            enabled=False,
            registration_token=self.generate_registration_token(),
        )
        try:
            saved = self.repository.save(user)
        except IntegrityError as exc:
            # A concurrent registration won the unique index on email.
            raise EmailAlreadyRegistered(email) from exc

        logger.info("Registered pending user %s", saved.email)
        self._send_registration_email(saved)
        return saved

    def update_user(self, request: UpdateUserRequest, user_id: int) -> None:
        user = self.get_user(user_id)
        user.password_hash = self.password_hasher.hash(request.password)
        user.first_name = request.first_name
        user.last_name = request.last_name
        self.repository.save(user)

    def delete_user(self, user_id: int) -> None:
        # No existence check: deleting an unknown id is a no-op.
        self.repository.delete_by_id(user_id)
        logger.info("Deleted user %s", user_id)

    def confirm_registration(self, token: str) -> None:
        user = self.repository.find_by_registration_token(token)
        if user is None:
            raise RegistrationTokenExpired(token)
        user.confirm()
        self.repository.save(user)
        logger.info("Confirmed registration for %s", user.email)

    def resend_registration_email(self, email: str) -> None:
        normalized = normalize_email(email)
        user = self.repository.find_by_email(normalized)
        if user is None or not user.is_pending:
            raise UserDoesNotExist(normalized)
        self._send_registration_email(user)

    def verify_password(self, user: User, password: str) -> bool:
        return self.password_hasher.verify(user.password_hash, password)

    def generate_registration_token(self) -> str:
        return self.token_factory()

    def _send_registration_email(self, user: User) -> None:
        link = self.settings.confirmation_link(user.registration_token)
        body = (
            f"Hello {user.first_name},\n\n"
            "Please confirm your registration by opening the link below:\n"
            f"{link}\n"
        )
        try:
            self.email_sender.send_mail(user.email, self.settings.mail_subject, body)
        except EmailDeliveryError:
            # The user stays pending and can ask for the mail again.
            logger.exception("Confirmation mail to %s was not sent", user.email)
