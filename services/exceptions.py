"""Domain errors raised by the account services."""

from __future__ import annotations

from http import HTTPStatus


class UserServiceError(Exception):
    """Base class for account lifecycle failures.

    ``status_code`` is the HTTP status the web layer renders the error with.
    """

    status_code: int = HTTPStatus.BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UserDoesNotExist(UserServiceError):
    status_code = HTTPStatus.NOT_FOUND

    def __init__(self, identifier: int | str):
        super().__init__(f"User {identifier} does not exist.")
        self.identifier = identifier


class EmptyRequiredField(UserServiceError):
    def __init__(self, field: str):
        super().__init__(f"Required field '{field}' is empty.")
        self.field = field


class InvalidEmail(UserServiceError):
    def __init__(self, email: str):
        super().__init__(f"'{email}' is not a valid email address.")
        self.email = email


class EmailAlreadyRegistered(UserServiceError):
    status_code = HTTPStatus.CONFLICT

    def __init__(self, email: str):
        super().__init__(f"Email {email} is already registered.")
        self.email = email


class RegistrationTokenExpired(UserServiceError):
    status_code = HTTPStatus.FORBIDDEN

    def __init__(self, token: str):
        super().__init__("Registration token is invalid or has already been used.")
        self.token = token
