"""SQLAlchemy-backed user store."""

from __future__ import annotations

from sqlalchemy import delete, exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.user import User


class UserRepository:
    """CRUD access to ``users`` rows through a request-scoped session."""

    def __init__(self, session: Session):
        self._session = session

    def find_by_id(self, user_id: int) -> User | None:
        return self._session.get(User, user_id)

    def find_by_email(self, email: str) -> User | None:
        return self._session.execute(
            select(User).where(User.email == email)
        ).scalar_one_or_none()

    def find_by_registration_token(self, token: str) -> User | None:
        return self._session.execute(
            select(User).where(User.registration_token == token)
        ).scalar_one_or_none()

    def exists_by_email(self, email: str) -> bool:
        return bool(self._session.execute(select(exists().where(User.email == email))).scalar())

    def save(self, user: User) -> User:
        """Insert or update the user and commit.

        Unique-index violations are rolled back and re-raised so the caller
        can map them to a domain error.
        """

        self._session.add(user)
        try:
            self._session.commit()
        except IntegrityError:
            self._session.rollback()
            raise
        return user

    def delete_by_id(self, user_id: int) -> None:
        self._session.execute(delete(User).where(User.id == user_id))
        self._session.commit()
