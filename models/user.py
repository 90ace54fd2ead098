"""User model definition."""

from datetime import datetime

from . import db


class User(db.Model):
    """Represents a registered account.

    A user is either pending (``enabled`` is false and a registration token
    is present) or active (``enabled`` is true and the token is cleared).
    """

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    first_name = db.Column(db.String(120), nullable=False)
    last_name = db.Column(db.String(120), nullable=False)
    enabled = db.Column(
        db.Boolean,
        nullable=False,
        default=False,
        server_default=db.text("false"),
    )
    registration_token = db.Column(db.String(64), unique=True, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    @property
    def is_pending(self) -> bool:
        return not self.enabled and self.registration_token is not None

    def confirm(self) -> None:
        """Activate the account and consume its registration token."""

        self.enabled = True
        self.registration_token = None

    def to_dict(self) -> dict:
        """Serialize the user without credentials or tokens."""

        return {
            "id": self.id,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "enabled": self.enabled,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User {self.email}>"
