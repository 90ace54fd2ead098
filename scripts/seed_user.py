"""Seed an already confirmed user for local development."""

from app import create_app
from models import db
from services import CreateUserRequest, get_user_service

SEED_EMAIL = "admin@example.com"
SEED_PASSWORD = "AdminPass123"


def main() -> None:
    app = create_app()
    with app.app_context():
        db.create_all()
        service = get_user_service()
        user = service.repository.find_by_email(SEED_EMAIL)
        if user is None:
            user = service.create_user(
                CreateUserRequest(
                    email=SEED_EMAIL,
                    password=SEED_PASSWORD,
                    first_name="Admin",
                    last_name="User",
                )
            )
            action = "created"
        else:
            action = "updated"
        if user.registration_token is not None:
            service.confirm_registration(user.registration_token)
        print(f"User {action} and enabled: {SEED_EMAIL}")


if __name__ == "__main__":
    main()
