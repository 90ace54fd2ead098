"""Authentication blueprint: registration, confirmation and login."""

from __future__ import annotations
from http import HTTPStatus

from flask import Blueprint, jsonify, request
from flask_jwt_extended import create_access_token
from werkzeug.exceptions import BadRequest, Unauthorized

from services import CreateUserRequest, UserDoesNotExist, get_user_service
from utils.request_validation import parse_json_request

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/register", methods=["POST"])
def register() -> tuple:
    """Register a pending user and send the confirmation mail."""
    payload = parse_json_request(
        request, str_keys=["email", "password", "first_name", "last_name"]
    )

    user = get_user_service().create_user(
        CreateUserRequest(
            email=payload.get("email"),
            password=payload.get("password"),
            first_name=payload.get("first_name"),
            last_name=payload.get("last_name"),
        )
    )

    return (
        jsonify(
            {
                "message": "User registered. Check your inbox to confirm the address.",
                "user": user.to_dict(),
            }
        ),
        HTTPStatus.CREATED,
    )


@auth_bp.route("/registration/confirm", methods=["GET"])
def confirm_registration() -> tuple:
    """Activate the account holding the given registration token."""
    token = (request.args.get("token") or "").strip()
    if not token:
        raise BadRequest("token query parameter is required.")

    get_user_service().confirm_registration(token)
    return jsonify({"message": "Registration confirmed."}), HTTPStatus.OK


@auth_bp.route("/registration/resend", methods=["POST"])
def resend_confirmation() -> tuple:
    payload = parse_json_request(request, required_keys=["email"], str_keys=["email"])
    get_user_service().resend_registration_email(payload["email"])
    return jsonify({"message": "Confirmation mail sent."}), HTTPStatus.ACCEPTED


@auth_bp.route("/login", methods=["POST"])
def login() -> tuple:
    """Authenticate an active user and return a JWT access token."""
    payload = parse_json_request(request, str_keys=["email", "password"])
    email = payload.get("email") or ""
    password = payload.get("password") or ""

    if not email.strip() or not password:
        raise BadRequest("Email and password are required.")

    service = get_user_service()
    try:
        user = service.get_enabled_user_by_email(email)
    except UserDoesNotExist:
        raise Unauthorized("Invalid email or password.")

    if not service.verify_password(user, password):
        raise Unauthorized("Invalid email or password.")

    token = create_access_token(identity=str(user.id))
    return (
        jsonify({"access_token": token, "user": user.to_dict()}),
        HTTPStatus.OK,
    )
