"""Self-service account endpoints for authenticated users."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required
from werkzeug.exceptions import Unauthorized

from services import UpdateUserRequest, get_user_service
from utils.request_validation import parse_json_request

users_bp = Blueprint("users", __name__)


def _current_user_id() -> int:
    identity = get_jwt_identity()
    try:
        return int(identity)
    except (TypeError, ValueError):
        raise Unauthorized("Token identity is not a user id.")


@users_bp.route("/me", methods=["GET"])
@jwt_required()
def get_me():
    user = get_user_service().get_user(_current_user_id())
    return jsonify(user.to_dict())


@users_bp.route("/me", methods=["PUT"])
@jwt_required()
def update_me():
    """Replace the caller's password and names. Email cannot be changed."""

    payload = parse_json_request(
        request,
        required_keys=["password", "first_name", "last_name"],
        str_keys=["password", "first_name", "last_name"],
    )
    get_user_service().update_user(
        UpdateUserRequest(
            password=payload["password"],
            first_name=payload["first_name"],
            last_name=payload["last_name"],
        ),
        _current_user_id(),
    )
    return "", HTTPStatus.NO_CONTENT


@users_bp.route("/me", methods=["DELETE"])
@jwt_required()
def delete_me():
    get_user_service().delete_user(_current_user_id())
    return "", HTTPStatus.NO_CONTENT


@users_bp.route("/<int:user_id>", methods=["GET"])
@jwt_required()
def get_user(user_id: int):
    user = get_user_service().get_user(user_id)
    return jsonify(user.to_dict())
