"""Utilities for validating incoming Flask requests."""

from __future__ import annotations

from typing import Iterable

from flask import Request
from werkzeug.exceptions import BadRequest


def parse_json_request(
    req: Request,
    *,
    required_keys: Iterable[str] | None = None,
    allow_empty: bool = False,
    str_keys: Iterable[str] | None = None,
) -> dict:
    """Return the parsed JSON body or raise a 400 error.

    Keys listed in ``str_keys`` may be absent or null but otherwise must hold
    strings.
    """

    if not req.is_json:
        raise BadRequest("Request content type must be application/json.")

    data = req.get_json(silent=False)
    if data is None:
        raise BadRequest("Request JSON body is required.")

    if not isinstance(data, dict):
        raise BadRequest("Request JSON payload must be an object.")

    if not data and not allow_empty:
        raise BadRequest("Request JSON body must not be empty.")

    if required_keys:
        missing = [key for key in required_keys if not data.get(key)]
        if missing:
            raise BadRequest(
                "Missing required fields: {}.".format(
                    ", ".join(sorted(missing))
                )
            )

    if str_keys:
        wrong_type = [
            key
            for key in str_keys
            if data.get(key) is not None and not isinstance(data[key], str)
        ]
        if wrong_type:
            raise BadRequest(
                "Fields must be strings: {}.".format(", ".join(sorted(wrong_type)))
            )

    return data


def parse_bool(value: object) -> bool | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in {"1", "true", "yes", "y"}:
        return True
    if text in {"0", "false", "no", "n"}:
        return False
    return None


def int_arg(req: Request, name: str, default: int, *, minimum: int | None = None) -> int:
    """Read an integer query parameter, enforcing an optional lower bound."""

    raw = req.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise BadRequest(f"{name} must be an integer.")
    if minimum is not None and value < minimum:
        raise BadRequest(f"{name} must be greater than or equal to {minimum}.")
    return value


def float_arg(req: Request, name: str) -> float | None:
    raw = req.args.get(name)
    if raw is None or raw == "":
        return None
    try:
        return float(raw)
    except ValueError:
        raise BadRequest(f"{name} must be a number.")


def bool_arg(req: Request, name: str, default: bool = False) -> bool:
    raw = req.args.get(name)
    if raw is None or raw == "":
        return default
    value = parse_bool(raw)
    if value is None:
        raise BadRequest(f"{name} must be a boolean value.")
    return value
