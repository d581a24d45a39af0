from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import Any, Optional

from flask import g, jsonify, request, session
from werkzeug.exceptions import BadRequest

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from .validators import require_int


@dataclass(frozen=True)
class CurrentUser:
    """Caller identity carried in the session signed by the surrounding system."""

    user_id: int
    role: Role


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            raise AuthenticationError("Please sign in to continue")
        try:
            g.current_user = CurrentUser(user_id=int(session["user_id"]), role=Role(session.get("role")))
        except (TypeError, ValueError):
            raise AuthenticationError("Session is not valid")
        return view(*args, **kwargs)

    return wrapper


def current_user() -> CurrentUser:
    return g.current_user


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise BadRequest("Request body must be a JSON object")
    return data


def optional_year_arg() -> Optional[int]:
    raw = request.args.get("year")
    if raw in (None, ""):
        return None
    return require_int(raw, "year")


def require_field(data: dict, name: str) -> Any:
    if data.get(name) in (None, ""):
        raise ValidationError(f"{name} is required")
    return data[name]


def ok(data: Any, status: int = 200):
    return jsonify({"success": True, "data": data}), status


def error(code: str, message: str, status: int):
    return jsonify({"success": False, "error": code, "message": message}), status


def optional_json_body() -> dict:
    """Like ``json_body`` but an empty body is an empty object."""
    if not request.get_data(cache=True):
        return {}
    return json_body()
