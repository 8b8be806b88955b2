from __future__ import annotations

import dataclasses
import logging
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from functools import wraps
from typing import Any, Optional

from flask import Flask, jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from ..users.model import Actor
from ..users.permissions import has_permission

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
)


def to_jsonable(value: Any) -> Any:
    """Convert domain objects (dataclasses, enums, dates, Decimals) into JSON-ready values."""

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value) if f.name != "password_hash"}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, time):
        return value.strftime("%H:%M")
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


def ok(data: Any = None, *, message: Optional[str] = None, status: int = 200):
    body: dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = to_jsonable(data)
    return jsonify(body), status


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def json_body() -> dict:
    return request.get_json(silent=True) or {}


def current_actor() -> Actor:
    return Actor(user_id=int(session["user_id"]), role=Role(session["role"]))


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Please sign in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def _role_required(required_role: Role):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return fail("Please sign in to continue", 401)
            if not has_permission(Role(session.get("role")), required_role):
                return fail("You do not have permission to do this", 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator


admin_required = _role_required(Role.ADMIN)
super_required = _role_required(Role.SUPER)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        for error_type, status in _STATUS_BY_ERROR:
            if isinstance(e, error_type):
                return fail(str(e), status)
        return fail(str(e), 400)

    @app.errorhandler(500)
    def handle_unexpected(e):
        original = getattr(e, "original_exception", None) or e
        logger.error("Unhandled error on %s %s", request.method, request.path, exc_info=original)
        return fail("Internal server error", 500)
