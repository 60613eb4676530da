"""Shared Flask helpers for the JSON controllers.

Login itself lives outside this package; it is expected to put ``hostel_id``,
``role`` and ``name`` into the Flask session.
"""

from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
)


def error_response(exc: Exception):
    if isinstance(exc, DomainError):
        for error_type, status in _STATUS_BY_ERROR:
            if isinstance(exc, error_type):
                return jsonify({"success": False, "error": type(exc).__name__, "message": str(exc)}), status
    logger.exception("Unhandled error", exc_info=exc)
    return jsonify({"success": False, "error": "InternalError", "message": "Internal server error"}), 500


def current_hostel_id() -> str:
    return str(session["hostel_id"])


def current_role() -> Role:
    try:
        return Role(session.get("role"))
    except ValueError:
        raise AuthenticationError("Session has no valid role; please log in again") from None


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "hostel_id" not in session:
            return error_response(AuthenticationError("Please log in to continue"))
        try:
            current_role()
        except AuthenticationError as e:
            return error_response(e)
        return view(*args, **kwargs)

    return wrapper


def _role_required(role: Role):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "hostel_id" not in session:
                return error_response(AuthenticationError("Please log in to continue"))
            if session.get("role") != role.value:
                return error_response(AuthorizationError("You do not have permission"))
            return view(*args, **kwargs)

        return wrapper

    return decorator


admin_required = _role_required(Role.ADMIN)
student_required = _role_required(Role.STUDENT)
