"""Session guards for controllers.

Login itself lives outside this package; the login flow is expected to put
``user_id``, ``role`` and ``organization_id`` into the Flask session.
"""

from __future__ import annotations

from functools import wraps

from flask import jsonify, session

from ..core.enums import Role


def current_role() -> Role:
    return Role(session.get("role"))


def _has_known_role() -> bool:
    return session.get("role") in {r.value for r in Role}


def current_user_id() -> int:
    return int(session["user_id"])


def current_organization_id() -> int:
    return int(session["organization_id"])


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session or "organization_id" not in session:
            return jsonify({"error": "Please log in to continue"}), 401
        if not _has_known_role():
            return jsonify({"error": "Forbidden"}), 403
        return view(*args, **kwargs)

    return wrapper


def _role_required(role: Role):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session or "organization_id" not in session:
                return jsonify({"error": "Please log in to continue"}), 401
            if session.get("role") != role.value:
                return jsonify({"error": "Forbidden"}), 403
            return view(*args, **kwargs)

        return wrapper

    return decorator


manager_required = _role_required(Role.MANAGER)
part_time_required = _role_required(Role.PART_TIME)
