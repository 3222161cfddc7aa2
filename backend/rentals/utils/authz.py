from dataclasses import dataclass
from functools import wraps

from flask import jsonify
from flask_jwt_extended import verify_jwt_in_request, get_jwt, get_jwt_identity

from ..models import ROLE_ADMIN


@dataclass(frozen=True)
class RequestContext:
    """Identity of the caller, handed explicitly to each view."""

    user_id: int
    role: str

    @property
    def is_admin(self):
        return self.role == ROLE_ADMIN

    def has_role(self, *roles):
        return self.is_admin or self.role in roles


def _current_context():
    claims = get_jwt()
    role = (claims.get("role") or "tenant").lower()
    return RequestContext(user_id=int(get_jwt_identity()), role=role)


def require_any_role(*roles):
    """Require a valid token and, when roles are given, one of them.

    The view receives the caller as a ``ctx`` keyword argument.
    """
    allowed = {r.lower() for r in roles}

    def deco(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            ctx = _current_context()

            # admin bypass
            if allowed and not ctx.is_admin and ctx.role not in allowed:
                return jsonify({"message": "Forbidden"}), 403

            return fn(*args, ctx=ctx, **kwargs)
        return wrapper
    return deco
