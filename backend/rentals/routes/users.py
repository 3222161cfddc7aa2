from flask import Blueprint, request, jsonify
from werkzeug.security import generate_password_hash

from ..errors import ConflictError, NotFoundError
from ..extensions import db
from ..models import User, USER_ROLES, ROLE_TENANT
from ..utils.authz import require_any_role
from ..utils.serialize import user_to_dict
from ..utils.transaction import db_transaction
from ..utils.validation import require_fields, require_choice

bp = Blueprint("users", __name__, url_prefix="/api/users")


def _get_user(user_id):
    user = db.session.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


@bp.route("", methods=["GET"])
@require_any_role("admin")
def list_users(ctx):
    users = User.query.order_by(User.id.asc()).all()
    return jsonify({"users": [user_to_dict(u) for u in users]})


@bp.route("", methods=["POST"])
@require_any_role("admin")
def create_user(ctx):
    data = request.get_json(silent=True)
    require_fields(data, ["name", "email", "password", "role"])
    require_choice(data["role"], USER_ROLES, "role")

    with db_transaction():
        user = User(
            name=str(data["name"]).strip(),
            email=str(data["email"]).strip().lower(),
            password=generate_password_hash(data["password"]),
            role=data["role"],
        )
        db.session.add(user)

    return jsonify({"user": user_to_dict(user)}), 201


@bp.route("/<int:user_id>", methods=["PUT", "PATCH"])
@require_any_role("admin")
def update_user(user_id, ctx):
    user = _get_user(user_id)
    data = request.get_json(silent=True) or {}

    if data.get("role"):
        require_choice(data["role"], USER_ROLES, "role")
        # tenant logins stay tenants while the tenant record exists
        if user.tenant is not None and data["role"] != ROLE_TENANT:
            raise ConflictError("User belongs to a tenant; its role cannot change")

    email = str(data["email"]).strip().lower() if data.get("email") else None
    if email and User.query.filter(User.email == email, User.id != user.id).first():
        raise ConflictError("Email already in use")

    with db_transaction():
        if data.get("name"):
            user.name = str(data["name"]).strip()
            if user.tenant is not None:
                user.tenant.name = user.name
        if email:
            user.email = email
            if user.tenant is not None:
                user.tenant.email = email
        if data.get("role"):
            user.role = data["role"]
        if data.get("password"):
            user.password = generate_password_hash(data["password"])

    return jsonify({"user": user_to_dict(user)})


@bp.route("/<int:user_id>", methods=["DELETE"])
@require_any_role("admin")
def delete_user(user_id, ctx):
    user = _get_user(user_id)
    if user.tenant is not None:
        raise ConflictError("User belongs to a tenant; remove the tenant instead")

    with db_transaction():
        db.session.delete(user)

    return "", 204
