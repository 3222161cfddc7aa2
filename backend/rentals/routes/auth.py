from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import create_access_token
from werkzeug.security import generate_password_hash, check_password_hash

from ..errors import NotFoundError, ValidationError
from ..extensions import db
from ..models import User
from ..utils.authz import require_any_role
from ..utils.serialize import user_to_dict
from ..utils.transaction import db_transaction
from ..utils.validation import require_fields

bp = Blueprint("auth", __name__, url_prefix="/api/auth")


def issue_token(user):
    return create_access_token(identity=str(user.id), additional_claims={"role": user.role})


@bp.route("/login", methods=["POST"])
def login():
    data = request.get_json(silent=True)
    if not data or not data.get("email") or not data.get("password"):
        return jsonify({"message": "Email and password are required"}), 400

    email = str(data["email"]).strip().lower()
    user = User.query.filter(User.email == email).first()
    if not user or not check_password_hash(user.password, data["password"]):
        current_app.logger.info("login failed: email=%s", email)
        return jsonify({"message": "Invalid credentials"}), 401

    return jsonify({"token": issue_token(user), "user": user_to_dict(user)})


@bp.route("/me", methods=["GET"])
@require_any_role()
def me(ctx):
    user = db.session.get(User, ctx.user_id)
    if not user:
        raise NotFoundError("User not found")
    return jsonify({"user": user_to_dict(user)})


@bp.route("/change-password", methods=["POST"])
@require_any_role()
def change_password(ctx):
    data = request.get_json(silent=True)
    require_fields(data, ["currentPassword", "newPassword"])

    user = db.session.get(User, ctx.user_id)
    if not user:
        raise NotFoundError("User not found")
    if not check_password_hash(user.password, data["currentPassword"]):
        return jsonify({"message": "Current password is incorrect"}), 400
    if len(str(data["newPassword"])) < 6:
        raise ValidationError("Password must be at least 6 characters", field="newPassword")

    with db_transaction():
        user.password = generate_password_hash(data["newPassword"])

    return jsonify({"message": "Password updated"})
