from datetime import datetime

from flask import Blueprint, request, jsonify, current_app

from ..errors import NotFoundError, ValidationError, ConflictError
from ..extensions import db
from ..models import (
    MaintenanceRequest, Tenant, ROLE_LANDLORD, ROLE_TENANT,
    PRIORITIES, REQUEST_PENDING, REQUEST_STATUSES,
)
from ..services.tenants import tenant_for_user
from ..services.units import get_unit, list_units
from ..utils.authz import require_any_role
from ..utils.serialize import request_to_dict, unit_to_dict
from ..utils.transaction import db_transaction
from ..utils.validation import require_fields, require_choice

bp = Blueprint("maintenance", __name__, url_prefix="/api/maintenance")


def _get_request(request_id):
    item = db.session.get(MaintenanceRequest, request_id)
    if not item:
        raise NotFoundError("Request not found")
    return item


@bp.get("/my")
@require_any_role(ROLE_TENANT)
def my_requests(ctx):
    tenant = Tenant.query.filter(Tenant.user_id == ctx.user_id).first()
    if not tenant:
        return jsonify({"requests": []})

    items = (
        MaintenanceRequest.query
        .filter(MaintenanceRequest.tenant_id == tenant.id)
        .order_by(MaintenanceRequest.id.desc())
        .all()
    )
    return jsonify({"requests": [request_to_dict(r) for r in items]})


@bp.post("")
@require_any_role()
def create_request(ctx):
    data = request.get_json(silent=True)
    require_fields(data, ["title", "description", "priority"])
    require_choice(data["priority"], PRIORITIES, "priority")

    tenant_id = None
    if ctx.role == ROLE_TENANT:
        tenant = tenant_for_user(ctx.user_id)
        if tenant.unit_id is None:
            raise ValidationError("Tenant unit not found")
        unit_id = tenant.unit_id
        tenant_id = tenant.id
    else:
        if data.get("unitId") in ("", None):
            raise ValidationError("unitId is required")
        unit_id = get_unit(data["unitId"]).id

    with db_transaction():
        item = MaintenanceRequest(
            title=str(data["title"]).strip(),
            description=str(data["description"]).strip(),
            priority=data["priority"],
            status=REQUEST_PENDING,
            date_reported=datetime.utcnow(),
            unit_id=unit_id,
            tenant_id=tenant_id,
        )
        db.session.add(item)

    current_app.logger.info("maintenance request created: request_id=%s unit_id=%s", item.id, unit_id)
    return jsonify({"request": request_to_dict(item)}), 201


@bp.get("")
@require_any_role(ROLE_LANDLORD)
def list_requests(ctx):
    q = MaintenanceRequest.query
    status = request.args.get("status")
    if status:
        q = q.filter(MaintenanceRequest.status == require_choice(status, REQUEST_STATUSES, "status"))

    items = q.order_by(MaintenanceRequest.id.desc()).all()
    return jsonify({"requests": [request_to_dict(r) for r in items]})


@bp.get("/units")
@require_any_role(ROLE_LANDLORD)
def request_units(ctx):
    return jsonify({"units": [unit_to_dict(u, with_location=True) for u in list_units()]})


@bp.patch("/<int:request_id>")
@require_any_role()
def update_request(request_id, ctx):
    data = request.get_json(silent=True) or {}
    item = _get_request(request_id)

    if ctx.role == ROLE_TENANT:
        tenant = tenant_for_user(ctx.user_id)
        if item.tenant_id != tenant.id:
            raise NotFoundError("Request not found")
        if item.status != REQUEST_PENDING:
            raise ConflictError("Only pending requests can be edited")
        if not data.get("description"):
            raise ValidationError("Description is required")

        with db_transaction():
            item.description = str(data["description"]).strip()
        return jsonify({"request": request_to_dict(item)})

    if data.get("status"):
        require_choice(data["status"], REQUEST_STATUSES, "status")
    if data.get("priority"):
        require_choice(data["priority"], PRIORITIES, "priority")

    with db_transaction():
        if data.get("status"):
            item.status = data["status"]
        if data.get("priority"):
            item.priority = data["priority"]

    return jsonify({"request": request_to_dict(item)})


@bp.delete("/<int:request_id>")
@require_any_role(ROLE_LANDLORD)
def delete_request(request_id, ctx):
    item = _get_request(request_id)
    with db_transaction():
        db.session.delete(item)
    return "", 204
