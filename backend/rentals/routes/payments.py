from flask import Blueprint, request, jsonify

from ..errors import ValidationError
from ..models import ROLE_LANDLORD, ROLE_TENANT
from ..services import payments as payment_service
from ..services.tenants import tenant_for_user
from ..utils.authz import require_any_role
from ..utils.pagination import paginate
from ..utils.serialize import payment_to_dict

bp = Blueprint("payments", __name__, url_prefix="/api/payments")


@bp.get("")
@require_any_role(ROLE_LANDLORD)
def list_payments(ctx):
    query = payment_service.list_payments(
        tenant_id=request.args.get("tenantId", type=int),
        month=request.args.get("month", type=int),
        year=request.args.get("year", type=int),
        status=request.args.get("status") or None,
    )
    items, meta, links = paginate(query)
    return jsonify({
        "payments": [payment_to_dict(p) for p in items],
        "meta": meta,
        "links": links,
    })


@bp.get("/my")
@require_any_role(ROLE_TENANT)
def my_payments(ctx):
    tenant = tenant_for_user(ctx.user_id)
    items = payment_service.list_payments(tenant_id=tenant.id).all()
    return jsonify({"payments": [payment_to_dict(p) for p in items]})


@bp.post("")
@require_any_role(ROLE_TENANT, ROLE_LANDLORD)
def create_payment(ctx):
    data = request.get_json(silent=True) or {}

    if ctx.role == ROLE_TENANT:
        tenant_id = tenant_for_user(ctx.user_id).id
    else:
        tenant_id = data.get("tenantId")
        if tenant_id in ("", None):
            raise ValidationError("tenantId is required")

    payment = payment_service.record_payment(
        tenant_id,
        data.get("month"),
        data.get("year"),
        method=data.get("method"),
    )
    return jsonify({"payment": payment_to_dict(payment)})


@bp.patch("/<int:payment_id>")
@require_any_role(ROLE_LANDLORD)
def update_payment(payment_id, ctx):
    data = request.get_json(silent=True) or {}
    payment = payment_service.update_payment(payment_id, data)
    return jsonify({"payment": payment_to_dict(payment)})
