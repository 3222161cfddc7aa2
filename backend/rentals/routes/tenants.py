from flask import Blueprint, request, jsonify
from sqlalchemy import or_

from ..models import Tenant, ROLE_LANDLORD, UNIT_VACANT
from ..services import tenants as tenant_service
from ..services.units import list_units
from ..utils.authz import require_any_role
from ..utils.pagination import paginate
from ..utils.serialize import tenant_to_dict, unit_to_dict

bp = Blueprint("tenants", __name__, url_prefix="/api/tenants")


@bp.route("", methods=["GET"])
@require_any_role(ROLE_LANDLORD)
def list_tenants(ctx):
    q = request.args.get("q", "").strip()
    query = Tenant.query

    if q:
        like = f"%{q}%"
        query = query.filter(or_(
            Tenant.name.ilike(like),
            Tenant.email.ilike(like),
            Tenant.phone.ilike(like),
        ))

    query = query.order_by(Tenant.id.desc())
    items, meta, links = paginate(query)

    return jsonify({
        "tenants": [tenant_to_dict(t) for t in items],
        "meta": meta,
        "links": links,
    })


@bp.route("/me", methods=["GET"])
@require_any_role()
def my_tenant(ctx):
    tenant = tenant_service.tenant_for_user(ctx.user_id)
    return jsonify({"tenant": tenant_to_dict(tenant)})


@bp.route("/vacant-units", methods=["GET"])
@require_any_role(ROLE_LANDLORD)
def vacant_units(ctx):
    units = list_units(status=UNIT_VACANT)
    return jsonify({"units": [unit_to_dict(u, with_location=True) for u in units]})


@bp.route("", methods=["POST"])
@require_any_role(ROLE_LANDLORD)
def create_tenant(ctx):
    data = request.get_json(silent=True)
    tenant, password = tenant_service.create_tenant(data)
    return jsonify({
        "tenant": tenant_to_dict(tenant),
        "credentials": {"email": tenant.email, "password": password},
    }), 201


@bp.route("/<int:tenant_id>", methods=["GET"])
@require_any_role(ROLE_LANDLORD)
def get_tenant(tenant_id, ctx):
    return jsonify({"tenant": tenant_to_dict(tenant_service.get_tenant(tenant_id))})


@bp.route("/<int:tenant_id>", methods=["PATCH", "PUT"])
@require_any_role(ROLE_LANDLORD)
def update_tenant(tenant_id, ctx):
    data = request.get_json(silent=True) or {}
    tenant = tenant_service.update_tenant(tenant_id, data)
    return jsonify({"tenant": tenant_to_dict(tenant)})


@bp.route("/<int:tenant_id>", methods=["DELETE"])
@require_any_role(ROLE_LANDLORD)
def delete_tenant(tenant_id, ctx):
    tenant_service.remove_tenant(tenant_id)
    return "", 204
