from flask import Blueprint, request, jsonify

from ..models import ROLE_LANDLORD, UNIT_VACANT
from ..services import units as unit_service
from ..utils.authz import require_any_role
from ..utils.serialize import unit_to_dict
from ..utils.validation import require_fields, parse_int

bp = Blueprint("units", __name__, url_prefix="/api/units")


@bp.route("", methods=["GET"])
@require_any_role(ROLE_LANDLORD)
def list_units(ctx):
    units = unit_service.list_units(status=request.args.get("status") or None)
    return jsonify({"units": [unit_to_dict(u, with_location=True) for u in units]})


@bp.route("", methods=["POST"])
@require_any_role(ROLE_LANDLORD)
def create_unit(ctx):
    data = request.get_json(silent=True)
    require_fields(data, ["floorId", "number", "type"])
    unit = unit_service.add_unit(
        parse_int(data["floorId"], "floorId"),
        data["number"],
        data["type"],
        rent=data.get("rent"),
        status=data.get("status") or UNIT_VACANT,
    )
    return jsonify({"unit": unit_to_dict(unit)}), 201


@bp.route("/<int:unit_id>/status", methods=["PATCH"])
@require_any_role(ROLE_LANDLORD)
def update_unit_status(unit_id, ctx):
    data = request.get_json(silent=True)
    require_fields(data, ["status"])
    unit = unit_service.set_unit_status(unit_id, data["status"])
    return jsonify({"unit": unit_to_dict(unit)})
