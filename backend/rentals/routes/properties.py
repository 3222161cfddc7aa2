from flask import Blueprint, request, jsonify

from ..models import Property, ROLE_LANDLORD
from ..services import properties as property_service
from ..utils.authz import require_any_role
from ..utils.serialize import property_to_dict

bp = Blueprint("properties", __name__, url_prefix="/api/properties")


@bp.route("", methods=["POST"])
@require_any_role(ROLE_LANDLORD)
def create_property(ctx):
    prop = property_service.create_property(request.get_json(silent=True))
    return jsonify({"property": property_to_dict(prop)}), 201


@bp.route("", methods=["GET"])
@require_any_role(ROLE_LANDLORD)
def list_properties(ctx):
    items = Property.query.order_by(Property.id.desc()).all()
    return jsonify({"properties": [property_to_dict(p) for p in items]})


@bp.route("/<int:property_id>", methods=["GET"])
@require_any_role(ROLE_LANDLORD)
def get_property(property_id, ctx):
    return jsonify({"property": property_to_dict(property_service.get_property(property_id))})


@bp.route("/<int:property_id>", methods=["PUT", "PATCH"])
@require_any_role(ROLE_LANDLORD)
def update_property(property_id, ctx):
    data = request.get_json(silent=True) or {}
    prop = property_service.update_property(property_id, data)
    return jsonify({"property": property_to_dict(prop)})


@bp.route("/<int:property_id>", methods=["DELETE"])
@require_any_role(ROLE_LANDLORD)
def delete_property(property_id, ctx):
    property_service.delete_property(property_id)
    return "", 204
