from flask import current_app

from ..errors import NotFoundError, ValidationError
from ..extensions import db
from ..models import Property, Floor, Unit, Payment, MaintenanceRequest, Tenant, UNIT_VACANT, UNIT_MAINTENANCE
from ..utils.transaction import db_transaction
from ..utils.validation import require_fields, require_choice, parse_int, parse_rent


def get_property(property_id) -> Property:
    prop = db.session.get(Property, parse_int(property_id, "propertyId"))
    if prop is None:
        raise NotFoundError("Property not found")
    return prop


def create_property(data):
    """Create a property with its floors and units in one go."""
    require_fields(data, ["name", "location", "type", "floors"])
    floors = data["floors"]
    if not isinstance(floors, list):
        raise ValidationError("Floors must be a list", field="floors")

    with db_transaction():
        prop = Property(
            name=str(data["name"]).strip(),
            location=str(data["location"]).strip(),
            type=str(data["type"]).strip(),
            image=data.get("image"),
        )
        db.session.add(prop)

        for f in floors:
            require_fields(f, ["name"])
            floor = Floor(name=str(f["name"]).strip(), property=prop)
            db.session.add(floor)
            for u in f.get("units") or []:
                require_fields(u, ["number", "type"])
                status = require_choice(u.get("status") or UNIT_VACANT, (UNIT_VACANT, UNIT_MAINTENANCE), "status")
                db.session.add(Unit(
                    floor=floor,
                    number=str(u["number"]),
                    type=u["type"],
                    status=status,
                    rent=parse_rent(u.get("rent")),
                ))

    current_app.logger.info("property created: property_id=%s floors=%s", prop.id, len(floors))
    return prop


def update_property(property_id, data):
    prop = get_property(property_id)
    with db_transaction():
        for key in ("name", "location", "type", "image"):
            if key in data and data[key] not in ("", None):
                setattr(prop, key, data[key])
    return prop


def delete_property(property_id):
    """Delete a property, its floors and units.

    Within the same transaction the units' payments and maintenance requests
    are deleted and their tenants lose the unit reference.
    """
    prop = get_property(property_id)
    unit_ids = [u.id for f in prop.floors for u in f.units]

    with db_transaction():
        if unit_ids:
            Payment.query.filter(Payment.unit_id.in_(unit_ids)).delete(synchronize_session=False)
            MaintenanceRequest.query.filter(
                MaintenanceRequest.unit_id.in_(unit_ids)
            ).delete(synchronize_session=False)
            Tenant.query.filter(Tenant.unit_id.in_(unit_ids)).update(
                {Tenant.unit_id: None}, synchronize_session=False
            )
        # the bulk statements above bypass the session
        db.session.expire_all()
        for floor in prop.floors:
            for unit in floor.units:
                db.session.delete(unit)
            db.session.delete(floor)
        db.session.delete(prop)

    current_app.logger.info("property deleted: property_id=%s units=%s", property_id, len(unit_ids))
