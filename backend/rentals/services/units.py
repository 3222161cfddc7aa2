"""Unit occupancy registry.

``occupied`` is only ever entered through :func:`occupy_unit`, a conditional
update that succeeds for exactly one caller while the unit is vacant.
"""
from flask import current_app
from sqlalchemy import update

from ..errors import ConflictError, NotFoundError
from ..extensions import db
from ..models import Unit, Floor, UNIT_VACANT, UNIT_OCCUPIED, UNIT_MAINTENANCE, UNIT_STATUSES
from ..utils.transaction import db_transaction
from ..utils.validation import parse_int, parse_rent, require_choice


def get_unit(unit_id) -> Unit:
    unit = db.session.get(Unit, parse_int(unit_id, "unitId"))
    if unit is None:
        raise NotFoundError("Unit not found")
    return unit


def list_units(status=None):
    q = Unit.query
    if status:
        require_choice(status, UNIT_STATUSES, "status")
        q = q.filter(Unit.status == status)
    return q.order_by(Unit.id.asc()).all()


def occupy_unit(unit_id):
    """Flip a unit from vacant to occupied, or raise ConflictError.

    Must run inside the caller's transaction.
    """
    result = db.session.execute(
        update(Unit)
        .where(Unit.id == unit_id, Unit.status == UNIT_VACANT)
        .values(status=UNIT_OCCUPIED)
    )
    if result.rowcount != 1:
        raise ConflictError("Unit is not vacant")


def vacate_unit(unit_id):
    db.session.execute(
        update(Unit)
        .where(Unit.id == unit_id)
        .values(status=UNIT_VACANT)
    )


def add_unit(floor_id, number, unit_type, rent=0, status=UNIT_VACANT):
    if db.session.get(Floor, floor_id) is None:
        raise NotFoundError("Floor not found")
    require_choice(status, (UNIT_VACANT, UNIT_MAINTENANCE), "status")
    rent = parse_rent(rent)

    with db_transaction():
        unit = Unit(floor_id=floor_id, number=str(number), type=unit_type, status=status, rent=rent)
        db.session.add(unit)

    current_app.logger.info("unit created: unit_id=%s floor_id=%s", unit.id, floor_id)
    return unit


def set_unit_status(unit_id, status):
    """Toggle a unit between vacant and maintenance.

    Occupancy belongs to the tenant lifecycle and cannot be set by hand.
    """
    require_choice(status, UNIT_STATUSES, "status")
    unit = get_unit(unit_id)

    if status == unit.status:
        return unit
    if status == UNIT_OCCUPIED or unit.status == UNIT_OCCUPIED:
        raise ConflictError("Occupancy is managed through tenant assignment")

    with db_transaction():
        result = db.session.execute(
            update(Unit)
            .where(Unit.id == unit_id, Unit.status == unit.status)
            .values(status=status)
        )
        if result.rowcount != 1:
            raise ConflictError("Unit status changed concurrently")

    db.session.refresh(unit)
    current_app.logger.info("unit status changed: unit_id=%s status=%s", unit_id, status)
    return unit
