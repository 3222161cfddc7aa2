"""Tenant lifecycle: creation, reassignment and removal.

Every operation that touches occupancy applies the unit and tenant writes in
a single transaction.
"""
import secrets

from flask import current_app
from werkzeug.security import generate_password_hash

from ..errors import ConflictError, NotFoundError
from ..extensions import db
from ..models import (
    Tenant, User,
    ROLE_TENANT, TENANT_ACTIVE, TENANT_STATUSES, UNIT_VACANT,
)
from ..utils.transaction import db_transaction
from ..utils.validation import require_fields, parse_date, parse_int, require_choice
from .units import get_unit, occupy_unit, vacate_unit

TENANT_FIELDS = ["name", "email", "phone", "moveInDate", "leaseEnd", "unitId"]


def generate_password():
    return f"Tenant@{100000 + secrets.randbelow(900000)}"


def get_tenant(tenant_id) -> Tenant:
    tenant = db.session.get(Tenant, parse_int(tenant_id, "tenantId"))
    if tenant is None:
        raise NotFoundError("Tenant not found")
    return tenant


def tenant_for_user(user_id):
    tenant = Tenant.query.filter(Tenant.user_id == user_id).first()
    if tenant is None:
        raise NotFoundError("Tenant not found")
    return tenant


def create_tenant(data):
    """Create a tenant on a vacant unit together with its login.

    Returns ``(tenant, plain_password)``; the password is not stored anywhere
    in clear text and is only disclosed here.
    """
    require_fields(data, TENANT_FIELDS)

    name = str(data["name"]).strip()
    email = str(data["email"]).strip().lower()
    phone = str(data["phone"]).strip()
    move_in = parse_date(data["moveInDate"], "moveInDate")
    lease_end = parse_date(data["leaseEnd"], "leaseEnd")

    unit = get_unit(data["unitId"])
    if unit.status != UNIT_VACANT:
        raise ConflictError("Unit is not vacant")

    if User.query.filter(User.email == email).first():
        raise ConflictError("Email already in use")

    plain_password = data.get("password") or generate_password()

    with db_transaction():
        occupy_unit(unit.id)

        user = User(
            name=name,
            email=email,
            password=generate_password_hash(plain_password),
            role=ROLE_TENANT,
        )
        db.session.add(user)
        db.session.flush()

        tenant = Tenant(
            name=name,
            email=email,
            phone=phone,
            move_in_date=move_in,
            lease_end=lease_end,
            status=TENANT_ACTIVE,
            unit_id=unit.id,
            user_id=user.id,
        )
        db.session.add(tenant)

    current_app.logger.info("tenant created: tenant_id=%s unit_id=%s", tenant.id, tenant.unit_id)
    return tenant, plain_password


def _move_to_unit(tenant, target):
    """Vacate the tenant's unit and claim ``target``.

    Must run inside the caller's transaction.
    """
    if tenant.unit_id is not None:
        vacate_unit(tenant.unit_id)
        # release the unique slot before claiming the new unit
        tenant.unit_id = None
        db.session.flush()
    occupy_unit(target.id)
    tenant.unit_id = target.id


def _target_unit(tenant, new_unit_id):
    """Resolve the unit a tenant is moving to; None when it is the current one."""
    target = get_unit(new_unit_id)
    if tenant.unit_id == target.id:
        return None
    if target.status != UNIT_VACANT:
        raise ConflictError("Unit is not vacant")
    return target


def reassign_tenant(tenant_id, new_unit_id):
    """Move a tenant to another vacant unit, vacating the one they leave."""
    tenant = get_tenant(tenant_id)
    target = _target_unit(tenant, new_unit_id)
    if target is None:
        return tenant

    previous_unit_id = tenant.unit_id
    with db_transaction():
        _move_to_unit(tenant, target)

    current_app.logger.info(
        "tenant reassigned: tenant_id=%s from_unit=%s to_unit=%s",
        tenant.id, previous_unit_id, target.id,
    )
    return tenant


def update_tenant(tenant_id, data):
    """Apply contact, status and unit changes as one unit of work."""
    tenant = get_tenant(tenant_id)

    changes = {}
    for key in ("name", "phone"):
        if data.get(key) not in ("", None):
            changes[key] = str(data[key]).strip()
    if data.get("email") not in ("", None):
        changes["email"] = str(data["email"]).strip().lower()
    if data.get("moveInDate"):
        changes["move_in_date"] = parse_date(data["moveInDate"], "moveInDate")
    if data.get("leaseEnd"):
        changes["lease_end"] = parse_date(data["leaseEnd"], "leaseEnd")
    if data.get("status"):
        changes["status"] = require_choice(data["status"], TENANT_STATUSES, "status")

    if "email" in changes:
        taken = User.query.filter(User.email == changes["email"], User.id != tenant.user_id).first()
        if taken:
            raise ConflictError("Email already in use")

    target = None
    if data.get("unitId") not in ("", None):
        target = _target_unit(tenant, data["unitId"])

    if target is None and not changes:
        return tenant

    previous_unit_id = tenant.unit_id
    with db_transaction():
        if target is not None:
            _move_to_unit(tenant, target)
        for key, value in changes.items():
            setattr(tenant, key, value)
        # keep the login in step with the contact details
        if tenant.user is not None:
            if "email" in changes:
                tenant.user.email = changes["email"]
            if "name" in changes:
                tenant.user.name = changes["name"]

    if target is not None:
        current_app.logger.info(
            "tenant reassigned: tenant_id=%s from_unit=%s to_unit=%s",
            tenant.id, previous_unit_id, target.id,
        )
    current_app.logger.info("tenant updated: tenant_id=%s fields=%s", tenant.id, sorted(changes))
    return tenant


def remove_tenant(tenant_id):
    """Delete a tenant, its payments and its login; vacate its unit.

    Maintenance requests stay on the unit with the tenant reference cleared.
    """
    tenant = get_tenant(tenant_id)
    unit_id = tenant.unit_id
    user = tenant.user

    with db_transaction():
        for payment in list(tenant.payments):
            db.session.delete(payment)
        for req in list(tenant.maintenance_requests):
            req.tenant = None
        if unit_id is not None:
            vacate_unit(unit_id)
        db.session.delete(tenant)
        if user is not None:
            db.session.delete(user)

    current_app.logger.info("tenant removed: tenant_id=%s unit_id=%s", tenant_id, unit_id)
