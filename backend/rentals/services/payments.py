"""Monthly payment ledger.

A payment is identified by (tenant, unit, month, year); the database holds a
unique constraint on that tuple and recording a payment is an upsert against
it.
"""
from datetime import datetime, date

from flask import current_app
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError

from ..errors import NotFoundError
from ..extensions import db
from ..models import Payment, PAYMENT_COMPLETED, PAYMENT_PENDING, PAYMENT_OVERDUE, PAYMENT_STATUSES
from ..utils.billing import parse_period, due_date_for, rent_due, generate_reference
from ..utils.transaction import db_transaction
from ..utils.validation import parse_datetime, parse_int, require_choice
from .tenants import get_tenant


def get_payment(payment_id) -> Payment:
    payment = db.session.get(Payment, parse_int(payment_id, "paymentId"))
    if payment is None:
        raise NotFoundError("Payment not found")
    return payment


def _find(tenant_id, unit_id, month, year):
    return (
        Payment.query
        .filter(
            Payment.tenant_id == tenant_id,
            Payment.unit_id == unit_id,
            Payment.month == month,
            Payment.year == year,
        )
        .first()
    )


def record_payment(tenant_id, month, year, method=None):
    """Record the tenant's rent for a month as paid.

    Completes the existing row for the period if there is one, otherwise
    creates it with the unit's rent as amount. Calling this again for the same
    period leaves a single completed row.
    """
    month, year = parse_period(month, year)
    tenant = get_tenant(tenant_id)
    if tenant.unit is None:
        raise NotFoundError("Tenant unit not found")

    unit = tenant.unit
    method = method or current_app.config.get("DEFAULT_PAYMENT_METHOD", "M-Pesa")

    with db_transaction():
        payment = _find(tenant.id, unit.id, month, year)
        if payment is None:
            try:
                with db.session.begin_nested():
                    payment = Payment(
                        tenant_id=tenant.id,
                        unit_id=unit.id,
                        month=month,
                        year=year,
                        amount=rent_due(unit),
                        status=PAYMENT_PENDING,
                        due_date=due_date_for(month, year),
                    )
                    db.session.add(payment)
            except IntegrityError:
                # a concurrent request created the row first
                payment = _find(tenant.id, unit.id, month, year)

        payment.status = PAYMENT_COMPLETED
        payment.method = method
        payment.reference = generate_reference()
        payment.date = datetime.utcnow()

    current_app.logger.info(
        "payment recorded: payment_id=%s tenant_id=%s period=%04d-%02d",
        payment.id, tenant.id, year, month,
    )
    return payment


def update_payment(payment_id, data):
    payment = get_payment(payment_id)

    changes = {}
    if data.get("status"):
        changes["status"] = require_choice(data["status"], PAYMENT_STATUSES, "status")
    for key in ("method", "reference"):
        if data.get(key) is not None:
            changes[key] = data[key]
    if data.get("date"):
        changes["date"] = parse_datetime(data["date"], "date")

    if not changes:
        return payment

    with db_transaction():
        for key, value in changes.items():
            setattr(payment, key, value)

    current_app.logger.info("payment updated: payment_id=%s fields=%s", payment.id, sorted(changes))
    return payment


def list_payments(tenant_id=None, month=None, year=None, status=None):
    q = Payment.query
    if tenant_id:
        q = q.filter(Payment.tenant_id == tenant_id)
    if month:
        q = q.filter(Payment.month == month)
    if year:
        q = q.filter(Payment.year == year)
    if status:
        q = q.filter(Payment.status == require_choice(status, PAYMENT_STATUSES, "status"))
    return q.order_by(Payment.id.desc())


def mark_overdue_payments(today=None):
    """Flag pending payments whose due date has passed. Returns the count."""
    today = today or date.today()
    with db_transaction():
        result = db.session.execute(
            update(Payment)
            .where(Payment.status == PAYMENT_PENDING, Payment.due_date < today)
            .values(status=PAYMENT_OVERDUE)
            .execution_options(synchronize_session=False)
        )
    current_app.logger.info("payments marked overdue: count=%s", result.rowcount)
    return result.rowcount
