from datetime import datetime

from sqlalchemy import (
    Column, Integer, String, Numeric, Date, DateTime, Text, ForeignKey, UniqueConstraint,
)
from sqlalchemy.orm import relationship

from .extensions import db

ROLE_ADMIN = "admin"
ROLE_LANDLORD = "landlord"
ROLE_TENANT = "tenant"
USER_ROLES = (ROLE_ADMIN, ROLE_LANDLORD, ROLE_TENANT)

UNIT_VACANT = "vacant"
UNIT_OCCUPIED = "occupied"
UNIT_MAINTENANCE = "maintenance"
UNIT_STATUSES = (UNIT_VACANT, UNIT_OCCUPIED, UNIT_MAINTENANCE)

TENANT_ACTIVE = "active"
TENANT_LATE = "late"
TENANT_ENDING = "ending"
TENANT_STATUSES = (TENANT_ACTIVE, TENANT_LATE, TENANT_ENDING)

PAYMENT_PENDING = "pending"
PAYMENT_COMPLETED = "completed"
PAYMENT_OVERDUE = "overdue"
PAYMENT_STATUSES = (PAYMENT_PENDING, PAYMENT_COMPLETED, PAYMENT_OVERDUE)

PRIORITIES = ("high", "medium", "low")

REQUEST_PENDING = "pending"
REQUEST_STATUSES = (REQUEST_PENDING, "in_progress", "completed")


class User(db.Model):
    id = Column(Integer, primary_key=True)
    name = Column(String(120), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=ROLE_TENANT)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)


class Property(db.Model):
    id = Column(Integer, primary_key=True)
    name = Column(String(120), nullable=False)
    location = Column(String(255), nullable=False)
    type = Column(String(60), nullable=False)
    image = Column(String(500))
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    floors = relationship("Floor", backref="property", lazy=True, order_by="Floor.id")


class Floor(db.Model):
    id = Column(Integer, primary_key=True)
    property_id = Column(Integer, ForeignKey("property.id"), nullable=False, index=True)
    name = Column(String(60), nullable=False)

    units = relationship("Unit", backref="floor", lazy=True, order_by="Unit.id")


class Unit(db.Model):
    id = Column(Integer, primary_key=True)
    floor_id = Column(Integer, ForeignKey("floor.id"), nullable=False, index=True)
    number = Column(String(20), nullable=False)
    type = Column(String(60), nullable=False)
    status = Column(String(20), nullable=False, default=UNIT_VACANT, index=True)
    rent = Column(Numeric(12, 2), nullable=False, default=0)


class Tenant(db.Model):
    id = Column(Integer, primary_key=True)
    name = Column(String(120), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(40), nullable=False)
    move_in_date = Column(Date, nullable=False)
    lease_end = Column(Date, nullable=False)
    status = Column(String(20), nullable=False, default=TENANT_ACTIVE)
    # one tenant per unit; NULL once the tenant no longer holds a unit
    unit_id = Column(Integer, ForeignKey("unit.id"), nullable=True, unique=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, unique=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    unit = relationship("Unit", backref=db.backref("tenant", uselist=False), lazy=True)
    user = relationship("User", backref=db.backref("tenant", uselist=False), lazy=True)


class Payment(db.Model):
    __table_args__ = (
        UniqueConstraint("tenant_id", "unit_id", "month", "year", name="uq_payment_tenant_unit_period"),
    )

    id = Column(Integer, primary_key=True)
    tenant_id = Column(Integer, ForeignKey("tenant.id"), nullable=False, index=True)
    unit_id = Column(Integer, ForeignKey("unit.id"), nullable=False, index=True)
    month = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    status = Column(String(20), nullable=False, default=PAYMENT_PENDING)
    due_date = Column(Date, nullable=False)
    date = Column(DateTime)
    method = Column(String(40))
    reference = Column(String(60))

    tenant = relationship("Tenant", backref=db.backref("payments", lazy=True))
    unit = relationship("Unit", backref=db.backref("payments", lazy=True))


class MaintenanceRequest(db.Model):
    id = Column(Integer, primary_key=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    priority = Column(String(10), nullable=False)
    status = Column(String(20), nullable=False, default=REQUEST_PENDING)
    date_reported = Column(DateTime, nullable=False, default=datetime.utcnow)
    unit_id = Column(Integer, ForeignKey("unit.id"), nullable=False, index=True)
    tenant_id = Column(Integer, ForeignKey("tenant.id"), nullable=True, index=True)

    unit = relationship("Unit", backref=db.backref("maintenance_requests", lazy=True))
    tenant = relationship("Tenant", backref=db.backref("maintenance_requests", lazy=True))
