import calendar
import random
from datetime import date
from decimal import Decimal

from flask import current_app

from ..errors import ValidationError
from .validation import parse_int


def parse_period(month, year):
    if month in ("", None) or year in ("", None):
        raise ValidationError("Month and year are required")

    month = parse_int(month, "month")
    year = parse_int(year, "year")
    if month < 1 or month > 12:
        raise ValidationError("Invalid month", field="month")
    if year < 1900 or year > 9999:
        raise ValidationError("Invalid year", field="year")
    return month, year


def due_date_for(month: int, year: int) -> date:
    day = current_app.config.get("PAYMENT_DUE_DAY", 5)
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day, last_day))


def rent_due(unit) -> Decimal:
    if unit.rent is None:
        return Decimal("0.00")
    return Decimal(str(unit.rent))


def generate_reference() -> str:
    # cosmetic receipt number, not a unique key
    prefix = current_app.config.get("PAYMENT_REFERENCE_PREFIX", "MPE")
    return f"{prefix}{random.randint(100000000, 999999999)}"
