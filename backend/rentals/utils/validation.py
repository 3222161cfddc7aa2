import math
from datetime import date, datetime

from ..errors import ValidationError


def require_fields(data, fields):
    if data is None:
        raise ValidationError("Invalid JSON body")

    missing = [f for f in fields if f not in data or data[f] in ("", None)]
    if missing:
        raise ValidationError("Missing required fields", fields=missing)


def parse_date(value, field):
    # accepts "YYYY-MM-DD" or a full ISO timestamp
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except (TypeError, ValueError):
        raise ValidationError("Invalid date", field=field)


def parse_datetime(value, field):
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00")).replace(tzinfo=None)
    except (TypeError, ValueError):
        raise ValidationError("Invalid date", field=field)


def parse_int(value, field):
    if isinstance(value, bool):
        raise ValidationError("Invalid number", field=field)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError("Invalid number", field=field)


def require_choice(value, choices, field):
    if value not in choices:
        raise ValidationError(f"Invalid {field}", field=field, allowed=list(choices))
    return value


def parse_rent(value):
    if value in ("", None):
        return 0
    if isinstance(value, bool):
        raise ValidationError("Invalid rent", field="rent")
    try:
        rent = float(value)
    except (TypeError, ValueError):
        raise ValidationError("Invalid rent", field="rent")
    if rent < 0 or not math.isfinite(rent):
        raise ValidationError("Invalid rent", field="rent")
    return rent
