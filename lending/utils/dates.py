from datetime import date, datetime

from lending.errors import ValidationError


def parse_date(value, field: str = "date") -> date:
    """
    Accepts a `date`, a `datetime` (date part is kept) or an ISO `YYYY-MM-DD` string.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            raise ValidationError(f"{field} must be an ISO date (YYYY-MM-DD), got {value!r}")
    raise ValidationError(f"{field} is required")
