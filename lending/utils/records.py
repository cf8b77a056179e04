from datetime import date, datetime
from decimal import Decimal


def to_json(record: dict) -> dict:
    """Plain report record -> JSON-safe dict (dates as ISO strings, money as float)."""
    out = {}
    for key, value in record.items():
        if isinstance(value, (date, datetime)):
            value = value.isoformat()
        elif isinstance(value, Decimal):
            value = float(value)
        out[key] = value
    return out
