# quickshow/utils/dates.py
from datetime import datetime, timezone


def utcnow():
    """Naive UTC now; show times are stored as naive UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_show_datetime(date, time):
    """Combine ``"2024-01-01"`` and ``"18:00"`` into a datetime."""
    value = datetime.fromisoformat(f"{date}T{time}")
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def to_iso(value):
    if value is None:
        return None
    return value.isoformat(timespec="seconds") + "Z"
