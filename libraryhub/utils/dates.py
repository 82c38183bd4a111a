import re
from datetime import datetime, timezone
from typing import Optional

# fromisoformat before 3.11 only takes 3 or 6 fractional digits; the data
# service trims trailing zeros, so anything from 1 to 9 digits shows up
_FRACTION = re.compile(r"\.(\d+)(?=[+-]\d{2}:?\d{2}$|$)")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _six_digit_fraction(match) -> str:
    return "." + match.group(1)[:6].ljust(6, "0")


def parse_timestamp(value) -> Optional[datetime]:
    """ISO-8601 string (or datetime) from the data service -> aware UTC datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        text = _FRACTION.sub(_six_digit_fraction, text)
        dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        # timestamps without offset are stored as UTC
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_iso(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat()
