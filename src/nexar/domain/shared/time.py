"""Time utilities for the domain layer."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(tz=timezone.utc)


def ensure_tz_aware(dt: datetime) -> datetime:
    """Ensure datetime is timezone-aware (UTC if naive)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def parse_timestamp(value: str | datetime | None) -> datetime | None:
    """Parse an ISO-8601 timestamp as returned by the row storage API."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return ensure_tz_aware(value)
    # Python < 3.11 does not accept the trailing "Z"
    normalized = value.replace("Z", "+00:00")
    return ensure_tz_aware(datetime.fromisoformat(normalized))
