"""UTC helpers shared by token expiry checks."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Server-side 'now' in UTC (aware)."""
    return datetime.now(UTC)


def as_utc(dt: datetime | None) -> datetime | None:
    """
    Normalize a stored datetime to aware UTC.

    Some backends (SQLite) return naive values for timezone=True columns;
    those are interpreted as UTC since everything is written in UTC.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
