"""Date-time helpers for wire timestamps."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    """Return the current UTC time as the ISO-8601 string stored on records."""

    return utc_now().isoformat()


def epoch_millis(now: datetime | None = None) -> int:
    """Milliseconds since the epoch for the provided timestamp (UTC)."""

    current = now.astimezone(timezone.utc) if now else utc_now()
    return int(current.timestamp() * 1000)
