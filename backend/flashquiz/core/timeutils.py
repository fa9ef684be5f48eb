from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current UTC time without tzinfo; every DateTime column stores naive UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime | None) -> datetime | None:
    # naive input is taken to be UTC already
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
