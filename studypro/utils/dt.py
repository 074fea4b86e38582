from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc_aware(value: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes even for DateTime(timezone=True)
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
