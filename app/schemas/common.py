"""Shared schema helpers."""

from datetime import datetime, timezone


def to_iso8601(value: datetime | str | None) -> str | None:
    """Canonical timestamp text: UTC, millisecond precision, ``Z`` suffix."""
    if value is None or isinstance(value, str):
        return value
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"
