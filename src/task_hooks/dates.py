"""Taskwarrior compact UTC timestamps (``20230101T090000Z``)."""

from __future__ import annotations

import re
from datetime import UTC, datetime

from task_hooks.errors import DecodeError, DecodeErrorKind

TIMESTAMP_LENGTH = 16

_TIMESTAMP_RE = re.compile(
    r"(?P<year>[0-9]{4})(?P<month>[0-9]{2})(?P<day>[0-9]{2})"
    r"T(?P<hour>[0-9]{2})(?P<minute>[0-9]{2})(?P<second>[0-9]{2})Z",
)


def normalize_date(value: datetime) -> datetime:
    """Bring an instant to the precision a timestamp can carry.

    Naive datetimes are taken as UTC. Microseconds are dropped, not rounded.
    """

    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    else:
        value = value.astimezone(UTC)
    return value.replace(microsecond=0)


def encode_date(value: datetime) -> str:
    """Render an instant as a fixed-width Taskwarrior timestamp."""

    value = normalize_date(value)
    return (
        f"{value.year:04d}{value.month:02d}{value.day:02d}"
        f"T{value.hour:02d}{value.minute:02d}{value.second:02d}Z"
    )


def decode_date(text: str, *, field: str | None = None) -> datetime:
    """Parse a Taskwarrior timestamp into an aware UTC datetime."""

    match = _TIMESTAMP_RE.fullmatch(text) if len(text) == TIMESTAMP_LENGTH else None
    if match is None:
        raise DecodeError(
            message=f"Malformed timestamp {text!r}, expected YYYYMMDDTHHMMSSZ",
            code="malformed_timestamp",
            kind=DecodeErrorKind.MALFORMED_TIMESTAMP,
            field=field,
        )
    parts = {name: int(value) for name, value in match.groupdict().items()}
    try:
        return datetime(tzinfo=UTC, **parts)
    except ValueError as error:
        raise DecodeError(
            message=f"Impossible calendar value in timestamp {text!r}: {error}",
            code="invalid_calendar_value",
            kind=DecodeErrorKind.INVALID_CALENDAR_VALUE,
            field=field,
        ) from error
