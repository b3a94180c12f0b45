"""Canonical instant handling for event dates and RSVP confirmations.

The canonical in-memory form is a timezone-aware UTC ``datetime`` truncated to
millisecond precision. The store-native form (remote table and local replica)
is an ISO-8601 UTC string with exactly three fractional digits and a ``Z``
suffix, which sorts lexicographically in chronological order.

Both conversions accept either form and are idempotent.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Union

InstantLike = Union[datetime, str, int, float, Decimal]

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_instant(value: InstantLike) -> datetime:
    """Normalize a date value into an aware UTC datetime with ms precision.

    Accepts datetimes (naive values are read as UTC), ISO-8601 strings (with
    ``Z`` or an explicit offset) and numbers holding epoch milliseconds.

    Raises:
        ValueError: if the value is of an unsupported type or a string is
            not ISO-8601.
    """
    if isinstance(value, bool):
        raise ValueError("booleans are not instants")

    if isinstance(value, datetime):
        instant = value
    elif isinstance(value, (int, float, Decimal)):
        instant = EPOCH + timedelta(milliseconds=int(value))
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z") or text.endswith("z"):
            text = text[:-1] + "+00:00"
        instant = datetime.fromisoformat(text)
    else:
        raise ValueError(f"cannot read an instant from {type(value).__name__}")

    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    else:
        instant = instant.astimezone(timezone.utc)

    return instant.replace(microsecond=(instant.microsecond // 1000) * 1000)


def to_store_timestamp(value: InstantLike) -> str:
    """Render an instant in the store-native form, e.g. 2026-11-07T22:00:00.000Z."""
    instant = to_instant(value)
    return instant.strftime("%Y-%m-%dT%H:%M:%S.") + f"{instant.microsecond // 1000:03d}Z"


def utc_now() -> datetime:
    return to_instant(datetime.now(timezone.utc))
