"""
Row parsing helpers shared by the repository modules.

Records coming back from the store are untrusted dictionaries. These helpers
turn individual fields into typed values and raise `PersistenceError` when a
required field is missing or malformed, so a bad row never becomes a
half-valid domain object. Unknown fields are ignored.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Mapping

from domain.errors import PersistenceError
from domain.money import to_decimal
from domain.time import require_utc_timestamp

_MISSING = object()


def require_field(row: Mapping[str, Any], name: str) -> Any:
    value = row.get(name, _MISSING)
    if value is _MISSING or value is None:
        raise PersistenceError(f"Malformed record {row.get('id')!r}: missing field '{name}'")
    return value


def text_field(row: Mapping[str, Any], name: str, default: str = "") -> str:
    """Optional free-text field; None and absent both become `default`."""

    value = row.get(name)
    return default if value is None else str(value)


def decimal_field(row: Mapping[str, Any], name: str) -> Decimal:
    try:
        return to_decimal(require_field(row, name), name=name)
    except ValueError as e:
        raise PersistenceError(f"Malformed record {row.get('id')!r}: {e}") from e


def parse_utc_datetime(value: Any) -> datetime:
    """
    Parse a stored timestamp into a timezone-aware UTC datetime.

    Supabase commonly returns ISO-8601 strings, sometimes with a trailing 'Z'.
    """

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    else:
        raise TypeError(f"Unsupported timestamp type: {type(value)!r}")

    if dt.tzinfo is None or dt.utcoffset() is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_calendar_date(value: Any) -> date:
    """
    Parse a stored calendar date.

    Accepts `YYYY-MM-DD` strings as well as full timestamps, which are
    reduced to their UTC date.
    """

    if isinstance(value, datetime):
        return parse_utc_datetime(value).date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        if len(value) == 10:
            return date.fromisoformat(value)
        return parse_utc_datetime(value).date()
    raise TypeError(f"Unsupported date type: {type(value)!r}")


def datetime_field(row: Mapping[str, Any], name: str) -> datetime:
    try:
        return parse_utc_datetime(require_field(row, name))
    except (TypeError, ValueError) as e:
        raise PersistenceError(f"Malformed record {row.get('id')!r}: bad '{name}': {e}") from e


def date_field(row: Mapping[str, Any], name: str) -> date:
    try:
        return parse_calendar_date(require_field(row, name))
    except (TypeError, ValueError) as e:
        raise PersistenceError(f"Malformed record {row.get('id')!r}: bad '{name}': {e}") from e


def to_iso_utc(dt: datetime, *, name: str) -> str:
    """Serialize a UTC datetime to ISO-8601 (timezone-aware, offset 0)."""

    require_utc_timestamp(name, dt)
    return dt.astimezone(timezone.utc).isoformat()


__all__ = [
    "require_field",
    "text_field",
    "decimal_field",
    "datetime_field",
    "date_field",
    "parse_utc_datetime",
    "parse_calendar_date",
    "to_iso_utc",
]
