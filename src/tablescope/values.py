"""Reduce backend-native cell values to one canonical string each.

The MySQL driver hands back Python objects (``None``, ``bytes``, ``int``,
``float``, ``Decimal``, ``datetime``, ``timedelta``...). Every supported
kind maps to exactly one string:

    None                 ""
    bytes                strict UTF-8 text
    int / float          positional decimal text, no exponent, no trailing ".0"
    datetime / date      "YYYY-MM-DD hh:mm:ss" (sub-seconds dropped)
    timedelta (TIME)     "[-]<days>d <hours>h <minutes>m"

Kinds outside that list raise ``ConversionError`` instead of guessing.
"""

from __future__ import annotations

import datetime
import math
from decimal import Decimal
from typing import Any, Mapping

from .errors import ConversionError
from .models import Row


def _two_digits(part: int) -> str:
    if part < 10:
        return f"0{part}"
    return str(part)


def format_date(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
    microsecond: int = 0,
) -> str:
    return (
        f"{year}-{_two_digits(month)}-{_two_digits(day)} "
        f"{_two_digits(hour)}:{_two_digits(minute)}:{_two_digits(second)}"
    )


def format_time(
    negative: bool,
    days: int,
    hours: int,
    minutes: int,
    seconds: int = 0,
    microseconds: int = 0,
) -> str:
    sign = "-" if negative else ""
    return f"{sign}{days}d {hours}h {minutes}m"


def _format_timedelta(value: datetime.timedelta) -> str:
    negative = value < datetime.timedelta(0)
    magnitude = -value if negative else value
    hours, remainder = divmod(magnitude.seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return format_time(
        negative, magnitude.days, hours, minutes, seconds, magnitude.microseconds
    )


def _format_float(value: float) -> str:
    if not math.isfinite(value):
        return repr(value)
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _decode(value: bytes | bytearray | memoryview) -> str:
    try:
        return bytes(value).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ConversionError(f"Value is not valid UTF-8 text: {exc}") from exc


def normalize_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return _decode(value)
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, Decimal):
        return str(value)
    # datetime before date: datetime is a date subclass
    if isinstance(value, datetime.datetime):
        return format_date(
            value.year,
            value.month,
            value.day,
            value.hour,
            value.minute,
            value.second,
            value.microsecond,
        )
    if isinstance(value, datetime.date):
        return format_date(value.year, value.month, value.day)
    if isinstance(value, datetime.timedelta):
        return _format_timedelta(value)
    if isinstance(value, datetime.time):
        return format_time(
            False, 0, value.hour, value.minute, value.second, value.microsecond
        )
    if isinstance(value, (set, frozenset)):
        return ",".join(sorted(normalize_value(member) for member in value))
    raise ConversionError(f"Unsupported value type {type(value).__name__}")


def normalize_row(record: Mapping[str, Any]) -> Row:
    """Normalize every cell of one fetched record."""
    return Row((str(column), normalize_value(value)) for column, value in record.items())
