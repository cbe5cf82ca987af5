"""Turn one ``SHOW COLUMNS`` record into a ColumnDescriptor."""

from __future__ import annotations

from typing import Any, Mapping

from ..errors import ConversionError
from ..models import ColumnDescriptor
from ..values import normalize_value


def _text(record: Mapping[str, Any], field: str) -> str | None:
    value = record.get(field)
    if value is None:
        return None
    return normalize_value(value)


def _required(record: Mapping[str, Any], field: str) -> str:
    value = _text(record, field)
    if value is None:
        raise ConversionError(f"Column description is missing {field!r}")
    return value


def _non_empty(record: Mapping[str, Any], field: str) -> str | None:
    value = _text(record, field)
    return value or None


def parse_column(record: Mapping[str, Any]) -> ColumnDescriptor:
    return ColumnDescriptor(
        name=_required(record, "Field"),
        declared_type=_required(record, "Type"),
        nullable=_text(record, "Null") == "YES",
        key_role=_non_empty(record, "Key"),
        default_value=_text(record, "Default"),
        extra=_non_empty(record, "Extra"),
    )
