from __future__ import annotations

from .errors import GuardrailError


def quote_identifier(identifier: str, field_name: str = "identifier") -> str:
    if not isinstance(identifier, str) or not identifier:
        raise GuardrailError(f"Invalid identifier for {field_name}")
    if "\x00" in identifier:
        raise GuardrailError(f"Identifier for {field_name} contains a NUL byte")
    escaped = identifier.replace("`", "``")
    return f"`{escaped}`"


def ensure_page_bounds(offset: int, limit: int) -> None:
    for value, field_name in ((offset, "offset"), (limit, "limit")):
        if isinstance(value, bool) or not isinstance(value, int):
            raise GuardrailError(f"{field_name} must be an integer")
        if value < 0:
            raise GuardrailError(f"{field_name} cannot be negative")


def detect_statement_type(sql: str) -> str:
    stripped = sql.strip().split()
    if not stripped:
        raise GuardrailError("SQL statement is empty")
    return stripped[0].upper()
