"""Result types returned by drivers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Mapping


@dataclass(frozen=True)
class ColumnDescriptor:
    name: str
    declared_type: str
    nullable: bool = False
    key_role: str | None = None
    default_value: str | None = None
    extra: str | None = None


class Row(Mapping[str, str]):
    """One fetched record: column name to canonical string value.

    Rows are read-only. Two rows compare equal when they hold the same
    key/value pairs, regardless of column order, and a row also compares
    equal to a plain dict with the same contents.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, str] | Iterable[tuple[str, str]] = ()) -> None:
        self._values: dict[str, str] = dict(values)

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Row):
            return self._values == other._values
        if isinstance(other, Mapping):
            return self._values == dict(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._values.items()))

    def __repr__(self) -> str:
        return f"Row({dict(sorted(self._values.items()))!r})"


RecordSet = list[Row]


@dataclass(frozen=True)
class ConstraintInfo:
    pass


@dataclass(frozen=True)
class ForeignKeyInfo:
    pass


@dataclass(frozen=True)
class IndexInfo:
    pass
