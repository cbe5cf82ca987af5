"""
Backend-agnostic driver contract.

Every backend implements the same seven coroutines:

    list_databases(ignore_default_schemas)   -> list[str]
    list_tables(database)                    -> list[str]
    list_columns(database, table)            -> list[ColumnDescriptor]
    list_records(database, table, ...)       -> RecordSet
    list_constraints(database, table)        -> list[ConstraintInfo]
    list_foreign_keys(database, table)       -> list[ForeignKeyInfo]
    list_indexes(database, table)            -> list[IndexInfo]

The last three are optional: a backend that has not implemented them
inherits a default that raises FeatureNotImplementedError, so callers can
tell "feature absent" apart from "operation failed".
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from ..config import ConnectionConfig, PoolConfig
from ..errors import FeatureNotImplementedError
from ..models import ColumnDescriptor, ConstraintInfo, ForeignKeyInfo, IndexInfo, RecordSet
from ..query import DEFAULT_PAGE_SIZE


class Driver(ABC):
    """One backend's implementation of the introspection operations."""

    name: str = "generic"

    # ── Required ──────────────────────────────────────────────

    @classmethod
    @abstractmethod
    async def create(
        cls, connection: ConnectionConfig, pool: PoolConfig | None = None
    ) -> Driver:
        """Build a driver that owns a freshly opened connection pool."""
        ...

    @abstractmethod
    async def list_databases(self, ignore_default_schemas: bool = False) -> list[str]:
        """
        List databases/schemas in backend order.

        With ignore_default_schemas, the backend's built-in system
        schemas are left out.
        """
        ...

    @abstractmethod
    async def list_tables(self, database: str) -> list[str]:
        """List the tables of one database."""
        ...

    @abstractmethod
    async def list_columns(self, database: str, table: str) -> list[ColumnDescriptor]:
        """Describe every column of a table, in backend order."""
        ...

    @abstractmethod
    async def list_records(
        self,
        database: str,
        table: str,
        filter: str | None = None,
        sort: str | None = None,
        offset: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> RecordSet:
        """
        Fetch one page of rows.

        filter and sort are trusted SQL fragments supplied by the
        caller; they are appended as-is.
        """
        ...

    # ── Optional (override once the backend supports it) ──────

    async def list_constraints(self, database: str, table: str) -> list[ConstraintInfo]:
        raise FeatureNotImplementedError("list_constraints", self.name)

    async def list_foreign_keys(self, database: str, table: str) -> list[ForeignKeyInfo]:
        raise FeatureNotImplementedError("list_foreign_keys", self.name)

    async def list_indexes(self, database: str, table: str) -> list[IndexInfo]:
        raise FeatureNotImplementedError("list_indexes", self.name)

    # ── Lifecycle ─────────────────────────────────────────────

    async def close(self) -> None:
        """Release backend resources. Safe to call more than once."""

    async def __aenter__(self) -> Driver:
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        await self.close()

    def __repr__(self):
        return f"<{self.__class__.__name__}>"
