"""
MySQL / MariaDB driver backed by an aiomysql connection pool.

Enumeration uses the server's own introspection statements:

    SHOW DATABASES
    SHOW TABLES IN `db`
    SHOW COLUMNS IN `db`.`table`

and record listing a composed ``SELECT * FROM `db`.`table` ...``.

The driver owns its pool. Every operation leases one connection for the
duration of a single statement and hands it back on every exit path.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any, AsyncIterator

import aiomysql
from pymysql.err import InterfaceError, MySQLError, OperationalError

from ..config import ConnectionConfig, PoolConfig
from ..errors import BackendConnectionError, ConversionError, QueryError
from ..guardrails import detect_statement_type
from ..logging_utils import log_extra
from ..models import ColumnDescriptor, RecordSet
from ..query import (
    DEFAULT_PAGE_SIZE,
    SORT_KEYWORD,
    compose_record_query,
    show_columns,
    show_databases,
    show_tables,
)
from ..values import normalize_row, normalize_value
from .base import Driver
from .describe import parse_column

DEFAULT_SCHEMAS = ("mysql", "information_schema", "performance_schema", "sys")

# Client-side error codes (CR_*) all sit in this range: server gone away,
# lost connection, cannot connect, ...
_CLIENT_ERROR_CODES = range(2000, 3000)


def _is_connection_loss(exc: BaseException) -> bool:
    if isinstance(exc, InterfaceError):
        return True
    if isinstance(exc, OperationalError) and exc.args:
        code = exc.args[0]
        return isinstance(code, int) and code in _CLIENT_ERROR_CODES
    return False


class MySQLDriver(Driver):
    """
    MySQL backend.

    Usage:
        driver = await MySQLDriver.create(ConnectionConfig(user="admin", database="slq"))
        async with driver:
            tables = await driver.list_tables("slq")
            rows = await driver.list_records("slq", "users", limit=50)
    """

    name = "mysql"

    def __init__(self, pool: Any) -> None:
        self._pool = pool
        self._closed = False
        self._log = logging.getLogger(__name__)

    @classmethod
    async def create(
        cls, connection: ConnectionConfig, pool: PoolConfig | None = None
    ) -> MySQLDriver:
        """Open an aiomysql pool from configuration and wrap it."""
        pool = pool or PoolConfig()
        try:
            mysql_pool = await aiomysql.create_pool(
                host=connection.host,
                port=connection.port,
                user=connection.user,
                password=connection.password or "",
                db=connection.database,
                charset=connection.charset,
                connect_timeout=connection.connect_timeout,
                autocommit=True,
                minsize=pool.min_size,
                maxsize=pool.max_size,
                pool_recycle=pool.pool_recycle,
            )
        except (MySQLError, OSError, asyncio.TimeoutError) as exc:
            raise BackendConnectionError(
                f"Could not open MySQL pool for "
                f"{connection.user}@{connection.host}:{connection.port}: {exc}"
            ) from exc
        return cls(mysql_pool)

    # ── Connection lease ──────────────────────────────────────

    @contextlib.asynccontextmanager
    async def _lease(self) -> AsyncIterator[Any]:
        if self._closed:
            raise BackendConnectionError("MySQL driver is closed")
        leased = False
        try:
            async with self._pool.acquire() as conn:
                leased = True
                yield conn
        except (MySQLError, OSError, asyncio.TimeoutError) as exc:
            if leased:
                raise
            self._log.warning(
                "Connection lease failed", extra=log_extra(error_message=str(exc))
            )
            raise BackendConnectionError(f"Could not lease a MySQL connection: {exc}") from exc

    async def _fetch(
        self,
        statement: str,
        *,
        dict_rows: bool = False,
        database: str | None = None,
        table: str | None = None,
    ) -> list[Any]:
        statement_type = detect_statement_type(statement)
        cursor_class = aiomysql.DictCursor if dict_rows else aiomysql.Cursor

        async with self._lease() as conn:
            try:
                async with conn.cursor(cursor_class) as cursor:
                    await cursor.execute(statement)
                    rows = await cursor.fetchall()
            except (MySQLError, OSError, asyncio.TimeoutError) as exc:
                self._log.warning(
                    "MySQL statement failed",
                    extra=log_extra(
                        statement_type=statement_type,
                        database=database,
                        table=table,
                        error_message=str(exc),
                    ),
                )
                if not isinstance(exc, MySQLError) or _is_connection_loss(exc):
                    raise BackendConnectionError(
                        f"Connection lost while executing statement: {exc}"
                    ) from exc
                raise QueryError(f"Query execution failed: {exc}", statement) from exc

        rows = list(rows or ())
        self._log.info(
            "Statement executed",
            extra=log_extra(
                statement_type=statement_type,
                database=database,
                table=table,
                row_count=len(rows),
            ),
        )
        return rows

    # ── Interface ─────────────────────────────────────────────

    async def list_databases(self, ignore_default_schemas: bool = False) -> list[str]:
        rows = await self._fetch(show_databases())
        names = [normalize_value(row[0]) for row in rows]
        if ignore_default_schemas:
            names = [name for name in names if name not in DEFAULT_SCHEMAS]
        return names

    async def list_tables(self, database: str) -> list[str]:
        rows = await self._fetch(show_tables(database), database=database)
        return [normalize_value(row[0]) for row in rows]

    async def list_columns(self, database: str, table: str) -> list[ColumnDescriptor]:
        rows = await self._fetch(
            show_columns(database, table), dict_rows=True, database=database, table=table
        )
        return [parse_column(row) for row in rows]

    async def list_records(
        self,
        database: str,
        table: str,
        filter: str | None = None,
        sort: str | None = None,
        offset: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> RecordSet:
        statement = compose_record_query(
            database, table, filter, sort, offset, limit, sort_keyword=SORT_KEYWORD
        )
        records = await self._fetch(
            statement, dict_rows=True, database=database, table=table
        )
        try:
            return [normalize_row(record) for record in records]
        except ConversionError:
            self._log.warning(
                "Record conversion failed",
                extra=log_extra(database=database, table=table),
            )
            raise

    # ── Lifecycle ─────────────────────────────────────────────

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._pool.close()
        await self._pool.wait_closed()

    def __repr__(self):
        return f"<MySQLDriver pool={self._pool!r}>"
