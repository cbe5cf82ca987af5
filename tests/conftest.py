"""In-memory stand-ins for an aiomysql pool, connection and cursor."""

from __future__ import annotations

import asyncio
import datetime
from typing import Any

import aiomysql
import pytest
from pymysql.err import ProgrammingError


class FakeCursor:
    def __init__(self, connection: "FakeConnection", cursor_class: Any) -> None:
        self._connection = connection
        self._cursor_class = cursor_class
        self._rows: list[Any] = []

    async def __aenter__(self) -> "FakeCursor":
        assert not self._connection.busy, "connection shared between operations"
        self._connection.busy = True
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self._connection.busy = False

    async def execute(self, sql: str) -> int:
        pool = self._connection.pool
        pool.statements.append(sql)
        self._connection.statements.append(sql)
        # hand control back so concurrent operations interleave
        await asyncio.sleep(0)
        if pool.execute_error is not None:
            raise pool.execute_error
        if sql not in pool.responses:
            raise ProgrammingError(1064, f"You have an error in your SQL syntax near '{sql}'")
        records = pool.responses[sql]
        if self._cursor_class is aiomysql.DictCursor:
            self._rows = [dict(record) for record in records]
        else:
            self._rows = [tuple(record.values()) for record in records]
        return len(self._rows)

    async def fetchall(self) -> list[Any]:
        await asyncio.sleep(0)
        return list(self._rows)


class FakeConnection:
    def __init__(self, pool: "FakePool") -> None:
        self.pool = pool
        self.busy = False
        self.statements: list[str] = []

    def cursor(self, cursor_class: Any = None) -> FakeCursor:
        self.pool.cursor_classes.append(cursor_class)
        return FakeCursor(self, cursor_class)


class FakeLease:
    """What ``pool.acquire()`` returns: awaited through ``async with``."""

    def __init__(self, pool: "FakePool") -> None:
        self._pool = pool
        self._conn: FakeConnection | None = None

    async def __aenter__(self) -> FakeConnection:
        await asyncio.sleep(0)
        if self._pool.acquire_error is not None:
            raise self._pool.acquire_error
        self._conn = FakeConnection(self._pool)
        self._pool.acquired += 1
        self._pool.connections.append(self._conn)
        self._pool.in_use += 1
        self._pool.max_in_use = max(self._pool.max_in_use, self._pool.in_use)
        return self._conn

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        await self._pool.release(self._conn)


class FakePool:
    def __init__(self, responses: dict[str, list[dict[str, Any]]] | None = None) -> None:
        self.responses = dict(responses or {})
        self.statements: list[str] = []
        self.cursor_classes: list[Any] = []
        self.connections: list[FakeConnection] = []
        self.acquire_error: BaseException | None = None
        self.execute_error: BaseException | None = None
        self.acquired = 0
        self.released = 0
        self.in_use = 0
        self.max_in_use = 0
        self.closed = False
        self.wait_closed_called = False

    def acquire(self) -> FakeLease:
        return FakeLease(self)

    async def release(self, conn: FakeConnection) -> None:
        self.released += 1
        self.in_use -= 1

    def close(self) -> None:
        self.closed = True

    async def wait_closed(self) -> None:
        self.wait_closed_called = True


REGISTERED_AT = datetime.datetime(2024, 2, 6, 16, 38, 26)

USERS = [
    {
        "id": 1,
        "username": "john_doe",
        "email": "john@example.com",
        "password": "password123",
        "registered_at": REGISTERED_AT,
    },
    {
        "id": 2,
        "username": "jane_smith",
        "email": "jane@example.com",
        "password": "secret456",
        "registered_at": REGISTERED_AT,
    },
    {
        "id": 3,
        "username": "mike_jackson",
        "email": "mike@example.com",
        "password": "mysecurepassword",
        "registered_at": REGISTERED_AT,
    },
]

USERS_COLUMNS = [
    {"Field": "id", "Type": "int", "Null": "NO", "Key": "PRI", "Default": None, "Extra": "auto_increment"},
    {"Field": "username", "Type": "varchar(32)", "Null": "NO", "Key": "UNI", "Default": None, "Extra": ""},
    {"Field": "email", "Type": "varchar(255)", "Null": "NO", "Key": "UNI", "Default": None, "Extra": ""},
    {"Field": "password", "Type": "varchar(255)", "Null": "NO", "Key": "", "Default": None, "Extra": ""},
    {
        "Field": "registered_at",
        "Type": "timestamp",
        "Null": "YES",
        "Key": "",
        "Default": "CURRENT_TIMESTAMP",
        "Extra": "DEFAULT_GENERATED",
    },
]


@pytest.fixture
def fake_pool() -> FakePool:
    return FakePool(
        {
            "SHOW DATABASES": [
                {"Database": "information_schema"},
                {"Database": "other_database"},
                {"Database": "mysql"},
                {"Database": "performance_schema"},
                {"Database": "slq"},
                {"Database": "sys"},
            ],
            "SHOW TABLES IN `slq`": [
                {"Tables_in_slq": "posts"},
                {"Tables_in_slq": "users"},
            ],
            "SHOW COLUMNS IN `slq`.`users`": USERS_COLUMNS,
            "SELECT * FROM `slq`.`users` LIMIT 50": USERS,
        }
    )
