"""SQL text for enumeration and record listing.

Database and table names are always backtick-quoted. Filter and sort
fragments are trusted caller input and are appended verbatim.
"""

from __future__ import annotations

from .guardrails import ensure_page_bounds, quote_identifier

DEFAULT_PAGE_SIZE = 50
SORT_KEYWORD = "ORDER BY"


def qualified_name(database: str, table: str) -> str:
    return f"{quote_identifier(database, 'database')}.{quote_identifier(table, 'table')}"


def show_databases() -> str:
    return "SHOW DATABASES"


def show_tables(database: str) -> str:
    return f"SHOW TABLES IN {quote_identifier(database, 'database')}"


def show_columns(database: str, table: str) -> str:
    return f"SHOW COLUMNS IN {qualified_name(database, table)}"


def compose_record_query(
    database: str,
    table: str,
    filter: str | None = None,
    sort: str | None = None,
    offset: int = 0,
    limit: int = DEFAULT_PAGE_SIZE,
    sort_keyword: str = SORT_KEYWORD,
) -> str:
    """Build the SELECT for one page of records.

    Clauses are appended in a fixed order, each only when present:
    WHERE, the sort clause, OFFSET (only when offset > 0), and LIMIT,
    which is always emitted.
    """
    ensure_page_bounds(offset, limit)
    query = f"SELECT * FROM {qualified_name(database, table)}"

    if filter:
        query += f" WHERE {filter}"

    if sort:
        query += f" {sort_keyword} {sort}"

    if offset > 0:
        query += f" OFFSET {offset}"

    query += f" LIMIT {limit}"
    return query
