import pytest

from tablescope.errors import GuardrailError
from tablescope.query import (
    compose_record_query,
    show_columns,
    show_databases,
    show_tables,
)


def test_enumeration_statements() -> None:
    assert show_databases() == "SHOW DATABASES"
    assert show_tables("slq") == "SHOW TABLES IN `slq`"
    assert show_columns("slq", "users") == "SHOW COLUMNS IN `slq`.`users`"


def test_identifiers_escape_backticks() -> None:
    assert show_tables("we`ird") == "SHOW TABLES IN `we``ird`"


def test_empty_identifier_rejected() -> None:
    with pytest.raises(GuardrailError):
        show_columns("", "users")


def test_bare_page() -> None:
    query = compose_record_query("slq", "t", None, None, 0, 50)
    assert query == "SELECT * FROM `slq`.`t` LIMIT 50"
    assert "WHERE" not in query
    assert "ORDER BY" not in query
    assert "OFFSET" not in query
    assert query.count("LIMIT") == 1


def test_all_clauses_in_order() -> None:
    query = compose_record_query("slq", "users", "id > 1", "id DESC", 10, 25)
    assert query == (
        "SELECT * FROM `slq`.`users` WHERE id > 1 ORDER BY id DESC OFFSET 10 LIMIT 25"
    )


def test_offset_sits_before_limit() -> None:
    query = compose_record_query("slq", "users", offset=10, limit=50)
    assert query.count("OFFSET") == 1
    assert query.index("OFFSET 10") < query.index("LIMIT 50")


def test_custom_sort_keyword() -> None:
    query = compose_record_query("db", "t", sort="a", sort_keyword="SORT BY")
    assert query == "SELECT * FROM `db`.`t` SORT BY a LIMIT 50"


def test_empty_filter_and_sort_are_skipped() -> None:
    assert compose_record_query("db", "t", "", "", 0, 5) == "SELECT * FROM `db`.`t` LIMIT 5"


@pytest.mark.parametrize("offset, limit", [(-1, 10), (0, -5), (0, 2.5), (True, 10)])
def test_invalid_page_bounds(offset, limit) -> None:
    with pytest.raises(GuardrailError):
        compose_record_query("db", "t", offset=offset, limit=limit)
