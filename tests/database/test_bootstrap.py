from __future__ import annotations

from zen_den.database.bootstrap import (
    SCHEMA_PATH,
    _strip_create_db_and_use,
    _strip_line_comments,
    iter_sql_statements,
)


def test_splitter_ignores_semicolons_inside_quotes():
    sql = "INSERT INTO t VALUES ('a;b'); INSERT INTO t VALUES (\"c;d\");\nSELECT 1"

    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'INSERT INTO t VALUES ("c;d")',
        "SELECT 1",
    ]


def test_schema_file_creates_visits_table():
    sql = _strip_line_comments(_strip_create_db_and_use(SCHEMA_PATH.read_text(encoding="utf-8")))

    statements = list(iter_sql_statements(sql))

    assert "CREATE DATABASE" not in sql
    assert "USE zen_den" not in sql
    assert len(statements) == 1
    assert statements[0].startswith("CREATE TABLE IF NOT EXISTS visits")
