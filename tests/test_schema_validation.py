"""Schema validation tests to prevent SQL query mismatches."""

import inspect
import re
import sqlite3
from pathlib import Path

import pytest

from odin.repositories import chart_repository, map_repository, tag_repository


def get_table_columns(db_path: Path, table_name: str) -> set:
    """
    Get all column names for a table from the database schema.
    """
    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()
    cursor.execute(f"PRAGMA table_info({table_name})")
    columns = {row[1] for row in cursor.fetchall()}
    conn.close()
    return columns


def extract_columns_from_query(query: str) -> set:
    """
    Extract column names from SELECT queries.
    """
    select_match = re.search(r"SELECT\s+(.*?)\s+FROM", query, re.IGNORECASE | re.DOTALL)
    if not select_match:
        return set()

    columns = [col.strip().split()[-1].split(".")[-1] for col in select_match.group(1).split(",")]
    return {col.lower() for col in columns if col}


@pytest.mark.parametrize("table", ["files", "file_contents", "maps", "charts", "tags", "categories", "tag_categories"])
def test_table_exists(test_db, table):
    conn = sqlite3.connect(test_db)
    cursor = conn.cursor()
    cursor.execute("SELECT name FROM sqlite_master WHERE type='table' AND name=?", (table,))
    result = cursor.fetchone()
    conn.close()
    assert result is not None


def test_maps_table_columns(test_db):
    assert get_table_columns(test_db, "maps") == {
        "id", "name", "file_id", "link", "latitude_key", "longitude_key", "properties", "geojson", "updated_at"
    }


def test_charts_table_columns(test_db):
    assert get_table_columns(test_db, "charts") == {
        "id", "name", "file_id", "link", "data_series", "data_type", "data", "updated_at"
    }


def test_tags_table_columns(test_db):
    assert get_table_columns(test_db, "tags") == {"id", "about", "description", "email", "created_at"}


@pytest.mark.parametrize("module, table, constant", [
    (map_repository, "maps", "_MAP_COLUMNS"),
    (chart_repository, "charts", "_CHART_COLUMNS"),
])
def test_artifact_column_lists_match_schema(test_db, module, table, constant):
    columns = {col.strip() for col in getattr(module, constant).split(",")}
    assert columns == get_table_columns(test_db, table)


def test_tag_repository_select_queries(test_db):
    source = inspect.getsource(tag_repository)
    selects = re.findall(r"SELECT\s+(.*?)\s+FROM\s+(\w+)", source, re.IGNORECASE | re.DOTALL)
    tag_queries = [f"SELECT {columns} FROM tags" for columns, table in selects if table == "tags"]

    table_columns = get_table_columns(test_db, "tags")

    assert tag_queries
    for query in tag_queries:
        for col in extract_columns_from_query(query):
            if col in ("*", "count"):
                continue
            assert col in table_columns, f"Column {col} not in tags table schema"


def test_init_database_is_idempotent(test_db):
    from odin.database import init_database

    init_database()
    init_database()

    assert "id" in get_table_columns(test_db, "files")
