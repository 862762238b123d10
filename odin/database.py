"""Database schema and connection management for SQLite."""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from odin.config import DATABASE_PATH


def init_database() -> None:
    """
    Initialize database and create tables if they don't exist.
    """
    db_path = Path(DATABASE_PATH)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    with get_db_connection() as conn:
        cursor = conn.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS files (
                id TEXT PRIMARY KEY,
                dataset TEXT NOT NULL,
                file_name TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS file_contents (
                dataset TEXT NOT NULL,
                file_name TEXT NOT NULL,
                row_index INTEGER NOT NULL,
                data TEXT NOT NULL,
                PRIMARY KEY(dataset, file_name, row_index)
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS maps (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                file_id TEXT NOT NULL,
                link TEXT,
                latitude_key TEXT NOT NULL,
                longitude_key TEXT NOT NULL,
                properties TEXT NOT NULL DEFAULT '',
                geojson TEXT,
                updated_at TEXT,
                FOREIGN KEY(file_id) REFERENCES files(id) ON DELETE CASCADE
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS charts (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                file_id TEXT NOT NULL,
                link TEXT,
                data_series TEXT NOT NULL,
                data_type TEXT NOT NULL,
                data TEXT,
                updated_at TEXT,
                FOREIGN KEY(file_id) REFERENCES files(id) ON DELETE CASCADE
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS tags (
                id TEXT PRIMARY KEY CHECK(length(id) <= 15),
                about TEXT,
                description TEXT,
                email TEXT CHECK(email IS NULL OR length(email) <= 250),
                created_at TEXT NOT NULL
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS categories (
                id TEXT PRIMARY KEY,
                name TEXT UNIQUE NOT NULL
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS tag_categories (
                tag_id TEXT NOT NULL,
                category_id TEXT NOT NULL,
                PRIMARY KEY(tag_id, category_id),
                FOREIGN KEY(tag_id) REFERENCES tags(id) ON DELETE CASCADE,
                FOREIGN KEY(category_id) REFERENCES categories(id) ON DELETE CASCADE
            )
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_files_dataset_name ON files(dataset, file_name)
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_maps_file_id ON maps(file_id)
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_charts_file_id ON charts(file_id)
        """)

        conn.commit()


def open_db_connection() -> sqlite3.Connection:
    """
    Open a configured connection. The caller owns it and must close it.
    """
    conn = sqlite3.connect(DATABASE_PATH)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_db_connection() -> Generator[sqlite3.Connection, None, None]:
    """
    Context manager for database connections.
    """
    conn = open_db_connection()
    try:
        yield conn
    finally:
        conn.close()
