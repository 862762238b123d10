"""Tabular content repository: row snapshots of uploaded data files."""

import json
from typing import Any, Dict, List, Optional

from common.logging_config import get_logger
from odin.database import get_db_connection, open_db_connection
from odin.domain import TabularContent

logger = get_logger(__name__)


def _collect_columns(rows: List[Dict[str, Any]]) -> List[str]:
    columns = []
    seen = set()
    for row in rows:
        for key in row:
            if key not in seen:
                seen.add(key)
                columns.append(key)
    return columns


def _matches(row: Dict[str, Any], row_filter: Dict[str, Any]) -> bool:
    return all(row.get(key) == value for key, value in row_filter.items())


class ContentRepository:
    @staticmethod
    def fetch_content(
        dataset: str,
        file_name: str,
        offset: int = 0,
        limit: int = 0,
        row_filter: Optional[Dict[str, Any]] = None,
    ) -> TabularContent:
        """
        Load the rows of a data file.

        Args:
            dataset: Dataset the file belongs to
            file_name: Name of the file inside the dataset
            offset: Number of matching rows to skip
            limit: Maximum rows to return; 0 means no limit
            row_filter: Optional column -> value equality filter

        Returns:
            TabularContent with rows ordered by their position in the file
        """
        with get_db_connection() as conn:
            cursor = conn.cursor()
            if row_filter:
                cursor.execute(
                    """
                    SELECT data FROM file_contents
                    WHERE dataset = ? AND file_name = ?
                    ORDER BY row_index
                    """,
                    (dataset, file_name)
                )
                rows = [json.loads(row["data"]) for row in cursor.fetchall()]
                rows = [row for row in rows if _matches(row, row_filter)]
                end = offset + limit if limit > 0 else None
                rows = rows[offset:end]
            else:
                cursor.execute(
                    """
                    SELECT data FROM file_contents
                    WHERE dataset = ? AND file_name = ?
                    ORDER BY row_index
                    LIMIT ? OFFSET ?
                    """,
                    (dataset, file_name, limit if limit > 0 else -1, offset)
                )
                rows = [json.loads(row["data"]) for row in cursor.fetchall()]

        logger.debug(f"Fetched {len(rows)} rows from {dataset}/{file_name}")
        return TabularContent(rows=rows, columns=_collect_columns(rows))

    @staticmethod
    def replace_content(dataset: str, file_name: str, rows: List[Dict[str, Any]], conn=None) -> int:
        """
        Replace the stored snapshot of a data file with rows.

        Returns:
            Number of rows stored
        """
        should_close = conn is None
        if conn is None:
            conn = open_db_connection()

        try:
            cursor = conn.cursor()
            cursor.execute(
                "DELETE FROM file_contents WHERE dataset = ? AND file_name = ?",
                (dataset, file_name)
            )
            cursor.executemany(
                "INSERT INTO file_contents (dataset, file_name, row_index, data) VALUES (?, ?, ?, ?)",
                [(dataset, file_name, index, json.dumps(row)) for index, row in enumerate(rows)]
            )
            if should_close:
                conn.commit()
            logger.info(f"Stored {len(rows)} rows for {dataset}/{file_name}")
            return len(rows)
        except Exception as e:
            if should_close:
                conn.rollback()
            logger.error(f"Failed to store content for {dataset}/{file_name}: {e}", exc_info=True)
            raise
        finally:
            if should_close:
                conn.close()
