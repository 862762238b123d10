"""Data file repository for database operations."""

from datetime import datetime
from typing import Optional

from common.logging_config import get_logger
from odin.database import get_db_connection, open_db_connection
from odin.domain import DataFile

logger = get_logger(__name__)


class FileRepository:
    @staticmethod
    def create_file(file_id: str, dataset: str, file_name: str, conn=None) -> DataFile:
        should_close = conn is None
        if conn is None:
            conn = open_db_connection()

        try:
            now = datetime.utcnow().isoformat()
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO files (id, dataset, file_name, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (file_id, dataset, file_name, now, now)
            )
            if should_close:
                conn.commit()
            logger.debug(f"Created file {dataset}/{file_name} [file_id={file_id}]")
            return DataFile(id=file_id, dataset=dataset, file_name=file_name)
        finally:
            if should_close:
                conn.close()

    @staticmethod
    def get_by_id(file_id: str) -> Optional[DataFile]:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT id, dataset, file_name FROM files WHERE id = ?",
                (file_id,)
            )
            row = cursor.fetchone()

            if row is None:
                return None

            return DataFile(id=row["id"], dataset=row["dataset"], file_name=row["file_name"])

    @staticmethod
    def touch(file_id: str, conn=None) -> None:
        """
        Bump updated_at after the file's content changed.
        """
        should_close = conn is None
        if conn is None:
            conn = open_db_connection()

        try:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE files SET updated_at = ? WHERE id = ?",
                (datetime.utcnow().isoformat(), file_id)
            )
            if should_close:
                conn.commit()
        finally:
            if should_close:
                conn.close()
