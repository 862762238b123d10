"""Data file service for business logic."""

from typing import Any, Dict, List

from common import shortid
from common.logging_config import get_logger
from odin.database import get_db_connection
from odin.domain import DataFile
from odin.exceptions import DataFileNotFoundError, InvalidIdentifierError
from odin.repositories.content_repository import ContentRepository
from odin.repositories.file_repository import FileRepository

logger = get_logger(__name__)


class FileService:
    def __init__(self):
        self.file_repo = FileRepository()
        self.content_repo = ContentRepository()

    def get_file(self, file_id: str) -> DataFile:
        if not shortid.is_valid(file_id):
            raise InvalidIdentifierError(f"Invalid file id: {file_id!r}")
        file = self.file_repo.get_by_id(file_id)
        if file is None:
            raise DataFileNotFoundError(f"File {file_id} not found")
        return file

    def replace_content(self, file_id: str, rows: List[Dict[str, Any]]) -> DataFile:
        """
        Store a new content snapshot for a file.

        Returns:
            The file whose content changed, ready to be refreshed
        """
        file = self.get_file(file_id)

        with get_db_connection() as conn:
            try:
                self.content_repo.replace_content(file.dataset, file.file_name, rows, conn=conn)
                self.file_repo.touch(file.id, conn=conn)
                conn.commit()
            except Exception as e:
                conn.rollback()
                logger.error(f"Failed to replace content: {e} [file_id={file_id}]", exc_info=True)
                raise

        logger.info(f"Replaced content with {len(rows)} rows [file_id={file_id}]")
        return file
