"""Chart artifact repository for database operations."""

import json
from datetime import datetime
from typing import Any, Dict, List, Optional

from common.logging_config import get_logger
from odin.database import get_db_connection, open_db_connection
from odin.domain import ChartArtifact

logger = get_logger(__name__)

_CHART_COLUMNS = "id, name, file_id, link, data_series, data_type, data, updated_at"


def _row_to_chart(row) -> ChartArtifact:
    return ChartArtifact(
        id=row["id"],
        name=row["name"],
        file_id=row["file_id"],
        link=row["link"],
        data_series=row["data_series"],
        data_type=row["data_type"],
        data=json.loads(row["data"]) if row["data"] else None,
        updated_at=datetime.fromisoformat(row["updated_at"]) if row["updated_at"] else None,
    )


class ChartRepository:
    @staticmethod
    def create(
        chart_id: str,
        name: str,
        file_id: str,
        data_series: str,
        data_type: str,
        link: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
        conn=None
    ) -> ChartArtifact:
        should_close = conn is None
        if conn is None:
            conn = open_db_connection()

        try:
            cursor = conn.cursor()
            cursor.execute(
                f"""
                INSERT INTO charts ({_CHART_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    chart_id, name, file_id, link, data_series, data_type,
                    json.dumps(data) if data is not None else None, None
                )
            )
            if should_close:
                conn.commit()

            return ChartArtifact(
                id=chart_id,
                name=name,
                file_id=file_id,
                link=link,
                data_series=data_series,
                data_type=data_type,
                data=data,
            )
        finally:
            if should_close:
                conn.close()

    @staticmethod
    def get_by_id(chart_id: str) -> Optional[ChartArtifact]:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f"SELECT {_CHART_COLUMNS} FROM charts WHERE id = ?", (chart_id,))
            row = cursor.fetchone()
            return _row_to_chart(row) if row else None

    @staticmethod
    def find_by_file(file_id: str) -> List[ChartArtifact]:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT {_CHART_COLUMNS} FROM charts WHERE file_id = ? ORDER BY id",
                (file_id,)
            )
            return [_row_to_chart(row) for row in cursor.fetchall()]

    @staticmethod
    def update_data(chart_id: str, data: Dict[str, Any]) -> Optional[ChartArtifact]:
        """
        Overwrite the derived series of a chart.

        Returns:
            The updated chart, or None if no chart has this id
        """
        with get_db_connection() as conn:
            try:
                cursor = conn.cursor()
                cursor.execute(
                    "UPDATE charts SET data = ?, updated_at = ? WHERE id = ?",
                    (json.dumps(data), datetime.utcnow().isoformat(), chart_id)
                )
                if cursor.rowcount == 0:
                    logger.warning(f"No chart to update [chart_id={chart_id}]")
                    return None
                conn.commit()

                cursor.execute(f"SELECT {_CHART_COLUMNS} FROM charts WHERE id = ?", (chart_id,))
                return _row_to_chart(cursor.fetchone())
            except Exception as e:
                conn.rollback()
                logger.error(f"Failed to update chart data [chart_id={chart_id}]: {e}", exc_info=True)
                raise
