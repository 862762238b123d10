"""Map artifact repository for database operations."""

import json
from datetime import datetime
from typing import Any, Dict, List, Optional

from common.logging_config import get_logger
from odin.database import get_db_connection, open_db_connection
from odin.domain import MapArtifact

logger = get_logger(__name__)

_MAP_COLUMNS = "id, name, file_id, link, latitude_key, longitude_key, properties, geojson, updated_at"


def _row_to_map(row) -> MapArtifact:
    return MapArtifact(
        id=row["id"],
        name=row["name"],
        file_id=row["file_id"],
        link=row["link"],
        latitude_key=row["latitude_key"],
        longitude_key=row["longitude_key"],
        properties=row["properties"],
        geojson=json.loads(row["geojson"]) if row["geojson"] else None,
        updated_at=datetime.fromisoformat(row["updated_at"]) if row["updated_at"] else None,
    )


class MapRepository:
    @staticmethod
    def create(
        map_id: str,
        name: str,
        file_id: str,
        latitude_key: str,
        longitude_key: str,
        properties: str = "",
        link: Optional[str] = None,
        geojson: Optional[Dict[str, Any]] = None,
        conn=None
    ) -> MapArtifact:
        should_close = conn is None
        if conn is None:
            conn = open_db_connection()

        try:
            cursor = conn.cursor()
            cursor.execute(
                f"""
                INSERT INTO maps ({_MAP_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    map_id, name, file_id, link, latitude_key, longitude_key, properties,
                    json.dumps(geojson) if geojson is not None else None, None
                )
            )
            if should_close:
                conn.commit()

            return MapArtifact(
                id=map_id,
                name=name,
                file_id=file_id,
                link=link,
                latitude_key=latitude_key,
                longitude_key=longitude_key,
                properties=properties,
                geojson=geojson,
            )
        finally:
            if should_close:
                conn.close()

    @staticmethod
    def get_by_id(map_id: str) -> Optional[MapArtifact]:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f"SELECT {_MAP_COLUMNS} FROM maps WHERE id = ?", (map_id,))
            row = cursor.fetchone()
            return _row_to_map(row) if row else None

    @staticmethod
    def find_by_file(file_id: str) -> List[MapArtifact]:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT {_MAP_COLUMNS} FROM maps WHERE file_id = ? ORDER BY id",
                (file_id,)
            )
            return [_row_to_map(row) for row in cursor.fetchall()]

    @staticmethod
    def update_geojson(map_id: str, geojson: Dict[str, Any]) -> Optional[MapArtifact]:
        """
        Overwrite the derived GeoJSON of a map.

        Returns:
            The updated map, or None if no map has this id
        """
        with get_db_connection() as conn:
            try:
                cursor = conn.cursor()
                cursor.execute(
                    "UPDATE maps SET geojson = ?, updated_at = ? WHERE id = ?",
                    (json.dumps(geojson), datetime.utcnow().isoformat(), map_id)
                )
                if cursor.rowcount == 0:
                    logger.warning(f"No map to update [map_id={map_id}]")
                    return None
                conn.commit()

                cursor.execute(f"SELECT {_MAP_COLUMNS} FROM maps WHERE id = ?", (map_id,))
                return _row_to_map(cursor.fetchone())
            except Exception as e:
                conn.rollback()
                logger.error(f"Failed to update map geojson [map_id={map_id}]: {e}", exc_info=True)
                raise
