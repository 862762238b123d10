"""Projection of tabular content onto GeoJSON point features."""

import math
from typing import Any, Dict, List, Optional, Tuple

from common.logging_config import get_logger
from odin.domain import TabularContent
from odin.exceptions import GeometryProjectionError

logger = get_logger(__name__)


def _parse_coordinate(value: Any, bound: float) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        coordinate = float(str(value).strip().replace(',', '.'))
    except ValueError:
        return None
    if math.isnan(coordinate) or abs(coordinate) > bound:
        return None
    return coordinate


class GeoJsonService:
    def to_geojson(
        self,
        content: TabularContent,
        latitude_key: str,
        longitude_key: str,
        properties: List[str],
    ) -> Tuple[Dict[str, Any], int, int]:
        """
        Build a FeatureCollection with one Point per row that has usable coordinates.

        Args:
            content: Rows to project
            latitude_key: Column holding latitudes
            longitude_key: Column holding longitudes
            properties: Columns copied into each feature's properties

        Returns:
            Tuple of (feature_collection, incorrect_rows, correct_rows)

        Raises:
            GeometryProjectionError: If a coordinate column is not named
        """
        if not latitude_key or not longitude_key:
            raise GeometryProjectionError("Latitude and longitude columns are required")

        features = []
        incorrect = 0

        for row in content.rows:
            latitude = _parse_coordinate(row.get(latitude_key), 90.0)
            longitude = _parse_coordinate(row.get(longitude_key), 180.0)

            if latitude is None or longitude is None:
                incorrect += 1
                continue

            features.append({
                "type": "Feature",
                "geometry": {
                    "type": "Point",
                    "coordinates": [longitude, latitude],
                },
                "properties": {name: row.get(name) for name in properties},
            })

        if incorrect:
            logger.debug(f"Skipped {incorrect} rows without valid coordinates")

        geojson = {"type": "FeatureCollection", "features": features}
        return geojson, incorrect, len(features)
