"""Service layer for business logic."""

from odin.services.chart_service import ChartService
from odin.services.file_service import FileService
from odin.services.geojson_service import GeoJsonService
from odin.services.tag_service import TagService
from odin.services.visualization_service import VisualizationRefresher

__all__ = [
    "ChartService",
    "FileService",
    "GeoJsonService",
    "TagService",
    "VisualizationRefresher",
]
