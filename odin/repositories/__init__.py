"""Repository layer for data access."""

from odin.repositories.file_repository import FileRepository
from odin.repositories.content_repository import ContentRepository
from odin.repositories.map_repository import MapRepository
from odin.repositories.chart_repository import ChartRepository
from odin.repositories.tag_repository import TagRepository

__all__ = [
    "FileRepository",
    "ContentRepository",
    "MapRepository",
    "ChartRepository",
    "TagRepository",
]
