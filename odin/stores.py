"""Async adapters exposing the SQLite repositories to the visualization refresher."""

import asyncio
from functools import partial
from typing import Any, Dict, List, Optional

from odin.domain import ChartArtifact, MapArtifact, TabularContent
from odin.repositories.chart_repository import ChartRepository
from odin.repositories.content_repository import ContentRepository
from odin.repositories.map_repository import MapRepository


async def _run_blocking(func, *args, **kwargs):
    loop = asyncio.get_event_loop()
    return await loop.run_in_executor(None, partial(func, *args, **kwargs))


class SqliteContentStore:
    async def fetch_content(
        self,
        dataset: str,
        file_name: str,
        offset: int = 0,
        limit: int = 0,
        row_filter: Optional[Dict[str, Any]] = None,
    ) -> TabularContent:
        return await _run_blocking(
            ContentRepository.fetch_content, dataset, file_name, offset, limit, row_filter
        )


class SqliteMapStore:
    async def find_by_file(self, file_id: str) -> List[MapArtifact]:
        return await _run_blocking(MapRepository.find_by_file, file_id)

    async def update_by_id(self, map_id: str, values: Dict[str, Any]) -> Optional[MapArtifact]:
        return await _run_blocking(MapRepository.update_geojson, map_id, values["geojson"])


class SqliteChartStore:
    async def find_by_file(self, file_id: str) -> List[ChartArtifact]:
        return await _run_blocking(ChartRepository.find_by_file, file_id)

    async def update_by_id(self, chart_id: str, values: Dict[str, Any]) -> Optional[ChartArtifact]:
        return await _run_blocking(ChartRepository.update_data, chart_id, values["data"])
