"""
Visualization refresh service.

When a data file changes, every map and chart derived from it inside Odin is
recomputed from the file's current content. Artifacts carrying a link are
sourced externally and are left alone.
"""

import asyncio
from typing import Callable, List, Optional

from common import shortid
from common.logging_config import get_logger
from odin.config import REFRESH_CONCURRENCY
from odin.domain import ChartArtifact, DataFile, MapArtifact, RefreshFailure, RefreshReport, TabularContent
from odin.exceptions import InvalidDataSeriesError
from odin.services.chart_service import build_chart_payload
from odin.utils import split_columns

logger = get_logger(__name__)


def parse_data_series(data_series: Optional[str]) -> List[str]:
    """
    Split a chart's data series into its category and value columns.

    Raises:
        InvalidDataSeriesError: If the series does not name exactly two columns
    """
    columns = split_columns(data_series)
    if len(columns) != 2:
        raise InvalidDataSeriesError(
            f"Data series must name a category and a value column, got {data_series!r}"
        )
    return columns


class VisualizationRefresher:
    def __init__(
        self,
        content_store,
        map_store,
        chart_store,
        geometry,
        aggregator,
        id_validator: Callable[[str], bool] = shortid.is_valid,
        concurrency: int = REFRESH_CONCURRENCY,
    ):
        """
        Args:
            content_store: Provides async fetch_content(dataset, file_name, offset, limit, row_filter)
            map_store: Provides async find_by_file(file_id) and update_by_id(id, {"geojson": ...})
            chart_store: Provides async find_by_file(file_id) and update_by_id(id, {"data": ...})
            geometry: Provides to_geojson(content, latitude_key, longitude_key, properties)
            aggregator: Provides aggregate(content, data_type, category_key, value_key)
            id_validator: Predicate accepting valid file identifiers
            concurrency: Maximum artifacts recomputed at once per branch
        """
        self.content_store = content_store
        self.map_store = map_store
        self.chart_store = chart_store
        self.geometry = geometry
        self.aggregator = aggregator
        self.id_validator = id_validator
        self.concurrency = max(1, concurrency)
        self._tasks = set()

    def schedule(self, file: DataFile) -> asyncio.Task:
        """
        Start a refresh in the background.

        Returns:
            Task resolving to the RefreshReport; callers may await it or drop it
        """
        task = asyncio.create_task(self.refresh(file))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        task.add_done_callback(self._log_outcome)
        return task

    @staticmethod
    def _log_outcome(task: asyncio.Task) -> None:
        if task.cancelled():
            logger.warning("Visualization refresh was cancelled")
            return
        exc = task.exception()
        if exc is not None:
            logger.error(f"Visualization refresh failed: {exc}", exc_info=exc)

    async def refresh(self, file: DataFile) -> RefreshReport:
        """
        Recompute the maps and charts generated from file.

        An invalid file identifier makes this a no-op. A failure to load the
        file content propagates; failures of individual artifacts are
        collected in the report and do not stop their siblings.
        """
        report = RefreshReport(file_id=file.id)

        if not self.id_validator(file.id):
            logger.debug(f"Skipping refresh for invalid file id {file.id!r}")
            report.skipped = True
            return report

        logger.info(f"Refreshing visualizations for {file.dataset}/{file.file_name} [file_id={file.id}]")

        try:
            content = await self.content_store.fetch_content(file.dataset, file.file_name, 0, 0, None)
        except Exception as e:
            logger.error(f"Failed to fetch content [file_id={file.id}]: {e}", exc_info=True)
            raise

        semaphore = asyncio.Semaphore(self.concurrency)
        await asyncio.gather(
            self._refresh_maps(file, content, report, semaphore),
            self._refresh_charts(file, content, report, semaphore),
        )

        logger.info(
            f"Refresh completed: {len(report.updated_maps)} maps, {len(report.updated_charts)} charts updated, "
            f"{len(report.skipped_linked)} linked skipped, {len(report.failures)} failed [file_id={file.id}]"
        )
        return report

    async def _refresh_maps(self, file, content, report, semaphore) -> None:
        try:
            maps = await self.map_store.find_by_file(file.id)
        except Exception as e:
            logger.error(f"Failed to load maps [file_id={file.id}]: {e}", exc_info=True)
            report.failures.append(RefreshFailure(kind="map", artifact_id=None, error=str(e)))
            return

        pending = self._without_links(maps, report)
        results = await asyncio.gather(
            *(self._limited(semaphore, self._refresh_map(m, content)) for m in pending),
            return_exceptions=True
        )
        self._collect("map", pending, results, report.updated_maps, report)

    async def _refresh_charts(self, file, content, report, semaphore) -> None:
        try:
            charts = await self.chart_store.find_by_file(file.id)
        except Exception as e:
            logger.error(f"Failed to load charts [file_id={file.id}]: {e}", exc_info=True)
            report.failures.append(RefreshFailure(kind="chart", artifact_id=None, error=str(e)))
            return

        pending = self._without_links(charts, report)
        results = await asyncio.gather(
            *(self._limited(semaphore, self._refresh_chart(c, content)) for c in pending),
            return_exceptions=True
        )
        self._collect("chart", pending, results, report.updated_charts, report)

    @staticmethod
    def _without_links(artifacts, report: RefreshReport) -> list:
        pending = []
        for artifact in artifacts:
            if artifact.link:
                report.skipped_linked.append(artifact.id)
            else:
                pending.append(artifact)
        return pending

    @staticmethod
    def _collect(kind: str, artifacts, results, updated: List[str], report: RefreshReport) -> None:
        for artifact, result in zip(artifacts, results):
            if isinstance(result, asyncio.CancelledError):
                logger.warning(f"Refresh of {kind} {artifact.id} was cancelled")
                report.failures.append(RefreshFailure(kind=kind, artifact_id=artifact.id, error="cancelled"))
            elif isinstance(result, BaseException):
                logger.warning(f"Failed to refresh {kind} {artifact.id}: {result}")
                report.failures.append(RefreshFailure(kind=kind, artifact_id=artifact.id, error=str(result)))
            elif result is None:
                logger.warning(f"{kind.capitalize()} {artifact.id} disappeared before it could be updated")
                report.failures.append(RefreshFailure(kind=kind, artifact_id=artifact.id, error="not found"))
            else:
                updated.append(artifact.id)

    @staticmethod
    async def _limited(semaphore: asyncio.Semaphore, coro):
        async with semaphore:
            return await coro

    async def _refresh_map(self, map_artifact: MapArtifact, content: TabularContent):
        properties = split_columns(map_artifact.properties)
        geojson, incorrect, correct = self.geometry.to_geojson(
            content, map_artifact.latitude_key, map_artifact.longitude_key, properties
        )
        logger.debug(f"Map {map_artifact.id}: {correct} features, {incorrect} rows rejected")
        return await self.map_store.update_by_id(map_artifact.id, {"geojson": geojson})

    async def _refresh_chart(self, chart: ChartArtifact, content: TabularContent):
        category_key, value_key = parse_data_series(chart.data_series)
        aggregation = self.aggregator.aggregate(content, chart.data_type, category_key, value_key)
        payload = build_chart_payload(aggregation, chart.data_type)
        return await self.chart_store.update_by_id(chart.id, {"data": payload})


def default_refresher() -> VisualizationRefresher:
    """Refresher wired to the SQLite stores and the in-process projection services."""
    from odin.services.chart_service import ChartService
    from odin.services.geojson_service import GeoJsonService
    from odin.stores import SqliteChartStore, SqliteContentStore, SqliteMapStore

    return VisualizationRefresher(
        content_store=SqliteContentStore(),
        map_store=SqliteMapStore(),
        chart_store=SqliteChartStore(),
        geometry=GeoJsonService(),
        aggregator=ChartService(),
    )
