"""Tests for data file business logic and the SQLite-backed refresh."""

import pytest

from odin.exceptions import DataFileNotFoundError, InvalidIdentifierError
from odin.repositories.chart_repository import ChartRepository
from odin.repositories.content_repository import ContentRepository
from odin.repositories.map_repository import MapRepository
from odin.services.file_service import FileService
from odin.services.visualization_service import default_refresher


def test_replace_content_stores_rows(data_file, city_rows):
    file = FileService().replace_content(data_file.id, city_rows)

    assert file == data_file
    assert ContentRepository.fetch_content("venezuela", "cities.csv").rows == city_rows


def test_replace_content_of_missing_file(test_db):
    with pytest.raises(DataFileNotFoundError):
        FileService().replace_content("missing123", [])


def test_replace_content_with_invalid_id(test_db):
    with pytest.raises(InvalidIdentifierError):
        FileService().replace_content("bad", [])


@pytest.mark.asyncio
async def test_refresh_against_database(data_file, city_rows):
    ContentRepository.replace_content(data_file.dataset, data_file.file_name, city_rows)
    MapRepository.create("mapAAA111", "Cities", data_file.id, "lat", "lon", "city")
    MapRepository.create(
        "mapBBB222", "External", data_file.id, "lat", "lon",
        link="https://example.org/map", geojson={"type": "FeatureCollection", "features": []}
    )
    ChartRepository.create("chartAAA11", "Cities by region", data_file.id, "region,city", "categorical")

    report = await default_refresher().refresh(data_file)

    assert report.ok
    assert report.updated_maps == ["mapAAA111"]
    assert report.updated_charts == ["chartAAA11"]
    assert report.skipped_linked == ["mapBBB222"]

    assert len(MapRepository.get_by_id("mapAAA111").geojson["features"]) == 3
    assert MapRepository.get_by_id("mapBBB222").geojson == {"type": "FeatureCollection", "features": []}
    assert ChartRepository.get_by_id("chartAAA11").data == {"labels": ["Capital", "Aragua"], "data": [2, 2]}
