"""Tests for GeoJSON projection of tabular content."""

import pytest

from odin.domain import TabularContent
from odin.exceptions import GeometryProjectionError
from odin.services.geojson_service import GeoJsonService


def test_projects_rows_with_valid_coordinates(city_content):
    geojson, incorrect, correct = GeoJsonService().to_geojson(city_content, "lat", "lon", ["city"])

    assert geojson["type"] == "FeatureCollection"
    assert correct == 3
    assert incorrect == 1
    assert [f["properties"]["city"] for f in geojson["features"]] == ["Caracas", "Maracay", "Petare"]


def test_feature_is_a_point_with_lon_lat_order():
    content = TabularContent(rows=[{"lat": 10.5, "lon": -66.9}])

    geojson, _, _ = GeoJsonService().to_geojson(content, "lat", "lon", [])

    feature = geojson["features"][0]
    assert feature["type"] == "Feature"
    assert feature["geometry"] == {"type": "Point", "coordinates": [-66.9, 10.5]}
    assert feature["properties"] == {}


def test_out_of_range_and_unparseable_rows_are_incorrect():
    content = TabularContent(rows=[
        {"lat": "91", "lon": "0"},
        {"lat": "0", "lon": "-181"},
        {"lat": "abc", "lon": "0"},
        {"lat": None, "lon": "0"},
        {"lat": True, "lon": "0"},
        {"lon": "0"},
        {"lat": "45,5", "lon": "9"},
    ])

    geojson, incorrect, correct = GeoJsonService().to_geojson(content, "lat", "lon", [])

    assert incorrect == 6
    assert correct == 1
    assert geojson["features"][0]["geometry"]["coordinates"] == [9.0, 45.5]


def test_missing_property_columns_are_null():
    content = TabularContent(rows=[{"lat": 1, "lon": 2, "name": "a"}])

    geojson, _, _ = GeoJsonService().to_geojson(content, "lat", "lon", ["name", "missing"])

    assert geojson["features"][0]["properties"] == {"name": "a", "missing": None}


def test_coordinate_columns_are_required(city_content):
    with pytest.raises(GeometryProjectionError):
        GeoJsonService().to_geojson(city_content, "", "lon", [])
