"""Shared pytest fixtures for all tests."""

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from odin.database import init_database
from odin.domain import DataFile, TabularContent
from odin.repositories.file_repository import FileRepository


@pytest.fixture
def test_db(monkeypatch) -> Generator[Path, None, None]:
    """
    Create a temporary test database for each test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "test.db"
        monkeypatch.setattr("odin.database.DATABASE_PATH", str(db_path))
        monkeypatch.setattr("odin.config.DATABASE_PATH", str(db_path))
        init_database()
        yield db_path


@pytest.fixture
def city_rows():
    """
    Rows of a small cities file with coordinates and a region column.
    """
    return [
        {"city": "Caracas", "region": "Capital", "lat": "10.48", "lon": "-66.90", "population": 2000},
        {"city": "Maracay", "region": "Aragua", "lat": "10.24", "lon": "-67.59", "population": 1000},
        {"city": "Petare", "region": "Capital", "lat": "10.47", "lon": "-66.80", "population": 500},
        {"city": "Nowhere", "region": "Aragua", "lat": "", "lon": "-67.00", "population": 3},
    ]


@pytest.fixture
def city_content(city_rows):
    return TabularContent(rows=city_rows, columns=["city", "region", "lat", "lon", "population"])


@pytest.fixture
def data_file(test_db) -> DataFile:
    """
    A file registered in the test database.
    """
    return FileRepository.create_file("fileAbc123", "venezuela", "cities.csv")
