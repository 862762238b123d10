"""Odin data type definitions."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class DataFile:
    """
    Reference to an uploaded data file. Content lives in the content store.
    """
    id: str
    dataset: str
    file_name: str


@dataclass
class TabularContent:
    """
    Rows of a data file materialized at a point in time.
    """
    rows: List[Dict[str, Any]]
    columns: List[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)


@dataclass
class MapArtifact:
    id: str
    name: str
    file_id: str
    latitude_key: str
    longitude_key: str
    properties: str = ""
    link: Optional[str] = None
    geojson: Optional[Dict[str, Any]] = None
    updated_at: Optional[datetime] = None


@dataclass
class ChartArtifact:
    id: str
    name: str
    file_id: str
    data_series: str
    data_type: str
    link: Optional[str] = None
    data: Optional[Dict[str, Any]] = None
    updated_at: Optional[datetime] = None


@dataclass
class Category:
    id: str
    name: str


@dataclass
class Tag:
    id: str
    about: Optional[str] = None
    description: Optional[str] = None
    email: Optional[str] = None
    categories: List[Category] = field(default_factory=list)
    created_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "about": self.about,
            "description": self.description,
            "email": self.email,
            "categories": [{"id": c.id, "name": c.name} for c in self.categories],
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class RefreshFailure:
    """
    One artifact whose recompute or persistence failed during a refresh.
    """
    kind: str
    artifact_id: Optional[str]
    error: str


@dataclass
class RefreshReport:
    """
    Outcome of refreshing the visualizations derived from one file.
    """
    file_id: str
    skipped: bool = False
    updated_maps: List[str] = field(default_factory=list)
    updated_charts: List[str] = field(default_factory=list)
    skipped_linked: List[str] = field(default_factory=list)
    failures: List[RefreshFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures
