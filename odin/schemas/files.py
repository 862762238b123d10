"""Pydantic schemas for data file and visualization endpoints."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class RefreshRequest(BaseModel):
    """Request model for refreshing the visualizations of a file."""
    dataset: str
    file_name: str


class RefreshFailureResponse(BaseModel):
    kind: str
    artifact_id: Optional[str] = None
    error: str


class RefreshReportResponse(BaseModel):
    """Outcome of a visualization refresh."""
    file_id: str
    skipped: bool
    updated_maps: List[str]
    updated_charts: List[str]
    skipped_linked: List[str]
    failures: List[RefreshFailureResponse]


class ReplaceContentRequest(BaseModel):
    """Request model for replacing a file's tabular content."""
    rows: List[Dict[str, Any]]


class ReplaceContentResponse(BaseModel):
    file_id: str
    row_count: int
    refresh_scheduled: bool
