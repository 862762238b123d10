"""Data file and visualization refresh API routes."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, status

from odin.domain import DataFile
from odin.responses import RequestMethod, build_body
from odin.schemas.common import Envelope
from odin.schemas.files import (
    RefreshReportResponse,
    RefreshRequest,
    ReplaceContentRequest,
    ReplaceContentResponse,
)
from odin.services.file_service import FileService
from odin.services.visualization_service import VisualizationRefresher, default_refresher

router = APIRouter(prefix="/files", tags=["Files"])

_refresher = None


def get_refresher() -> VisualizationRefresher:
    """
    FastAPI dependency returning the process-wide visualization refresher.
    """
    global _refresher
    if _refresher is None:
        _refresher = default_refresher()
    return _refresher


@router.post("/{file_id}/refresh", response_model=Envelope)
async def refresh_visualizations(
    file_id: str,
    request: RefreshRequest,
    refresher: VisualizationRefresher = Depends(get_refresher)
):
    """
    Recompute the maps and charts generated from a file and wait for the result.

    Parameters:
        - file_id: Short identifier of the changed file
        - dataset, file_name: Location of the file's content

    Returns:
        - data: Refresh report (updated, linked-and-skipped and failed artifacts).
                An invalid file id yields a report with skipped=true.
    """
    file = DataFile(id=file_id, dataset=request.dataset, file_name=request.file_name)
    report = await refresher.refresh(file)

    if report.skipped:
        meta = {"status": "skipped", "message": "Invalid file id, nothing refreshed"}
    elif report.failures:
        meta = {"status": "partial", "message": f"{len(report.failures)} visualizations failed to refresh"}
    else:
        meta = {"status": "ok", "message": "Visualizations refreshed"}

    data = RefreshReportResponse(**asdict(report)).model_dump()
    return build_body(RequestMethod.POST, meta, data=data)


@router.patch("/{file_id}/content", response_model=Envelope, status_code=status.HTTP_202_ACCEPTED)
async def replace_content(
    file_id: str,
    request: ReplaceContentRequest,
    refresher: VisualizationRefresher = Depends(get_refresher)
):
    """
    Replace a file's tabular content and refresh its visualizations in the background.

    Raises:
        - 400: Invalid file id
        - 404: File not found
    """
    file_service = FileService()
    file = file_service.replace_content(file_id, request.rows)

    refresher.schedule(file)

    data = ReplaceContentResponse(
        file_id=file.id,
        row_count=len(request.rows),
        refresh_scheduled=True,
    ).model_dump()
    meta = {"status": "accepted", "message": "Content stored, refresh scheduled"}
    return build_body(RequestMethod.PATCH, meta, data=data)
