"""Pydantic schemas for API requests and responses."""

from odin.schemas.common import Envelope, ErrorResponse
from odin.schemas.files import (
    RefreshRequest,
    RefreshFailureResponse,
    RefreshReportResponse,
    ReplaceContentRequest,
    ReplaceContentResponse,
)
from odin.schemas.tags import CategoryResponse, CreateTagRequest, TagResponse

__all__ = [
    "Envelope",
    "ErrorResponse",
    "RefreshRequest",
    "RefreshFailureResponse",
    "RefreshReportResponse",
    "ReplaceContentRequest",
    "ReplaceContentResponse",
    "CategoryResponse",
    "CreateTagRequest",
    "TagResponse",
]
