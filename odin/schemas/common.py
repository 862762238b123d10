"""Common schemas used across multiple endpoints."""

from typing import Any, Dict

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Response model for errors."""
    detail: str
    code: str


class Envelope(BaseModel):
    """Response body made of meta, data and links objects."""
    meta: Dict[str, Any]
    data: Any = None
    links: Dict[str, Any] = {}
