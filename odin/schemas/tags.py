"""Pydantic schemas for tag endpoints."""

from typing import List, Optional

from pydantic import BaseModel, EmailStr


class CreateTagRequest(BaseModel):
    """Request model for creating a tag."""
    about: Optional[str] = None
    description: Optional[str] = None
    email: Optional[EmailStr] = None
    categories: List[str] = []


class CategoryResponse(BaseModel):
    id: str
    name: str


class TagResponse(BaseModel):
    """Response model for a tag record."""
    id: str
    about: Optional[str] = None
    description: Optional[str] = None
    email: Optional[str] = None
    categories: List[CategoryResponse]
    created_at: Optional[str] = None
