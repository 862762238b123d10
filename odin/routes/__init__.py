"""API routes package."""

from odin.routes.file_routes import router as file_router
from odin.routes.tag_routes import router as tag_router

__all__ = ["file_router", "tag_router"]
