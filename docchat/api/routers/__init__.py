"""API routers."""

from docchat.api.routers.diagrams import router as diagrams_router
from docchat.api.routers.documents import router as documents_router
from docchat.api.routers.health import router as health_router

__all__ = ["diagrams_router", "documents_router", "health_router"]
