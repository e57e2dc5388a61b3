"""
Health check API endpoint.

Routes: GET /health

Reports liveness plus two readiness hints for diagram generation: whether
the D2 executable is on PATH and whether the uploads directory is writable.
Neither hint changes the status code; a missing D2 only pushes rendering
onto the fallback tiers.

System role: Health check HTTP API
"""

import os
import shutil

from fastapi import APIRouter
from pydantic import BaseModel

from docchat.configs import get_settings


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str
    d2_available: bool
    uploads_writable: bool


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    diagrams = get_settings().diagrams
    uploads_dir = diagrams.uploads_dir
    writable = uploads_dir.is_dir() and os.access(uploads_dir, os.W_OK)
    if not uploads_dir.exists():
        # created lazily on first render; writable if the parent is
        writable = os.access(uploads_dir.parent, os.W_OK)
    return HealthResponse(
        status="healthy",
        message="Server Healthy",
        d2_available=shutil.which(diagrams.d2_binary) is not None,
        uploads_writable=writable,
    )
