"""
Diagram API endpoints.

Routes:
- POST /diagrams/generate - Classify, synthesize and render a diagram
- GET /diagrams/source/{file_name} - Stored markup
- GET /diagrams/svg/{file_name} - SVG with fallbacks for stale links
- GET /diagrams/png/{file_name} - Background raster, when ready
- GET /diagrams/html/{file_name} - Interactive viewer

Dependencies: docchat.application.services.diagram_service, docchat.core.diagrams.artifact_store
System role: Diagram generation and retrieval HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse, Response

from docchat.api.deps import get_artifact_store, get_diagram_service
from docchat.application.services.diagram_service import DiagramService
from docchat.core.diagrams.artifact_store import ArtifactStore
from docchat.core.exceptions import DiagramRenderError, NotADiagramRequestError, ValidationError
from docchat.models.diagram import DiagramGenerateRequest, DiagramGenerateResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/diagrams", tags=["diagrams"])

PLACEHOLDER_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="480" height="160" viewBox="0 0 480 160">'
    '<rect width="100%" height="100%" fill="#f4f4f4" stroke="#cccccc"/>'
    '<text x="240" y="72" font-family="Helvetica, Arial, sans-serif" font-size="18" '
    'text-anchor="middle" fill="#666666">Diagram not found</text>'
    '<text x="240" y="100" font-family="Helvetica, Arial, sans-serif" font-size="12" '
    'text-anchor="middle" fill="#999999">It may have been removed or the link is out of date.</text>'
    "</svg>"
)

MEDIA_TYPES = {
    ".svg": "image/svg+xml",
    ".png": "image/png",
    ".html": "text/html; charset=utf-8",
}


def _file(path) -> FileResponse:
    media_type = MEDIA_TYPES.get(path.suffix.lower(), "text/plain; charset=utf-8")
    return FileResponse(path, media_type=media_type, filename=path.name, content_disposition_type="inline")


@router.post("/generate", response_model=DiagramGenerateResponse)
async def generate_diagram(
    request: DiagramGenerateRequest,
    diagram_service: DiagramService = Depends(get_diagram_service),
) -> DiagramGenerateResponse:
    """
    Generate a diagram from a prompt.

    Raises:
        HTTPException(400): Prompt is not a diagram request
        HTTPException(502): Every render tier failed
        HTTPException(500): Unexpected error
    """
    try:
        return await diagram_service.generate(
            prompt=request.prompt,
            context_snippets=request.context,
            force=request.force,
        )
    except (NotADiagramRequestError, ValidationError) as e:
        raise HTTPException(status_code=400, detail=e.message)
    except DiagramRenderError as e:
        logger.error(f"{__name__}:generate_diagram - {type(e).__name__}: {e}")
        raise HTTPException(status_code=502, detail="Diagram generation failed")
    except Exception as e:
        logger.error(f"{__name__}:generate_diagram - {type(e).__name__}: {e}")
        raise HTTPException(status_code=500, detail=f"Diagram generation error: {str(e)}")


@router.get("/source/{file_name}")
async def get_diagram_source(
    file_name: str,
    store: ArtifactStore = Depends(get_artifact_store),
) -> FileResponse:
    """Stored markup (D2 or Mermaid) by file name."""
    path = store.find_source(file_name)
    if path is None:
        raise HTTPException(status_code=404, detail="Diagram source not found")
    return _file(path)


@router.get("/svg/{file_name}")
async def get_diagram_svg(
    file_name: str,
    store: ArtifactStore = Depends(get_artifact_store),
) -> Response:
    """
    SVG by file name.

    Falls back to the name without ``.xml`` and then to the HTML viewer;
    returns a placeholder image instead of 404 so old chat links still render.
    """
    path = store.find_svg(file_name)
    if path is None:
        logger.warning(f"{__name__}:get_diagram_svg - not found: {file_name}")
        return Response(content=PLACEHOLDER_SVG, media_type="image/svg+xml")
    return _file(path)


@router.get("/png/{file_name}")
async def get_diagram_png(
    file_name: str,
    store: ArtifactStore = Depends(get_artifact_store),
) -> FileResponse:
    """Raster output; 404 until the background conversion has finished."""
    path = store.find("png", file_name)
    if path is None:
        raise HTTPException(status_code=404, detail="Diagram PNG not found")
    return _file(path)


@router.get("/html/{file_name}")
async def get_diagram_html(
    file_name: str,
    store: ArtifactStore = Depends(get_artifact_store),
) -> FileResponse:
    """Interactive viewer page."""
    path = store.find("html", file_name)
    if path is None:
        raise HTTPException(status_code=404, detail="Diagram viewer not found")
    return _file(path)
