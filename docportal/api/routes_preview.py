"""Routes propres à la preview locale (détection de changements)."""

from fastapi import APIRouter, Request

from docportal.domain.errors import NotFound
from docportal.services.preview_backend import PreviewDocsBackend

router = APIRouter(prefix="/api/preview", tags=["preview"])


@router.get("/revision")
def revision(request: Request):
    """Empreinte courante des sources; le shell recharge quand elle change."""
    backend = request.app.state.backend
    if not isinstance(backend, PreviewDocsBackend):
        raise NotFound("preview routes are not available")
    return {"revision": backend.revision(), "route": str(backend.route)}
