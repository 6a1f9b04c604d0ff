"""
Routes documentaires communes au BFF et à la preview.

Une seule route attrape tous les GET; `routing.match` décide de la variante
(catalogue, métadonnées, contenu, asset du shell, non-routé) et le backend
monté sur l'application fournit les données.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse, HTMLResponse

from docportal.app.metrics import DOCS_LOOKUPS
from docportal.core.http_constants import HTTP_NOT_FOUND
from docportal.domain import routing
from docportal.domain.errors import DocsError, NotFound
from docportal.domain.paths import sanitize
from docportal.services.docs_backend import DocsBackend

router = APIRouter(tags=["docs"])

SHELL_INDEX = "index.html"
NOT_FOUND_PAGE = (
    "<!doctype html><html><head><title>Not Found</title></head><body>"
    "<h1>404 - Not Found</h1><p>The requested documentation page does not exist.</p>"
    "</body></html>"
)


def get_backend(request: Request) -> DocsBackend:
    return request.app.state.backend


def _observe(kind: str, lookup: Callable[[], Any]) -> Any:
    try:
        result = lookup()
    except NotFound:
        DOCS_LOOKUPS.labels(kind, "not_found").inc()
        raise
    except DocsError:
        DOCS_LOOKUPS.labels(kind, "error").inc()
        raise
    DOCS_LOOKUPS.labels(kind, "ok").inc()
    return result


def _not_found_page() -> HTMLResponse:
    return HTMLResponse(NOT_FOUND_PAGE, status_code=HTTP_NOT_FOUND)


def _serve_asset(shell_dir: Path, asset: str):
    try:
        path = sanitize(shell_dir, asset, default=None)
    except NotFound:
        return _not_found_page()
    if not path.is_file():
        # lien profond dont le dernier segment contient un point
        return _serve_shell(shell_dir)
    return FileResponse(path)


def _serve_shell(shell_dir: Path):
    index = shell_dir / SHELL_INDEX
    if not index.is_file():
        return _not_found_page()
    return FileResponse(index, media_type="text/html")


@router.get("/{full_path:path}")
def dispatch(full_path: str, request: Request):
    """
    Point d'entrée unique des GET documentaires.

    - `/api/catalog` -> JSON domain -> system -> [{id, title, description, path}]
    - `/api/metadata/{route}` -> JSON du `docs.yaml` ou 404
    - `/api/content/{route}/{page}` -> fragment HTML ou 404
    - autre `/api/...` -> 404 JSON; le reste -> asset ou shell SPA
    """
    backend = get_backend(request)
    settings = request.app.state.settings
    shell_dir: Path = request.app.state.shell_dir
    matched = routing.match(request.url.path, default_page=settings.DEFAULT_PAGE)

    if isinstance(matched, routing.CatalogRoute):
        return _observe("catalog", backend.catalog)
    if isinstance(matched, routing.MetadataRoute):
        return _observe("metadata", lambda: backend.metadata(matched.route).document())
    if isinstance(matched, routing.ContentRoute):
        artifact = _observe("content", lambda: backend.content(matched.route, matched.page))
        return HTMLResponse(artifact.html)
    if isinstance(matched, routing.StaticAssetRoute):
        return _serve_asset(shell_dir, matched.asset)
    if matched.api:
        DOCS_LOOKUPS.labels("unmatched", "not_found").inc()
        raise NotFound("no such API route")
    return _serve_shell(shell_dir)
