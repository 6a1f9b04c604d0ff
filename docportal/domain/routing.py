"""
Aiguillage explicite des requêtes, indépendant de la couche HTTP.

`match` évalue les variantes dans un ordre fixe: catalogue, métadonnées,
contenu, asset statique, puis non-routé (404 JSON sous `/api`, shell sinon).
"""

from __future__ import annotations

from dataclasses import dataclass

from docportal.domain.hierarchy import RoutePath, parse_route
from docportal.domain.paths import DEFAULT_PAGE

API_PREFIX = "/api"
CATALOG_PATH = f"{API_PREFIX}/catalog"
METADATA_PREFIX = f"{API_PREFIX}/metadata/"
CONTENT_PREFIX = f"{API_PREFIX}/content/"
_ROUTE_SEGMENTS = 4


@dataclass(frozen=True)
class CatalogRoute:
    pass


@dataclass(frozen=True)
class MetadataRoute:
    route: RoutePath


@dataclass(frozen=True)
class ContentRoute:
    route: RoutePath
    page: str


@dataclass(frozen=True)
class StaticAssetRoute:
    asset: str


@dataclass(frozen=True)
class UnmatchedRoute:
    path: str
    api: bool = False


Route = CatalogRoute | MetadataRoute | ContentRoute | StaticAssetRoute | UnmatchedRoute


def _match_content(rest: str, default_page: str) -> ContentRoute | None:
    segments = rest.split("/")
    if len(segments) < _ROUTE_SEGMENTS:
        return None
    route = parse_route("/".join(segments[:_ROUTE_SEGMENTS]))
    if route is None:
        return None
    page = "/".join(segments[_ROUTE_SEGMENTS:]).strip("/")
    return ContentRoute(route=route, page=page or default_page)


def match(path: str, default_page: str = DEFAULT_PAGE) -> Route:
    """Classe un chemin d'URL dans une des variantes de route."""
    path = "/" + path.lstrip("/")

    if path.rstrip("/") == CATALOG_PATH:
        return CatalogRoute()
    if path.startswith(METADATA_PREFIX):
        route = parse_route(path[len(METADATA_PREFIX) :])
        if route is not None:
            return MetadataRoute(route=route)
        return UnmatchedRoute(path=path, api=True)
    if path.startswith(CONTENT_PREFIX):
        content = _match_content(path[len(CONTENT_PREFIX) :], default_page)
        if content is not None:
            return content
        return UnmatchedRoute(path=path, api=True)
    if path == API_PREFIX or path.startswith(API_PREFIX + "/"):
        return UnmatchedRoute(path=path, api=True)

    last = path.rsplit("/", 1)[-1]
    if "." in last.strip("."):
        return StaticAssetRoute(asset=path.lstrip("/"))
    return UnmatchedRoute(path=path, api=False)
