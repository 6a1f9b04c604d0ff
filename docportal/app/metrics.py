"""
Métriques Prometheus pour le portail de documentation.

Ce module définit les métriques exposées par le BFF et la preview, ainsi que
le middleware qui mesure les requêtes HTTP par type de route.
"""

import time

from fastapi import APIRouter, Request
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from docportal.domain import routing

metrics_router = APIRouter()

# Routes hors documentation, étiquetées par leur chemin littéral
LITERAL_ROUTES = ("/health", "/metrics", "/api/preview/revision")

REQUEST_COUNT = Counter(
    "http_requests_total", "Total HTTP requests", ["method", "route", "status"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds", "Latency of HTTP requests", ["route"]
)

# Docs lookups (catalog/metadata/content)
DOCS_LOOKUPS = Counter(
    "docs_lookups_total",
    "Total docs API lookups",
    ["kind", "outcome"],
)
CATALOG_PRODUCTS = Gauge(
    "docs_catalog_products",
    "Products found by the last catalog scan",
)
CATALOG_DUPLICATES = Gauge(
    "docs_catalog_duplicates",
    "Duplicate hierarchy declarations found by the last catalog scan",
)

# Conversion engine
CONVERSIONS = Counter(
    "docs_conversions_total",
    "Total source document conversions",
    ["converter", "outcome"],
)
CONVERSION_LATENCY = Histogram(
    "docs_conversion_duration_seconds",
    "Latency of source document conversions",
    ["converter"],
)


def route_label(path: str) -> str:
    """Libellé de métrique borné: type de route plutôt que chemin brut."""
    matched = routing.match(path)
    if isinstance(matched, routing.UnmatchedRoute):
        return "unmatched_api" if matched.api else "shell"
    return type(matched).__name__.removesuffix("Route").lower()


@metrics_router.get("/metrics")
def metrics():
    """
    Expose les métriques Prometheus au format texte.

    Returns:
        Response: Réponse HTTP contenant les métriques au format Prometheus.
    """
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Middleware Prometheus pour mesurer les métriques HTTP.

    Collecte le nombre de requêtes et la latence par type de route.
    """

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response: Response = await call_next(request)
        path = request.scope.get("path", "")
        route = path if path in LITERAL_ROUTES else route_label(path)
        REQUEST_COUNT.labels(request.method, route, str(response.status_code)).inc()
        REQUEST_LATENCY.labels(route).observe(time.perf_counter() - start)
        return response
