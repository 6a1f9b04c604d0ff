"""
Application principale FastAPI.

Assemble middlewares, gestion d'erreurs et routes pour le BFF du portail de
documentation. La preview réutilise `create_app` avec son propre backend.

Responsabilités du module:
- Initialiser le logging structuré
- Construire l'application FastAPI avec son titre/debug
- Ajouter les middlewares (request id, métriques, CORS)
- Monter les routers (santé, métriques, routes additionnelles, docs en dernier)
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docportal.api.errors import register_error_handlers
from docportal.api.routes_docs import router as docs_router
from docportal.api.routes_health import router as health_router
from docportal.app.metrics import PrometheusMiddleware, metrics_router
from docportal.core.container import container
from docportal.core.logging import setup_logging
from docportal.core.settings import Settings
from docportal.middlewares.request_id import RequestIDMiddleware
from docportal.services.docs_backend import DocsBackend


def create_app(
    backend: DocsBackend | None = None,
    settings: Settings | None = None,
    shell_dir: str | Path | None = None,
    extra_routers: Sequence[APIRouter] = (),
) -> FastAPI:
    """
    Construit et retourne l'application FastAPI prête à l'usage.

    Étapes:
    - Configure le logging structuré (structlog)
    - Attache le backend documentaire (store par défaut) et le shell SPA
    - Ajoute les middlewares et les handlers d'erreurs
    - Publie santé, métriques, routes additionnelles puis la route docs
    """
    settings = settings or container.settings
    setup_logging(settings.LOG_LEVEL)
    app = FastAPI(title=settings.APP_NAME, debug=settings.APP_DEBUG)
    app.state.settings = settings
    app.state.backend = backend or container.docs_backend
    app.state.shell_dir = Path(shell_dir or settings.SHELL_DIR).resolve()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin).rstrip("/") for origin in settings.CORS_ORIGINS],
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.add_middleware(PrometheusMiddleware)
    app.add_middleware(RequestIDMiddleware)
    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(metrics_router)
    for router in extra_routers:
        app.include_router(router)
    app.include_router(docs_router)
    return app


app = create_app()
