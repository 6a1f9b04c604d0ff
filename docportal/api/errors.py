"""Gestion standardisée des erreurs API avec enveloppes d'erreur.

Traduit les erreurs du domaine documentaire en réponses JSON
`{code, message, trace_id}`. Les détails de chemin ne sont jamais renvoyés au
client: une tentative de traversée est journalisée puis présentée comme un 404.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from docportal.domain.errors import (
    ConversionFailure,
    MalformedMetadata,
    NotFound,
    PathTraversal,
)

log = structlog.get_logger(__name__)


class ErrorCodes:
    """Codes d'erreur standard de l'API."""

    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    METADATA_ERROR = "METADATA_ERROR"
    CONVERSION_ERROR = "CONVERSION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    HTTP_ERROR = "HTTP_ERROR"


_HTTP_CODES = {
    404: ErrorCodes.NOT_FOUND,
    405: ErrorCodes.METHOD_NOT_ALLOWED,
    500: ErrorCodes.INTERNAL_ERROR,
}


@dataclass
class ErrorEnvelope:
    """Standard error envelope for API responses."""

    code: str
    message: str
    trace_id: str | None = None


def create_error_response(
    status_code: int, code: str, message: str, trace_id: str | None = None
) -> JSONResponse:
    """Create a standardized error response."""
    envelope = ErrorEnvelope(code=code, message=message, trace_id=trace_id)
    return JSONResponse(
        status_code=status_code,
        content={
            "code": envelope.code,
            "message": envelope.message,
            "trace_id": envelope.trace_id,
        },
    )


def extract_trace_id(request: Request) -> str | None:
    """Extract trace ID from request state (request-id middleware) or headers."""
    trace_id = getattr(request.state, "trace_id", None)
    if trace_id:
        return trace_id
    return request.headers.get("X-Request-ID")


def handle_not_found(request: Request, exc: NotFound) -> JSONResponse:
    """404 générique; une traversée est tracée côté serveur uniquement."""
    trace_id = extract_trace_id(request)
    if isinstance(exc, PathTraversal):
        log.warning("path_traversal_rejected", path=request.url.path, reason=str(exc), trace_id=trace_id)
    else:
        log.info("docs_not_found", path=request.url.path, trace_id=trace_id)
    return create_error_response(404, ErrorCodes.NOT_FOUND, "Content not found", trace_id)


def handle_malformed_metadata(request: Request, exc: MalformedMetadata) -> JSONResponse:
    trace_id = extract_trace_id(request)
    log.error("metadata_invalid", path=request.url.path, error=str(exc), trace_id=trace_id)
    return create_error_response(500, ErrorCodes.METADATA_ERROR, "Failed to load metadata", trace_id)


def handle_conversion_failure(request: Request, exc: ConversionFailure) -> JSONResponse:
    trace_id = extract_trace_id(request)
    log.error("conversion_failed", path=request.url.path, source=exc.source, error=str(exc), trace_id=trace_id)
    return create_error_response(500, ErrorCodes.CONVERSION_ERROR, "Failed to convert document", trace_id)


def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions raised by the framework with the standard envelope."""
    code = _HTTP_CODES.get(exc.status_code, ErrorCodes.HTTP_ERROR)
    return create_error_response(exc.status_code, code, str(exc.detail), extract_trace_id(request))


def handle_generic_exception(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions with standard envelope."""
    trace_id = extract_trace_id(request)
    log.error(
        "unexpected_error",
        path=request.url.path,
        exception_type=type(exc).__name__,
        trace_id=trace_id,
        exc_info=exc,
    )
    return create_error_response(500, ErrorCodes.INTERNAL_ERROR, "An unexpected error occurred", trace_id)


def register_error_handlers(app: FastAPI) -> None:
    """Branche les handlers d'erreurs sur l'application."""
    app.add_exception_handler(NotFound, handle_not_found)
    app.add_exception_handler(MalformedMetadata, handle_malformed_metadata)
    app.add_exception_handler(ConversionFailure, handle_conversion_failure)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_generic_exception)
