"""
Endpoint de santé pour vérifier la disponibilité de l'API et de son backend.

Expose `/health` avec le type de backend (store ou preview).
"""

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
def health(request: Request):
    """Vérifie la disponibilité de l'API et décrit le backend documentaire."""
    return {"status": "ok", **request.app.state.backend.describe()}
