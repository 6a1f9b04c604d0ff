"""Tests pour l'endpoint de santé de l'application."""

from pathlib import Path

from fastapi.testclient import TestClient

from docportal.app.main import create_app
from docportal.core.http_constants import HTTP_OK
from docportal.core.settings import Settings
from docportal.services.docs_backend import StoreDocsBackend


def test_health(store_root: Path) -> None:
    """Teste que l'endpoint de santé retourne un statut OK et le backend."""
    client = TestClient(create_app(backend=StoreDocsBackend(store_root), settings=Settings()))
    r = client.get("/health")
    assert r.status_code == HTTP_OK
    assert r.json() == {"status": "ok", "backend": "store", "store_present": True}
