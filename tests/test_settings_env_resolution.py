"""
Tests pour la résolution des variables d'environnement.

Vérifie le chargement des settings depuis un fichier .env personnalisé.
"""

from __future__ import annotations

import importlib
from pathlib import Path


def test_settings_reads_env_file(tmp_path: Path, monkeypatch) -> None:
    """Les valeurs d'un fichier désigné par ENV_FILE sont appliquées aux settings."""
    env = tmp_path / ".env.custom"
    env.write_text("STORE_ROOT=/srv/docs-store\nDOCS_VERSION=v2\nAPP_PORT=8080\n", encoding="utf-8")
    monkeypatch.setenv("ENV_FILE", str(env))

    settings_mod = importlib.import_module("docportal.core.settings")
    importlib.reload(settings_mod)
    try:
        s = settings_mod.get_settings()
        assert s.STORE_ROOT == "/srv/docs-store"
        assert s.DOCS_VERSION == "v2"
        assert s.APP_PORT == 8080  # noqa: PLR2004
    finally:
        monkeypatch.delenv("ENV_FILE")
        importlib.reload(settings_mod)


def test_settings_defaults(monkeypatch) -> None:
    for key in ("STORE_ROOT", "DOCS_VERSION", "METADATA_FILENAME", "DEFAULT_PAGE"):
        monkeypatch.delenv(key, raising=False)
    from docportal.core.settings import Settings

    s = Settings(_env_file=None)
    assert s.DOCS_VERSION == "v1"
    assert s.METADATA_FILENAME == "docs.yaml"
    assert s.DEFAULT_PAGE == "intro"
    assert s.CONTENT_EXTENSION == ".html"
