"""Configuration de test pour pytest avec gestion des chemins.

Ce module ajoute la racine du projet au sys.path et fournit des produits,
stores et shells temporaires pour les tests.
"""

import os
import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so that
# imports like `from docportal...` resolve.
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from tests.fakes import SAMPLE_DOCS_YAML, fake_registry  # noqa: E402


@pytest.fixture
def product_dir(tmp_path: Path) -> Path:
    """Dépôt produit minimal: docs.yaml + src/intro.adoc."""
    root = tmp_path / "product-s3"
    (root / "src").mkdir(parents=True)
    (root / "docs.yaml").write_text(SAMPLE_DOCS_YAML, encoding="utf-8")
    (root / "src" / "intro.adoc").write_text("= Introduction\n\nHello S3.\n", encoding="utf-8")
    return root


@pytest.fixture
def store_root(tmp_path: Path) -> Path:
    root = tmp_path / "dist"
    root.mkdir()
    return root


@pytest.fixture
def shell_dir(tmp_path: Path) -> Path:
    """Shell SPA factice (index.html + main.js)."""
    root = tmp_path / "public"
    root.mkdir()
    (root / "index.html").write_text("<html><body><div id='content'></div></body></html>", encoding="utf-8")
    (root / "main.js").write_text("console.log('shell');", encoding="utf-8")
    return root


@pytest.fixture
def converters():
    return fake_registry()
