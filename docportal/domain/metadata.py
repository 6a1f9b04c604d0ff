"""Chargement et validation des documents `docs.yaml`."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from docportal.domain.entities import ProductMetadata
from docportal.domain.errors import MalformedMetadata, NotFound
from docportal.domain.hierarchy import validate_hierarchy

METADATA_FILENAME = "docs.yaml"


def parse_metadata(text: str, source: str | None = None) -> ProductMetadata:
    """
    Désérialise et valide un document de métadonnées.

    Paramètres:
    - text: contenu YAML.
    - source: libellé (chemin) utilisé dans les messages d'erreur.

    Erreurs:
    - `MalformedMetadata` si le YAML est invalide ou le schéma non respecté.
    - `MalformedHierarchy` si le bloc `hierarchy` est absent ou invalide.
    """
    label = source or "<metadata>"
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as err:
        raise MalformedMetadata(f"{label}: invalid YAML") from err
    if not isinstance(raw, dict):
        raise MalformedMetadata(f"{label}: document is not a mapping")

    hierarchy = validate_hierarchy(raw.get("hierarchy"))
    try:
        return ProductMetadata.model_validate({**raw, "hierarchy": hierarchy})
    except ValidationError as err:
        fields = ", ".join(".".join(str(p) for p in e["loc"]) for e in err.errors())
        raise MalformedMetadata(f"{label}: invalid fields: {fields}") from err


def load_metadata(path: str | Path) -> ProductMetadata:
    """Lit et valide le fichier `path`; `NotFound` s'il n'existe pas."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as err:
        raise NotFound(f"{path.name} not found") from err
    except UnicodeDecodeError as err:
        raise MalformedMetadata(f"{path}: not UTF-8 text") from err
    return parse_metadata(text, source=str(path))
