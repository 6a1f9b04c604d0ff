"""
Résolution de la hiérarchie d'un produit en chemin de route.

Le chemin `domain/system/product/version` sert à la fois de suffixe de
fichier sous la racine du store et de suffixe d'URL sous `/docs/`. Le build et
la preview passent tous deux par `resolve`: les deux processus doivent produire
exactement la même chaîne pour les mêmes métadonnées, sinon le BFF répond 404.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from docportal.domain.entities import Hierarchy
from docportal.domain.errors import MalformedHierarchy

DEFAULT_VERSION = "v1"
DOCS_URL_PREFIX = "/docs"
HIERARCHY_FIELDS = ("domain", "system", "product")
_FORBIDDEN_CHARS = ("/", "\\", "\x00")


@dataclass(frozen=True)
class RoutePath:
    """Chemin de route à quatre segments."""

    domain: str
    system: str
    product: str
    version: str = DEFAULT_VERSION

    @property
    def parts(self) -> tuple[str, str, str, str]:
        return (self.domain, self.system, self.product, self.version)

    def __str__(self) -> str:
        return "/".join(self.parts)

    def filesystem_path(self, root: str | Path) -> Path:
        """Répertoire du produit sous `root`."""
        return Path(root).joinpath(*self.parts)

    @property
    def url(self) -> str:
        """Préfixe d'URL public du produit (`/docs/...`)."""
        return f"{DOCS_URL_PREFIX}/{self}"

    def page_url(self, nav_url: str) -> str:
        """Résout l'URL d'une entrée de navigation contre le préfixe du produit.

        Les URL absolues (`http://`, `https://`) et celles déjà préfixées sont
        retournées telles quelles.
        """
        if "://" in nav_url or nav_url.startswith(self.url + "/"):
            return nav_url
        page = nav_url.lstrip("/")
        return f"{self.url}/{page}" if page else f"{self.url}/"


def is_valid_segment(value: Any) -> bool:
    """Vrai si `value` peut servir de segment de chemin et d'URL."""
    if not isinstance(value, str) or not value.strip():
        return False
    if value in (".", ".."):
        return False
    return not any(ch in value for ch in _FORBIDDEN_CHARS)


def validate_hierarchy(raw: Any) -> Hierarchy:
    """Valide un bloc `hierarchy` brut (mapping ou `Hierarchy`).

    Lève `MalformedHierarchy` si le bloc est absent ou si un champ est vide ou
    contient un séparateur. Aucune valeur par défaut n'est appliquée.
    """
    if isinstance(raw, Hierarchy):
        raw = raw.model_dump()
    if not isinstance(raw, Mapping):
        raise MalformedHierarchy("hierarchy block is missing or not a mapping")
    for field in HIERARCHY_FIELDS:
        value = raw.get(field)
        if value is None:
            raise MalformedHierarchy(f"hierarchy.{field} is missing")
        if not is_valid_segment(value):
            raise MalformedHierarchy(f"hierarchy.{field} is not a valid path segment: {value!r}")
    return Hierarchy(domain=raw["domain"], system=raw["system"], product=raw["product"])


def resolve(metadata: Any, version: str = DEFAULT_VERSION) -> RoutePath:
    """Calcule le chemin de route d'un produit à partir de ses métadonnées.

    Paramètres:
    - metadata: `ProductMetadata` ou mapping brut issu du YAML.
    - version: version publiée (placeholder fixe pour l'instant).

    Fonction pure: mêmes métadonnées, même chemin, dans n'importe quel processus.
    """
    if isinstance(metadata, Mapping):
        raw = metadata.get("hierarchy")
    else:
        raw = getattr(metadata, "hierarchy", None)
    hierarchy = validate_hierarchy(raw)
    if not is_valid_segment(version):
        raise MalformedHierarchy(f"version is not a valid path segment: {version!r}")
    return RoutePath(hierarchy.domain, hierarchy.system, hierarchy.product, version)


def parse_route(text: str) -> RoutePath | None:
    """Analyse une chaîne `domain/system/product/version`.

    Retourne None si la chaîne n'a pas exactement quatre segments valides.
    """
    segments = text.strip("/").split("/")
    if len(segments) != len(HIERARCHY_FIELDS) + 1:
        return None
    if not all(is_valid_segment(s) for s in segments):
        return None
    return RoutePath(*segments)
