"""
Assainissement des chemins demandés par les clients.

Toute lecture de contenu ou de métadonnées passe par `sanitize` avant de
toucher le stockage: le chemin retourné est toujours un descendant de la
racine, et une tentative de sortie lève `PathTraversal`.
"""

from __future__ import annotations

import posixpath
from pathlib import Path

from docportal.domain.errors import PathTraversal

DEFAULT_PAGE = "intro"


def normalize_subpath(requested: str | None) -> str:
    """Normalise un sous-chemin relatif (`.`/`..` résolus, séparateurs unifiés).

    Retourne une chaîne vide lorsque le chemin désigne la racine elle-même.
    """
    if not requested:
        return ""
    if "\x00" in requested:
        raise PathTraversal("NUL byte in requested path")
    cleaned = requested.replace("\\", "/").lstrip("/")
    if not cleaned:
        return ""
    normalized = posixpath.normpath(cleaned)
    if normalized == ".":
        return ""
    if normalized == ".." or normalized.startswith("../"):
        raise PathTraversal(f"path escapes root: {requested!r}")
    return normalized


def sanitize(root: str | Path, requested: str | None, default: str | None = DEFAULT_PAGE) -> Path:
    """
    Construit un chemin absolu sûr pour `requested` sous `root`.

    Paramètres:
    - root: racine autorisée.
    - requested: sous-chemin fourni par le client (peut être vide).
    - default: page utilisée quand le sous-chemin est vide ou désigne la racine;
      avec None, ce cas lève `PathTraversal` (on ne sert jamais la racine).

    Les liens symboliques sont résolus avant la vérification d'inclusion.
    """
    root_path = Path(root).resolve()
    subpath = normalize_subpath(requested)
    if not subpath:
        if default is None:
            raise PathTraversal("empty path refers to the root")
        subpath = normalize_subpath(default)
        if not subpath:
            raise PathTraversal("default page refers to the root")

    candidate = (root_path / subpath).resolve()
    if candidate == root_path or root_path not in candidate.parents:
        raise PathTraversal(f"path escapes root: {requested!r}")
    return candidate
