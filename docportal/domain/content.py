"""
Résolution des fragments et métadonnées publiés dans le store.

Le répertoire du produit est assaini contre la racine du store, puis la page
contre le répertoire du produit: une page ne peut jamais sortir de son produit.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from docportal.domain.entities import Artifact, ProductMetadata
from docportal.domain.errors import NotFound
from docportal.domain.hierarchy import RoutePath
from docportal.domain.metadata import METADATA_FILENAME, load_metadata
from docportal.domain.paths import DEFAULT_PAGE, sanitize

log = structlog.get_logger(__name__)

CONTENT_EXTENSION = ".html"


class ContentResolver:
    """Lecture seule du store `{root}/{domain}/{system}/{product}/{version}/`."""

    def __init__(
        self,
        store_root: str | Path,
        metadata_filename: str = METADATA_FILENAME,
        content_extension: str = CONTENT_EXTENSION,
        default_page: str = DEFAULT_PAGE,
    ):
        self.store_root = Path(store_root)
        self.metadata_filename = metadata_filename
        self.content_extension = content_extension
        self.default_page = default_page

    def route_dir(self, route: RoutePath | str) -> Path:
        """Répertoire assaini du produit; la racine seule n'est jamais servie."""
        return sanitize(self.store_root, str(route), default=None)

    def resolve_content(self, route: RoutePath | str, page: str | None) -> Artifact:
        """
        Lit le fragment `{route}/{page}` (extension ajoutée sauf si déjà présente).

        Erreurs: `NotFound` si absent, `PathTraversal` (un `NotFound`) si la
        page sort du répertoire du produit.
        """
        base = self.route_dir(route)
        path = sanitize(base, page, default=self.default_page)
        if path.suffix != self.content_extension:
            path = path.with_name(path.name + self.content_extension)
        try:
            html = path.read_text(encoding="utf-8")
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as err:
            raise NotFound("content not found") from err
        page_id = path.relative_to(base).as_posix()
        if page_id.endswith(self.content_extension):
            page_id = page_id[: -len(self.content_extension)]
        log.debug("content_resolved", route=str(route), page=page_id)
        return Artifact(page=page_id, html=html)

    def resolve_metadata(self, route: RoutePath | str) -> ProductMetadata:
        """Lit `{route}/docs.yaml`; `NotFound` si absent, `MalformedMetadata` si invalide."""
        path = sanitize(self.route_dir(route), self.metadata_filename, default=None)
        return load_metadata(path)
