"""
Backend de preview locale pour un seul produit.

Émule le catalogue, les métadonnées et le contenu comme si ce produit était
le store entier: le chemin de route est calculé par le même `resolve` que le
build, les métadonnées sont relues à chaque appel et chaque page est
convertie à la volée depuis l'arbre de travail.
"""

from __future__ import annotations

import hashlib
from pathlib import Path

import structlog

from docportal.domain.entities import Artifact, Catalog, ProductMetadata, ProductSummary
from docportal.domain.errors import NotFound
from docportal.domain.hierarchy import DEFAULT_VERSION, RoutePath, resolve
from docportal.domain.metadata import METADATA_FILENAME, load_metadata
from docportal.domain.paths import DEFAULT_PAGE, normalize_subpath, sanitize
from docportal.infra.converters.registry import ConverterRegistry
from docportal.services.docs_backend import DocsBackend

log = structlog.get_logger(__name__)

PREVIEW_DESCRIPTION = "[Preview] {title}"


class PreviewDocsBackend(DocsBackend):
    """
    Backend de preview.

    La construction échoue (`NotFound`, `MalformedHierarchy`,
    `MalformedMetadata`) si le `docs.yaml` local est absent ou invalide: la
    preview refuse alors de démarrer.
    """

    name = "preview"

    def __init__(
        self,
        product_dir: str | Path,
        converters: ConverterRegistry,
        metadata_filename: str = METADATA_FILENAME,
        source_dirname: str = "src",
        default_page: str = DEFAULT_PAGE,
        version: str = DEFAULT_VERSION,
        content_extension: str = ".html",
    ) -> None:
        self.product_dir = Path(product_dir).resolve()
        self.metadata_path = self.product_dir / metadata_filename
        self.source_dir = self.product_dir / source_dirname
        self.converters = converters
        self.default_page = default_page
        self.content_extension = content_extension

        self.startup_metadata = load_metadata(self.metadata_path)
        self.route = resolve(self.startup_metadata, version=version)
        log.info("preview_product_loaded", product_id=self.startup_metadata.id, route=str(self.route))

    def _ensure_mine(self, route: RoutePath) -> None:
        if route != self.route:
            raise NotFound("route not served by this preview")

    def catalog(self) -> Catalog:
        meta = self.startup_metadata
        summary = ProductSummary(
            id=meta.id,
            title=meta.title,
            description=meta.description or PREVIEW_DESCRIPTION.format(title=meta.title),
            path=str(self.route),
        )
        return {self.route.domain: {self.route.system: [summary]}}

    def metadata(self, route: RoutePath) -> ProductMetadata:
        self._ensure_mine(route)
        return load_metadata(self.metadata_path)

    def content(self, route: RoutePath, page: str) -> Artifact:
        """Convertit `src/{page}.{ext}` à la volée.

        Seuls les identifiants publiés par le build sont servis: pas de
        sous-répertoire et pas de nom de source (`intro.adoc`).
        """
        self._ensure_mine(route)
        page_id = normalize_subpath(page) or self.default_page
        if page_id.endswith(self.content_extension):
            page_id = page_id[: -len(self.content_extension)]
        if "/" in page_id or Path(page_id).suffix.lower() in self.converters.extensions:
            raise NotFound("content not found")

        for ext in self.converters.extensions:
            path = sanitize(self.source_dir, page_id + ext, default=None)
            if path.is_file():
                html = self.converters.convert_file(path)
                return Artifact(page=page_id, html=html)
        raise NotFound("content not found")

    def revision(self) -> str:
        """Empreinte des sources et du `docs.yaml` (chemins, tailles, mtimes).

        Change dès qu'un fichier suivi est modifié, ajouté ou supprimé; le shell
        peut l'interroger pour recharger la page.
        """
        digest = hashlib.sha1()  # noqa: S324
        tracked = [self.metadata_path]
        if self.source_dir.is_dir():
            tracked += sorted(
                p for p in self.source_dir.rglob("*") if p.suffix.lower() in self.converters.extensions
            )
        for path in tracked:
            try:
                stat = path.stat()
            except FileNotFoundError:
                continue
            rel = path.relative_to(self.product_dir).as_posix()
            digest.update(f"{rel}:{stat.st_size}:{stat.st_mtime_ns}\n".encode())
        return digest.hexdigest()

    def describe(self) -> dict:
        return {"backend": self.name, "route": str(self.route)}
