"""
Backends des trois APIs documentaires (catalogue, métadonnées, contenu).

Le BFF et la preview exposent la même surface HTTP; seule la source des
données change. `StoreDocsBackend` lit le store publié par le build.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from docportal.app.metrics import CATALOG_DUPLICATES, CATALOG_PRODUCTS
from docportal.domain.catalog import CatalogScan, scan
from docportal.domain.content import CONTENT_EXTENSION, ContentResolver
from docportal.domain.entities import Artifact, Catalog, ProductMetadata
from docportal.domain.hierarchy import DEFAULT_VERSION, RoutePath
from docportal.domain.metadata import METADATA_FILENAME
from docportal.domain.paths import DEFAULT_PAGE


class DocsBackend(ABC):
    """Interface commune du BFF et de la preview."""

    name: str = "docs"

    @abstractmethod
    def catalog(self) -> Catalog:
        """Catalogue domain -> system -> produits."""
        ...

    @abstractmethod
    def metadata(self, route: RoutePath) -> ProductMetadata:
        """Métadonnées d'un produit; `NotFound` si inconnu."""
        ...

    @abstractmethod
    def content(self, route: RoutePath, page: str) -> Artifact:
        """Fragment HTML d'une page; `NotFound` si absent."""
        ...

    def describe(self) -> dict:
        """Informations non sensibles exposées par `/health`."""
        return {"backend": self.name}


class StoreDocsBackend(DocsBackend):
    """Backend du BFF: scan du store à chaque requête, sans cache."""

    name = "store"

    def __init__(
        self,
        store_root: str | Path,
        metadata_filename: str = METADATA_FILENAME,
        content_extension: str = CONTENT_EXTENSION,
        default_page: str = DEFAULT_PAGE,
        version: str = DEFAULT_VERSION,
    ) -> None:
        self.store_root = Path(store_root)
        self.metadata_filename = metadata_filename
        self.version = version
        self.resolver = ContentResolver(
            self.store_root,
            metadata_filename=metadata_filename,
            content_extension=content_extension,
            default_page=default_page,
        )

    def scan(self) -> CatalogScan:
        result = scan(self.store_root, metadata_filename=self.metadata_filename, version=self.version)
        CATALOG_PRODUCTS.set(result.product_count)
        CATALOG_DUPLICATES.set(len(result.duplicates))
        return result

    def catalog(self) -> Catalog:
        return self.scan().catalog

    def metadata(self, route: RoutePath) -> ProductMetadata:
        return self.resolver.resolve_metadata(route)

    def content(self, route: RoutePath, page: str) -> Artifact:
        return self.resolver.resolve_content(route, page)

    def describe(self) -> dict:
        return {"backend": self.name, "store_present": self.store_root.is_dir()}
