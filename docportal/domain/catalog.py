"""
Découverte des produits publiés dans le store.

Le catalogue est une projection pure des documents `docs.yaml` présents:
recalculé à chaque appel, sans état partagé. Le chemin de chaque produit est
recalculé depuis sa hiérarchie déclarée, jamais lu sur l'emplacement disque.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from docportal.domain.entities import Catalog, Hierarchy, ProductSummary
from docportal.domain.errors import MalformedMetadata, NotFound
from docportal.domain.hierarchy import DEFAULT_VERSION, resolve
from docportal.domain.metadata import METADATA_FILENAME, load_metadata

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class DuplicateProduct:
    """Plusieurs documents déclarent le même triplet de hiérarchie."""

    hierarchy: Hierarchy
    sources: tuple[str, ...]


@dataclass(frozen=True)
class SkippedDocument:
    """Document de métadonnées ignoré lors du scan."""

    source: str
    reason: str


@dataclass
class CatalogScan:
    """Résultat d'un scan: catalogue et anomalies rapportables."""

    catalog: Catalog = field(default_factory=dict)
    duplicates: list[DuplicateProduct] = field(default_factory=list)
    skipped: list[SkippedDocument] = field(default_factory=list)

    @property
    def product_count(self) -> int:
        return sum(len(products) for systems in self.catalog.values() for products in systems.values())


def scan(
    store_root: str | Path,
    metadata_filename: str = METADATA_FILENAME,
    version: str = DEFAULT_VERSION,
) -> CatalogScan:
    """
    Parcourt récursivement `store_root` et regroupe les produits par domaine et système.

    - Une racine absente ou illisible donne un catalogue vide.
    - Un document invalide est journalisé et ignoré; le reste du catalogue est servi.
    - Les doublons de hiérarchie restent tous deux dans le catalogue et sont
      rapportés dans `duplicates`, sans choisir de gagnant.
    - Les répertoires sont parcourus en ordre trié pour des scans reproductibles.
    """
    root = Path(store_root)
    result = CatalogScan()
    if not root.is_dir():
        log.info("catalog_store_missing", store_root=str(root))
        return result

    def _on_walk_error(err: OSError) -> None:
        log.warning("catalog_walk_error", path=err.filename, error=err.strerror)

    sources_by_hierarchy: dict[Hierarchy, list[str]] = {}
    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_walk_error):
        dirnames.sort()
        if metadata_filename not in filenames:
            continue
        path = Path(dirpath) / metadata_filename
        source = path.relative_to(root).as_posix()
        try:
            metadata = load_metadata(path)
        except (MalformedMetadata, NotFound, OSError) as err:
            log.warning("catalog_metadata_skipped", source=source, error=str(err))
            result.skipped.append(SkippedDocument(source=source, reason=str(err)))
            continue

        route = resolve(metadata, version=version)
        summary = ProductSummary(
            id=metadata.id,
            title=metadata.title,
            description=metadata.description,
            path=str(route),
        )
        systems = result.catalog.setdefault(route.domain, {})
        systems.setdefault(route.system, []).append(summary)
        sources_by_hierarchy.setdefault(metadata.hierarchy, []).append(source)

    for hierarchy, sources in sources_by_hierarchy.items():
        if len(sources) > 1:
            log.warning(
                "catalog_duplicate_product",
                domain=hierarchy.domain,
                system=hierarchy.system,
                product=hierarchy.product,
                sources=sources,
            )
            result.duplicates.append(DuplicateProduct(hierarchy=hierarchy, sources=tuple(sources)))

    log.debug("catalog_scanned", store_root=str(root), products=result.product_count)
    return result


def build_catalog(
    store_root: str | Path,
    metadata_filename: str = METADATA_FILENAME,
    version: str = DEFAULT_VERSION,
) -> Catalog:
    """Raccourci retournant uniquement le mapping domain -> system -> produits."""
    return scan(store_root, metadata_filename=metadata_filename, version=version).catalog
