"""
Pipeline de build d'un produit documentaire.

Charge `docs.yaml`, résout le chemin de sortie via `resolve` (le même que la
preview), convertit chaque document source en fragment et dépose fragments et
métadonnées dans le store. Toutes les conversions sont faites avant la
première écriture: un échec n'altère pas le répertoire publié.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from docportal.domain.errors import ConversionFailure
from docportal.domain.hierarchy import DEFAULT_VERSION, RoutePath, resolve
from docportal.domain.metadata import METADATA_FILENAME, load_metadata
from docportal.infra.converters.registry import ConverterRegistry

log = structlog.get_logger(__name__)


@dataclass
class BuildReport:
    """Résultat d'un build réussi."""

    product_id: str
    route: RoutePath
    output_dir: Path
    pages: list[str] = field(default_factory=list)


def collect_sources(source_dir: Path, converters: ConverterRegistry) -> list[Path]:
    """Fichiers sources convertibles de `source_dir` (non récursif, ordre trié)."""
    if not source_dir.is_dir():
        return []
    sources = []
    for path in sorted(source_dir.iterdir()):
        if path.is_file() and converters.for_path(path) is not None:
            sources.append(path)
        else:
            log.debug("build_source_ignored", source=path.name)
    return sources


def build_product(
    product_dir: str | Path,
    store_root: str | Path,
    converters: ConverterRegistry,
    metadata_filename: str = METADATA_FILENAME,
    source_dirname: str = "src",
    content_extension: str = ".html",
    version: str = DEFAULT_VERSION,
) -> BuildReport:
    """
    Construit un produit et le publie dans `store_root`.

    Paramètres:
    - product_dir: répertoire contenant `docs.yaml` et `src/`.
    - store_root: racine du store de contenus.
    - converters: registre des moteurs par extension.

    Erreurs (fatales au build): `NotFound` si `docs.yaml` est absent,
    `MalformedMetadata`/`MalformedHierarchy` s'il est invalide,
    `ConversionFailure` au premier document non convertible.
    """
    product_dir = Path(product_dir)
    metadata_path = product_dir / metadata_filename
    source_dir = product_dir / source_dirname
    log.info("build_started", product_dir=str(product_dir))

    metadata = load_metadata(metadata_path)
    route = resolve(metadata, version=version)
    output_dir = route.filesystem_path(store_root)
    log.info("build_output_resolved", product_id=metadata.id, route=str(route), output_dir=str(output_dir))

    if not source_dir.is_dir():
        log.warning("build_source_dir_missing", source_dir=str(source_dir))

    fragments: dict[str, str] = {}
    origins: dict[str, Path] = {}
    for source in collect_sources(source_dir, converters):
        page = source.stem
        if page in origins:
            raise ConversionFailure(
                f"page '{page}' produced by both {origins[page].name} and {source.name}",
                source=str(source),
            )
        log.info("build_converting", source=source.name)
        try:
            fragments[page] = converters.convert_file(source)
        except ConversionFailure as err:
            log.error("build_conversion_failed", source=source.name, error=str(err))
            raise
        origins[page] = source

    output_dir.mkdir(parents=True, exist_ok=True)
    for page, html in fragments.items():
        dest = output_dir / f"{page}{content_extension}"
        dest.write_text(html, encoding="utf-8")
        log.info("build_fragment_written", dest=str(dest))

    shutil.copyfile(metadata_path, output_dir / metadata_filename)
    log.info("build_metadata_copied", dest=str(output_dir / metadata_filename))
    log.info("build_completed", product_id=metadata.id, pages=len(fragments))
    return BuildReport(product_id=metadata.id, route=route, output_dir=output_dir, pages=list(fragments))
