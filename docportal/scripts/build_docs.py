"""
Script de build d'un produit documentaire vers le store.

Lit `docs.yaml` dans le répertoire du produit, convertit chaque document de
`src/` en fragment HTML et publie le tout sous
`{store}/{domain}/{system}/{product}/{version}/`.

Code de sortie: 0 si le build réussit, 1 au premier échec (métadonnées
absentes ou invalides, conversion en erreur).
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import structlog

from docportal.core.container import build_converters
from docportal.core.http_constants import EXIT_FAILURE, EXIT_OK
from docportal.core.logging import setup_logging
from docportal.core.settings import get_settings
from docportal.domain.errors import DocsError
from docportal.services.build_pipeline import build_product

log = structlog.get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Build d'un produit documentaire vers le store")
    parser.add_argument(
        "--product",
        "-p",
        type=str,
        required=True,
        help="Répertoire du produit (contenant docs.yaml et src/)",
    )
    parser.add_argument(
        "--store",
        type=str,
        default=settings.STORE_ROOT,
        help="Racine du store de contenus publiés",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Point d'entrée: construit le produit et retourne le code de sortie."""
    args = parse_args(argv)
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)

    product_dir = Path(args.product).resolve()
    try:
        report = build_product(
            product_dir,
            Path(args.store).resolve(),
            build_converters(settings),
            metadata_filename=settings.METADATA_FILENAME,
            source_dirname=settings.SOURCE_DIRNAME,
            content_extension=settings.CONTENT_EXTENSION,
            version=settings.DOCS_VERSION,
        )
    except DocsError as err:
        log.error("build_failed", product_dir=str(product_dir), error_type=type(err).__name__, error=str(err))
        print(f"[build] échec ({type(err).__name__}): {err}", file=sys.stderr)
        return EXIT_FAILURE

    print(f"[build] {report.product_id}: {len(report.pages)} page(s) publiée(s) dans {report.output_dir}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
