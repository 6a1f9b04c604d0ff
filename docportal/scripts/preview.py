"""
Serveur de preview locale d'un produit documentaire.

À lancer depuis le dépôt d'un produit (ou avec `--product-dir`): sert le shell
SPA et émule les APIs catalogue/métadonnées/contenu pour ce seul produit, en
convertissant les sources à la volée. Le shell peut interroger
`/api/preview/revision` pour recharger la page après une modification.

Code de sortie: 1 si aucun `docs.yaml` valide n'est trouvé au démarrage.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import structlog
import uvicorn

from docportal.api.routes_preview import router as preview_router
from docportal.app.main import create_app
from docportal.core.container import build_converters
from docportal.core.http_constants import EXIT_FAILURE, EXIT_OK
from docportal.core.logging import setup_logging
from docportal.core.settings import get_settings
from docportal.domain.errors import DocsError
from docportal.services.preview_backend import PreviewDocsBackend

log = structlog.get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Preview locale d'un produit documentaire")
    parser.add_argument(
        "--product-dir",
        type=str,
        default=str(Path.cwd()),
        help="Répertoire du produit (défaut: répertoire courant)",
    )
    parser.add_argument("--host", type=str, default="127.0.0.1", help="Interface d'écoute")
    parser.add_argument("--port", type=int, default=settings.PREVIEW_PORT, help="Port d'écoute")
    parser.add_argument(
        "--shell-dir",
        type=str,
        default=settings.SHELL_DIR,
        help="Répertoire du shell SPA (index.html, assets)",
    )
    return parser.parse_args(argv)


def build_backend(product_dir: Path) -> PreviewDocsBackend:
    settings = get_settings()
    return PreviewDocsBackend(
        product_dir,
        build_converters(settings),
        metadata_filename=settings.METADATA_FILENAME,
        source_dirname=settings.SOURCE_DIRNAME,
        default_page=settings.DEFAULT_PAGE,
        version=settings.DOCS_VERSION,
        content_extension=settings.CONTENT_EXTENSION,
    )


def main(argv: list[str] | None = None) -> int:
    """Point d'entrée: valide le produit local puis lance le serveur."""
    args = parse_args(argv)
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)

    product_dir = Path(args.product_dir).resolve()
    try:
        backend = build_backend(product_dir)
    except DocsError as err:
        log.error("preview_start_refused", product_dir=str(product_dir), error=str(err))
        print(
            f"[preview] erreur: {err}. Lancez la commande depuis la racine d'un dépôt de documentation.",
            file=sys.stderr,
        )
        return EXIT_FAILURE

    app = create_app(
        backend=backend,
        settings=settings,
        shell_dir=args.shell_dir,
        extra_routers=[preview_router],
    )
    navigation = backend.startup_metadata.navigation
    start_url = backend.route.page_url(navigation[0].url if navigation else "/")
    print(f"[preview] http://{args.host}:{args.port}{start_url}")
    uvicorn.run(app, host=args.host, port=args.port, reload=False)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
