"""
Conteneur d'injection de dépendances et configuration application.

Instancie les composants centraux (settings, moteurs de conversion, backend
du store) et expose un singleton `container` utilisé par le BFF.
"""

from docportal.core.settings import Settings, get_settings
from docportal.infra.converters.registry import ConverterRegistry, default_registry
from docportal.services.docs_backend import StoreDocsBackend


def build_converters(settings: Settings) -> ConverterRegistry:
    """Registre de conversion configuré depuis les settings."""
    return default_registry(
        asciidoctor_bin=settings.ASCIIDOCTOR_BIN,
        asciidoctor_requires=settings.ASCIIDOCTOR_REQUIRES,
        timeout=settings.CONVERSION_TIMEOUT,
    )


def build_store_backend(settings: Settings) -> StoreDocsBackend:
    """Backend du BFF lisant le store configuré."""
    return StoreDocsBackend(
        settings.STORE_ROOT,
        metadata_filename=settings.METADATA_FILENAME,
        content_extension=settings.CONTENT_EXTENSION,
        default_page=settings.DEFAULT_PAGE,
        version=settings.DOCS_VERSION,
    )


class Container:
    def __init__(self):
        self.settings = get_settings()
        self.converters = build_converters(self.settings)
        self.docs_backend = build_store_backend(self.settings)


container = Container()
