"""
Registre des moteurs de conversion par extension de fichier source.

Fournit aussi `convert_file`, utilisé à l'identique par le pipeline de build
et par la preview afin que les deux produisent les mêmes fragments.
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from pathlib import Path

import structlog

from docportal.app.metrics import CONVERSION_LATENCY, CONVERSIONS
from docportal.domain.errors import ConversionFailure
from docportal.infra.converters.asciidoctor import AsciidoctorConverter
from docportal.infra.converters.base import Converter
from docportal.infra.converters.markdown import MarkdownConverter

log = structlog.get_logger(__name__)


class ConverterRegistry:
    """Associe une extension (`.adoc`, `.md`, ...) à un moteur de conversion."""

    def __init__(self, converters: Mapping[str, Converter] | None = None) -> None:
        self._converters: dict[str, Converter] = {}
        for extension, converter in (converters or {}).items():
            self.register(extension, converter)

    def register(self, extension: str, converter: Converter) -> None:
        ext = extension.lower()
        if not ext.startswith("."):
            ext = "." + ext
        self._converters[ext] = converter

    @property
    def extensions(self) -> tuple[str, ...]:
        """Extensions gérées, dans l'ordre d'enregistrement."""
        return tuple(self._converters)

    def for_path(self, path: str | Path) -> Converter | None:
        return self._converters.get(Path(path).suffix.lower())

    def convert_file(self, path: str | Path, attributes: Mapping[str, str] | None = None) -> str:
        """
        Lit et convertit un fichier source.

        Erreurs: `ConversionFailure` si l'extension n'a pas de moteur, si le
        fichier est illisible ou si le moteur échoue.
        """
        path = Path(path)
        converter = self.for_path(path)
        if converter is None:
            raise ConversionFailure(f"no converter for {path.suffix or path.name}", source=str(path))
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as err:
            raise ConversionFailure(f"cannot read source: {err}", source=str(path)) from err

        start = time.perf_counter()
        try:
            html = converter.convert(source, attributes)
        except ConversionFailure as err:
            CONVERSIONS.labels(converter.name, "error").inc()
            err.source = err.source or str(path)
            raise
        finally:
            CONVERSION_LATENCY.labels(converter.name).observe(time.perf_counter() - start)
        CONVERSIONS.labels(converter.name, "ok").inc()
        log.debug("source_converted", source=str(path), converter=converter.name)
        return html


def default_registry(
    asciidoctor_bin: str = "asciidoctor",
    asciidoctor_requires: list[str] | None = None,
    timeout: float = 60.0,
) -> ConverterRegistry:
    """Registre standard: AsciiDoc (`.adoc`, `.asciidoc`) et Markdown (`.md`)."""
    asciidoc = AsciidoctorConverter(
        executable=asciidoctor_bin, requires=asciidoctor_requires or [], timeout=timeout
    )
    return ConverterRegistry(
        {
            ".adoc": asciidoc,
            ".asciidoc": asciidoc,
            ".md": MarkdownConverter(),
        }
    )
