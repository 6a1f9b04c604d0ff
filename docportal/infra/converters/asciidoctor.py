"""
Conversion AsciiDoc via l'exécutable `asciidoctor`.

Le fragment est produit en mode embarqué (`-s`, sans en-tête ni pied de page)
sur la sortie standard; les bibliothèques supplémentaires (ex.
`asciidoctor-kroki` pour les diagrammes) sont chargées via `-r`.
"""

from __future__ import annotations

import subprocess
from collections.abc import Mapping, Sequence

import structlog

from docportal.domain.errors import ConversionFailure
from docportal.infra.converters.base import DEFAULT_ATTRIBUTES, Converter

log = structlog.get_logger(__name__)


class AsciidoctorConverter(Converter):
    """Moteur AsciiDoc appelant le binaire `asciidoctor` en sous-processus."""

    name = "asciidoctor"

    def __init__(
        self,
        executable: str = "asciidoctor",
        requires: Sequence[str] = (),
        timeout: float = 60.0,
    ) -> None:
        self.executable = executable
        self.requires = list(requires)
        self.timeout = timeout

    def command(self, attributes: Mapping[str, str] | None = None) -> list[str]:
        """Construit la ligne de commande (entrée stdin, sortie stdout)."""
        cmd = [self.executable, "-s", "-o", "-"]
        for lib in self.requires:
            cmd += ["-r", lib]
        attrs = dict(DEFAULT_ATTRIBUTES)
        attrs.update(attributes or {})
        for key, value in attrs.items():
            cmd += ["-a", f"{key}={value}" if value else key]
        cmd.append("-")
        return cmd

    def convert(self, source: str, attributes: Mapping[str, str] | None = None) -> str:
        cmd = self.command(attributes)
        try:
            proc = subprocess.run(  # noqa: S603
                cmd,
                input=source,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as err:
            raise ConversionFailure(f"{self.executable} executable not found") from err
        except subprocess.TimeoutExpired as err:
            raise ConversionFailure(f"{self.executable} timed out after {self.timeout}s") from err
        if proc.returncode != 0:
            log.error("asciidoctor_failed", returncode=proc.returncode, stderr=proc.stderr.strip())
            raise ConversionFailure(
                f"{self.executable} exited with code {proc.returncode}: {proc.stderr.strip()}"
            )
        return proc.stdout
