"""
Interface de base des moteurs de conversion source -> fragment HTML.

Le moteur est un collaborateur externe: texte source + attributs en entrée,
fragment HTML sans document englobant en sortie, ou `ConversionFailure`.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping

# Attributs passés à chaque conversion (titre affiché, rôle CSS du conteneur)
DEFAULT_ATTRIBUTES: dict[str, str] = {"showtitle": "", "role": "doc-content"}


class Converter(ABC):
    """Interface abstraite pour les moteurs de conversion."""

    name: str = "converter"

    @abstractmethod
    def convert(self, source: str, attributes: Mapping[str, str] | None = None) -> str:
        """Convertit `source` en fragment HTML; lève `ConversionFailure` en cas d'échec."""
        ...
