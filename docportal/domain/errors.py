"""
Erreurs du domaine documentaire.

Toutes les erreurs héritent de `DocsError` pour que les scripts (build,
preview) puissent arrêter proprement le traitement et que la couche HTTP les
traduise en enveloppes d'erreur standard.
"""

from __future__ import annotations


class DocsError(Exception):
    """Erreur de base du domaine."""


class MalformedMetadata(DocsError):
    """Document de métadonnées illisible ou non conforme au schéma."""


class MalformedHierarchy(MalformedMetadata):
    """Champs `hierarchy` absents, vides ou contenant des séparateurs."""


class NotFound(DocsError):
    """Contenu ou métadonnées absents du store."""


class PathTraversal(NotFound):
    """Chemin demandé sortant de la racine autorisée.

    Sous-classe de `NotFound`: l'appelant ne voit jamais qu'un 404.
    """


class ConversionFailure(DocsError):
    """Le moteur de conversion a échoué sur un document source."""

    def __init__(self, message: str, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source
