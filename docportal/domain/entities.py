"""
Entités du domaine documentaire.

Ce module définit les modèles de données échangés entre le pipeline de build,
le BFF et l'outil de preview: métadonnées produit, résumés de catalogue et
fragments HTML.
"""

from pydantic import BaseModel, ConfigDict, Field


class Hierarchy(BaseModel):
    """Triplet `{domain, system, product}` situant un produit dans le catalogue."""

    model_config = ConfigDict(frozen=True)

    domain: str
    system: str
    product: str


class NavigationItem(BaseModel):
    """Entrée de navigation; `url` est relative au préfixe de route du produit."""

    model_config = ConfigDict(extra="allow")

    label: str
    url: str


class ProductMetadata(BaseModel):
    """Document `docs.yaml` d'un produit, source de vérité du routage.

    Les clés inconnues sont conservées pour restituer le document tel qu'écrit.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    title: str
    description: str | None = None
    hierarchy: Hierarchy
    navigation: list[NavigationItem] = Field(default_factory=list)

    def document(self) -> dict:
        """Retourne le document sérialisable JSON, limité aux clés présentes."""
        return self.model_dump(mode="json", exclude_unset=True)


class ProductSummary(BaseModel):
    """Entrée de catalogue pour un produit publié."""

    id: str
    title: str
    description: str | None = None
    path: str


class Artifact(BaseModel):
    """Fragment HTML (sans document englobant) et page dont il est issu."""

    page: str
    html: str


# domain -> system -> [produits]
Catalog = dict[str, dict[str, list[ProductSummary]]]
