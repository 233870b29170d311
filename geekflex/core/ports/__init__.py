"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Les ports sont les frontières de l'architecture hexagonale. Ils définissent
ce dont le domaine a besoin du monde extérieur sans spécifier
comment ces besoins sont satisfaits.

Ports repository : Contrats de persistance des données
- IContentRepository : Stockage des contenus
- ICategoryTagRepository : Stockage des instantanes de categorie
- DuplicateKeyConflict, LockConflict : Conflits d'ecriture

Ports fournisseur : Contrats pour le service externe
- IContentProvider : Client du fournisseur de metadonnees
- ListingEntry, ListingPage, DetailRecord : Enregistrements du fournisseur
- ProviderUnavailableError, ContentNotFoundError : Erreurs du fournisseur
"""

from geekflex.core.ports.repositories import (
    DuplicateKeyConflict,
    ICategoryTagRepository,
    IContentRepository,
    LockConflict,
)
from geekflex.core.ports.api_clients import (
    ContentNotFoundError,
    DetailRecord,
    IContentProvider,
    ListingEntry,
    ListingPage,
    ProviderUnavailableError,
)

__all__ = [
    # Repositories
    "IContentRepository",
    "ICategoryTagRepository",
    "DuplicateKeyConflict",
    "LockConflict",
    # Fournisseur
    "IContentProvider",
    "ListingEntry",
    "ListingPage",
    "DetailRecord",
    "ProviderUnavailableError",
    "ContentNotFoundError",
]
