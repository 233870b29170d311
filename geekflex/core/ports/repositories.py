"""
Interfaces ports pour les repositories.

Interfaces abstraites (ports) définissant les contrats pour la persistance des données.
Les implémentations (adaptateurs) fournissent les mécanismes de stockage concrets
(SQLite/PostgreSQL via SQLModel).

Les conflits d'ecriture sont exprimes par deux exceptions independantes de la
technologie de stockage : DuplicateKeyConflict et LockConflict.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from geekflex.core.entities.content import CategoryTag, ContentRecord
from geekflex.core.value_objects import MediaKind


class DuplicateKeyConflict(Exception):
    """
    Violation de contrainte d'unicite par un ecrivain concurrent.

    Toujours recuperee localement en relisant la ligne gagnante.
    """


class LockConflict(Exception):
    """
    Impossible d'obtenir un verrou (ligne ou table) pour le moment.

    Transitoire : les appelants relancent l'operation avec un delai aleatoire.
    """


class _UnitOfWorkRepository(ABC):
    """
    Base des repositories : une instance = une session courte.

    S'utilise comme context manager pour liberer la session :
        with content_repository_factory() as repo:
            repo.get_by_id(1)
    """

    def close(self) -> None:
        """Libere les ressources de stockage (session)."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class IContentRepository(_UnitOfWorkRepository):
    """
    Interface de stockage des contenus.

    Chaque ecriture est validee (commit) immediatement : une instance de
    repository correspond a une frontiere transactionnelle courte.
    """

    @abstractmethod
    def get_by_id(self, content_id: int) -> Optional[ContentRecord]:
        """Récupère un contenu par son ID interne."""
        ...

    @abstractmethod
    def get_by_natural_key(
        self, external_id: int, media_kind: MediaKind
    ) -> Optional[ContentRecord]:
        """Récupère un contenu par sa cle naturelle (external_id, media_kind)."""
        ...

    @abstractmethod
    def insert(self, record: ContentRecord) -> ContentRecord:
        """
        Insere un nouveau contenu et retourne la ligne avec son ID.

        Raises :
            DuplicateKeyConflict : La cle naturelle existe deja
            LockConflict : Verrou indisponible
        """
        ...

    @abstractmethod
    def update_descriptive(
        self,
        content_id: int,
        record: ContentRecord,
        fields: Optional[Sequence[str]] = None,
    ) -> ContentRecord:
        """
        Ecrase les champs descriptifs d'un contenu existant.

        L'identite (id, external_id, media_kind) et created_at ne changent pas.
        Avec `fields`, seuls ces champs sont ecrases ; les autres gardent
        leur valeur en base.

        Raises :
            ValueError : Champ hors de DESCRIPTIVE_FIELDS
            LockConflict : Verrou indisponible
        """
        ...

    @abstractmethod
    def list_by_category(self, category: str) -> list[ContentRecord]:
        """Liste les contenus du dernier instantane d'une categorie."""
        ...


class ICategoryTagRepository(_UnitOfWorkRepository):
    """
    Interface de stockage des tags de categorie.

    Un instantane de categorie est toujours remplace d'un bloc.
    """

    @abstractmethod
    def list_by_category(self, category: str) -> list[CategoryTag]:
        """Liste les tags d'une categorie."""
        ...

    @abstractmethod
    def replace_category(
        self,
        category: str,
        content_ids: Sequence[int],
        region: Optional[str],
    ) -> list[CategoryTag]:
        """
        Remplace l'instantane d'une categorie dans une seule transaction.

        Supprime tous les tags existants de la categorie puis insere un tag
        par contenu. En cas d'echec, l'instantane precedent est conserve.
        """
        ...
