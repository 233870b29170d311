"""
Reconciliation d'une categorie TMDB avec le stockage local.

Une passe recupere la premiere page d'une liste classee (a l'affiche,
populaires, ...), met a jour ou insere chaque contenu dans sa propre
transaction, puis remplace d'un bloc les tags de la categorie.

Etats d'une passe:
    FETCHING -> ABORTED (liste vide ou TMDB injoignable, aucun changement)
    FETCHING -> UPSERTING -> ABORTED (un contenu echoue, tags intacts)
    FETCHING -> UPSERTING -> REPLACING_TAGS -> DONE
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from loguru import logger

from geekflex.core.entities.content import ContentRecord
from geekflex.core.ports.api_clients import IContentProvider, ListingEntry, ProviderUnavailableError
from geekflex.core.ports.repositories import (
    DuplicateKeyConflict,
    ICategoryTagRepository,
    IContentRepository,
)
from geekflex.services.content_mapper import content_from_listing_entry, listing_fields
from geekflex.services.retry import threaded_conflict_retry
from geekflex.utils.constants import DEFAULT_LISTING_PAGE


class ReconciliationState(str, Enum):
    """Etat d'une passe de reconciliation."""

    FETCHING = "fetching"
    ABORTED = "aborted"
    UPSERTING = "upserting"
    REPLACING_TAGS = "replacing_tags"
    DONE = "done"


@dataclass
class ReconciliationResult:
    """
    Bilan d'une passe de reconciliation.

    Attributes:
        category: Categorie reconciliee
        listing_path: Endpoint TMDB utilise
        state: Etat final (DONE ou ABORTED)
        fetched: Entrees recues de TMDB
        duplicates: Entrees ignorees car deja vues dans la page
        inserted: Contenus crees
        updated: Contenus mis a jour
        tagged: Tags ecrits dans le nouvel instantane
        error: Message de l'erreur ayant interrompu la passe
    """

    category: str
    listing_path: str
    state: ReconciliationState = ReconciliationState.FETCHING
    fetched: int = 0
    duplicates: int = 0
    inserted: int = 0
    updated: int = 0
    tagged: int = 0
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.state is ReconciliationState.DONE


class ReconciliationAborted(Exception):
    """
    Passe interrompue pendant la mise a jour des contenus ou des tags.

    L'instantane precedent de la categorie est conserve.

    Attributes:
        result: Bilan de la passe au moment de l'arret
    """

    def __init__(self, result: ReconciliationResult, cause: BaseException) -> None:
        self.result = result
        self.cause = cause
        super().__init__(f"Reconciliation {result.category} interrompue: {cause}")


def deduplicate_entries(entries: list[ListingEntry]) -> tuple[list[ListingEntry], int]:
    """
    Supprime les doublons d'une page en conservant la premiere occurrence.

    Returns:
        Tuple (entrees uniques dans l'ordre, nombre de doublons ignores)
    """
    seen: set[int] = set()
    unique = []
    for entry in entries:
        if entry.external_id in seen:
            continue
        seen.add(entry.external_id)
        unique.append(entry)
    return unique, len(entries) - len(unique)


class CategoryReconciliationService:
    """
    Service de reconciliation d'une categorie.

    Sans etat : la categorie et l'endpoint sont passes a chaque appel, la
    planification est externe (voir ReconciliationScheduler).

    Example:
        service = CategoryReconciliationService(
            content_repository_factory=container.content_repository.provider,
            tag_repository_factory=container.category_tag_repository.provider,
            provider=tmdb_client,
        )
        result = await service.reconcile_category("NOW_PLAYING", "/movie/now_playing")
    """

    def __init__(
        self,
        content_repository_factory: Callable[[], IContentRepository],
        tag_repository_factory: Callable[[], ICategoryTagRepository],
        provider: IContentProvider,
        language: str = "ko-KR",
        region: str = "KR",
        max_attempts: int = 3,
        min_wait: float = 0.05,
        max_wait: float = 0.15,
    ) -> None:
        """
        Initialise le service.

        Args:
            content_repository_factory: Fabrique de repository de contenus (session neuve)
            tag_repository_factory: Fabrique de repository de tags (session neuve)
            provider: Fournisseur des listes classees
            language: Langue des titres et resumes
            region: Region des listes et des tags
            max_attempts: Tentatives maximum sur LockConflict
            min_wait: Delai minimum entre tentatives (secondes)
            max_wait: Delai maximum entre tentatives (secondes)
        """
        self._content_repository_factory = content_repository_factory
        self._tag_repository_factory = tag_repository_factory
        self._provider = provider
        self._language = language
        self._region = region
        self._in_store = threaded_conflict_retry(max_attempts, min_wait, max_wait)

    def _upsert_entry(self, record: ContentRecord) -> tuple[ContentRecord, bool]:
        """
        Met a jour ou insere un contenu dans sa propre transaction.

        La mise a jour se limite aux champs qu'une liste fournit : date de
        fin et pays d'origine d'un film restent ceux de la fiche detaillee.

        Returns:
            Tuple (contenu resolu, True si cree)
        """
        fields = listing_fields(record.media_kind)
        with self._content_repository_factory() as repo:
            existing = repo.get_by_natural_key(*record.natural_key)
            if existing is not None:
                return repo.update_descriptive(existing.id, record, fields=fields), False

            try:
                return repo.insert(record), True
            except DuplicateKeyConflict:
                # Un autre ecrivain a insere la meme cle : reprendre sa ligne
                winner = repo.get_by_natural_key(*record.natural_key)
                if winner is None:
                    raise
                logger.debug(
                    f"Insertion concurrente de {record.external_id}, mise a jour de la ligne {winner.id}"
                )
                return repo.update_descriptive(winner.id, record, fields=fields), False

    def _replace_tags(self, category: str, content_ids: list[int]) -> int:
        with self._tag_repository_factory() as repo:
            return len(repo.replace_category(category, content_ids, self._region))

    async def reconcile_category(self, category: str, listing_path: str) -> ReconciliationResult:
        """
        Reconcilie une categorie avec la premiere page de sa liste TMDB.

        Args:
            category: Nom de la categorie (ex: "NOW_PLAYING")
            listing_path: Endpoint TMDB (ex: "/movie/now_playing")

        Returns:
            ReconciliationResult en etat DONE, ou ABORTED si la liste est vide
            ou TMDB injoignable (aucun changement dans ce cas)

        Raises:
            ReconciliationAborted: Echec d'un contenu ou du remplacement des tags
        """
        log = logger.bind(category=category)
        result = ReconciliationResult(category=category, listing_path=listing_path)

        try:
            page = await self._provider.fetch_category_page(
                listing_path, self._language, self._region, page=DEFAULT_LISTING_PAGE
            )
        except ProviderUnavailableError as e:
            result.state = ReconciliationState.ABORTED
            result.error = str(e)
            log.warning(f"TMDB injoignable, instantane conserve: {e}")
            return result

        result.fetched = len(page.results)
        if page.is_empty:
            result.state = ReconciliationState.ABORTED
            result.error = "liste vide"
            log.warning("Liste TMDB vide, instantane conserve")
            return result

        entries, result.duplicates = deduplicate_entries(page.results)
        if result.duplicates:
            log.info(f"{result.duplicates} doublon(s) ignore(s) dans la page")

        result.state = ReconciliationState.UPSERTING
        content_ids = []
        for entry in entries:
            try:
                content, created = await self._in_store(
                    self._upsert_entry, content_from_listing_entry(entry)
                )
            except Exception as e:
                result.state = ReconciliationState.ABORTED
                result.error = str(e)
                log.error(f"Echec sur le contenu {entry.external_id}, passe interrompue: {e}")
                raise ReconciliationAborted(result, e) from e

            content_ids.append(content.id)
            if created:
                result.inserted += 1
            else:
                result.updated += 1

        result.state = ReconciliationState.REPLACING_TAGS
        try:
            result.tagged = await self._in_store(self._replace_tags, category, content_ids)
        except Exception as e:
            result.state = ReconciliationState.ABORTED
            result.error = str(e)
            log.error(f"Echec du remplacement des tags, instantane conserve: {e}")
            raise ReconciliationAborted(result, e) from e

        result.state = ReconciliationState.DONE
        log.info(
            f"Reconciliation terminee: {result.inserted} cree(s), "
            f"{result.updated} mis a jour, {result.tagged} tag(s)"
        )
        return result
