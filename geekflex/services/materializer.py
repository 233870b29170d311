"""
Materialisation a la demande d'un contenu TMDB.

Retourne la ligne locale d'un (external_id, media_kind), en la creant depuis
la fiche TMDB si elle n'existe pas encore. Sans verrou applicatif : la
contrainte d'unicite tranche entre deux createurs concurrents et le perdant
relit la ligne du gagnant.
"""

from collections.abc import Callable

from loguru import logger

from geekflex.core.entities.content import ContentRecord
from geekflex.core.ports.api_clients import IContentProvider
from geekflex.core.ports.repositories import DuplicateKeyConflict, IContentRepository
from geekflex.core.value_objects import MediaKind
from geekflex.services.content_mapper import content_from_detail
from geekflex.services.retry import threaded_conflict_retry


class ContentMaterializer:
    """
    Service get-or-create des contenus.

    Chaque acces au stockage (lecture, insertion, relecture) ouvre son
    propre repository, donc sa propre transaction courte. Les conflits de
    verrou sont relances ; les erreurs du fournisseur sont propagees.
    Ces acces bloquants s'executent dans des threads (asyncio.to_thread) :
    plusieurs get_or_create avancent en parallele sans bloquer la boucle.

    Example:
        materializer = ContentMaterializer(
            content_repository_factory=container.content_repository.provider,
            provider=tmdb_client,
        )
        record = await materializer.get_or_create(19995, MediaKind.MOVIE)
    """

    def __init__(
        self,
        content_repository_factory: Callable[[], IContentRepository],
        provider: IContentProvider,
        language: str = "ko-KR",
        max_attempts: int = 3,
        min_wait: float = 0.05,
        max_wait: float = 0.15,
    ) -> None:
        """
        Initialise le service.

        Args:
            content_repository_factory: Fabrique de repository (session neuve a chaque appel)
            provider: Fournisseur de fiches detaillees
            language: Langue demandee au fournisseur
            max_attempts: Tentatives maximum sur LockConflict
            min_wait: Delai minimum entre tentatives (secondes)
            max_wait: Delai maximum entre tentatives (secondes)
        """
        self._repository_factory = content_repository_factory
        self._provider = provider
        self._language = language
        # Acces bloquants au stockage, executes hors de la boucle asyncio
        self._in_store = threaded_conflict_retry(max_attempts, min_wait, max_wait)

    def _read(self, external_id: int, media_kind: MediaKind):
        with self._repository_factory() as repo:
            return repo.get_by_natural_key(external_id, media_kind)

    def _insert(self, record: ContentRecord) -> ContentRecord:
        with self._repository_factory() as repo:
            return repo.insert(record)

    async def get_or_create(self, external_id: int, media_kind: MediaKind) -> ContentRecord:
        """
        Retourne le contenu local, en le creant depuis TMDB au premier acces.

        Args:
            external_id: ID TMDB
            media_kind: MOVIE ou TV

        Returns:
            Le ContentRecord (toujours le meme ID pour une meme cle naturelle)

        Raises:
            ProviderUnavailableError: TMDB injoignable (non relance ici)
            ContentNotFoundError: L'ID n'existe pas chez TMDB
            DuplicateKeyConflict: Insertion refusee mais aucune ligne a la relecture
        """
        log = logger.bind(external_id=external_id, media_kind=media_kind.value)

        existing = await self._in_store(self._read, external_id, media_kind)
        if existing is not None:
            log.debug("Contenu deja en cache")
            return existing

        detail = await self._provider.fetch_detail(external_id, media_kind, self._language)
        record = content_from_detail(detail)
        # La cle naturelle demandee fait foi
        record.external_id = external_id
        record.media_kind = media_kind

        try:
            created = await self._in_store(self._insert, record)
        except DuplicateKeyConflict:
            winner = await self._in_store(self._read, external_id, media_kind)
            if winner is None:
                log.error("Conflit d'unicite sans ligne existante a la relecture")
                raise
            log.info(f"Creation concurrente detectee, ligne existante reprise (id={winner.id})")
            return winner
        except Exception:
            log.exception("Echec de l'insertion du contenu")
            raise

        log.info(f"Contenu cree en cache: {created.title} (id={created.id})")
        return created
