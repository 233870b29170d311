"""
Acces en lecture au cache de contenus pour les autres composants.

Point d'entree unique des routes web et des commandes CLI : lecture par
categorie, lecture par ID et get-or-create.
"""

from collections.abc import Callable
from typing import Optional

from geekflex.core.entities.content import ContentRecord
from geekflex.core.ports.repositories import IContentRepository
from geekflex.core.value_objects import MediaKind
from geekflex.services.materializer import ContentMaterializer


class ContentService:
    """Facade de lecture du cache de contenus."""

    def __init__(
        self,
        content_repository_factory: Callable[[], IContentRepository],
        materializer: ContentMaterializer,
    ) -> None:
        self._repository_factory = content_repository_factory
        self._materializer = materializer

    def list_by_category(self, category: str) -> list[ContentRecord]:
        """Contenus du dernier instantane d'une categorie, plus recents en premier."""
        with self._repository_factory() as repo:
            return repo.list_by_category(category)

    def get_by_id(self, content_id: int) -> Optional[ContentRecord]:
        with self._repository_factory() as repo:
            return repo.get_by_id(content_id)

    async def get_or_create(self, external_id: int, media_kind: MediaKind) -> ContentRecord:
        return await self._materializer.get_or_create(external_id, media_kind)
