"""
Implementation SQLModel du repository des tags de categorie.

Implemente ICategoryTagRepository : l'instantane d'une categorie est
remplace d'un bloc (suppression + insertions) dans une seule transaction.
"""

from datetime import datetime, timezone
from typing import Optional, Sequence

from sqlmodel import Session, select

from geekflex.core.entities.content import CategoryTag
from geekflex.core.ports.repositories import ICategoryTagRepository
from geekflex.infrastructure.persistence.models import ContentListTagModel
from geekflex.infrastructure.persistence.repositories.errors import translate_conflicts


class SQLModelCategoryTagRepository(ICategoryTagRepository):
    """Repository SQLModel pour les tags de categorie."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def close(self) -> None:
        self._session.close()

    def _to_entity(self, model: ContentListTagModel) -> CategoryTag:
        return CategoryTag(
            id=model.id,
            content_id=model.content_id,
            category=model.category,
            region=model.region,
            snapshot_at=model.snapshot_at,
        )

    def list_by_category(self, category: str) -> list[CategoryTag]:
        """Liste les tags d'une categorie, dans l'ordre d'insertion."""
        statement = (
            select(ContentListTagModel)
            .where(ContentListTagModel.category == category)
            .order_by(ContentListTagModel.id)
        )
        with translate_conflicts(self._session):
            models = self._session.exec(statement).all()
        return [self._to_entity(model) for model in models]

    def replace_category(
        self,
        category: str,
        content_ids: Sequence[int],
        region: Optional[str],
    ) -> list[CategoryTag]:
        """
        Remplace tous les tags d'une categorie par un nouvel instantane.

        Les IDs en double sont ignores (premier vu conserve). La suppression
        et les insertions sont commitees ensemble ; en cas d'erreur la
        transaction est annulee et l'ancien instantane reste visible.

        Raises :
            LockConflict : Verrou indisponible
            DuplicateKeyConflict : Un ecrivain concurrent a insere le meme tag
        """
        snapshot_at = datetime.now(timezone.utc)
        unique_ids = list(dict.fromkeys(content_ids))
        models = [
            ContentListTagModel(
                content_id=content_id,
                category=category,
                region=region,
                snapshot_at=snapshot_at,
            )
            for content_id in unique_ids
        ]

        with translate_conflicts(self._session):
            previous = self._session.exec(
                select(ContentListTagModel).where(ContentListTagModel.category == category)
            ).all()
            for model in previous:
                self._session.delete(model)
            # Les suppressions doivent partir avant les insertions (contrainte d'unicite)
            self._session.flush()
            self._session.add_all(models)
            self._session.commit()

        for model in models:
            self._session.refresh(model)
        return [self._to_entity(model) for model in models]
