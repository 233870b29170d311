"""
Implementation SQLModel du repository des contenus.

Implemente l'interface IContentRepository pour la persistance des films et
series dans la table `contents`.
"""

from datetime import datetime, timezone
from typing import Optional, Sequence

from sqlmodel import Session, select

from geekflex.core.entities.content import DESCRIPTIVE_FIELDS, ContentRecord
from geekflex.core.ports.repositories import IContentRepository
from geekflex.core.value_objects import MediaKind
from geekflex.infrastructure.persistence.models import ContentListTagModel, ContentModel
from geekflex.infrastructure.persistence.repositories.errors import translate_conflicts


class SQLModelContentRepository(IContentRepository):
    """
    Repository SQLModel pour les contenus.

    Implemente IContentRepository avec conversion bidirectionnelle
    entre l'entite ContentRecord (domaine) et ContentModel (persistance).
    Chaque ecriture est commitee immediatement.
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel dediee a ce repository
        """
        self._session = session

    def close(self) -> None:
        self._session.close()

    def _to_entity(self, model: ContentModel) -> ContentRecord:
        """Convertit un modele DB en entite domaine."""
        return ContentRecord(
            id=model.id,
            external_id=model.external_id,
            media_kind=MediaKind(model.media_kind),
            title=model.title,
            original_title=model.original_title,
            original_language=model.original_language,
            overview=model.overview,
            release_date=model.release_date,
            end_date=model.end_date,
            poster_path=model.poster_path,
            backdrop_path=model.backdrop_path,
            popularity=model.popularity,
            vote_average=model.vote_average,
            vote_count=model.vote_count,
            genre=model.genre,
            origin_country=model.origin_country,
            created_at=model.created_at,
        )

    def _to_model(self, entity: ContentRecord) -> ContentModel:
        """Convertit une entite domaine en modele DB (sans ID)."""
        model = ContentModel(
            external_id=entity.external_id,
            media_kind=entity.media_kind.value,
        )
        for name in DESCRIPTIVE_FIELDS:
            setattr(model, name, getattr(entity, name))
        if model.title is None:
            model.title = ""
        return model

    def get_by_id(self, content_id: int) -> Optional[ContentRecord]:
        """Recupere un contenu par son ID interne."""
        with translate_conflicts(self._session):
            model = self._session.get(ContentModel, content_id)
        if model:
            return self._to_entity(model)
        return None

    def get_by_natural_key(
        self, external_id: int, media_kind: MediaKind
    ) -> Optional[ContentRecord]:
        """Recupere un contenu par son couple (external_id, media_kind)."""
        statement = (
            select(ContentModel)
            .where(ContentModel.external_id == external_id)
            .where(ContentModel.media_kind == media_kind.value)
        )
        with translate_conflicts(self._session):
            model = self._session.exec(statement).first()
        if model:
            return self._to_entity(model)
        return None

    def insert(self, record: ContentRecord) -> ContentRecord:
        """Insere un nouveau contenu, DuplicateKeyConflict si la cle existe."""
        model = self._to_model(record)
        with translate_conflicts(self._session):
            self._session.add(model)
            self._session.commit()
        self._session.refresh(model)
        return self._to_entity(model)

    def update_descriptive(
        self,
        content_id: int,
        record: ContentRecord,
        fields: Optional[Sequence[str]] = None,
    ) -> ContentRecord:
        """Ecrase les champs descriptifs (tous, ou seulement `fields`) d'un contenu."""
        fields = DESCRIPTIVE_FIELDS if fields is None else tuple(fields)
        unknown = set(fields) - set(DESCRIPTIVE_FIELDS)
        if unknown:
            raise ValueError(f"Champs non modifiables : {sorted(unknown)}")
        with translate_conflicts(self._session):
            model = self._session.get(ContentModel, content_id)
            if model is None:
                raise LookupError(f"Contenu {content_id} introuvable")
            for name in fields:
                setattr(model, name, getattr(record, name))
            if model.title is None:
                model.title = ""
            model.updated_at = datetime.now(timezone.utc)
            self._session.add(model)
            self._session.commit()
        self._session.refresh(model)
        return self._to_entity(model)

    def list_by_category(self, category: str) -> list[ContentRecord]:
        """
        Liste les contenus tagues dans une categorie.

        Tri par date de sortie decroissante (dates inconnues en dernier),
        puis par ID pour un ordre stable.
        """
        statement = (
            select(ContentModel)
            .join(ContentListTagModel, ContentListTagModel.content_id == ContentModel.id)
            .where(ContentListTagModel.category == category)
            .order_by(ContentModel.release_date.is_(None), ContentModel.release_date.desc(), ContentModel.id)
        )
        with translate_conflicts(self._session):
            models = self._session.exec(statement).all()
        return [self._to_entity(model) for model in models]
