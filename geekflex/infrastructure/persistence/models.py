"""
Modeles SQLModel pour la base de donnees GeekFlex.

Ces modeles representent les tables de la base de donnees.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- contents: Films et series copies depuis TMDB, uniques par (external_id, media_kind)
- content_list_tags: Appartenance d'un contenu a une categorie, uniques par
  (content_id, category)
"""

from __future__ import annotations

from datetime import date, datetime, timezone

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ContentModel(SQLModel, table=True):
    """
    Modele representant un film ou une serie.

    La contrainte d'unicite sur (external_id, media_kind) est la seule
    garantie contre les doublons lors d'insertions concurrentes.
    """

    __tablename__ = "contents"
    __table_args__ = (
        UniqueConstraint("external_id", "media_kind", name="uq_contents_external_id_media_kind"),
    )

    id: int | None = Field(default=None, primary_key=True)
    external_id: int = Field(index=True)
    media_kind: str = Field(max_length=10)  # "MOVIE" ou "TV"
    title: str = Field(default="", index=True)
    original_title: str | None = None
    original_language: str | None = None
    overview: str | None = None
    release_date: date | None = Field(default=None, index=True)
    end_date: date | None = None  # Derniere diffusion (series)
    poster_path: str | None = None
    backdrop_path: str | None = None
    popularity: float | None = None
    vote_average: float | None = None  # Note moyenne TMDB (0-10)
    vote_count: int | None = None
    genre: str | None = None  # "액션,SF"
    origin_country: str | None = None  # "KR,US"
    created_at: datetime | None = Field(default_factory=_utcnow)
    updated_at: datetime | None = Field(default_factory=_utcnow)


class ContentListTagModel(SQLModel, table=True):
    """
    Modele representant l'appartenance d'un contenu a une categorie.

    Les tags d'une categorie sont remplaces d'un bloc a chaque reconciliation.
    """

    __tablename__ = "content_list_tags"
    __table_args__ = (
        UniqueConstraint("content_id", "category", name="uq_content_list_tags_content_category"),
    )

    id: int | None = Field(default=None, primary_key=True)
    content_id: int = Field(foreign_key="contents.id", index=True)
    category: str = Field(index=True)  # "NOW_PLAYING", "POPULAR", ...
    region: str | None = None
    snapshot_at: datetime | None = Field(default_factory=_utcnow)
