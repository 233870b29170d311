"""
Schemas de reponse de l'API REST.

Les chemins d'images TMDB stockes en base sont relatifs : les reponses
exposent des URLs completes.
"""

from datetime import date
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

from geekflex.core.entities.content import ContentRecord
from geekflex.core.ports.api_clients import ListingEntry
from geekflex.utils.constants import TMDB_BACKDROP_SIZE, TMDB_IMAGE_BASE_URL, TMDB_POSTER_SIZE

T = TypeVar("T")


def image_url(path: Optional[str], size: str) -> Optional[str]:
    """Construit l'URL CDN d'une image TMDB (les URLs absolues sont conservees)."""
    if not path:
        return None
    if path.startswith(("http://", "https://")):
        return path
    return f"{TMDB_IMAGE_BASE_URL}/{size}{path}"


def _split(value: Optional[str]) -> list[str]:
    return [item for item in (value or "").split(",") if item]


class ContentResponse(BaseModel):
    """Contenu du cache local."""

    id: int
    external_id: int
    media_kind: str
    title: str
    original_title: Optional[str] = None
    original_language: Optional[str] = None
    overview: Optional[str] = None
    release_date: Optional[date] = None
    end_date: Optional[date] = None
    poster_url: Optional[str] = None
    backdrop_url: Optional[str] = None
    popularity: Optional[float] = None
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None
    genres: list[str] = []
    origin_country: list[str] = []

    @classmethod
    def from_record(cls, record: ContentRecord) -> "ContentResponse":
        return cls(
            id=record.id,
            external_id=record.external_id,
            media_kind=record.media_kind.value,
            title=record.title,
            original_title=record.original_title,
            original_language=record.original_language,
            overview=record.overview,
            release_date=record.release_date,
            end_date=record.end_date,
            poster_url=image_url(record.poster_path, TMDB_POSTER_SIZE),
            backdrop_url=image_url(record.backdrop_path, TMDB_BACKDROP_SIZE),
            popularity=record.popularity,
            vote_average=record.vote_average,
            vote_count=record.vote_count,
            genres=_split(record.genre),
            origin_country=_split(record.origin_country),
        )


class SearchResultResponse(BaseModel):
    """Resultat de recherche TMDB (non mis en cache)."""

    external_id: int
    media_kind: str
    title: str
    original_title: Optional[str] = None
    overview: Optional[str] = None
    release_date: Optional[date] = None
    poster_url: Optional[str] = None
    vote_average: Optional[float] = None

    @classmethod
    def from_entry(cls, entry: ListingEntry) -> "SearchResultResponse":
        return cls(
            external_id=entry.external_id,
            media_kind=entry.media_kind.value,
            title=entry.title,
            original_title=entry.original_title,
            overview=entry.overview,
            release_date=entry.release_date,
            poster_url=image_url(entry.poster_path, TMDB_POSTER_SIZE),
            vote_average=entry.vote_average,
        )


class ApiResponse(BaseModel, Generic[T]):
    """Enveloppe des reponses d'action (ex: enregistrement d'un titre)."""

    success: bool
    message: str
    data: Optional[T] = None
