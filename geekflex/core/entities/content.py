"""
Entites du cache de contenus.

Entites representant les contenus TMDB copies localement et leur
appartenance aux categories (a l'affiche, populaires, ...).
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from geekflex.core.value_objects import MediaKind

# Champs remplacables par une mise a jour (l'identite et created_at ne bougent pas)
DESCRIPTIVE_FIELDS = (
    "title",
    "original_title",
    "original_language",
    "overview",
    "release_date",
    "end_date",
    "poster_path",
    "backdrop_path",
    "popularity",
    "vote_average",
    "vote_count",
    "genre",
    "origin_country",
)


@dataclass
class ContentRecord:
    """
    Contenu (film ou serie) copie depuis TMDB.

    L'identite locale est `id` (attribue a l'insertion). La cle naturelle est
    le couple (external_id, media_kind) : au plus une ligne par couple.

    Attributes:
        id: ID interne en base (None avant insertion)
        external_id: ID TMDB
        media_kind: MOVIE ou TV
        title: Titre localise
        original_title: Titre en langue originale
        original_language: Code langue originale (ex: "en")
        overview: Resume
        release_date: Date de sortie (film) ou de premiere diffusion (serie)
        end_date: Date de derniere diffusion (series uniquement)
        poster_path: Chemin du poster sur le CDN TMDB
        backdrop_path: Chemin de l'image de fond sur le CDN TMDB
        popularity: Indice de popularite TMDB
        vote_average: Note moyenne TMDB (0-10)
        vote_count: Nombre de votes TMDB
        genre: Noms de genre separes par des virgules
        origin_country: Codes pays separes par des virgules
        created_at: Date de creation de la ligne (jamais modifiee)
    """

    external_id: int
    media_kind: MediaKind
    title: str = ""
    id: Optional[int] = None
    original_title: Optional[str] = None
    original_language: Optional[str] = None
    overview: Optional[str] = None
    release_date: Optional[date] = None
    end_date: Optional[date] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    popularity: Optional[float] = None
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None
    genre: Optional[str] = None
    origin_country: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def natural_key(self) -> tuple[int, MediaKind]:
        """Cle naturelle (external_id, media_kind)."""
        return (self.external_id, self.media_kind)


@dataclass
class CategoryTag:
    """
    Appartenance d'un contenu a une categorie lors d'un instantane.

    Attributes:
        id: ID interne en base
        content_id: ID interne du ContentRecord tague
        category: Nom de categorie (ex: "NOW_PLAYING")
        region: Code region de l'instantane (ex: "KR")
        snapshot_at: Date de l'instantane
    """

    content_id: int
    category: str
    region: Optional[str] = None
    id: Optional[int] = None
    snapshot_at: Optional[datetime] = None
