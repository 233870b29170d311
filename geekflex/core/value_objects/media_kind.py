"""
Type de contenu cote fournisseur.

TMDB utilise des espaces d'identifiants distincts pour les films et les series :
le meme identifiant numerique peut designer un film et une serie differents.
Le type fait donc partie de la cle naturelle (external_id, media_kind).
"""

from enum import Enum


class MediaKind(str, Enum):
    """Type de media TMDB.

    Valeurs:
        MOVIE: Film (endpoints /movie/...)
        TV: Serie TV (endpoints /tv/...)
    """

    MOVIE = "MOVIE"
    TV = "TV"

    @property
    def api_segment(self) -> str:
        """Segment d'URL TMDB correspondant ("movie" ou "tv")."""
        return "tv" if self is MediaKind.TV else "movie"

    @classmethod
    def from_listing_path(cls, listing_path: str) -> "MediaKind":
        """Deduit le type depuis un chemin de liste TMDB (ex: /tv/popular)."""
        if listing_path.lstrip("/").startswith("tv/"):
            return cls.TV
        return cls.MOVIE

    @classmethod
    def parse(cls, value: str) -> "MediaKind":
        """Convertit une saisie libre ("movie", "TV", ...) en MediaKind."""
        try:
            return cls(value.strip().upper())
        except ValueError:
            raise ValueError(f"Type de contenu inconnu: {value!r} (attendu: movie ou tv)") from None
