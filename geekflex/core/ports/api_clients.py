"""
Interfaces ports pour le fournisseur de metadonnees.

Interface abstraite (port) définissant le contrat du fournisseur externe
(TMDB) et les enregistrements qu'il renvoie. L'implémentation concrete
(adaptateur httpx) est dans adapters/api/tmdb_client.py.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from geekflex.core.value_objects import MediaKind


class ProviderUnavailableError(Exception):
    """
    Le fournisseur n'a pas pu repondre.

    Couvre les erreurs reseau, les timeouts et les reponses non 2xx.

    Attributes:
        status_code: Code HTTP recu, ou None si aucune reponse
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ContentNotFoundError(Exception):
    """L'identifiant externe n'existe pas chez le fournisseur."""

    def __init__(self, external_id: int, media_kind: MediaKind) -> None:
        self.external_id = external_id
        self.media_kind = media_kind
        super().__init__(f"Contenu introuvable chez le fournisseur: {media_kind.value} {external_id}")


@dataclass
class ListingEntry:
    """
    Resume d'un contenu dans une liste classee (categorie ou recherche).

    Attributs :
        external_id : ID TMDB
        media_kind : MOVIE ou TV (deduit de l'endpoint appele)
        title : Titre localise (title pour un film, name pour une serie)
        genre_ids : IDs de genre TMDB (les noms ne sont pas fournis par les listes)
        origin_country : Codes pays (series uniquement, vide pour les films)
    """

    external_id: int
    media_kind: MediaKind
    title: str = ""
    original_title: Optional[str] = None
    original_language: Optional[str] = None
    overview: Optional[str] = None
    release_date: Optional[date] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    popularity: Optional[float] = None
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None
    genre_ids: tuple[int, ...] = ()
    origin_country: tuple[str, ...] = ()


@dataclass
class ListingPage:
    """Une page de resultats classes."""

    page: int = 1
    total_pages: int = 0
    total_results: int = 0
    results: list[ListingEntry] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.results


@dataclass
class DetailRecord:
    """
    Fiche complete d'un contenu.

    Attributs :
        genres : Noms de genre localises
        origin_country : Codes pays d'origine
        runtime : Duree en minutes (films)
        last_air_date : Derniere diffusion (series)
        number_of_seasons / number_of_episodes : Compteurs (series)
    """

    external_id: int
    media_kind: MediaKind
    title: str = ""
    original_title: Optional[str] = None
    original_language: Optional[str] = None
    overview: Optional[str] = None
    release_date: Optional[date] = None
    last_air_date: Optional[date] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    popularity: Optional[float] = None
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None
    genres: tuple[str, ...] = ()
    origin_country: tuple[str, ...] = ()
    production_countries: tuple[str, ...] = ()
    runtime: Optional[int] = None
    number_of_seasons: Optional[int] = None
    number_of_episodes: Optional[int] = None
    status: Optional[str] = None
    tagline: Optional[str] = None
    imdb_id: Optional[str] = None


class IContentProvider(ABC):
    """
    Interface du fournisseur de metadonnees.

    Enveloppe d'entrees/sorties pure : un appel HTTP par invocation,
    pas de retry, pas de cache, pas de persistance.
    """

    @abstractmethod
    async def fetch_category_page(
        self,
        category_path: str,
        language: str,
        region: str,
        page: int = 1,
    ) -> ListingPage:
        """
        Recupere une page d'une liste classee (ex: /movie/now_playing).

        Raises :
            ProviderUnavailableError : Erreur reseau, timeout ou reponse non 2xx
        """
        ...

    @abstractmethod
    async def fetch_detail(
        self,
        external_id: int,
        media_kind: MediaKind,
        language: str,
    ) -> DetailRecord:
        """
        Recupere la fiche complete d'un contenu.

        Raises :
            ProviderUnavailableError : Erreur reseau, timeout ou reponse non 2xx
            ContentNotFoundError : L'identifiant n'existe pas chez le fournisseur
        """
        ...

    @abstractmethod
    async def search(
        self,
        query: str,
        media_kind: MediaKind,
        language: str,
        page: int = 1,
    ) -> ListingPage:
        """Recherche par mot-cle, resultats dans l'ordre du fournisseur."""
        ...
