"""
Client TMDB pour les listes classees, la recherche et les fiches detaillees.

Implemente l'interface IContentProvider pour TMDB (The Movie Database).
C'est une enveloppe d'entrees/sorties pure : un appel HTTP par methode,
sans cache ni retry. Toute erreur de transport, tout timeout et toute
reponse non 2xx devient une ProviderUnavailableError ; un 404 sur une fiche
devient une ContentNotFoundError.

Usage:
    client = TMDBClient(api_key="your_key")
    page = await client.fetch_category_page("/movie/now_playing", "ko-KR", "KR")
    detail = await client.fetch_detail(19995, MediaKind.MOVIE, "ko-KR")
    await client.close()
"""

from datetime import date
from typing import Any, Optional

import httpx
from loguru import logger

from geekflex.core.ports.api_clients import (
    ContentNotFoundError,
    DetailRecord,
    IContentProvider,
    ListingEntry,
    ListingPage,
    ProviderUnavailableError,
)
from geekflex.core.value_objects import MediaKind


def _parse_date(value: Optional[str]) -> Optional[date]:
    """Convertit une date TMDB (YYYY-MM-DD, parfois vide) en date."""
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def _as_float(value: Any) -> Optional[float]:
    return float(value) if value is not None else None


class TMDBClient(IContentProvider):
    """
    Client API TMDB pour les metadonnees de films et de series.

    Implemente IContentProvider avec:
    - Listes classees paginees (now_playing, popular, ...)
    - Fiches detaillees films (/movie/{id}) et series (/tv/{id})
    - Recherche par mot-cle (/search/movie, /search/tv)
    - Timeout borne sur chaque appel

    Attributes:
        TMDB_BASE_URL: URL de base de l'API TMDB v3

    Example:
        client = TMDBClient(api_key="xxx", timeout=10.0)
        page = await client.fetch_category_page("/movie/popular", "ko-KR", "KR")
        for entry in page.results:
            print(entry.external_id, entry.title)
        await client.close()
    """

    TMDB_BASE_URL = "https://api.themoviedb.org/3"

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = TMDB_BASE_URL,
        timeout: float = 10.0,
    ) -> None:
        """
        Initialise le client TMDB.

        Args:
            api_key: Cle API TMDB (API Key v3 ou Read Access Token v4)
            base_url: URL de base de l'API
            timeout: Timeout de chaque appel en secondes
        """
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, le cree si necessaire (lazy init).

        Supporte les deux modes d'authentification TMDB:
        - API Key v3 (32 caracteres hex) : passe en parametre api_key
        - Read Access Token v4 (long JWT) : passe en header Bearer

        Raises:
            ProviderUnavailableError: Si aucune cle API n'est configuree
        """
        if not self._api_key:
            raise ProviderUnavailableError("Cle API TMDB non configuree")

        if self._client is None or self._client.is_closed:
            # Detecter le type de cle : v3 (32 hex) vs v4 (long JWT)
            is_v4_token = len(self._api_key) > 40

            headers = {"Accept": "application/json"}
            params = {}

            if is_v4_token:
                headers["Authorization"] = f"Bearer {self._api_key}"
            else:
                params["api_key"] = self._api_key

            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=headers,
                params=params,
                timeout=self._timeout,
            )
        return self._client

    async def _get_json(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        """
        Execute un GET et retourne le corps JSON.

        Raises:
            ProviderUnavailableError: Timeout, erreur reseau, statut non 2xx ou
                JSON invalide. Le code HTTP est conserve dans status_code.
        """
        client = self._get_client()
        logger.debug("Appel TMDB", path=path, params=params)
        try:
            response = await client.get(path, params=params)
        except httpx.TimeoutException as e:
            raise ProviderUnavailableError(f"Timeout TMDB sur {path}") from e
        except httpx.HTTPError as e:
            raise ProviderUnavailableError(f"Erreur reseau TMDB sur {path}: {e}") from e

        if not response.is_success:
            raise ProviderUnavailableError(
                f"Reponse TMDB {response.status_code} sur {path}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderUnavailableError(f"Reponse TMDB illisible sur {path}") from e
        if not isinstance(data, dict):
            raise ProviderUnavailableError(f"Reponse TMDB inattendue sur {path}")
        return data

    def _parse_listing(self, data: dict[str, Any], media_kind: MediaKind) -> ListingPage:
        """Transforme une reponse de liste (categorie ou recherche) en ListingPage."""
        entries = []
        for item in data.get("results") or []:
            if item.get("id") is None:
                continue
            if media_kind is MediaKind.TV:
                title = item.get("name") or item.get("original_name") or ""
                original_title = item.get("original_name")
                release_date = _parse_date(item.get("first_air_date"))
            else:
                title = item.get("title") or item.get("original_title") or ""
                original_title = item.get("original_title")
                release_date = _parse_date(item.get("release_date"))

            entries.append(
                ListingEntry(
                    external_id=int(item["id"]),
                    media_kind=media_kind,
                    title=title,
                    original_title=original_title,
                    original_language=item.get("original_language"),
                    overview=item.get("overview"),
                    release_date=release_date,
                    poster_path=item.get("poster_path"),
                    backdrop_path=item.get("backdrop_path"),
                    popularity=_as_float(item.get("popularity")),
                    vote_average=_as_float(item.get("vote_average")),
                    vote_count=item.get("vote_count"),
                    genre_ids=tuple(item.get("genre_ids") or ()),
                    origin_country=tuple(item.get("origin_country") or ()),
                )
            )

        return ListingPage(
            page=data.get("page", 1),
            total_pages=data.get("total_pages", 0),
            total_results=data.get("total_results", 0),
            results=entries,
        )

    async def fetch_category_page(
        self,
        category_path: str,
        language: str,
        region: str,
        page: int = 1,
    ) -> ListingPage:
        """
        Recupere une page d'une liste classee TMDB.

        Le type de contenu est deduit du chemin (/tv/... pour les series).

        Args:
            category_path: Endpoint TMDB (ex: "/movie/now_playing")
            language: Langue des titres et resumes (ex: "ko-KR")
            region: Region de sortie (ex: "KR")
            page: Numero de page (1-indexe)

        Returns:
            ListingPage dans l'ordre de classement TMDB
        """
        media_kind = MediaKind.from_listing_path(category_path)
        data = await self._get_json(
            category_path,
            params={"language": language, "region": region, "page": page},
        )
        listing = self._parse_listing(data, media_kind)
        logger.info(
            f"Liste TMDB recue: {category_path} page {page} -> {len(listing.results)} resultat(s)"
        )
        return listing

    async def fetch_detail(
        self,
        external_id: int,
        media_kind: MediaKind,
        language: str,
    ) -> DetailRecord:
        """
        Recupere la fiche complete d'un film ou d'une serie.

        Args:
            external_id: ID TMDB
            media_kind: MOVIE (/movie/{id}) ou TV (/tv/{id})
            language: Langue des titres et resumes

        Returns:
            DetailRecord avec genres, pays, duree ou nombre de saisons

        Raises:
            ContentNotFoundError: TMDB repond 404
            ProviderUnavailableError: Toute autre erreur
        """
        path = f"/{media_kind.api_segment}/{external_id}"
        try:
            data = await self._get_json(path, params={"language": language})
        except ProviderUnavailableError as e:
            if e.status_code == 404:
                raise ContentNotFoundError(external_id, media_kind) from e
            raise

        genres = tuple(
            genre["name"] for genre in data.get("genres") or () if genre.get("name")
        )
        production_countries = tuple(
            country["iso_3166_1"]
            for country in data.get("production_countries") or ()
            if country.get("iso_3166_1")
        )

        if media_kind is MediaKind.TV:
            detail = DetailRecord(
                external_id=int(data.get("id", external_id)),
                media_kind=media_kind,
                title=data.get("name") or data.get("original_name") or "",
                original_title=data.get("original_name"),
                release_date=_parse_date(data.get("first_air_date")),
                last_air_date=_parse_date(data.get("last_air_date")),
                number_of_seasons=data.get("number_of_seasons"),
                number_of_episodes=data.get("number_of_episodes"),
                genres=genres,
                production_countries=production_countries,
                origin_country=tuple(data.get("origin_country") or ()),
            )
        else:
            detail = DetailRecord(
                external_id=int(data.get("id", external_id)),
                media_kind=media_kind,
                title=data.get("title") or data.get("original_title") or "",
                original_title=data.get("original_title"),
                release_date=_parse_date(data.get("release_date")),
                runtime=data.get("runtime"),
                imdb_id=data.get("imdb_id"),
                genres=genres,
                production_countries=production_countries,
                # Les films recents exposent origin_country, les anciens seulement
                # production_countries
                origin_country=tuple(data.get("origin_country") or production_countries),
            )

        detail.original_language = data.get("original_language")
        detail.overview = data.get("overview")
        detail.poster_path = data.get("poster_path")
        detail.backdrop_path = data.get("backdrop_path")
        detail.popularity = _as_float(data.get("popularity"))
        detail.vote_average = _as_float(data.get("vote_average"))
        detail.vote_count = data.get("vote_count")
        detail.status = data.get("status")
        detail.tagline = data.get("tagline")

        logger.info(f"Fiche TMDB recue: {media_kind.value} {external_id} -> {detail.title}")
        return detail

    async def search(
        self,
        query: str,
        media_kind: MediaKind,
        language: str,
        page: int = 1,
    ) -> ListingPage:
        """
        Recherche des films ou des series par titre.

        Args:
            query: Mot-cle (titre)
            media_kind: MOVIE (/search/movie) ou TV (/search/tv)
            language: Langue des resultats
            page: Numero de page

        Returns:
            ListingPage dans l'ordre renvoye par TMDB
        """
        data = await self._get_json(
            f"/search/{media_kind.api_segment}",
            params={
                "query": query,
                "language": language,
                "page": page,
                "include_adult": "false",
            },
        )
        return self._parse_listing(data, media_kind)

    async def close(self) -> None:
        """
        Ferme le client HTTP.

        Doit etre appele a la fin de l'utilisation pour liberer
        les ressources reseau.
        """
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
