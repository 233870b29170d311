"""
Conversion des enregistrements TMDB en ContentRecord.

Le type de contenu (MediaKind) choisit la fonction de conversion : les
listes ne fournissent que des IDs de genre, les fiches detaillees les noms.
"""

from typing import Iterable, Optional

from geekflex.core.entities.content import DESCRIPTIVE_FIELDS, ContentRecord
from geekflex.core.ports.api_clients import DetailRecord, ListingEntry
from geekflex.core.value_objects import MediaKind
from geekflex.utils.constants import TMDB_GENRE_MAPPING, TMDB_TV_GENRE_MAPPING


def _join(values: Iterable[str]) -> Optional[str]:
    """Joint des valeurs par des virgules, None si aucune."""
    joined = ",".join(value for value in values if value)
    return joined or None


def genre_names(genre_ids: Iterable[int], media_kind: MediaKind) -> list[str]:
    """
    Convertit des IDs de genre TMDB en noms localises.

    Les IDs inconnus sont ignores.
    """
    mapping = TMDB_TV_GENRE_MAPPING if media_kind is MediaKind.TV else TMDB_GENRE_MAPPING
    return [mapping[genre_id] for genre_id in genre_ids if genre_id in mapping]


def content_from_listing_entry(entry: ListingEntry) -> ContentRecord:
    """
    Construit un ContentRecord depuis une entree de liste classee.

    Les listes de films ne fournissent pas de pays d'origine : le champ
    reste vide. Aucune date de fin n'est connue a ce stade.
    """
    origin_country = None
    if entry.media_kind is MediaKind.TV:
        origin_country = _join(entry.origin_country)

    return ContentRecord(
        external_id=entry.external_id,
        media_kind=entry.media_kind,
        title=entry.title,
        original_title=entry.original_title,
        original_language=entry.original_language,
        overview=entry.overview,
        release_date=entry.release_date,
        poster_path=entry.poster_path,
        backdrop_path=entry.backdrop_path,
        popularity=entry.popularity,
        vote_average=entry.vote_average,
        vote_count=entry.vote_count,
        genre=_join(genre_names(entry.genre_ids, entry.media_kind)),
        origin_country=origin_country,
    )


def listing_fields(media_kind: MediaKind) -> tuple[str, ...]:
    """
    Champs qu'une entree de liste peut mettre a jour.

    Une liste ne connait jamais la date de fin, ni le pays d'origine d'un
    film : ces valeurs, issues d'une fiche detaillee, restent en base.
    """
    skipped = {"end_date"}
    if media_kind is MediaKind.MOVIE:
        skipped.add("origin_country")
    return tuple(name for name in DESCRIPTIVE_FIELDS if name not in skipped)


def content_from_detail(detail: DetailRecord) -> ContentRecord:
    """
    Construit un ContentRecord depuis une fiche detaillee.

    Pour une serie, release_date est la premiere diffusion et end_date
    la derniere.
    """
    end_date = detail.last_air_date if detail.media_kind is MediaKind.TV else None

    return ContentRecord(
        external_id=detail.external_id,
        media_kind=detail.media_kind,
        title=detail.title,
        original_title=detail.original_title,
        original_language=detail.original_language,
        overview=detail.overview,
        release_date=detail.release_date,
        end_date=end_date,
        poster_path=detail.poster_path,
        backdrop_path=detail.backdrop_path,
        popularity=detail.popularity,
        vote_average=detail.vote_average,
        vote_count=detail.vote_count,
        genre=_join(detail.genres),
        origin_country=_join(detail.origin_country),
    )
