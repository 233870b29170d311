"""
Tests pour les enregistrements et erreurs du port fournisseur.
"""

from geekflex.core.ports.api_clients import (
    ContentNotFoundError,
    DetailRecord,
    ListingEntry,
    ListingPage,
    ProviderUnavailableError,
)
from geekflex.core.value_objects import MediaKind


class TestListingPage:
    """Tests pour ListingPage."""

    def test_empty_by_default(self):
        assert ListingPage().is_empty

    def test_not_empty_with_results(self):
        page = ListingPage(results=[ListingEntry(external_id=1, media_kind=MediaKind.MOVIE)])
        assert not page.is_empty


class TestDetailRecord:
    """Tests pour DetailRecord."""

    def test_movie_defaults(self):
        detail = DetailRecord(external_id=19995, media_kind=MediaKind.MOVIE, title="아바타")
        assert detail.genres == ()
        assert detail.last_air_date is None
        assert detail.number_of_seasons is None


class TestErrors:
    """Tests pour les erreurs du fournisseur."""

    def test_unavailable_keeps_status_code(self):
        error = ProviderUnavailableError("Reponse TMDB 503", status_code=503)
        assert error.status_code == 503
        assert str(error) == "Reponse TMDB 503"

    def test_unavailable_without_response(self):
        assert ProviderUnavailableError("Timeout TMDB").status_code is None

    def test_not_found_carries_key(self):
        error = ContentNotFoundError(999, MediaKind.TV)
        assert error.external_id == 999
        assert error.media_kind is MediaKind.TV
        assert "TV 999" in str(error)
