"""
Tests pour l'objet valeur MediaKind.
"""

import pytest

from geekflex.core.value_objects import MediaKind


class TestMediaKind:
    """Tests pour MediaKind."""

    def test_api_segment(self):
        assert MediaKind.MOVIE.api_segment == "movie"
        assert MediaKind.TV.api_segment == "tv"

    @pytest.mark.parametrize(
        "path, expected",
        [
            ("/movie/now_playing", MediaKind.MOVIE),
            ("/movie/top_rated", MediaKind.MOVIE),
            ("/tv/popular", MediaKind.TV),
            ("tv/on_the_air", MediaKind.TV),
        ],
    )
    def test_from_listing_path(self, path, expected):
        assert MediaKind.from_listing_path(path) is expected

    @pytest.mark.parametrize("value", ["movie", "MOVIE", " Movie "])
    def test_parse_movie(self, value):
        assert MediaKind.parse(value) is MediaKind.MOVIE

    def test_parse_tv(self):
        assert MediaKind.parse("tv") is MediaKind.TV

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="Type de contenu inconnu"):
            MediaKind.parse("anime")

    def test_is_a_string(self):
        """La valeur stockee en base est le nom en majuscules."""
        assert MediaKind.TV == "TV"
        assert MediaKind.MOVIE.value == "MOVIE"
