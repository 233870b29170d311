"""
Tests pour les routes REST (FastAPI TestClient).

Le Container reel est utilise avec une base SQLite temporaire ; seuls la
configuration et le client TMDB sont surcharges.
"""

from datetime import date

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from geekflex.container import Container
from geekflex.core.entities.content import ContentRecord
from geekflex.core.ports.api_clients import ProviderUnavailableError
from geekflex.core.value_objects import MediaKind
from geekflex.web.app import create_app
from tests.fixtures.fake_provider import make_detail, make_entry


@pytest.fixture
def container(test_settings, fake_provider):
    container = Container()
    container.config.override(providers.Object(test_settings))
    container.tmdb_client.override(providers.Object(fake_provider))
    yield container
    container.reset_override()


@pytest.fixture
def client(container, engine):
    with TestClient(create_app(container)) as client:
        yield client


def _seed_category(content_repository_factory, tag_repository_factory, category, records):
    with content_repository_factory() as repo:
        ids = [repo.insert(record).id for record in records]
    with tag_repository_factory() as repo:
        repo.replace_category(category, ids, "KR")
    return ids


class TestCategoryRoutes:
    """GET /api/v1/movies/{categorie}."""

    def test_now_playing_sorted_by_release_date(
        self, client, content_repository_factory, tag_repository_factory
    ):
        ids = _seed_category(
            content_repository_factory,
            tag_repository_factory,
            "NOW_PLAYING",
            [
                ContentRecord(external_id=1, media_kind=MediaKind.MOVIE, title="A", release_date=date(2024, 1, 5)),
                ContentRecord(external_id=2, media_kind=MediaKind.MOVIE, title="B", release_date=None),
                ContentRecord(external_id=3, media_kind=MediaKind.MOVIE, title="C", release_date=date(2024, 3, 1)),
            ],
        )

        response = client.get("/api/v1/movies/now-playing")

        assert response.status_code == 200
        assert [item["id"] for item in response.json()] == [ids[2], ids[0], ids[1]]

    def test_empty_category(self, client):
        response = client.get("/api/v1/movies/popular")
        assert response.status_code == 200
        assert response.json() == []

    def test_image_urls_are_absolute(
        self, client, content_repository_factory, tag_repository_factory
    ):
        _seed_category(
            content_repository_factory,
            tag_repository_factory,
            "UPCOMING",
            [
                ContentRecord(
                    external_id=10,
                    media_kind=MediaKind.MOVIE,
                    title="곧 개봉",
                    poster_path="/poster.jpg",
                    genre="액션,SF",
                )
            ],
        )

        item = client.get("/api/v1/movies/upcoming").json()[0]

        assert item["poster_url"] == "https://image.tmdb.org/t/p/w500/poster.jpg"
        assert item["backdrop_url"] is None
        assert item["genres"] == ["액션", "SF"]


class TestTitleRoutes:
    """GET et POST /api/v1/movies/{id} et /api/v1/tv/{id}."""

    def test_detail_miss_then_hit(self, client, fake_provider):
        fake_provider.details[(19995, MediaKind.MOVIE)] = make_detail(19995, title="아바타")

        first = client.get("/api/v1/movies/19995")
        second = client.get("/api/v1/movies/19995")

        assert first.status_code == 200
        assert first.json()["title"] == "아바타"
        assert second.json()["id"] == first.json()["id"]
        assert fake_provider.detail_calls == [(19995, MediaKind.MOVIE)]

    def test_save_returns_envelope(self, client, fake_provider):
        fake_provider.details[(209067, MediaKind.TV)] = make_detail(209067, MediaKind.TV, title="눈물의 여왕")

        response = client.post("/api/v1/tv/209067")

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Contenu enregistre"
        assert body["data"]["media_kind"] == "TV"
        assert body["data"]["external_id"] == 209067

    def test_provider_unavailable_is_502(self, client, fake_provider):
        fake_provider.detail_error = ProviderUnavailableError("Timeout TMDB")

        response = client.get("/api/v1/movies/19995")

        assert response.status_code == 502
        assert response.json() == {
            "success": False,
            "message": "Contenu temporairement indisponible",
            "data": None,
        }

    def test_unknown_title_is_404(self, client):
        response = client.get("/api/v1/tv/999999999")

        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_content_by_internal_id(self, client, fake_provider):
        fake_provider.details[(550, MediaKind.MOVIE)] = make_detail(550)
        created = client.post("/api/v1/movies/550").json()["data"]

        assert client.get(f"/api/v1/contents/{created['id']}").json()["external_id"] == 550
        assert client.get("/api/v1/contents/424242").status_code == 404


class TestSearchRoutes:
    """GET /api/v1/{movies,tv}/search."""

    def test_blank_keyword_is_400(self, client, fake_provider):
        response = client.get("/api/v1/movies/search", params={"keyword": "   "})

        assert response.status_code == 400
        assert fake_provider.search_calls == []

    def test_results_keep_provider_order(self, client, fake_provider):
        fake_provider.search_results = [
            make_entry(76600, "아바타: 물의 길"),
            make_entry(19995, "아바타"),
            make_entry(83121, "아바타 더 라스트 에어벤더", media_kind=MediaKind.TV),
        ]

        response = client.get("/api/v1/movies/search", params={"keyword": "아바타"})

        assert response.status_code == 200
        assert [item["external_id"] for item in response.json()] == [76600, 19995]
        assert fake_provider.search_calls == [("아바타", MediaKind.MOVIE)]

    def test_tv_search(self, client, fake_provider):
        fake_provider.search_results = [make_entry(83121, "아바타", media_kind=MediaKind.TV)]

        response = client.get("/api/v1/tv/search", params={"keyword": "아바타"})

        assert [item["media_kind"] for item in response.json()] == ["TV"]

    def test_search_is_not_cached(self, client, fake_provider, content_repository_factory):
        fake_provider.search_results = [make_entry(19995, "아바타")]

        client.get("/api/v1/movies/search", params={"keyword": "아바타"})

        with content_repository_factory() as repo:
            assert repo.get_by_natural_key(19995, MediaKind.MOVIE) is None


class TestLifespan:
    """Demarrage et arret de l'application."""

    def test_provider_closed_on_shutdown(self, container, engine, fake_provider):
        with TestClient(create_app(container)):
            assert not fake_provider.closed

        assert fake_provider.closed
