"""
Tests pour ContentMaterializer.get_or_create.

Verifie sur une vraie base SQLite:
- Un premier acces appelle TMDB une fois, le suivant aucune
- Des appels concurrents sur la meme cle ne creent qu'une ligne
- Les erreurs du fournisseur sont propagees sans rien ecrire
- Un conflit d'unicite sans ligne a la relecture remonte
- Les lectures du stockage s'executent hors de la boucle, en parallele
"""

import asyncio
import threading
from unittest.mock import MagicMock

import pytest
from sqlmodel import Session, select

from geekflex.core.entities.content import ContentRecord
from geekflex.core.ports.api_clients import ContentNotFoundError, ProviderUnavailableError
from geekflex.core.ports.repositories import (
    DuplicateKeyConflict,
    IContentRepository,
    LockConflict,
)
from geekflex.core.value_objects import MediaKind
from geekflex.infrastructure.persistence.models import ContentModel
from geekflex.services.materializer import ContentMaterializer
from tests.fixtures.fake_provider import FakeProvider, make_detail


def _count_contents(engine) -> int:
    with Session(engine) as session:
        return len(session.exec(select(ContentModel)).all())


@pytest.fixture
def materializer(content_repository_factory, fake_provider: FakeProvider) -> ContentMaterializer:
    return ContentMaterializer(
        content_repository_factory=content_repository_factory,
        provider=fake_provider,
        language="ko-KR",
        min_wait=0,
        max_wait=0.001,
    )


def _mock_repository() -> MagicMock:
    repo = MagicMock(spec=IContentRepository)
    repo.__enter__.return_value = repo
    return repo


class TestGetOrCreate:
    """Chemin nominal: lecture, creation, relecture."""

    @pytest.mark.asyncio
    async def test_miss_then_hit(self, materializer, fake_provider, engine):
        fake_provider.details[(19995, MediaKind.MOVIE)] = make_detail(19995, title="아바타")

        first = await materializer.get_or_create(19995, MediaKind.MOVIE)
        second = await materializer.get_or_create(19995, MediaKind.MOVIE)

        assert first.id is not None
        assert first.title == "아바타"
        assert second.id == first.id
        assert fake_provider.detail_calls == [(19995, MediaKind.MOVIE)]
        assert _count_contents(engine) == 1

    @pytest.mark.asyncio
    async def test_existing_row_needs_no_provider_call(
        self, materializer, fake_provider, content_repository_factory
    ):
        with content_repository_factory() as repo:
            existing = repo.insert(ContentRecord(external_id=550, media_kind=MediaKind.MOVIE, title="파이트 클럽"))

        record = await materializer.get_or_create(550, MediaKind.MOVIE)

        assert record.id == existing.id
        assert fake_provider.detail_calls == []

    @pytest.mark.asyncio
    async def test_media_kind_is_part_of_the_key(self, materializer, fake_provider, engine):
        """Le meme ID TMDB peut designer un film et une serie distincts."""
        fake_provider.details[(1399, MediaKind.MOVIE)] = make_detail(1399, MediaKind.MOVIE)
        fake_provider.details[(1399, MediaKind.TV)] = make_detail(1399, MediaKind.TV)

        movie = await materializer.get_or_create(1399, MediaKind.MOVIE)
        tv = await materializer.get_or_create(1399, MediaKind.TV)

        assert movie.id != tv.id
        assert tv.media_kind is MediaKind.TV
        assert _count_contents(engine) == 2

    @pytest.mark.asyncio
    async def test_concurrent_calls_create_a_single_row(self, materializer, fake_provider, engine):
        """Tous les appelants ratent la lecture, un seul insert gagne."""
        fake_provider.details[(27205, MediaKind.MOVIE)] = make_detail(27205)
        fake_provider.detail_barrier = asyncio.Barrier(5)

        results = await asyncio.gather(
            *(materializer.get_or_create(27205, MediaKind.MOVIE) for _ in range(5))
        )

        assert len({record.id for record in results}) == 1
        assert len(fake_provider.detail_calls) == 5
        assert _count_contents(engine) == 1

    @pytest.mark.asyncio
    async def test_slow_store_reads_overlap(self, fake_provider):
        """Cinq lectures lentes se recouvrent : aucune ne bloque la boucle."""
        cached = ContentRecord(id=3, external_id=550, media_kind=MediaKind.MOVIE, title="Fight Club")
        readers = threading.Barrier(5, timeout=2)
        loop_thread = threading.get_ident()
        reader_threads = []

        def slow_read(external_id, media_kind):
            reader_threads.append(threading.get_ident())
            # Ne passe que si les cinq lectures sont en cours en meme temps
            readers.wait()
            return cached

        repo = _mock_repository()
        repo.get_by_natural_key.side_effect = slow_read
        materializer = ContentMaterializer(lambda: repo, fake_provider, min_wait=0, max_wait=0.001)

        results = await asyncio.gather(
            *(materializer.get_or_create(550, MediaKind.MOVIE) for _ in range(5))
        )

        assert all(record is cached for record in results)
        assert loop_thread not in reader_threads
        assert fake_provider.detail_calls == []


class TestErrors:
    """Propagation des erreurs."""

    @pytest.mark.asyncio
    async def test_provider_unavailable_propagates(self, materializer, fake_provider, engine):
        fake_provider.detail_error = ProviderUnavailableError("Timeout TMDB")

        with pytest.raises(ProviderUnavailableError):
            await materializer.get_or_create(19995, MediaKind.MOVIE)
        assert _count_contents(engine) == 0

    @pytest.mark.asyncio
    async def test_not_found_propagates(self, materializer, engine):
        with pytest.raises(ContentNotFoundError):
            await materializer.get_or_create(999999999, MediaKind.MOVIE)
        assert _count_contents(engine) == 0

    @pytest.mark.asyncio
    async def test_duplicate_without_winner_is_raised(self, fake_provider):
        repo = _mock_repository()
        repo.get_by_natural_key.return_value = None
        repo.insert.side_effect = DuplicateKeyConflict("UNIQUE constraint failed")
        fake_provider.details[(1, MediaKind.MOVIE)] = make_detail(1)
        materializer = ContentMaterializer(lambda: repo, fake_provider, min_wait=0, max_wait=0.001)

        with pytest.raises(DuplicateKeyConflict):
            await materializer.get_or_create(1, MediaKind.MOVIE)
        assert repo.get_by_natural_key.call_count == 2

    @pytest.mark.asyncio
    async def test_lock_conflict_on_insert_is_retried(self, fake_provider):
        repo = _mock_repository()
        repo.get_by_natural_key.return_value = None
        created = ContentRecord(id=7, external_id=1, media_kind=MediaKind.MOVIE, title="Titre 1")
        repo.insert.side_effect = [LockConflict("database is locked"), created]
        fake_provider.details[(1, MediaKind.MOVIE)] = make_detail(1)
        materializer = ContentMaterializer(lambda: repo, fake_provider, min_wait=0, max_wait=0.001)

        record = await materializer.get_or_create(1, MediaKind.MOVIE)

        assert record.id == 7
        assert repo.insert.call_count == 2
        assert len(fake_provider.detail_calls) == 1

    @pytest.mark.asyncio
    async def test_unexpected_persistence_error_propagates(self, fake_provider):
        repo = _mock_repository()
        repo.get_by_natural_key.return_value = None
        repo.insert.side_effect = RuntimeError("disk I/O error")
        fake_provider.details[(1, MediaKind.MOVIE)] = make_detail(1)
        materializer = ContentMaterializer(lambda: repo, fake_provider, min_wait=0, max_wait=0.001)

        with pytest.raises(RuntimeError):
            await materializer.get_or_create(1, MediaKind.MOVIE)
        assert repo.insert.call_count == 1
