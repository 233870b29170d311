"""
Fixtures pytest partagees pour les tests GeekFlex.

Ce module contient les fixtures communes utilisees dans les tests:
- Settings de test avec base SQLite temporaire
- Engine initialise et fabriques de repositories (session neuve par appel)
- Fournisseur TMDB en memoire
"""

from pathlib import Path

import pytest
from sqlalchemy import Engine
from sqlmodel import Session

from geekflex.config import Settings
from geekflex.infrastructure.persistence.database import get_engine, init_db
from geekflex.infrastructure.persistence.repositories import (
    SQLModelCategoryTagRepository,
    SQLModelContentRepository,
)
from tests.fixtures.fake_provider import FakeProvider


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec base et logs temporaires.

    Les delais de retry sont reduits pour garder des tests rapides et le
    scheduler est desactive.
    """
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'geekflex_test.db'}",
        tmdb_api_key="test_api_key",
        conflict_max_attempts=3,
        conflict_min_wait_seconds=0.0,
        conflict_max_wait_seconds=0.001,
        scheduler_enabled=False,
        log_file=tmp_path / "logs" / "geekflex.log",
    )


@pytest.fixture
def engine(test_settings: Settings) -> Engine:
    """Engine SQLite fichier avec les tables creees."""
    engine = init_db(get_engine(test_settings.database_url))
    yield engine
    engine.dispose()


@pytest.fixture
def content_repository_factory(engine: Engine):
    """Fabrique de SQLModelContentRepository, une session neuve par appel."""
    return lambda: SQLModelContentRepository(Session(engine))


@pytest.fixture
def tag_repository_factory(engine: Engine):
    """Fabrique de SQLModelCategoryTagRepository, une session neuve par appel."""
    return lambda: SQLModelCategoryTagRepository(Session(engine))


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()
