"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour les interfaces CLI et Web :
engine et sessions SQLModel, repositories, client TMDB et services du cache.
"""

from dependency_injector import containers, providers
from sqlmodel import Session

from .adapters.api.tmdb_client import TMDBClient
from .config import Settings
from .infrastructure.persistence.database import get_engine, init_db
from .infrastructure.persistence.repositories import (
    SQLModelCategoryTagRepository,
    SQLModelContentRepository,
)
from .services.content_service import ContentService
from .services.materializer import ContentMaterializer
from .services.reconciliation import CategoryReconciliationService
from .services.scheduler import ReconciliationScheduler


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Cree les tables une fois
        service = container.reconciliation_service()
        result = await service.reconcile_category("NOW_PLAYING", "/movie/now_playing")

    Les services recoivent les fabriques de repositories (`.provider`) et non
    des instances : chaque appel ouvre une session neuve, donc une
    transaction courte par unite de travail.
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Engine partage par toutes les sessions
    engine = providers.Singleton(get_engine, database_url=config.provided.database_url)

    # Database - Resource pour initialisation unique
    database = providers.Resource(init_db, engine=engine)

    # Session - nouvelle session a chaque appel
    session = providers.Factory(Session, engine)

    # Repositories - Factory pour nouvelle instance avec session fraiche
    content_repository = providers.Factory(
        SQLModelContentRepository,
        session=session,
    )
    category_tag_repository = providers.Factory(
        SQLModelCategoryTagRepository,
        session=session,
    )

    # Client API - Singleton, le client httpx est cree a la demande
    tmdb_client = providers.Singleton(
        TMDBClient,
        api_key=config.provided.tmdb_api_key,
        base_url=config.provided.tmdb_base_url,
        timeout=config.provided.tmdb_timeout_seconds,
    )

    materializer = providers.Factory(
        ContentMaterializer,
        content_repository_factory=content_repository.provider,
        provider=tmdb_client,
        language=config.provided.tmdb_language,
        max_attempts=config.provided.conflict_max_attempts,
        min_wait=config.provided.conflict_min_wait_seconds,
        max_wait=config.provided.conflict_max_wait_seconds,
    )

    reconciliation_service = providers.Factory(
        CategoryReconciliationService,
        content_repository_factory=content_repository.provider,
        tag_repository_factory=category_tag_repository.provider,
        provider=tmdb_client,
        language=config.provided.tmdb_language,
        region=config.provided.tmdb_region,
        max_attempts=config.provided.conflict_max_attempts,
        min_wait=config.provided.conflict_min_wait_seconds,
        max_wait=config.provided.conflict_max_wait_seconds,
    )

    content_service = providers.Factory(
        ContentService,
        content_repository_factory=content_repository.provider,
        materializer=materializer,
    )

    # Scheduler - Singleton, demarre et arrete par le lifespan FastAPI
    scheduler = providers.Singleton(
        ReconciliationScheduler,
        reconciliation_service=reconciliation_service,
        timezone=config.provided.scheduler_timezone,
    )
