"""
Application FastAPI de GeekFlex.

Initialise l'application web avec le Container DI, monte les routes et
demarre le scheduler de reconciliation pendant la duree de vie du serveur.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from loguru import logger

from ..container import Container
from .errors import register_exception_handlers
from .routes.contents import router as contents_router
from .routes.movies import router as movies_router
from .routes.tv import router as tv_router


def create_app(container: Optional[Container] = None) -> FastAPI:
    """
    Cree l'application FastAPI.

    Args:
        container: Container DI a utiliser (un nouveau par defaut)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialise la base et le scheduler au demarrage, les arrete a l'arret."""
        app_container = container or Container()
        app_container.database.init()
        app.state.container = app_container

        settings = app_container.config()
        scheduler = None
        if settings.scheduler_enabled:
            scheduler = app_container.scheduler()
            scheduler.start()
        else:
            logger.info("Scheduler de reconciliation desactive")

        yield

        if scheduler is not None:
            scheduler.shutdown()
        await app_container.tmdb_client().close()

    app = FastAPI(title="GeekFlex", lifespan=lifespan)
    register_exception_handlers(app)

    app.include_router(movies_router)
    app.include_router(tv_router)
    app.include_router(contents_router)
    return app


app = create_app()
