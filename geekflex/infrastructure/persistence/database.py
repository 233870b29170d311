"""
Configuration de la base de donnees pour GeekFlex.

Ce module fournit :
- Engine SQLAlchemy (SQLite par defaut, toute URL SQLAlchemy acceptee)
- Fonction d'initialisation des tables

La base de donnees est configuree via GEEKFLEX_DATABASE_URL
(defaut: sqlite:///geekflex.db).
"""

from pathlib import Path
from typing import Optional

from loguru import logger
from sqlalchemy import Engine
from sqlmodel import SQLModel, create_engine

# Engines deja crees, par URL
_engines: dict[str, Engine] = {}


def get_engine(database_url: Optional[str] = None) -> Engine:
    """
    Retourne l'engine associe a une URL, en le creant si necessaire.

    Sans URL, utilise la configuration de l'application.
    """
    if database_url is None:
        from geekflex.config import Settings

        database_url = Settings().database_url

    engine = _engines.get(database_url)
    if engine is not None:
        return engine

    connect_args = {}
    if database_url.startswith("sqlite"):
        # Les sessions sont ouvertes depuis plusieurs threads (uvicorn, scheduler)
        connect_args["check_same_thread"] = False

        # Creer le repertoire parent si l'URL est un fichier SQLite
        if database_url.startswith("sqlite:///") and ":memory:" not in database_url:
            db_path = Path(database_url.replace("sqlite:///", "", 1))
            db_path.parent.mkdir(exist_ok=True, parents=True)

    engine = create_engine(database_url, echo=False, connect_args=connect_args)
    _engines[database_url] = engine
    return engine


def init_db(engine: Optional[Engine] = None) -> Engine:
    """
    Initialise la base de donnees en creant toutes les tables.

    Importe les modeles pour enregistrer leurs metadonnees dans
    SQLModel.metadata, puis cree les tables (et leurs contraintes d'unicite)
    si elles n'existent pas deja. Idempotent.

    Returns:
        L'engine initialise
    """
    # L'import est fait ici pour eviter les imports circulaires
    from geekflex.infrastructure.persistence import models  # noqa: F401

    engine = engine or get_engine()
    SQLModel.metadata.create_all(engine)
    logger.debug("Tables initialisees", url=str(engine.url))
    return engine
