"""
Module de persistance pour GeekFlex.

Ce module fournit l'infrastructure de stockage utilisant SQLModel (SQLAlchemy).
Il contient :

- database.py : Engine et initialisation des tables
- models.py : Modeles SQLModel representant les tables
- repositories/ : Implementations des ports de stockage

Usage:
    from geekflex.infrastructure.persistence import get_engine, init_db

    engine = init_db(get_engine("sqlite:///geekflex.db"))
"""

from geekflex.infrastructure.persistence.database import (
    get_engine,
    init_db,
)
from geekflex.infrastructure.persistence.models import ContentListTagModel, ContentModel

__all__ = [
    "get_engine",
    "init_db",
    "ContentModel",
    "ContentListTagModel",
]
