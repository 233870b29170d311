"""
Implementations SQLModel des repositories.

Ce module contient les implementations concretes des interfaces repository
definies dans geekflex/core/ports/repositories.py.

Chaque repository :
- Herite de l'interface ABC correspondante du domaine
- Recoit une session SQLModel dediee via injection de dependances
- Convertit entre entites de domaine (dataclass) et modeles DB (SQLModel)
- Traduit les erreurs SQLAlchemy en DuplicateKeyConflict / LockConflict
"""

from geekflex.infrastructure.persistence.repositories.category_tag_repository import (
    SQLModelCategoryTagRepository,
)
from geekflex.infrastructure.persistence.repositories.content_repository import (
    SQLModelContentRepository,
)

__all__ = [
    "SQLModelContentRepository",
    "SQLModelCategoryTagRepository",
]
