"""
Traduction des erreurs SQLAlchemy en conflits du domaine.

- IntegrityError (contrainte d'unicite) -> DuplicateKeyConflict
- OperationalError de verrouillage -> LockConflict

Les autres erreurs sont propagees telles quelles.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlmodel import Session

from geekflex.core.ports.repositories import DuplicateKeyConflict, LockConflict

# Fragments de messages des moteurs (SQLite, PostgreSQL, MySQL)
_LOCK_MARKERS = (
    "database is locked",
    "database table is locked",
    "deadlock",
    "lock timeout",
    "lock wait timeout",
    "could not obtain lock",
    "could not serialize access",
    "serialization failure",
)


def is_lock_error(error: OperationalError) -> bool:
    """Indique si une OperationalError signale un verrou indisponible."""
    message = str(error.orig if error.orig is not None else error).lower()
    return any(marker in message for marker in _LOCK_MARKERS)


@contextmanager
def translate_conflicts(session: Session) -> Iterator[None]:
    """
    Annule la transaction et traduit les conflits d'ecriture.

    Raises:
        DuplicateKeyConflict: Violation de contrainte d'unicite
        LockConflict: Verrou indisponible
    """
    try:
        yield
    except IntegrityError as e:
        session.rollback()
        raise DuplicateKeyConflict(str(e.orig)) from e
    except OperationalError as e:
        session.rollback()
        if is_lock_error(e):
            raise LockConflict(str(e.orig)) from e
        raise
