"""
Tests pour la traduction des erreurs SQLAlchemy en conflits du domaine.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from geekflex.core.ports.repositories import DuplicateKeyConflict, LockConflict
from geekflex.infrastructure.persistence.repositories.errors import (
    is_lock_error,
    translate_conflicts,
)


def _operational(message: str) -> OperationalError:
    return OperationalError("UPDATE contents", {}, Exception(message))


class TestIsLockError:
    """Tests pour is_lock_error."""

    @pytest.mark.parametrize(
        "message",
        [
            "database is locked",
            "deadlock detected",
            "Lock wait timeout exceeded; try restarting transaction",
            "could not obtain lock on row in relation \"contents\"",
            "could not serialize access due to concurrent update",
        ],
    )
    def test_lock_messages(self, message: str) -> None:
        assert is_lock_error(_operational(message))

    def test_other_operational_error(self) -> None:
        assert not is_lock_error(_operational("no such table: contents"))


class TestTranslateConflicts:
    """Tests pour translate_conflicts."""

    def test_integrity_error_becomes_duplicate(self) -> None:
        session = MagicMock()

        with pytest.raises(DuplicateKeyConflict):
            with translate_conflicts(session):
                raise IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))
        session.rollback.assert_called_once()

    def test_lock_error_becomes_lock_conflict(self) -> None:
        session = MagicMock()

        with pytest.raises(LockConflict):
            with translate_conflicts(session):
                raise _operational("database is locked")
        session.rollback.assert_called_once()

    def test_other_operational_error_propagates(self) -> None:
        session = MagicMock()

        with pytest.raises(OperationalError):
            with translate_conflicts(session):
                raise _operational("no such table: contents")
        session.rollback.assert_called_once()
