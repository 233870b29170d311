"""
Tests unitaires pour la politique de retry sur conflit de verrou.

Ces tests verifient:
- with_conflict_retry relance sur LockConflict
- L'erreur d'origine remonte apres epuisement des tentatives
- Les autres erreurs (DuplicateKeyConflict comprise) ne sont pas relancees
- threaded_conflict_retry execute chaque tentative hors de la boucle asyncio
"""

import threading

import pytest

from geekflex.core.ports.repositories import DuplicateKeyConflict, LockConflict
from geekflex.services.retry import threaded_conflict_retry, with_conflict_retry


class TestWithConflictRetry:
    """Tests pour le decorateur with_conflict_retry."""

    @pytest.mark.asyncio
    async def test_retries_on_lock_conflict(self) -> None:
        call_count = 0

        @with_conflict_retry(max_attempts=3, min_wait=0, max_wait=0.001)
        async def flaky() -> str:
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                raise LockConflict("database is locked")
            return "ok"

        assert await flaky() == "ok"
        assert call_count == 3

    @pytest.mark.asyncio
    async def test_reraises_after_max_attempts(self) -> None:
        call_count = 0

        @with_conflict_retry(max_attempts=3, min_wait=0, max_wait=0.001)
        async def always_locked() -> None:
            nonlocal call_count
            call_count += 1
            raise LockConflict("database is locked")

        with pytest.raises(LockConflict):
            await always_locked()
        assert call_count == 3

    @pytest.mark.asyncio
    async def test_duplicate_key_is_not_retried(self) -> None:
        call_count = 0

        @with_conflict_retry(max_attempts=3, min_wait=0, max_wait=0.001)
        async def duplicate() -> None:
            nonlocal call_count
            call_count += 1
            raise DuplicateKeyConflict("UNIQUE constraint failed")

        with pytest.raises(DuplicateKeyConflict):
            await duplicate()
        assert call_count == 1

    @pytest.mark.asyncio
    async def test_other_errors_are_not_retried(self) -> None:
        call_count = 0

        @with_conflict_retry(max_attempts=3, min_wait=0, max_wait=0.001)
        async def broken() -> None:
            nonlocal call_count
            call_count += 1
            raise ValueError("boom")

        with pytest.raises(ValueError):
            await broken()
        assert call_count == 1

    def test_sync_functions_are_supported(self) -> None:
        call_count = 0

        @with_conflict_retry(max_attempts=2, min_wait=0, max_wait=0.001)
        def flaky() -> int:
            nonlocal call_count
            call_count += 1
            if call_count == 1:
                raise LockConflict("deadlock detected")
            return call_count

        assert flaky() == 2


class TestThreadedConflictRetry:
    """Tests pour threaded_conflict_retry."""

    @pytest.mark.asyncio
    async def test_runs_outside_the_event_loop_thread(self) -> None:
        calls = []

        def locked_twice() -> str:
            calls.append(threading.get_ident())
            if len(calls) < 3:
                raise LockConflict("database is locked")
            return "ok"

        run_in_store = threaded_conflict_retry(max_attempts=3, min_wait=0, max_wait=0.001)

        assert await run_in_store(locked_twice) == "ok"
        assert len(calls) == 3
        assert threading.get_ident() not in calls

    @pytest.mark.asyncio
    async def test_arguments_are_forwarded(self) -> None:
        run_in_store = threaded_conflict_retry()

        assert await run_in_store(max, 3, 7) == 7
