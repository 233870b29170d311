"""
Politique de retry sur les conflits de verrouillage.

Relance une operation de stockage qui a echoue sur LockConflict, avec un
delai aleatoire borne entre chaque tentative pour eviter que des
reconciliations concurrentes ne relancent toutes au meme instant.

Usage:
    @with_conflict_retry(max_attempts=3, min_wait=0.05, max_wait=0.15)
    async def upsert_entry():
        ...

    run_in_store = threaded_conflict_retry(max_attempts=3)
    record = await run_in_store(repo_call, record)
"""

import asyncio

from loguru import logger
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random,
)

from geekflex.core.ports.repositories import LockConflict


def _log_before_sleep(retry_state: RetryCallState) -> None:
    """Trace chaque nouvelle tentative (niveau WARNING)."""
    error = retry_state.outcome.exception() if retry_state.outcome else None
    wait = retry_state.next_action.sleep if retry_state.next_action else 0
    logger.warning(
        f"Conflit de verrou, tentative {retry_state.attempt_number} echouee, "
        f"nouvel essai dans {wait:.3f}s: {error}"
    )


def with_conflict_retry(
    max_attempts: int = 3,
    min_wait: float = 0.05,
    max_wait: float = 0.15,
):
    """
    Decorateur pour relancer sur LockConflict avec un delai aleatoire.

    Seul LockConflict est relance : les autres erreurs (y compris
    DuplicateKeyConflict, resolu par relecture) sont propagees
    immediatement. Apres la derniere tentative l'erreur d'origine est
    relevee (reraise=True).

    Args:
        max_attempts: Nombre maximum de tentatives (defaut: 3)
        min_wait: Delai minimum entre deux tentatives, en secondes
        max_wait: Delai maximum entre deux tentatives, en secondes

    Returns:
        Decorateur applicable a une fonction sync ou async
    """
    return retry(
        retry=retry_if_exception_type(LockConflict),
        wait=wait_random(min=min_wait, max=max_wait),
        stop=stop_after_attempt(max_attempts),
        before_sleep=_log_before_sleep,
        reraise=True,
    )


def threaded_conflict_retry(
    max_attempts: int = 3,
    min_wait: float = 0.05,
    max_wait: float = 0.15,
):
    """
    Execute une fonction bloquante dans un thread, relancee sur LockConflict.

    Chaque tentative passe par asyncio.to_thread et l'attente entre deux
    tentatives est un asyncio.sleep : la boucle asyncio n'est jamais bloquee
    par le stockage.

    Returns:
        Coroutine function appelee comme asyncio.to_thread(func, *args)
    """
    return with_conflict_retry(max_attempts, min_wait, max_wait)(asyncio.to_thread)
