"""
Planification des reconciliations de categories.

Un job APScheduler par categorie, chacun sur son propre declencheur cron.
Les erreurs d'une categorie sont journalisees et n'affectent jamais les
autres.
"""

from collections.abc import Sequence
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from loguru import logger

from geekflex.services.reconciliation import (
    CategoryReconciliationService,
    ReconciliationResult,
)
from geekflex.utils.constants import CATEGORY_SCHEDULES, CategorySchedule


class ReconciliationScheduler:
    """
    Declenche la reconciliation de chaque categorie a intervalles fixes.

    Example:
        scheduler = ReconciliationScheduler(reconciliation_service, timezone="Asia/Seoul")
        scheduler.start()
        ...
        scheduler.shutdown()
    """

    def __init__(
        self,
        reconciliation_service: CategoryReconciliationService,
        schedules: Sequence[CategorySchedule] = CATEGORY_SCHEDULES,
        timezone: str = "Asia/Seoul",
    ) -> None:
        self._service = reconciliation_service
        self._schedules = tuple(schedules)
        self._timezone = timezone
        self._scheduler: Optional[AsyncIOScheduler] = None

    @property
    def schedules(self) -> tuple[CategorySchedule, ...]:
        return self._schedules

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    async def run_category(self, schedule: CategorySchedule) -> Optional[ReconciliationResult]:
        """
        Reconcilie une categorie en isolant toute erreur.

        Returns:
            Le bilan de la passe, ou None si elle a leve une exception
        """
        try:
            return await self._service.reconcile_category(schedule.category, schedule.listing_path)
        except Exception:
            logger.exception(f"Reconciliation {schedule.category} en echec")
            return None

    async def run_all(self) -> list[Optional[ReconciliationResult]]:
        """Reconcilie toutes les categories une fois, l'une apres l'autre."""
        results = []
        for schedule in self._schedules:
            results.append(await self.run_category(schedule))
        return results

    def build(self) -> AsyncIOScheduler:
        """Cree le scheduler APScheduler avec un job par categorie (sans le demarrer)."""
        scheduler = AsyncIOScheduler(timezone=self._timezone)
        for schedule in self._schedules:
            scheduler.add_job(
                self.run_category,
                trigger=CronTrigger.from_crontab(schedule.crontab, timezone=self._timezone),
                args=[schedule],
                id=f"reconcile_{schedule.category.lower()}",
                name=f"Reconciliation {schedule.category}",
                max_instances=1,
                coalesce=True,
                replace_existing=True,
            )
        return scheduler

    def start(self) -> None:
        """Demarre le scheduler dans la boucle asyncio courante."""
        if self.running:
            return
        self._scheduler = self.build()
        self._scheduler.start()
        for job in self._scheduler.get_jobs():
            logger.info(f"Job planifie: {job.name} ({job.trigger})")

    def shutdown(self) -> None:
        """Arrete le scheduler sans attendre les jobs en cours."""
        if self._scheduler is not None and self._scheduler.running:
            self._scheduler.shutdown(wait=False)
        self._scheduler = None
