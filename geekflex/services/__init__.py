"""
Services applicatifs GeekFlex.

- ContentMaterializer : get-or-create d'un contenu a la demande
- CategoryReconciliationService : reconciliation d'une categorie TMDB
- ReconciliationScheduler : declenchement periodique des reconciliations
- ContentService : lecture du cache pour le web et le CLI
"""

from geekflex.services.content_service import ContentService
from geekflex.services.materializer import ContentMaterializer
from geekflex.services.reconciliation import (
    CategoryReconciliationService,
    ReconciliationAborted,
    ReconciliationResult,
    ReconciliationState,
)
from geekflex.services.scheduler import ReconciliationScheduler

__all__ = [
    "ContentService",
    "ContentMaterializer",
    "CategoryReconciliationService",
    "ReconciliationAborted",
    "ReconciliationResult",
    "ReconciliationState",
    "ReconciliationScheduler",
]
