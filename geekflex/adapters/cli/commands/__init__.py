"""Sous-package CLI commands - re-exporte les commandes publiques."""

from geekflex.adapters.cli.commands.cache_commands import (
    init_database,
    materialize,
    reconcile,
)

__all__ = [
    "init_database",
    "materialize",
    "reconcile",
]
