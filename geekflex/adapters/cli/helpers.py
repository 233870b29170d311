"""
Utilitaires partages pour les commandes CLI de GeekFlex.

Ce module fournit :
- console : instance Rich Console partagee
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- with_container : decorateur injectant un container initialise
"""

from contextlib import contextmanager
from functools import wraps

from loguru import logger as loguru_logger
from rich.console import Console

from geekflex.container import Container

console = Console()


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable("geekflex")
    try:
        yield
    finally:
        loguru_logger.enable("geekflex")


def with_container(requires_db: bool = True):
    """
    Decorateur qui injecte un container initialise en premier argument.

    Le client TMDB est ferme a la fin de la commande.

    Args:
        requires_db: Si True (defaut), initialise la base de donnees.

    Usage:
        @with_container()
        async def my_command(container, ...):
            config = container.config()
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            if requires_db:
                container.database.init()
            try:
                return await func(container, *args, **kwargs)
            finally:
                await container.tmdb_client().close()
        return wrapper
    return decorator
