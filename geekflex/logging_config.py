"""
Configuration de loguru pour geekflex.

Deux sorties :
- la console, pour suivre une passe de reconciliation ou un materialize,
  prefixee par le contexte lie (categorie, contenu)
- un fichier JSON tournant, un objet par ligne, contexte lie compris
"""

import sys

from loguru import logger

from geekflex.config import Settings

# Cles liees par les services via logger.bind(...)
CONTEXT_KEYS = ("category", "external_id", "media_kind")


def _console_format(record) -> str:
    """Format console, avec le contexte lie present dans l'enregistrement."""
    context = " ".join(
        f"{key}={{extra[{key}]}}" for key in CONTEXT_KEYS if key in record["extra"]
    )
    prefix = f"<magenta>[{context}]</magenta> " if context else ""
    return (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan> | "
        f"{prefix}<level>{{message}}</level>\n{{exception}}"
    )


def configure_logging(settings: Settings, verbose: bool = False) -> None:
    """
    Remplace les handlers loguru par ceux de l'application.

    Args:
        settings: Niveau, fichier, rotation et retention des logs
        verbose: Force le niveau DEBUG sur la console
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else settings.log_level,
        format=_console_format,
        colorize=True,
    )

    settings.log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        settings.log_file,
        level="DEBUG",  # Garde les tentatives de retry
        format="{message}",
        serialize=True,
        rotation=settings.log_rotation_size,
        retention=settings.log_retention_count,
        compression="zip",
        enqueue=True,  # Jobs du planificateur et threads du stockage
    )

    logger.debug(f"Logs ecrits dans {settings.log_file}")
