"""
Point d'entrée CLI de GeekFlex.

Configure le logging et fournit les commandes CLI du cache de contenus.
"""

from typing import Annotated

import typer
from loguru import logger

from .adapters.cli.commands import init_database, materialize, reconcile
from .config import Settings
from .logging_config import configure_logging

app = typer.Typer(
    name="geekflex",
    help="Cache local des contenus TMDB",
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Logs de niveau DEBUG"),
    ] = False,
) -> None:
    """GeekFlex - Cache et reconciliation des contenus TMDB."""
    settings = Settings()
    configure_logging(settings, verbose=verbose)


app.command(name="init-db")(init_database)
app.command()(reconcile)
app.command()(materialize)


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = Settings()
    typer.echo(f"Base de données : {config.database_url}")
    typer.echo(f"API TMDB : {'activée' if config.tmdb_enabled else 'désactivée'}")
    typer.echo(f"Langue / région : {config.tmdb_language} / {config.tmdb_region}")
    typer.echo(f"Scheduler : {'activé' if config.scheduler_enabled else 'désactivé'}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Adresse d'écoute")] = "0.0.0.0",
    port: Annotated[int, typer.Option(help="Port d'écoute")] = 8000,
    reload: Annotated[bool, typer.Option(help="Rechargement automatique")] = False,
) -> None:
    """Lance le serveur web GeekFlex."""
    import uvicorn

    logger.info(f"Démarrage du serveur sur {host}:{port}")
    uvicorn.run("geekflex.web.app:app", host=host, port=port, reload=reload)


def main() -> None:
    """Point d'entrée de l'application."""
    app()


if __name__ == "__main__":
    main()
