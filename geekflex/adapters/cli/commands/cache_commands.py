"""
Commandes CLI du cache de contenus : initialisation, reconciliation,
materialisation d'un titre.
"""

import asyncio
from typing import Annotated, Optional

import typer
from rich.table import Table

from geekflex.adapters.cli.helpers import console, suppress_loguru, with_container
from geekflex.core.ports.api_clients import ContentNotFoundError, ProviderUnavailableError
from geekflex.core.value_objects import MediaKind
from geekflex.infrastructure.persistence.database import get_engine, init_db
from geekflex.utils.constants import CATEGORY_SCHEDULES, find_schedule


def init_database() -> None:
    """Cree les tables de la base de donnees si necessaire."""
    from geekflex.config import Settings

    settings = Settings()
    init_db(get_engine(settings.database_url))
    console.print(f"[green]Base initialisee:[/green] {settings.database_url}")


def reconcile(
    category: Annotated[
        Optional[str],
        typer.Argument(help="Categorie a reconcilier (toutes si absente)"),
    ] = None,
) -> None:
    """Reconcilie une categorie TMDB (ou toutes) avec le cache local."""
    if category is not None:
        try:
            schedules = [find_schedule(category)]
        except KeyError as e:
            console.print(f"[red]{e.args[0]}[/red]")
            raise typer.Exit(code=1)
    else:
        schedules = list(CATEGORY_SCHEDULES)

    results = asyncio.run(_reconcile_async(None if category is None else schedules))

    table = Table(title="Reconciliation")
    table.add_column("Categorie", style="cyan")
    table.add_column("Etat")
    table.add_column("Recus", justify="right")
    table.add_column("Crees", justify="right")
    table.add_column("Mis a jour", justify="right")
    table.add_column("Tags", justify="right")

    failed = 0
    for schedule, result in zip(schedules, results):
        if result is None:
            failed += 1
            table.add_row(schedule.category, "[red]erreur[/red]", "-", "-", "-", "-")
            continue
        if not result.succeeded:
            failed += 1
        state = "[green]ok[/green]" if result.succeeded else f"[yellow]{result.state.value}[/yellow]"
        table.add_row(
            schedule.category,
            state,
            str(result.fetched),
            str(result.inserted),
            str(result.updated),
            str(result.tagged),
        )

    console.print(table)
    if failed:
        raise typer.Exit(code=1)


@with_container()
async def _reconcile_async(container, schedules=None):
    """Implementation async de la commande reconcile (toutes les categories si None)."""
    scheduler = container.scheduler()
    if schedules is None:
        return await scheduler.run_all()
    return [await scheduler.run_category(schedule) for schedule in schedules]


def materialize(
    external_id: Annotated[int, typer.Argument(help="ID TMDB du titre")],
    kind: Annotated[
        str,
        typer.Option("--kind", "-k", help="Type de contenu: movie ou tv"),
    ] = "movie",
) -> None:
    """Copie un titre TMDB dans le cache (sans effet s'il y est deja)."""
    try:
        media_kind = MediaKind.parse(kind)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)

    try:
        record = asyncio.run(_materialize_async(external_id, media_kind))
    except ContentNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)
    except ProviderUnavailableError as e:
        console.print(f"[red]TMDB indisponible:[/red] {e}")
        raise typer.Exit(code=2)

    console.print(
        f"[green]{record.title}[/green] "
        f"(id={record.id}, {record.media_kind.value} {record.external_id})"
    )


@with_container()
async def _materialize_async(container, external_id: int, media_kind: MediaKind):
    """Implementation async de la commande materialize."""
    service = container.content_service()
    with suppress_loguru():
        return await service.get_or_create(external_id, media_kind)
