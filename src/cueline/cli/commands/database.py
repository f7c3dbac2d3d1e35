"""Database setup commands."""

from typing import Annotated

import typer
from rich.console import Console

from cueline.cli.utils import (
    ConfigOption,
    DbPathOption,
    handle_error,
    load_settings,
    open_store,
)
from cueline.database import DatabaseInitializer, seed_sample_data
from cueline.exceptions import CueLineError

console = Console()


def init_command(
    db_path: DbPathOption = None,
    force: Annotated[
        bool,
        typer.Option(
            "--force", "-f", help="Overwrite an existing database without asking"
        ),
    ] = False,
    config: ConfigOption = None,
) -> None:
    """Initialize the CueLine SQLite database."""
    settings = load_settings(config, db_path)
    target = settings.database_path

    if (
        target.exists()
        and not force
        and typer.confirm(f"Database exists at {target}. Overwrite?", default=False)
    ):
        force = True

    try:
        path = DatabaseInitializer().initialize_database(
            settings=settings, force=force
        )
    except FileExistsError as e:
        console.print(f"[yellow]{e}[/yellow]")
        raise typer.Exit(1) from e
    except CueLineError as e:
        handle_error(console, e)

    console.print(f"[green]✓[/green] Database initialized at {path}")


def seed_command(
    db_path: DbPathOption = None,
    config: ConfigOption = None,
) -> None:
    """Add the sample scripts to an empty database."""
    settings = load_settings(config, db_path)
    try:
        with open_store(settings) as store:
            created = seed_sample_data(store)
    except CueLineError as e:
        handle_error(console, e)

    if created:
        console.print(f"[green]✓[/green] Added {created} sample scripts")
    else:
        console.print("[yellow]Database already has scripts; nothing seeded.[/yellow]")
