"""Shared helpers for CLI commands."""

from __future__ import annotations

import json
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated, Any, NoReturn

import typer
from pydantic import BaseModel
from rich.console import Console

from cueline.config import CueLineSettings, get_logger, get_settings_for_cli
from cueline.database.connection_manager import DatabaseConnectionManager
from cueline.database.initializer import DatabaseInitializer
from cueline.database.script_store import ScriptStore
from cueline.exceptions import CueLineError, ValidationError

logger = get_logger(__name__)

DbPathOption = Annotated[
    Path | None,
    typer.Option("--db-path", "-d", help="Path to the SQLite database file"),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Path to configuration file"),
]


def load_settings(
    config: Path | None = None, db_path: Path | None = None
) -> CueLineSettings:
    """Settings for a command, honouring --config and --db-path."""
    overrides = {"database_path": db_path} if db_path else None
    try:
        return get_settings_for_cli(config_file=config, cli_overrides=overrides)
    except FileNotFoundError as e:
        raise typer.BadParameter(str(e), param_hint="--config") from e


@contextmanager
def open_store(settings: CueLineSettings) -> Generator[ScriptStore, None, None]:
    """Open a script store on the configured database, creating the schema if needed."""
    DatabaseInitializer().ensure_database(settings)
    with DatabaseConnectionManager(settings) as manager:
        yield ScriptStore(manager)


def handle_error(console: Console, error: Exception) -> NoReturn:
    """Print a domain error and exit with status 1."""
    logger.debug("Command failed", error=str(error), error_type=type(error).__name__)
    if isinstance(error, ValidationError):
        console.print(f"[red]Validation Error: {error.message}[/red]")
        for field, messages in error.field_errors.items():
            for message in messages:
                console.print(f"[red]  {field}: {message}[/red]")
    elif isinstance(error, CueLineError):
        console.print(f"[red]Error: {error.message}[/red]")
        if error.hint:
            console.print(f"[dim]Hint: {error.hint}[/dim]")
    else:
        console.print(f"[red]Error: {error}[/red]")
    raise typer.Exit(1)


def print_json(console: Console, payload: BaseModel | list[BaseModel] | Any) -> None:
    """Print API-shaped JSON for one model or a list of models."""
    if isinstance(payload, BaseModel):
        data = payload.model_dump(mode="json", by_alias=True)
    elif isinstance(payload, list):
        data = [
            item.model_dump(mode="json", by_alias=True)
            if isinstance(item, BaseModel)
            else item
            for item in payload
        ]
    else:
        data = payload
    console.print_json(json.dumps(data, ensure_ascii=False))
