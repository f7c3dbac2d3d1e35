"""REST API server command."""

import json
import os
from typing import Annotated

import typer
import uvicorn
from fastapi import FastAPI
from rich.console import Console

from cueline.api.app import create_app
from cueline.cli.utils import ConfigOption, DbPathOption, load_settings
from cueline.config import CueLineSettings

console = Console()

# Resolved settings handed to the reload worker process.
SERVE_SETTINGS_ENV = "CUELINE_SERVE_SETTINGS"


def create_reload_app() -> FastAPI:
    """App factory for the reload worker, using the settings ``serve`` resolved."""
    payload = os.environ.get(SERVE_SETTINGS_ENV)
    if not payload:
        return create_app()
    return create_app(CueLineSettings(**json.loads(payload)))


def serve_command(
    host: Annotated[
        str | None, typer.Option("--host", "-h", help="API host address")
    ] = None,
    port: Annotated[
        int | None, typer.Option("--port", "-p", help="API port number")
    ] = None,
    reload: Annotated[
        bool, typer.Option("--reload", "-r", help="Enable auto-reload")
    ] = False,
    db_path: DbPathOption = None,
    config: ConfigOption = None,
) -> None:
    """Start the REST API server."""
    settings = load_settings(config, db_path)
    host = host or settings.api_host
    port = port or settings.api_port

    console.print("[blue]Starting CueLine REST API server...[/blue]")
    console.print(f"[dim]Host: {host}:{port}[/dim]")
    console.print(f"[dim]Docs: http://{host}:{port}/api/docs[/dim]")

    if reload:
        os.environ[SERVE_SETTINGS_ENV] = settings.model_dump_json()
        uvicorn.run(
            "cueline.cli.commands.server:create_reload_app",
            factory=True,
            host=host,
            port=port,
            reload=True,
            log_level=settings.log_level.lower(),
        )
        return

    uvicorn.run(
        create_app(settings),
        host=host,
        port=port,
        log_level=settings.log_level.lower(),
    )
