"""Audio asset commands."""

from typing import Annotated

import typer
from rich.console import Console

from cueline.cli.utils import ConfigOption, handle_error, load_settings
from cueline.exceptions import CueLineError
from cueline.storage import AudioAssetStore

console = Console()


def ensure_audio_command(
    filenames: Annotated[
        list[str] | None,
        typer.Argument(
            help="Files to create; defaults to the configured placeholder set"
        ),
    ] = None,
    config: ConfigOption = None,
) -> None:
    """Create empty placeholder audio files that do not exist yet."""
    settings = load_settings(config)
    store = AudioAssetStore.from_settings(settings)
    try:
        results = store.ensure_placeholders(
            filenames or settings.audio_placeholder_files
        )
    except CueLineError as e:
        handle_error(console, e)

    for result in results:
        if not result.success:
            console.print(f"[red]✗[/red] {result.file}: could not be created")
        elif result.created:
            console.print(f"[green]✓[/green] {result.file}: created")
        else:
            console.print(f"[dim]-[/dim] {result.file}: already exists")

    if not all(result.success for result in results):
        raise typer.Exit(1)
