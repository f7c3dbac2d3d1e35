"""Script browsing and editing commands."""

from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cueline.api.v1.schemas import (
    ScriptDetailResponse,
    ScriptSummaryResponse,
)
from cueline.cli.utils import (
    ConfigOption,
    DbPathOption,
    handle_error,
    load_settings,
    open_store,
    print_json,
)
from cueline.exceptions import CueLineError

console = Console()

JsonOption = Annotated[
    bool, typer.Option("--json", help="Output as JSON instead of a table")
]


def list_command(
    json_output: JsonOption = False,
    db_path: DbPathOption = None,
    config: ConfigOption = None,
) -> None:
    """List all scripts, alphabetically by title."""
    settings = load_settings(config, db_path)
    try:
        with open_store(settings) as store:
            scripts = store.list_scripts()
    except CueLineError as e:
        handle_error(console, e)

    if json_output:
        print_json(
            console, [ScriptSummaryResponse.model_validate(s) for s in scripts]
        )
        return

    if not scripts:
        console.print("[yellow]No scripts found.[/yellow]")
        console.print("Run [bold]cueline seed[/bold] to add the sample scripts.")
        return

    table = Table(title="Scripts", show_header=True, header_style="bold cyan")
    table.add_column("ID", justify="right")
    table.add_column("Title", style="green")
    table.add_column("Description")
    table.add_column("Characters", justify="right")
    table.add_column("Lines", justify="right")

    for script in scripts:
        table.add_row(
            str(script.id),
            escape(script.title),
            escape(script.description or ""),
            str(script.character_count),
            str(script.dialogue_count),
        )

    console.print(table)


def show_command(
    script_id: Annotated[str, typer.Argument(help="Script ID")],
    json_output: JsonOption = False,
    db_path: DbPathOption = None,
    config: ConfigOption = None,
) -> None:
    """Show a script with its characters and dialogue lines."""
    settings = load_settings(config, db_path)
    try:
        with open_store(settings) as store:
            script = store.get_script(script_id)
    except CueLineError as e:
        handle_error(console, e)

    if json_output:
        print_json(console, ScriptDetailResponse.model_validate(script))
        return

    console.print(f"[bold]{escape(script.title)}[/bold] [dim](#{script.id})[/dim]")
    if script.description:
        console.print(escape(script.description))

    if script.characters:
        names = ", ".join(
            f"{escape(character.name)} [dim](#{character.id})[/dim]"
            for character in script.characters
        )
        console.print(f"Characters: {names}")
    else:
        console.print("[yellow]No characters yet.[/yellow]")

    if not script.dialogues:
        console.print("[yellow]No dialogue lines yet.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right")
    table.add_column("Character", style="green")
    table.add_column("Line")
    table.add_column("Audio", style="dim")
    for line in script.dialogues:
        table.add_row(
            str(line.line_number),
            escape(line.character.name) if line.character else "Unknown",
            escape(line.content),
            escape(line.audio_path or ""),
        )
    console.print(table)


def add_script_command(
    title: Annotated[str, typer.Argument(help="Script title")],
    description: Annotated[
        str | None, typer.Option("--description", help="Script description")
    ] = None,
    db_path: DbPathOption = None,
    config: ConfigOption = None,
) -> None:
    """Create a new script."""
    settings = load_settings(config, db_path)
    try:
        with open_store(settings) as store:
            script = store.create_script(title, description)
    except CueLineError as e:
        handle_error(console, e)

    console.print(
        f"[green]✓[/green] Created script [bold]{script.title}[/bold] (#{script.id})"
    )


def add_character_command(
    script_id: Annotated[str, typer.Argument(help="Script ID")],
    name: Annotated[str, typer.Argument(help="Character name")],
    description: Annotated[
        str | None, typer.Option("--description", help="Character notes")
    ] = None,
    db_path: DbPathOption = None,
    config: ConfigOption = None,
) -> None:
    """Add a character to a script."""
    settings = load_settings(config, db_path)
    try:
        with open_store(settings) as store:
            character = store.add_character(script_id, name, description)
    except CueLineError as e:
        handle_error(console, e)

    console.print(
        f"[green]✓[/green] Added character [bold]{character.name}[/bold] "
        f"(#{character.id})"
    )


def add_line_command(
    script_id: Annotated[str, typer.Argument(help="Script ID")],
    character_id: Annotated[str, typer.Argument(help="Speaking character ID")],
    content: Annotated[str, typer.Argument(help="Line text")],
    audio: Annotated[
        str | None, typer.Option("--audio", help="Audio path or URL for the line")
    ] = None,
    db_path: DbPathOption = None,
    config: ConfigOption = None,
) -> None:
    """Append a dialogue line to a script."""
    settings = load_settings(config, db_path)
    try:
        with open_store(settings) as store:
            line = store.add_dialogue(script_id, character_id, content, audio)
    except CueLineError as e:
        handle_error(console, e)

    speaker = line.character.name if line.character else "Unknown"
    console.print(
        f"[green]✓[/green] Added line {line.line_number} for [bold]{speaker}[/bold]"
    )
