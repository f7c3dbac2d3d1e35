"""Interactive rehearsal in the terminal.

The user's lines wait for Enter; every other line is handed to the
transcript audio backend and advances when playback finishes.
"""

from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from cueline.cli.utils import (
    ConfigOption,
    DbPathOption,
    handle_error,
    load_settings,
    open_store,
)
from cueline.exceptions import CueLineError, ValidationError
from cueline.rehearsal import (
    PlayerState,
    RehearsalDriver,
    RehearsalPlayer,
    TranscriptAudioBackend,
)

console = Console()


def _show_line(player: RehearsalPlayer, hide_own_lines: bool) -> None:
    line = player.current_line
    if line is None:
        return
    if player.is_user_turn:
        text = "[dim](your line)[/dim]" if hide_own_lines else escape(line.content)
        console.print(
            Panel(
                text,
                title=f"{player.line_label} · {escape(line.speaker)}",
                subtitle="Your turn!",
                border_style="green",
            )
        )
    else:
        console.print(
            Panel(
                escape(line.content),
                title=f"{player.line_label} · {escape(line.speaker)}",
                border_style="blue",
            )
        )


def rehearse_command(
    script_id: Annotated[str, typer.Argument(help="Script ID")],
    role: Annotated[
        str | None,
        typer.Option(
            "--role", "-r", help="Character you play; defaults to the first one"
        ),
    ] = None,
    pause: Annotated[
        float,
        typer.Option("--pause", help="Seconds to wait on each played line", min=0),
    ] = 0.0,
    hide_own_lines: Annotated[
        bool,
        typer.Option("--hide-own-lines", help="Do not print the text of your lines"),
    ] = False,
    once: Annotated[
        bool, typer.Option("--once", help="Stop after one pass without asking")
    ] = False,
    db_path: DbPathOption = None,
    config: ConfigOption = None,
) -> None:
    """Rehearse a script: play the other parts and wait for yours."""
    settings = load_settings(config, db_path)
    try:
        with open_store(settings) as store:
            script = store.get_script(script_id)
        if role is not None and role not in script.role_names:
            choices = ", ".join(script.role_names) or "none"
            raise ValidationError.for_field(
                "role", f"Unknown character '{role}' (choose from: {choices})"
            )
    except CueLineError as e:
        handle_error(console, e)

    player = RehearsalPlayer.from_script(script, role)
    if player.state is PlayerState.EMPTY:
        console.print("[yellow]This script has no dialogue lines.[/yellow]")
        return

    backend = TranscriptAudioBackend(
        settings.audio_dir, settings.audio_url_prefix, console=console, pause=pause
    )
    driver = RehearsalDriver(player, backend)

    console.print(
        f"[bold]{escape(script.title)}[/bold]: you are "
        f"[green]{escape(player.selected_role) or 'nobody'}[/green]"
    )

    while True:
        state = player.state
        if state is PlayerState.COMPLETED:
            console.print("[green]✓[/green] Rehearsal complete!")
            if once or not typer.confirm("Rehearse again?", default=False):
                break
            player.restart()
            continue

        _show_line(player, hide_own_lines)
        if state is PlayerState.AWAITING_USER_TURN:
            typer.prompt(
                "Press Enter after your line",
                default="",
                show_default=False,
                prompt_suffix=" ",
            )
            driver.next()
        elif driver.play() is PlayerState.PLAYING:
            # Backend finished without reporting the end of playback.
            player.on_audio_ended()
