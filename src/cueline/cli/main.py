"""Main CLI entry point."""

from __future__ import annotations

import typer

from cueline.cli.commands import (
    add_character_command,
    add_line_command,
    add_script_command,
    ensure_audio_command,
    init_command,
    list_command,
    rehearse_command,
    seed_command,
    serve_command,
    show_command,
)

app = typer.Typer(
    name="cueline",
    help="Rehearse scripts line by line while the other parts are played back",
    pretty_exceptions_enable=False,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command(name="init")(init_command)
app.command(name="seed")(seed_command)
app.command(name="list")(list_command)
app.command(name="ls")(list_command)  # Alias for list command
app.command(name="show")(show_command)
app.command(name="add-script")(add_script_command)
app.command(name="add-character")(add_character_command)
app.command(name="add-line")(add_line_command)
app.command(name="ensure-audio")(ensure_audio_command)
app.command(name="rehearse")(rehearse_command)
app.command(name="serve")(serve_command)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
