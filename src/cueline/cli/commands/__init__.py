"""CueLine CLI commands."""

from __future__ import annotations

from cueline.cli.commands.audio import ensure_audio_command
from cueline.cli.commands.database import init_command, seed_command
from cueline.cli.commands.rehearse import rehearse_command
from cueline.cli.commands.scripts import (
    add_character_command,
    add_line_command,
    add_script_command,
    list_command,
    show_command,
)
from cueline.cli.commands.server import serve_command

__all__ = [
    "add_character_command",
    "add_line_command",
    "add_script_command",
    "ensure_audio_command",
    "init_command",
    "list_command",
    "rehearse_command",
    "seed_command",
    "serve_command",
    "show_command",
]
