"""Domain records for scripts, characters and dialogue lines."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

SCRIPT_TITLE_MIN_LENGTH = 3
CHARACTER_NAME_MIN_LENGTH = 2
DIALOGUE_CONTENT_MIN_LENGTH = 1


@dataclass
class Script:
    """A stored script without its nested characters and lines."""

    id: int
    title: str
    description: str | None = None
    created_at: datetime | None = None


@dataclass
class Character:
    """A speaking part that belongs to exactly one script."""

    id: int
    script_id: int
    name: str
    description: str | None = None


@dataclass
class DialogueLine:
    """One utterance by one character.

    Attributes:
        line_number: Position within the script, starting at 1. Unique per
            script and defines playback order.
        audio_path: Path or URL of the recorded line, or None when the line
            has no audio.
        character: The resolved speaking character, when loaded with the line.
    """

    id: int
    script_id: int
    character_id: int
    line_number: int
    content: str
    audio_path: str | None = None
    character: Character | None = None


@dataclass
class ScriptSummary:
    """Script listing entry."""

    id: int
    title: str
    description: str | None = None
    created_at: datetime | None = None
    character_count: int = 0
    dialogue_count: int = 0


@dataclass
class ScriptDetail(Script):
    """A script with its characters and ordered dialogue lines."""

    characters: list[Character] = field(default_factory=list)
    dialogues: list[DialogueLine] = field(default_factory=list)

    @property
    def role_names(self) -> list[str]:
        """Names of the characters a user can rehearse as."""
        return [character.name for character in self.characters]
