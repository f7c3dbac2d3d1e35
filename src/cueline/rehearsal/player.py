"""Rehearsal playback state machine.

The player walks a fixed, ordered list of cue lines. Lines spoken by the
selected role wait for the user to say the line and advance by hand; lines
spoken by anyone else are played back and advance automatically once the
audio collaborator reports that playback ended (or failed).
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from cueline.config import get_logger

if TYPE_CHECKING:
    from cueline.models import ScriptDetail

logger = get_logger(__name__)


class PlayerState(str, Enum):
    """Observable state of a rehearsal session."""

    EMPTY = "empty"
    AWAITING_USER_TURN = "awaiting_user_turn"
    AWAITING_PLAYBACK = "awaiting_playback"
    PLAYING = "playing"
    COMPLETED = "completed"


@dataclass(frozen=True)
class CueLine:
    """The player's view of one dialogue line."""

    speaker: str
    content: str = ""
    audio: str = ""
    id: int | None = None


Listener = Callable[["RehearsalPlayer"], None]


def cue_lines_from_script(script: ScriptDetail) -> list[CueLine]:
    """Convert a stored script's dialogue into cue lines, in line order."""
    lines = []
    for dialogue in script.dialogues:
        speaker = dialogue.character.name if dialogue.character else ""
        lines.append(
            CueLine(
                speaker=speaker,
                content=dialogue.content,
                audio=dialogue.audio_path or "",
                id=dialogue.id,
            )
        )
    return lines


class RehearsalPlayer:
    """Explicit state container for one rehearsal session.

    Listeners registered with :meth:`subscribe` are called with the player
    after every operation that may have changed its state.
    """

    def __init__(self, lines: Sequence[CueLine] = (), default_role: str = "") -> None:
        self._listeners: list[Listener] = []
        self._lines: tuple[CueLine, ...] = ()
        self.cursor = 0
        self.selected_role = ""
        self.playing = False
        self.completed = False
        self.initialize(lines, default_role)

    @classmethod
    def from_script(
        cls, script: ScriptDetail, role: str | None = None
    ) -> RehearsalPlayer:
        """Build a player for a stored script.

        The role defaults to the first character's name, or "" when the
        script has no characters.
        """
        roles = script.role_names
        default_role = role if role is not None else (roles[0] if roles else "")
        return cls(cue_lines_from_script(script), default_role)

    @property
    def lines(self) -> tuple[CueLine, ...]:
        return self._lines

    @property
    def current_line(self) -> CueLine | None:
        if 0 <= self.cursor < len(self._lines):
            return self._lines[self.cursor]
        return None

    @property
    def is_user_turn(self) -> bool:
        line = self.current_line
        return line is not None and line.speaker == self.selected_role

    @property
    def state(self) -> PlayerState:
        if not self._lines:
            return PlayerState.EMPTY
        if self.completed:
            return PlayerState.COMPLETED
        if self.is_user_turn:
            return PlayerState.AWAITING_USER_TURN
        if self.playing:
            return PlayerState.PLAYING
        return PlayerState.AWAITING_PLAYBACK

    @property
    def progress(self) -> float:
        """Fraction of the script reached, counting the current line."""
        if not self._lines:
            return 0.0
        return (self.cursor + 1) / len(self._lines)

    @property
    def line_label(self) -> str:
        return f"Line {self.cursor + 1} of {len(self._lines)}"

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a state listener and return a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def initialize(self, lines: Sequence[CueLine], default_role: str = "") -> None:
        """Start a new session over ``lines``.

        An empty sequence leaves the player in the EMPTY state.
        """
        self._lines = tuple(lines)
        self.cursor = 0
        self.playing = False
        self.completed = False
        self.selected_role = default_role or ""
        logger.debug(
            "Rehearsal initialized",
            line_count=len(self._lines),
            role=self.selected_role,
        )
        self._notify()

    def select_role(self, role: str) -> None:
        """Switch the user's role; the cursor is left where it is."""
        self.selected_role = role
        self._notify()

    def request_play(self) -> PlayerState:
        """Ask for the current line to be played.

        Starts playback only for lines spoken by someone other than the
        selected role. On the user's own line, after completion, or with no
        current line this is a no-op.
        """
        line = self.current_line
        if line is None or self.completed:
            return self.state
        if line.speaker == self.selected_role:
            return self.state
        self.playing = True
        self._notify()
        return self.state

    def on_audio_ended(self) -> None:
        """Playback of the current line finished, or failed to load or play."""
        self.playing = False
        line = self.current_line
        if line is not None and line.speaker != self.selected_role:
            self.advance()
            return
        self._notify()

    def advance(self) -> None:
        """Move to the next line, or mark the session completed on the last one."""
        if not self._lines:
            return
        if self.cursor >= len(self._lines) - 1:
            if not self.completed:
                logger.debug("Rehearsal completed", line_count=len(self._lines))
            self.completed = True
        else:
            self.cursor += 1
            self.playing = False
        self._notify()

    def restart(self) -> None:
        """Return to the first line, keeping the selected role."""
        self.cursor = 0
        self.playing = False
        self.completed = False
        self._notify()
