"""Audio playback seam between the rehearsal player and an output device."""

from __future__ import annotations

import time
from collections.abc import Callable
from pathlib import Path
from typing import Protocol

from rich.console import Console

from cueline.config import get_logger
from cueline.rehearsal.player import PlayerState, RehearsalPlayer

logger = get_logger(__name__)


class AudioBackend(Protocol):
    """Something that can play one audio reference.

    Implementations call ``on_end`` when playback finishes. Raising from
    ``play`` means the audio could not be loaded or played.
    """

    def play(self, source: str, on_end: Callable[[], None]) -> None:
        """Start playing ``source`` and call ``on_end`` when done."""
        ...


def play_cue(
    backend: AudioBackend, source: str, on_end: Callable[[], None]
) -> None:
    """Play ``source`` and invoke ``on_end`` exactly once.

    Load and playback failures are logged and reported as a normal end of
    audio so a missing or broken asset never stalls the rehearsal. Errors
    raised by ``on_end`` itself propagate to the caller.
    """
    finished = False
    callback_failed = False

    def finish() -> None:
        nonlocal finished, callback_failed
        if finished:
            return
        finished = True
        try:
            on_end()
        except Exception:
            callback_failed = True
            raise

    try:
        backend.play(source, finish)
    except Exception as e:
        if callback_failed:
            raise
        logger.warning("Audio playback failed", source=source, error=str(e))
        finish()


class RehearsalDriver:
    """Connects a :class:`RehearsalPlayer` to an :class:`AudioBackend`."""

    def __init__(self, player: RehearsalPlayer, backend: AudioBackend) -> None:
        self.player = player
        self.backend = backend

    def play(self) -> PlayerState:
        """Request playback of the current line and hand it to the backend."""
        state = self.player.request_play()
        line = self.player.current_line
        if state is PlayerState.PLAYING and line is not None:
            play_cue(self.backend, line.audio, self.player.on_audio_ended)
        return self.player.state

    def next(self) -> PlayerState:
        """User-triggered advance after speaking their own line."""
        self.player.advance()
        return self.player.state


class TranscriptAudioBackend:
    """Terminal stand-in for audio output.

    Reports the audio reference being "played" and signals completion after
    an optional pause. References are resolved against the local audio
    directory so a missing asset is reported as a playback failure.
    """

    def __init__(
        self,
        audio_dir: Path,
        url_prefix: str = "/audio",
        console: Console | None = None,
        pause: float = 0.0,
    ) -> None:
        self.audio_dir = audio_dir
        self.url_prefix = url_prefix.rstrip("/")
        self.console = console or Console()
        self.pause = pause

    def resolve(self, source: str) -> Path | None:
        """Map an audio reference to a local file, or None for remote URLs."""
        if not source or source.startswith(("http://", "https://")):
            return None
        prefix = f"{self.url_prefix}/"
        if source.startswith(prefix):
            return self.audio_dir / source[len(prefix) :]
        path = Path(source)
        return path if path.is_absolute() else self.audio_dir / path

    def play(self, source: str, on_end: Callable[[], None]) -> None:
        path = self.resolve(source)
        if path is not None and not path.exists():
            raise FileNotFoundError(f"Audio file not found: {path}")
        if source:
            self.console.print(f"[dim]♪ {source}[/dim]")

        if self.pause > 0:
            time.sleep(self.pause)
        on_end()
