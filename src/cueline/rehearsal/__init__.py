"""Rehearsal playback: the player state machine and its audio seam."""

from cueline.rehearsal.audio import (
    AudioBackend,
    RehearsalDriver,
    TranscriptAudioBackend,
    play_cue,
)
from cueline.rehearsal.player import (
    CueLine,
    PlayerState,
    RehearsalPlayer,
    cue_lines_from_script,
)

__all__ = [
    "AudioBackend",
    "CueLine",
    "PlayerState",
    "RehearsalDriver",
    "RehearsalPlayer",
    "TranscriptAudioBackend",
    "cue_lines_from_script",
    "play_cue",
]
