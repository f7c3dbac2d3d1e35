"""Filesystem storage for audio assets."""

from cueline.storage.audio_assets import (
    AudioAssetStore,
    PlaceholderResult,
    normalize_filename,
)

__all__ = ["AudioAssetStore", "PlaceholderResult", "normalize_filename"]
