"""Request-scoped access to the stores attached to the application."""

from fastapi import Request

from cueline.config import CueLineSettings
from cueline.database.script_store import ScriptStore
from cueline.storage.audio_assets import AudioAssetStore


async def get_store(request: Request) -> ScriptStore:
    """Get the script store from app state."""
    store: ScriptStore = request.app.state.store
    return store


async def get_audio_store(request: Request) -> AudioAssetStore:
    """Get the audio asset store from app state."""
    audio_store: AudioAssetStore = request.app.state.audio_store
    return audio_store


async def get_app_settings(request: Request) -> CueLineSettings:
    """Get the settings the application was created with."""
    settings: CueLineSettings = request.app.state.settings
    return settings
