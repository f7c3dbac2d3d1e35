"""Placeholder audio asset endpoints."""

from fastapi import APIRouter, Depends

from cueline.api.dependencies import get_app_settings, get_audio_store
from cueline.api.v1.schemas import (
    AudioFilesResponse,
    AudioUploadRequest,
    AudioUploadResponse,
    EnsureAudioFilesResponse,
    PlaceholderResultResponse,
)
from cueline.config import CueLineSettings
from cueline.storage.audio_assets import AudioAssetStore

router = APIRouter()


@router.get("/audio-files", response_model=AudioFilesResponse)
async def list_audio_files(
    audio_store: AudioAssetStore = Depends(get_audio_store),
) -> AudioFilesResponse:
    """List the audio files available for dialogue lines."""
    return AudioFilesResponse(files=audio_store.list_audio_files())


@router.post("/upload-audio", response_model=AudioUploadResponse)
async def upload_audio(
    upload: AudioUploadRequest,
    audio_store: AudioAssetStore = Depends(get_audio_store),
) -> AudioUploadResponse:
    """Create a placeholder audio file and return the path to store on a line."""
    result = audio_store.ensure_placeholder(upload.filename)
    return AudioUploadResponse(success=result.success, path=result.path)


@router.post("/ensure-audio-files", response_model=EnsureAudioFilesResponse)
async def ensure_audio_files(
    audio_store: AudioAssetStore = Depends(get_audio_store),
    settings: CueLineSettings = Depends(get_app_settings),
) -> EnsureAudioFilesResponse:
    """Create placeholders for the configured set of known audio files."""
    results = audio_store.ensure_placeholders(settings.audio_placeholder_files)
    return EnsureAudioFilesResponse(
        results=[PlaceholderResultResponse.model_validate(r) for r in results]
    )
