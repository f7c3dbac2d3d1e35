"""Main API router."""

from fastapi import APIRouter

from cueline.api.v1.endpoints import audio, dialogues, scripts

api_router = APIRouter()

api_router.include_router(scripts.router, prefix="/scripts", tags=["scripts"])
api_router.include_router(dialogues.router, prefix="/dialogues", tags=["dialogues"])
api_router.include_router(audio.router, tags=["audio"])
