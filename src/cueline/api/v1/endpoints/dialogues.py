"""Dialogue line endpoints."""

from typing import Any

from fastapi import APIRouter, Depends

from cueline.api.dependencies import get_store
from cueline.api.v1.schemas import DialogueResponse, DialogueUpdateRequest
from cueline.database.script_store import ScriptStore

router = APIRouter()


@router.get("/{dialogue_id}", response_model=DialogueResponse)
async def get_dialogue(
    dialogue_id: str,
    store: ScriptStore = Depends(get_store),
) -> DialogueResponse:
    """Get one dialogue line with its character."""
    return DialogueResponse.model_validate(store.get_dialogue(dialogue_id))


@router.patch("/{dialogue_id}", response_model=DialogueResponse)
async def update_dialogue(
    dialogue_id: str,
    update_data: DialogueUpdateRequest,
    store: ScriptStore = Depends(get_store),
) -> DialogueResponse:
    """Edit a dialogue line's content and/or audio path.

    Only fields present in the request body are changed.
    """
    changes: dict[str, Any] = {
        field: getattr(update_data, field) for field in update_data.model_fields_set
    }
    dialogue = store.update_dialogue(dialogue_id, **changes)
    return DialogueResponse.model_validate(dialogue)
