"""Script, character and dialogue authoring endpoints."""

from fastapi import APIRouter, Depends, status

from cueline.api.dependencies import get_store
from cueline.api.v1.schemas import (
    CharacterCreateRequest,
    CharacterResponse,
    DialogueCreateRequest,
    DialogueResponse,
    ScriptCreateRequest,
    ScriptDetailResponse,
    ScriptResponse,
    ScriptSummaryResponse,
)
from cueline.config import get_logger
from cueline.database.script_store import ScriptStore

logger = get_logger(__name__)
router = APIRouter()


@router.get("", response_model=list[ScriptSummaryResponse])
async def list_scripts(
    store: ScriptStore = Depends(get_store),
) -> list[ScriptSummaryResponse]:
    """List all scripts sorted by title."""
    return [
        ScriptSummaryResponse.model_validate(summary)
        for summary in store.list_scripts()
    ]


@router.get("/{script_id}", response_model=ScriptDetailResponse)
async def get_script(
    script_id: str,
    store: ScriptStore = Depends(get_store),
) -> ScriptDetailResponse:
    """Get a script with its characters and ordered dialogue lines."""
    return ScriptDetailResponse.model_validate(store.get_script(script_id))


@router.post(
    "", response_model=ScriptResponse, status_code=status.HTTP_201_CREATED
)
async def create_script(
    script_data: ScriptCreateRequest,
    store: ScriptStore = Depends(get_store),
) -> ScriptResponse:
    """Create a script."""
    script = store.create_script(script_data.title, script_data.description)
    return ScriptResponse.model_validate(script)


@router.post(
    "/{script_id}/characters",
    response_model=CharacterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_character(
    script_id: str,
    character_data: CharacterCreateRequest,
    store: ScriptStore = Depends(get_store),
) -> CharacterResponse:
    """Add a character to a script."""
    character = store.add_character(
        script_id, character_data.name, character_data.description
    )
    return CharacterResponse.model_validate(character)


@router.post(
    "/{script_id}/dialogues",
    response_model=DialogueResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_dialogue(
    script_id: str,
    dialogue_data: DialogueCreateRequest,
    store: ScriptStore = Depends(get_store),
) -> DialogueResponse:
    """Append a dialogue line; the server assigns its line number."""
    dialogue = store.add_dialogue(
        script_id,
        dialogue_data.character_id,
        dialogue_data.content,
        dialogue_data.audio_path,
    )
    return DialogueResponse.model_validate(dialogue)
