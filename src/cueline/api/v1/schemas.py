"""Pydantic schemas for API request/response models.

JSON bodies use camelCase (``lineNumber``, ``audioPath``); requests accept
either the camelCase alias or the snake_case field name. Length rules
(title, character name, dialogue content) are enforced by the script store
so the API and CLI share the same messages.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(APIModel):
    """Error response model."""

    detail: str = Field(description="Error message")
    errors: dict[str, list[str]] | None = Field(
        default=None, description="Validation messages per field"
    )


# Script models
class ScriptCreateRequest(APIModel):
    """Script creation request."""

    title: str = Field(description="Script title, at least 3 characters")
    description: str | None = Field(default=None, description="Script description")


class ScriptResponse(APIModel):
    """Script response."""

    id: int
    title: str
    description: str | None = None
    created_at: datetime | None = None


class ScriptSummaryResponse(ScriptResponse):
    """Script listing entry."""

    character_count: int = 0
    dialogue_count: int = 0


# Character models
class CharacterCreateRequest(APIModel):
    """Character creation request."""

    name: str = Field(description="Character name, at least 2 characters")
    description: str | None = Field(default=None, description="Character notes")


class CharacterResponse(APIModel):
    """Character response."""

    id: int
    script_id: int
    name: str
    description: str | None = None


# Dialogue models
class DialogueCreateRequest(APIModel):
    """Dialogue creation request; the line number is assigned by the server."""

    character_id: int = Field(description="Speaking character in the same script")
    content: str = Field(description="Line text")
    audio_path: str | None = Field(default=None, description="Audio path or URL")


class DialogueUpdateRequest(APIModel):
    """Dialogue update request; omitted fields are left unchanged."""

    content: str | None = None
    audio_path: str | None = None


class DialogueResponse(APIModel):
    """Dialogue line response with its resolved character."""

    id: int
    script_id: int
    character_id: int
    line_number: int
    content: str
    audio_path: str | None = None
    character: CharacterResponse | None = None


class ScriptDetailResponse(ScriptResponse):
    """Script with nested characters and ordered dialogue lines."""

    characters: list[CharacterResponse] = Field(default_factory=list)
    dialogues: list[DialogueResponse] = Field(default_factory=list)


# Audio models
class AudioUploadRequest(APIModel):
    """Placeholder audio creation request."""

    filename: str = Field(description="File name; .mp3 is appended when missing")


class AudioUploadResponse(APIModel):
    """Placeholder audio creation result."""

    success: bool
    path: str


class PlaceholderResultResponse(APIModel):
    """Per-file result of bulk placeholder creation."""

    file: str
    created: bool
    success: bool = True


class EnsureAudioFilesResponse(APIModel):
    """Bulk placeholder creation results."""

    results: list[PlaceholderResultResponse]


class AudioFilesResponse(APIModel):
    """Audio files available in the audio directory."""

    files: list[str]
