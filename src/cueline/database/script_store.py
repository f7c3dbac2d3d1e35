"""Persistence operations for scripts, characters and dialogue lines.

The store validates its inputs itself, so every caller (REST API, CLI,
seeding) gets the same rules: script titles need at least three characters,
character names at least two, and dialogue content must not be empty.
Dialogue line numbers are assigned by the store as the script's current
maximum plus one, starting at 1.
"""

from __future__ import annotations

import sqlite3
from datetime import UTC, datetime
from typing import Any

from cueline.config import get_logger
from cueline.database.connection_manager import DatabaseConnectionManager
from cueline.exceptions import DatabaseError, NotFoundError, ValidationError
from cueline.models import (
    CHARACTER_NAME_MIN_LENGTH,
    DIALOGUE_CONTENT_MIN_LENGTH,
    SCRIPT_TITLE_MIN_LENGTH,
    Character,
    DialogueLine,
    Script,
    ScriptDetail,
    ScriptSummary,
)

logger = get_logger(__name__)

_UNSET: Any = object()


def _parse_id(value: Any) -> int | None:
    """Coerce an identifier to int, or None if it is not a valid id."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, str) and value.strip().isdigit():
        parsed = int(value.strip())
        return parsed if parsed > 0 else None
    return None


def _require_min_length(field: str, value: str | None, minimum: int, label: str) -> str:
    """Strip ``value`` and check it is at least ``minimum`` characters long."""
    text = (value or "").strip()
    if len(text) < minimum:
        if minimum == 1:
            message = f"{label} cannot be empty"
        else:
            message = f"{label} must be at least {minimum} characters"
        raise ValidationError.for_field(field, message)
    return text


def _optional_text(value: str | None) -> str | None:
    if value is None:
        return None
    text = value.strip()
    return text or None


def _parse_timestamp(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def _row_to_script(row: sqlite3.Row) -> Script:
    return Script(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        created_at=_parse_timestamp(row["created_at"]),
    )


def _row_to_character(row: sqlite3.Row) -> Character:
    return Character(
        id=row["id"],
        script_id=row["script_id"],
        name=row["name"],
        description=row["description"],
    )


def _row_to_dialogue(row: sqlite3.Row, character: Character | None = None) -> DialogueLine:
    return DialogueLine(
        id=row["id"],
        script_id=row["script_id"],
        character_id=row["character_id"],
        line_number=row["line_number"],
        content=row["content"],
        audio_path=row["audio_path"],
        character=character,
    )


class ScriptStore:
    """Script, character and dialogue persistence over an injected connection manager."""

    def __init__(self, connection_manager: DatabaseConnectionManager) -> None:
        self.connection_manager = connection_manager

    def list_scripts(self) -> list[ScriptSummary]:
        """List all scripts sorted by title."""
        try:
            with self.connection_manager.readonly() as conn:
                rows = conn.execute(
                    """
                    SELECT s.id, s.title, s.description, s.created_at,
                           (SELECT COUNT(*) FROM characters c
                            WHERE c.script_id = s.id) AS character_count,
                           (SELECT COUNT(*) FROM dialogues d
                            WHERE d.script_id = s.id) AS dialogue_count
                    FROM scripts s
                    ORDER BY s.title COLLATE NOCASE, s.id
                    """
                ).fetchall()
        except sqlite3.Error as e:
            raise DatabaseError(
                message=f"Failed to list scripts: {e}",
                details={"error_type": type(e).__name__},
            ) from e

        return [
            ScriptSummary(
                id=row["id"],
                title=row["title"],
                description=row["description"],
                created_at=_parse_timestamp(row["created_at"]),
                character_count=row["character_count"],
                dialogue_count=row["dialogue_count"],
            )
            for row in rows
        ]

    def get_script(self, script_id: Any) -> ScriptDetail:
        """Get a script with its characters and dialogue lines.

        Raises:
            NotFoundError: If the id is not a valid identifier or no script
                has it.
        """
        parsed_id = _parse_id(script_id)
        if parsed_id is None:
            raise NotFoundError("Script", script_id)

        try:
            with self.connection_manager.readonly() as conn:
                script_row = conn.execute(
                    "SELECT id, title, description, created_at "
                    "FROM scripts WHERE id = ?",
                    (parsed_id,),
                ).fetchone()
                if script_row is None:
                    raise NotFoundError("Script", script_id)

                character_rows = conn.execute(
                    "SELECT id, script_id, name, description "
                    "FROM characters WHERE script_id = ? ORDER BY id",
                    (parsed_id,),
                ).fetchall()
                dialogue_rows = conn.execute(
                    "SELECT id, script_id, character_id, line_number, content, "
                    "audio_path FROM dialogues WHERE script_id = ? "
                    "ORDER BY line_number",
                    (parsed_id,),
                ).fetchall()
        except sqlite3.Error as e:
            raise DatabaseError(
                message=f"Failed to load script: {e}",
                details={"script_id": parsed_id, "error_type": type(e).__name__},
            ) from e

        script = _row_to_script(script_row)
        characters = [_row_to_character(row) for row in character_rows]
        by_id = {character.id: character for character in characters}
        dialogues = [
            _row_to_dialogue(row, by_id.get(row["character_id"]))
            for row in dialogue_rows
        ]
        return ScriptDetail(
            id=script.id,
            title=script.title,
            description=script.description,
            created_at=script.created_at,
            characters=characters,
            dialogues=dialogues,
        )

    def create_script(self, title: str, description: str | None = None) -> Script:
        """Create a script.

        Raises:
            ValidationError: If the title is shorter than three characters.
        """
        title = _require_min_length("title", title, SCRIPT_TITLE_MIN_LENGTH, "Title")
        description = _optional_text(description)
        created_at = datetime.now(UTC)

        try:
            with self.connection_manager.transaction() as conn:
                cursor = conn.execute(
                    "INSERT INTO scripts (title, description, created_at) "
                    "VALUES (?, ?, ?)",
                    (title, description, created_at.isoformat()),
                )
                script_id = cursor.lastrowid
        except sqlite3.Error as e:
            raise DatabaseError(
                message=f"Failed to create script: {e}",
                details={"title": title, "error_type": type(e).__name__},
            ) from e

        logger.info("Script created", script_id=script_id, title=title)
        return Script(
            id=int(script_id or 0),
            title=title,
            description=description,
            created_at=created_at,
        )

    def add_character(
        self, script_id: Any, name: str, description: str | None = None
    ) -> Character:
        """Add a character to a script.

        Raises:
            NotFoundError: If the script does not exist.
            ValidationError: If the name is shorter than two characters.
        """
        parsed_id = self._require_script(script_id)
        name = _require_min_length(
            "name", name, CHARACTER_NAME_MIN_LENGTH, "Character name"
        )
        description = _optional_text(description)

        try:
            with self.connection_manager.transaction() as conn:
                cursor = conn.execute(
                    "INSERT INTO characters (script_id, name, description) "
                    "VALUES (?, ?, ?)",
                    (parsed_id, name, description),
                )
                character_id = cursor.lastrowid
        except sqlite3.Error as e:
            raise DatabaseError(
                message=f"Failed to add character: {e}",
                details={"script_id": parsed_id, "error_type": type(e).__name__},
            ) from e

        logger.info(
            "Character added",
            script_id=parsed_id,
            character_id=character_id,
            name=name,
        )
        return Character(
            id=int(character_id or 0),
            script_id=parsed_id,
            name=name,
            description=description,
        )

    def add_dialogue(
        self,
        script_id: Any,
        character_id: Any,
        content: str,
        audio_path: str | None = None,
    ) -> DialogueLine:
        """Append a dialogue line to a script.

        The line number is the script's current maximum line number plus one,
        computed inside the insert statement.

        Raises:
            NotFoundError: If the script does not exist.
            ValidationError: If content is empty or the character does not
                belong to the script.
        """
        parsed_script_id = self._require_script(script_id)
        content = _require_min_length(
            "content", content, DIALOGUE_CONTENT_MIN_LENGTH, "Dialogue content"
        )
        audio_path = _optional_text(audio_path)

        character = self._find_character(parsed_script_id, character_id)
        if character is None:
            raise ValidationError.for_field(
                "character_id", "Character does not belong to this script"
            )

        try:
            with self.connection_manager.transaction() as conn:
                cursor = conn.execute(
                    """
                    INSERT INTO dialogues
                        (script_id, character_id, line_number, content, audio_path)
                    SELECT ?, ?, COALESCE(MAX(line_number), 0) + 1, ?, ?
                    FROM dialogues WHERE script_id = ?
                    """,
                    (
                        parsed_script_id,
                        character.id,
                        content,
                        audio_path,
                        parsed_script_id,
                    ),
                )
                dialogue_id = cursor.lastrowid
                row = conn.execute(
                    "SELECT id, script_id, character_id, line_number, content, "
                    "audio_path FROM dialogues WHERE id = ?",
                    (dialogue_id,),
                ).fetchone()
        except sqlite3.Error as e:
            raise DatabaseError(
                message=f"Failed to add dialogue: {e}",
                details={
                    "script_id": parsed_script_id,
                    "error_type": type(e).__name__,
                },
            ) from e

        dialogue = _row_to_dialogue(row, character)
        logger.info(
            "Dialogue added",
            script_id=parsed_script_id,
            dialogue_id=dialogue.id,
            line_number=dialogue.line_number,
        )
        return dialogue

    def get_dialogue(self, dialogue_id: Any) -> DialogueLine:
        """Get one dialogue line with its character.

        Raises:
            NotFoundError: If no dialogue line has this id.
        """
        parsed_id = _parse_id(dialogue_id)
        if parsed_id is None:
            raise NotFoundError("Dialogue", dialogue_id)

        try:
            with self.connection_manager.readonly() as conn:
                row = conn.execute(
                    "SELECT id, script_id, character_id, line_number, content, "
                    "audio_path FROM dialogues WHERE id = ?",
                    (parsed_id,),
                ).fetchone()
                character_row = (
                    conn.execute(
                        "SELECT id, script_id, name, description "
                        "FROM characters WHERE id = ?",
                        (row["character_id"],),
                    ).fetchone()
                    if row is not None
                    else None
                )
        except sqlite3.Error as e:
            raise DatabaseError(
                message=f"Failed to load dialogue: {e}",
                details={"dialogue_id": parsed_id, "error_type": type(e).__name__},
            ) from e

        if row is None:
            raise NotFoundError("Dialogue", dialogue_id)
        character = _row_to_character(character_row) if character_row else None
        return _row_to_dialogue(row, character)

    def update_dialogue(
        self,
        dialogue_id: Any,
        content: str | None = _UNSET,
        audio_path: str | None = _UNSET,
    ) -> DialogueLine:
        """Edit a dialogue line's content and/or audio path in place.

        Omitted arguments are left unchanged; an empty or None audio path
        clears the line's audio.

        Raises:
            NotFoundError: If no dialogue line has this id.
            ValidationError: If the new content is empty.
        """
        current = self.get_dialogue(dialogue_id)

        updates: dict[str, Any] = {}
        if content is not _UNSET:
            updates["content"] = _require_min_length(
                "content", content, DIALOGUE_CONTENT_MIN_LENGTH, "Dialogue content"
            )
        if audio_path is not _UNSET:
            updates["audio_path"] = _optional_text(audio_path)

        if not updates:
            return current

        assignments = ", ".join(f"{column} = ?" for column in updates)
        try:
            with self.connection_manager.transaction() as conn:
                conn.execute(
                    f"UPDATE dialogues SET {assignments} WHERE id = ?",  # noqa: S608
                    (*updates.values(), current.id),
                )
        except sqlite3.Error as e:
            raise DatabaseError(
                message=f"Failed to update dialogue: {e}",
                details={"dialogue_id": current.id, "error_type": type(e).__name__},
            ) from e

        logger.info(
            "Dialogue updated", dialogue_id=current.id, fields=sorted(updates)
        )
        return self.get_dialogue(current.id)

    def has_scripts(self) -> bool:
        """Whether at least one script is stored."""
        try:
            with self.connection_manager.readonly() as conn:
                row = conn.execute("SELECT 1 FROM scripts LIMIT 1").fetchone()
        except sqlite3.Error as e:
            raise DatabaseError(
                message=f"Failed to check for scripts: {e}",
                details={"error_type": type(e).__name__},
            ) from e
        return row is not None

    def _require_script(self, script_id: Any) -> int:
        """Resolve ``script_id`` to an existing script id or raise NotFoundError."""
        parsed_id = _parse_id(script_id)
        if parsed_id is None:
            raise NotFoundError("Script", script_id)
        try:
            with self.connection_manager.readonly() as conn:
                row = conn.execute(
                    "SELECT id FROM scripts WHERE id = ?", (parsed_id,)
                ).fetchone()
        except sqlite3.Error as e:
            raise DatabaseError(
                message=f"Failed to look up script: {e}",
                details={"script_id": parsed_id, "error_type": type(e).__name__},
            ) from e
        if row is None:
            raise NotFoundError("Script", script_id)
        return parsed_id

    def _find_character(self, script_id: int, character_id: Any) -> Character | None:
        parsed_id = _parse_id(character_id)
        if parsed_id is None:
            return None
        try:
            with self.connection_manager.readonly() as conn:
                row = conn.execute(
                    "SELECT id, script_id, name, description FROM characters "
                    "WHERE id = ? AND script_id = ?",
                    (parsed_id, script_id),
                ).fetchone()
        except sqlite3.Error as e:
            raise DatabaseError(
                message=f"Failed to look up character: {e}",
                details={
                    "script_id": script_id,
                    "character_id": parsed_id,
                    "error_type": type(e).__name__,
                },
            ) from e
        return _row_to_character(row) if row else None
