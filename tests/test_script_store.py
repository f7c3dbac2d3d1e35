"""Tests for script, character and dialogue persistence."""

import sqlite3
from datetime import datetime
from unittest.mock import patch

import pytest

from cueline.database.script_store import ScriptStore
from cueline.exceptions import DatabaseError, NotFoundError, ValidationError


class TestScripts:
    """Test script creation and retrieval."""

    def test_create_script(self, store):
        script = store.create_script("  Hamlet  ", "Act 1")

        assert script.id > 0
        assert script.title == "Hamlet"
        assert script.description == "Act 1"
        assert isinstance(script.created_at, datetime)

    def test_create_script_blank_description_is_none(self, store):
        script = store.create_script("Hamlet", "   ")
        assert script.description is None

    @pytest.mark.parametrize("title", ["", "ab", "  ab  ", None])
    def test_title_too_short(self, store, title):
        with pytest.raises(ValidationError) as exc_info:
            store.create_script(title)

        assert exc_info.value.field_errors == {
            "title": ["Title must be at least 3 characters"]
        }
        assert store.list_scripts() == []

    def test_list_scripts_sorted_by_title(self, store):
        store.create_script("zebra crossing")
        store.create_script("Apple Orchard")
        store.create_script("Meadow")

        titles = [script.title for script in store.list_scripts()]

        assert titles == ["Apple Orchard", "Meadow", "zebra crossing"]

    def test_list_scripts_counts(self, store, coffee_script):
        store.create_script("Empty Stage")

        summaries = {s.title: s for s in store.list_scripts()}

        assert summaries["Coffee Shop Meeting"].character_count == 2
        assert summaries["Coffee Shop Meeting"].dialogue_count == 4
        assert summaries["Empty Stage"].character_count == 0
        assert summaries["Empty Stage"].dialogue_count == 0

    def test_get_script_detail(self, store, coffee_script):
        script = store.get_script(coffee_script.id)

        assert [c.name for c in script.characters] == ["Ali", "Ayşe"]
        assert [d.line_number for d in script.dialogues] == [1, 2, 3, 4]
        assert [d.character.name for d in script.dialogues] == [
            "Ali",
            "Ayşe",
            "Ali",
            "Ayşe",
        ]
        assert script.role_names == ["Ali", "Ayşe"]

    def test_get_script_accepts_digit_string(self, store, coffee_script):
        assert store.get_script(str(coffee_script.id)).id == coffee_script.id

    @pytest.mark.parametrize("script_id", [999, "999", "abc", "", 0, -1, None])
    def test_get_script_not_found(self, store, script_id):
        with pytest.raises(NotFoundError) as exc_info:
            store.get_script(script_id)
        assert exc_info.value.message == "Script not found"

    def test_has_scripts(self, store):
        assert store.has_scripts() is False
        store.create_script("Hamlet")
        assert store.has_scripts() is True


class TestCharacters:
    """Test adding characters."""

    def test_add_character(self, store):
        script = store.create_script("Hamlet")

        character = store.add_character(script.id, " Ophelia ", "Polonius' daughter")

        assert character.id > 0
        assert character.script_id == script.id
        assert character.name == "Ophelia"
        assert character.description == "Polonius' daughter"

    def test_name_too_short(self, store):
        script = store.create_script("Hamlet")

        with pytest.raises(ValidationError) as exc_info:
            store.add_character(script.id, "H")

        assert exc_info.value.field_errors == {
            "name": ["Character name must be at least 2 characters"]
        }

    def test_missing_script(self, store):
        with pytest.raises(NotFoundError):
            store.add_character(42, "Hamlet")


class TestDialogues:
    """Test appending and editing dialogue lines."""

    @pytest.fixture
    def script_with_cast(self, store):
        script = store.create_script("Hamlet")
        hamlet = store.add_character(script.id, "Hamlet")
        horatio = store.add_character(script.id, "Horatio")
        return script, hamlet, horatio

    def test_line_numbers_are_sequential(self, store, script_with_cast):
        script, hamlet, horatio = script_with_cast

        first = store.add_dialogue(script.id, hamlet.id, "Who's there?")
        second = store.add_dialogue(script.id, horatio.id, "Friends to this ground.")
        third = store.add_dialogue(script.id, hamlet.id, "Long live the king!")

        assert [first.line_number, second.line_number, third.line_number] == [1, 2, 3]
        assert second.character.name == "Horatio"

    def test_line_numbers_are_per_script(self, store, script_with_cast):
        script, hamlet, _ = script_with_cast
        other = store.create_script("Macbeth")
        witch = store.add_character(other.id, "First Witch")

        store.add_dialogue(script.id, hamlet.id, "Who's there?")
        store.add_dialogue(script.id, hamlet.id, "Stand, ho!")
        line = store.add_dialogue(other.id, witch.id, "When shall we three meet again")

        assert line.line_number == 1

    def test_audio_path_is_stored(self, store, script_with_cast):
        script, hamlet, _ = script_with_cast

        line = store.add_dialogue(script.id, hamlet.id, "Who's there?", "/audio/h1.mp3")

        assert store.get_dialogue(line.id).audio_path == "/audio/h1.mp3"

    def test_empty_content(self, store, script_with_cast):
        script, hamlet, _ = script_with_cast

        with pytest.raises(ValidationError) as exc_info:
            store.add_dialogue(script.id, hamlet.id, "   ")

        assert exc_info.value.field_errors == {
            "content": ["Dialogue content cannot be empty"]
        }

    def test_character_from_other_script(self, store, script_with_cast):
        script, _, _ = script_with_cast
        other = store.create_script("Macbeth")
        witch = store.add_character(other.id, "First Witch")

        with pytest.raises(ValidationError) as exc_info:
            store.add_dialogue(script.id, witch.id, "Double, double")

        assert "character_id" in exc_info.value.field_errors
        assert store.get_script(script.id).dialogues == []

    def test_unknown_character(self, store, script_with_cast):
        script, _, _ = script_with_cast
        with pytest.raises(ValidationError):
            store.add_dialogue(script.id, 999, "Who's there?")

    def test_missing_script(self, store):
        with pytest.raises(NotFoundError):
            store.add_dialogue(999, 1, "Who's there?")

    def test_get_dialogue_not_found(self, store):
        with pytest.raises(NotFoundError) as exc_info:
            store.get_dialogue(123)
        assert exc_info.value.message == "Dialogue not found"

    def test_update_content(self, store, script_with_cast):
        script, hamlet, _ = script_with_cast
        line = store.add_dialogue(script.id, hamlet.id, "Who's there?", "/audio/h1.mp3")

        updated = store.update_dialogue(line.id, content="Who goes there?")

        assert updated.content == "Who goes there?"
        assert updated.audio_path == "/audio/h1.mp3"
        assert updated.line_number == line.line_number

    def test_update_clears_audio(self, store, script_with_cast):
        script, hamlet, _ = script_with_cast
        line = store.add_dialogue(script.id, hamlet.id, "Who's there?", "/audio/h1.mp3")

        updated = store.update_dialogue(line.id, audio_path="")

        assert updated.audio_path is None
        assert updated.content == "Who's there?"

    def test_update_without_changes(self, store, script_with_cast):
        script, hamlet, _ = script_with_cast
        line = store.add_dialogue(script.id, hamlet.id, "Who's there?")

        assert store.update_dialogue(line.id) == line

    def test_update_rejects_empty_content(self, store, script_with_cast):
        script, hamlet, _ = script_with_cast
        line = store.add_dialogue(script.id, hamlet.id, "Who's there?")

        with pytest.raises(ValidationError):
            store.update_dialogue(line.id, content="")

        assert store.get_dialogue(line.id).content == "Who's there?"

    def test_update_missing_dialogue(self, store):
        with pytest.raises(NotFoundError):
            store.update_dialogue(404, content="Anything")


class TestDatabaseFailures:
    """Test that sqlite errors surface as DatabaseError."""

    @pytest.fixture
    def broken_reads(self, store):
        with patch.object(
            store.connection_manager,
            "readonly",
            side_effect=sqlite3.OperationalError("disk I/O error"),
        ):
            yield store

    def test_has_scripts(self, broken_reads):
        with pytest.raises(DatabaseError) as exc_info:
            broken_reads.has_scripts()

        assert exc_info.value.details["error_type"] == "OperationalError"

    def test_add_character_script_lookup(self, broken_reads):
        with pytest.raises(DatabaseError) as exc_info:
            broken_reads.add_character(1, "Hamlet")

        assert exc_info.value.details["script_id"] == 1

    def test_add_dialogue_character_lookup(self, broken_reads):
        with (
            patch.object(ScriptStore, "_require_script", return_value=1),
            pytest.raises(DatabaseError) as exc_info,
        ):
            broken_reads.add_dialogue(1, 2, "Who's there?")

        assert exc_info.value.details["character_id"] == 2
