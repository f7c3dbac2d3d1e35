"""Pytest configuration and fixtures."""

import pytest
from typer.testing import CliRunner

from cueline.config import CueLineSettings, reset_settings, set_settings
from cueline.database import DatabaseConnectionManager, DatabaseInitializer, ScriptStore


@pytest.fixture(autouse=True)
def isolated_test_environment(tmp_path, monkeypatch):
    """Run every test against its own database, audio directory and settings.

    The working directory and home directory point into ``tmp_path`` so no
    config file or ``.env`` from the developer machine is picked up.
    """
    db_path = tmp_path / "test_cueline.db"
    audio_dir = tmp_path / "audio"

    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CUELINE_DATABASE_PATH", str(db_path))
    monkeypatch.setenv("CUELINE_AUDIO_DIR", str(audio_dir))

    reset_settings()
    settings = CueLineSettings(database_path=db_path, audio_dir=audio_dir)
    set_settings(settings)

    yield settings

    reset_settings()


@pytest.fixture
def settings(isolated_test_environment):
    """Settings for the isolated test environment."""
    return isolated_test_environment


@pytest.fixture
def connection_manager(settings):
    """Connection manager over a freshly initialized database."""
    DatabaseInitializer().initialize_database(settings=settings)
    manager = DatabaseConnectionManager(settings)
    yield manager
    manager.close()


@pytest.fixture
def store(connection_manager):
    """Script store over an empty database."""
    return ScriptStore(connection_manager)


@pytest.fixture
def coffee_script(store):
    """A two-character script with four alternating lines."""
    script = store.create_script("Coffee Shop Meeting", "A modern scene")
    ali = store.add_character(script.id, "Ali", "A software developer")
    ayse = store.add_character(script.id, "Ayşe", "A graphic designer")
    store.add_dialogue(script.id, ali.id, "Hi there!", "/audio/ali1.mp3")
    store.add_dialogue(script.id, ayse.id, "Please join me.", "/audio/ayse1.mp3")
    store.add_dialogue(script.id, ali.id, "I'm a developer.", "/audio/ali2.mp3")
    store.add_dialogue(script.id, ayse.id, "What a coincidence!", "/audio/ayse2.mp3")
    return store.get_script(script.id)


@pytest.fixture
def cli_runner():
    """Typer CLI runner."""
    return CliRunner()
