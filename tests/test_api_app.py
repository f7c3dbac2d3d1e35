"""Tests for the FastAPI application, audio endpoints and error handlers."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from cueline.api.app import create_app
from cueline.config import CueLineSettings
from cueline.exceptions import DatabaseError


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as client:
        yield client


class TestApplication:
    """Test application wiring."""

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["message"] == "CueLine API"

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_startup_creates_database_and_audio_dir(self, client, settings):
        assert settings.database_path.exists()
        assert settings.audio_dir.is_dir()

    def test_each_app_uses_its_own_database(self, tmp_path):
        """Stores are attached per application, not shared globally."""
        first = CueLineSettings(
            database_path=tmp_path / "one.db", audio_dir=tmp_path / "audio"
        )
        second = CueLineSettings(
            database_path=tmp_path / "two.db", audio_dir=tmp_path / "audio"
        )

        with TestClient(create_app(first)) as one, TestClient(
            create_app(second)
        ) as two:
            one.post("/api/scripts", json={"title": "Hamlet"})
            assert [s["title"] for s in one.get("/api/scripts").json()] == ["Hamlet"]
            assert two.get("/api/scripts").json() == []

    def test_cors_preflight(self, client):
        response = client.options(
            "/api/scripts",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

        assert response.status_code == 200
        assert (
            response.headers["access-control-allow-origin"] == "http://localhost:3000"
        )

    def test_internal_errors_are_hidden(self, client):
        with patch(
            "cueline.database.script_store.ScriptStore.list_scripts",
            side_effect=DatabaseError("disk I/O error"),
        ):
            response = client.get("/api/scripts")

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}


class TestAudioEndpoints:
    """Test placeholder audio endpoints and static serving."""

    def test_list_audio_files_empty(self, client):
        response = client.get("/api/audio-files")
        assert response.status_code == 200
        assert response.json() == {"files": []}

    def test_upload_audio_creates_placeholder(self, client, settings):
        response = client.post("/api/upload-audio", json={"filename": "ali3"})

        assert response.status_code == 200
        assert response.json() == {"success": True, "path": "/audio/ali3.mp3"}
        assert (settings.audio_dir / "ali3.mp3").exists()
        assert client.get("/api/audio-files").json() == {"files": ["ali3.mp3"]}

    def test_upload_audio_keeps_existing_file(self, client, settings):
        (settings.audio_dir / "ali1.mp3").write_bytes(b"ID3 real audio")

        response = client.post("/api/upload-audio", json={"filename": "ali1.mp3"})

        assert response.json() == {"success": True, "path": "/audio/ali1.mp3"}
        assert (settings.audio_dir / "ali1.mp3").read_bytes() == b"ID3 real audio"

    @pytest.mark.parametrize("filename", ["", "../escape"])
    def test_upload_audio_rejects_bad_names(self, client, filename):
        response = client.post("/api/upload-audio", json={"filename": filename})

        assert response.status_code == 400
        assert "filename" in response.json()["errors"]

    def test_ensure_audio_files(self, client, settings):
        (settings.audio_dir / "ali1.mp3").write_bytes(b"ID3")

        response = client.post("/api/ensure-audio-files")

        assert response.status_code == 200
        results = response.json()["results"]
        assert [(r["file"], r["created"]) for r in results] == [
            ("ali1.mp3", False),
            ("ali2.mp3", True),
            ("ayse1.mp3", True),
            ("ayse2.mp3", True),
        ]
        assert all(r["success"] for r in results)

    def test_ensure_audio_files_uses_configured_set(self, tmp_path):
        settings = CueLineSettings(
            database_path=tmp_path / "custom.db",
            audio_dir=tmp_path / "custom_audio",
            audio_placeholder_files=["intro.mp3"],
        )
        with TestClient(create_app(settings)) as client:
            results = client.post("/api/ensure-audio-files").json()["results"]

        assert [r["file"] for r in results] == ["intro.mp3"]

    def test_audio_files_are_served(self, client, settings):
        (settings.audio_dir / "ali1.mp3").write_bytes(b"ID3 audio bytes")

        response = client.get("/audio/ali1.mp3")

        assert response.status_code == 200
        assert response.content == b"ID3 audio bytes"
