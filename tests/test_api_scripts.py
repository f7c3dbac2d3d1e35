"""Tests for the script authoring REST endpoints."""

import pytest
from fastapi.testclient import TestClient

from cueline.api.app import create_app


@pytest.fixture
def client(settings):
    """Test client over an app bound to the isolated settings."""
    with TestClient(create_app(settings)) as client:
        yield client


@pytest.fixture
def script(client):
    """A script with two characters."""
    created = client.post(
        "/api/scripts", json={"title": "Coffee Shop Meeting"}
    ).json()
    ali = client.post(
        f"/api/scripts/{created['id']}/characters", json={"name": "Ali"}
    ).json()
    ayse = client.post(
        f"/api/scripts/{created['id']}/characters", json={"name": "Ayşe"}
    ).json()
    return {"id": created["id"], "ali": ali["id"], "ayse": ayse["id"]}


class TestScripts:
    """Test script endpoints."""

    def test_list_empty(self, client):
        response = client.get("/api/scripts")
        assert response.status_code == 200
        assert response.json() == []

    def test_create_script(self, client):
        response = client.post(
            "/api/scripts",
            json={"title": "Hamlet", "description": "Act 1, Scene 1"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["id"] > 0
        assert data["title"] == "Hamlet"
        assert data["description"] == "Act 1, Scene 1"
        assert "createdAt" in data

    def test_create_script_short_title(self, client):
        response = client.post("/api/scripts", json={"title": "ab"})

        assert response.status_code == 400
        assert response.json()["errors"] == {
            "title": ["Title must be at least 3 characters"]
        }
        assert client.get("/api/scripts").json() == []

    def test_create_script_missing_title(self, client):
        response = client.post("/api/scripts", json={})

        assert response.status_code == 400
        assert "title" in response.json()["errors"]

    def test_list_sorted_with_counts(self, client, script):
        client.post("/api/scripts", json={"title": "Arcadia"})

        data = client.get("/api/scripts").json()

        assert [s["title"] for s in data] == ["Arcadia", "Coffee Shop Meeting"]
        assert data[1]["characterCount"] == 2
        assert data[1]["dialogueCount"] == 0

    def test_get_script_detail(self, client, script):
        client.post(
            f"/api/scripts/{script['id']}/dialogues",
            json={
                "characterId": script["ali"],
                "content": "Hi there!",
                "audioPath": "/audio/ali1.mp3",
            },
        )

        response = client.get(f"/api/scripts/{script['id']}")

        assert response.status_code == 200
        data = response.json()
        assert [c["name"] for c in data["characters"]] == ["Ali", "Ayşe"]
        line = data["dialogues"][0]
        assert line["lineNumber"] == 1
        assert line["audioPath"] == "/audio/ali1.mp3"
        assert line["character"]["name"] == "Ali"

    @pytest.mark.parametrize("script_id", ["999", "abc"])
    def test_get_script_not_found(self, client, script_id):
        response = client.get(f"/api/scripts/{script_id}")

        assert response.status_code == 404
        assert response.json() == {"detail": "Script not found"}


class TestCharacters:
    """Test character endpoints."""

    def test_add_character(self, client, script):
        response = client.post(
            f"/api/scripts/{script['id']}/characters",
            json={"name": "Barista", "description": "Works the morning shift"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["scriptId"] == script["id"]
        assert data["name"] == "Barista"

    def test_add_character_short_name(self, client, script):
        response = client.post(
            f"/api/scripts/{script['id']}/characters", json={"name": "B"}
        )

        assert response.status_code == 400
        assert response.json()["errors"] == {
            "name": ["Character name must be at least 2 characters"]
        }

    def test_add_character_missing_script(self, client):
        response = client.post("/api/scripts/999/characters", json={"name": "Ali"})
        assert response.status_code == 404


class TestDialogues:
    """Test dialogue endpoints."""

    def test_line_numbers_assigned_by_server(self, client, script):
        url = f"/api/scripts/{script['id']}/dialogues"

        first = client.post(url, json={"characterId": script["ali"], "content": "Hi"})
        second = client.post(
            url, json={"character_id": script["ayse"], "content": "Hello"}
        )

        assert first.status_code == 201
        assert second.status_code == 201
        assert first.json()["lineNumber"] == 1
        assert second.json()["lineNumber"] == 2
        assert second.json()["character"]["name"] == "Ayşe"

    def test_empty_content(self, client, script):
        response = client.post(
            f"/api/scripts/{script['id']}/dialogues",
            json={"characterId": script["ali"], "content": ""},
        )

        assert response.status_code == 400
        assert response.json()["errors"] == {
            "content": ["Dialogue content cannot be empty"]
        }

    def test_character_from_other_script(self, client, script):
        other = client.post("/api/scripts", json={"title": "Macbeth"}).json()
        witch = client.post(
            f"/api/scripts/{other['id']}/characters", json={"name": "Witch"}
        ).json()

        response = client.post(
            f"/api/scripts/{script['id']}/dialogues",
            json={"characterId": witch["id"], "content": "Double, double"},
        )

        assert response.status_code == 400
        assert "character_id" in response.json()["errors"]

    def test_missing_character_id(self, client, script):
        response = client.post(
            f"/api/scripts/{script['id']}/dialogues", json={"content": "Hi"}
        )

        assert response.status_code == 400
        assert "characterId" in response.json()["errors"]

    def test_get_and_update_dialogue(self, client, script):
        created = client.post(
            f"/api/scripts/{script['id']}/dialogues",
            json={
                "characterId": script["ali"],
                "content": "Hi",
                "audioPath": "/audio/ali1.mp3",
            },
        ).json()

        response = client.patch(
            f"/api/dialogues/{created['id']}", json={"content": "Hi there!"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["content"] == "Hi there!"
        assert data["audioPath"] == "/audio/ali1.mp3"
        assert client.get(f"/api/dialogues/{created['id']}").json() == data

    def test_update_clears_audio(self, client, script):
        created = client.post(
            f"/api/scripts/{script['id']}/dialogues",
            json={
                "characterId": script["ali"],
                "content": "Hi",
                "audioPath": "/audio/ali1.mp3",
            },
        ).json()

        data = client.patch(
            f"/api/dialogues/{created['id']}", json={"audioPath": None}
        ).json()

        assert data["audioPath"] is None
        assert data["content"] == "Hi"

    def test_update_missing_dialogue(self, client):
        response = client.patch("/api/dialogues/404", json={"content": "Hi"})
        assert response.status_code == 404
        assert response.json() == {"detail": "Dialogue not found"}
