"""Sample scripts for a fresh database."""

from __future__ import annotations

from typing import Any

from cueline.config import get_logger
from cueline.database.script_store import ScriptStore

logger = get_logger(__name__)

SAMPLE_SCRIPTS: list[dict[str, Any]] = [
    {
        "title": "Romeo and Juliet Scene",
        "description": "A famous scene from Shakespeare's Romeo and Juliet",
        "characters": [
            ("Romeo", "Young man from the Montague family"),
            ("Juliet", "Young woman from the Capulet family"),
        ],
        "lines": [
            (
                "Romeo",
                "But, soft! what light through yonder window breaks? "
                "It is the east, and Juliet is the sun.",
                "/audio/romeo1.mp3",
            ),
            (
                "Juliet",
                "O Romeo, Romeo! wherefore art thou Romeo? "
                "Deny thy father and refuse thy name.",
                "/audio/juliet1.mp3",
            ),
            (
                "Romeo",
                "I take thee at thy word: Call me but love, "
                "and I'll be new baptized.",
                "/audio/romeo2.mp3",
            ),
            (
                "Juliet",
                "What man art thou that thus bescreen'd in night "
                "so stumblest on my counsel?",
                "/audio/juliet2.mp3",
            ),
        ],
    },
    {
        "title": "Coffee Shop Meeting",
        "description": "A modern scene in a coffee shop",
        "characters": [
            ("Ali", "A software developer"),
            ("Ayşe", "A graphic designer"),
        ],
        "lines": [
            ("Ali", "Hi there! Is this seat taken?", "/audio/ali1.mp3"),
            (
                "Ayşe",
                "No, please feel free to join me. "
                "I'm just finishing some design work.",
                "/audio/ayse1.mp3",
            ),
            (
                "Ali",
                "Oh, you're a designer? I'm a developer myself. "
                "I've been looking for someone to collaborate with.",
                "/audio/ali2.mp3",
            ),
            (
                "Ayşe",
                "What a coincidence! I've been searching for a developer "
                "to work on a project I have in mind.",
                "/audio/ayse2.mp3",
            ),
        ],
    },
]


def seed_sample_data(store: ScriptStore) -> int:
    """Insert the sample scripts unless the store already has scripts.

    Returns:
        Number of scripts created (0 when the store was not empty).
    """
    if store.has_scripts():
        logger.info("Database already has scripts, skipping seed data")
        return 0

    for sample in SAMPLE_SCRIPTS:
        script = store.create_script(sample["title"], sample["description"])
        character_ids = {
            name: store.add_character(script.id, name, description).id
            for name, description in sample["characters"]
        }
        for speaker, content, audio_path in sample["lines"]:
            store.add_dialogue(script.id, character_ids[speaker], content, audio_path)
        logger.info(
            "Seeded sample script",
            script_id=script.id,
            title=script.title,
            line_count=len(sample["lines"]),
        )

    return len(SAMPLE_SCRIPTS)
