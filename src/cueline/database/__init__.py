"""Relational storage for scripts, characters and dialogue lines."""

from cueline.database.connection_manager import DatabaseConnectionManager
from cueline.database.initializer import DatabaseInitializer
from cueline.database.script_store import ScriptStore
from cueline.database.seed import SAMPLE_SCRIPTS, seed_sample_data

__all__ = [
    "SAMPLE_SCRIPTS",
    "DatabaseConnectionManager",
    "DatabaseInitializer",
    "ScriptStore",
    "seed_sample_data",
]
