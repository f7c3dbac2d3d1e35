"""Database schema initialization."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from cueline.config import CueLineSettings, get_logger
from cueline.database.connection_manager import DatabaseConnectionManager
from cueline.exceptions import DatabaseError

logger = get_logger(__name__)


class DatabaseInitializer:
    """Creates the CueLine schema in a SQLite database."""

    def __init__(self, sql_dir: Path | None = None) -> None:
        """Initialize database initializer.

        Args:
            sql_dir: Directory containing SQL files. Defaults to the package
                SQL directory.
        """
        if sql_dir is None:
            sql_dir = Path(__file__).parent / "sql"
        self.sql_dir = sql_dir

    def _read_sql_file(self, filename: str) -> str:
        """Read SQL file content.

        Raises:
            FileNotFoundError: If SQL file not found.
        """
        sql_path = self.sql_dir / filename
        if not sql_path.exists():
            raise FileNotFoundError(f"SQL file not found: {sql_path}")
        return sql_path.read_text(encoding="utf-8")

    def initialize_database(
        self,
        db_path: Path | None = None,
        force: bool = False,
        settings: CueLineSettings | None = None,
    ) -> Path:
        """Initialize SQLite database with schema.

        Args:
            db_path: Path to the SQLite database file. If None, uses settings.
            force: If True, remove an existing database first.
            settings: Configuration settings. If None, uses global settings.

        Returns:
            Path to the initialized database.

        Raises:
            FileExistsError: If a database with a schema exists and force is False.
            DatabaseError: If database initialization fails.
        """
        if settings is None:
            from cueline.config import get_settings

            settings = get_settings()

        db_path = (db_path or settings.database_path).resolve()

        if db_path.exists():
            with DatabaseConnectionManager(settings, db_path=db_path) as probe:
                has_schema = probe.check_database_exists()
            if has_schema and not force:
                raise FileExistsError(
                    f"Database already exists at {db_path}. Use --force to overwrite."
                )
            if force:
                logger.warning("Removing existing database", path=str(db_path))
                for suffix in ("", "-wal", "-shm"):
                    Path(f"{db_path}{suffix}").unlink(missing_ok=True)

        db_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            init_sql = self._read_sql_file("init_database.sql")
            with (
                DatabaseConnectionManager(settings, db_path=db_path) as manager,
                manager.transaction() as conn,
            ):
                conn.executescript(init_sql)
        except (OSError, sqlite3.Error) as e:
            raise DatabaseError(
                message=f"Failed to initialize database: {e}",
                hint="Check disk space and file permissions",
                details={"path": str(db_path), "error_type": type(e).__name__},
            ) from e

        logger.info("Database initialized successfully", path=str(db_path))
        return db_path

    def ensure_database(self, settings: CueLineSettings) -> Path:
        """Create the schema when the configured database has none yet."""
        with DatabaseConnectionManager(settings) as probe:
            if probe.check_database_exists():
                return probe.db_path
        return self.initialize_database(settings=settings)
