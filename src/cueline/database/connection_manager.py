"""Database connection management with a small pool of SQLite connections.

The manager is constructed explicitly and owned by whoever opens it (the API
lifespan or a CLI command); there is no module-level singleton.
"""

from __future__ import annotations

import sqlite3
import threading
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from queue import Empty, Full, LifoQueue
from typing import Any

from cueline.config import CueLineSettings, get_logger
from cueline.exceptions import DatabaseError

logger = get_logger(__name__)


class DatabaseConnectionManager:
    """Hands out configured SQLite connections and wraps them in transactions."""

    def __init__(
        self,
        settings: CueLineSettings,
        db_path: Path | None = None,
        max_idle: int = 5,
    ) -> None:
        """Initialize the connection manager.

        Args:
            settings: Configuration settings
            db_path: Database path (defaults to settings.database_path)
            max_idle: Maximum number of idle connections kept for reuse
        """
        self.settings = settings
        self.db_path = Path(db_path or settings.database_path)
        self._idle: LifoQueue[sqlite3.Connection] = LifoQueue(maxsize=max_idle)
        self._lock = threading.Lock()
        self._closed = False

    def _create_connection(self) -> sqlite3.Connection:
        """Create a new database connection with the configured pragmas."""
        try:
            conn = sqlite3.connect(
                str(self.db_path),
                timeout=self.settings.database_timeout,
                check_same_thread=False,
            )
        except sqlite3.Error as e:
            raise DatabaseError(
                message=f"Failed to open database: {e}",
                hint="Check that the database directory exists and is writable",
                details={"path": str(self.db_path)},
            ) from e

        conn.row_factory = sqlite3.Row
        conn.execute(f"PRAGMA journal_mode = {self.settings.database_journal_mode}")
        conn.execute(f"PRAGMA synchronous = {self.settings.database_synchronous}")
        if self.settings.database_foreign_keys:
            conn.execute("PRAGMA foreign_keys = ON")
        else:
            conn.execute("PRAGMA foreign_keys = OFF")
        return conn

    def get_connection(self) -> sqlite3.Connection:
        """Get an idle connection, or open a new one."""
        with self._lock:
            if self._closed:
                raise DatabaseError(
                    message="Connection manager is closed",
                    details={"path": str(self.db_path)},
                )
        try:
            return self._idle.get_nowait()
        except Empty:
            return self._create_connection()

    def release_connection(self, conn: sqlite3.Connection) -> None:
        """Return a connection for reuse, closing it if the pool is full."""
        if self._closed:
            conn.close()
            return
        try:
            self._idle.put_nowait(conn)
        except Full:
            conn.close()

    @contextmanager
    def transaction(self) -> Generator[sqlite3.Connection, None, None]:
        """Yield a connection inside a transaction; commit or roll back on exit."""
        conn = self.get_connection()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            self.release_connection(conn)

    @contextmanager
    def readonly(self) -> Generator[sqlite3.Connection, None, None]:
        """Yield a connection that rejects writes."""
        conn = self.get_connection()
        try:
            conn.execute("PRAGMA query_only = ON")
            yield conn
        finally:
            conn.execute("PRAGMA query_only = OFF")
            self.release_connection(conn)

    def check_database_exists(self) -> bool:
        """Check if the database file exists and has the scripts table."""
        if not self.db_path.exists():
            return False
        try:
            with self.readonly() as conn:
                cursor = conn.execute(
                    "SELECT name FROM sqlite_master "
                    "WHERE type='table' AND name='scripts'"
                )
                return cursor.fetchone() is not None
        except sqlite3.Error:
            return False

    def close(self) -> None:
        """Close all idle connections and refuse further use."""
        with self._lock:
            self._closed = True
        closed = 0
        while True:
            try:
                conn = self._idle.get_nowait()
            except Empty:
                break
            conn.close()
            closed += 1
        logger.debug("Connection manager closed", connections_closed=closed)

    def __enter__(self) -> DatabaseConnectionManager:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
