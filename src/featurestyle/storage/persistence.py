"""
SQLite Persistence Layer

Handles connection management, transactions, metadata, and container lifecycle.
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Optional, Union

from featurestyle.config import get_config_value
from featurestyle.logging_config import logger
from featurestyle.exceptions import StorageError
from featurestyle.storage.schema import init_schema
from featurestyle.storage.config import DEFAULT_FILE_NAME, DEFAULT_TIMEOUT, ENABLE_WAL_MODE


class SQLitePersistence:
    """
    Manages the container file, its connections, and metadata.

    Responsibilities:
    - Connection creation and configuration
    - Transaction management
    - Metadata storage
    - Container statistics
    """

    def __init__(self, container_path: Union[str, Path]):
        """
        Initialize persistence layer with automatic schema creation.

        Args:
            container_path: Path to a container file (.gpkg/.db/.sqlite), or a
                            directory in which one is created
        """
        if isinstance(container_path, str):
            container_path = Path(container_path)

        if container_path.suffix in ('.gpkg', '.db', '.sqlite'):
            self.db_path = container_path
            self.container_dir = container_path.parent
        else:
            self.container_dir = container_path
            self.db_path = container_path / get_config_value("storage.file_name", DEFAULT_FILE_NAME)

        self.timeout = float(get_config_value("storage.timeout", DEFAULT_TIMEOUT))
        self.wal_mode = bool(get_config_value("storage.wal_mode", ENABLE_WAL_MODE))

        self.container_dir.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    def _get_connection(self) -> sqlite3.Connection:
        """
        Get database connection with optimized settings.

        Returns:
            Connection with row factory and foreign keys enabled
        """
        conn = sqlite3.connect(str(self.db_path), timeout=self.timeout)
        conn.row_factory = sqlite3.Row  # Access columns by name
        conn.execute("PRAGMA foreign_keys = ON")

        if self.wal_mode:
            conn.execute("PRAGMA journal_mode = WAL")

        conn.execute(f"PRAGMA busy_timeout = {int(self.timeout * 1000)}")
        return conn

    @contextmanager
    def transaction(self):
        """
        Context manager for atomic transactions.

        Usage:
            with persistence.transaction() as conn:
                # Perform database operations
                # Commits on success, rolls back on exception

        Yields:
            Connection object for passing to write methods
        """
        conn = self._get_connection()
        try:
            yield conn
            conn.commit()
            logger.debug("Transaction committed successfully")
        except Exception as e:
            conn.rollback()
            logger.error(f"Transaction rolled back due to error: {e}")
            raise
        finally:
            conn.close()

    def _init_schema(self):
        """Initialize core schema if not exists."""
        with self.transaction() as conn:
            init_schema(conn, str(self.db_path))

    def get_metadata(self, key: str) -> Optional[str]:
        """Get metadata value by key."""
        conn = self._get_connection()
        try:
            cursor = conn.execute("SELECT value FROM featurestyle_metadata WHERE key = ?", (key,))
            row = cursor.fetchone()
            return row['value'] if row else None
        finally:
            conn.close()

    def set_metadata(self, key: str, value: str, conn: Optional[sqlite3.Connection] = None):
        """Set metadata key-value pair."""
        _conn = conn or self._get_connection()
        try:
            _conn.execute("""
                INSERT INTO featurestyle_metadata (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value=excluded.value
            """, (key, value))

            if not conn:
                _conn.commit()
        finally:
            if not conn:
                _conn.close()

    def get_stats(self) -> Dict[str, Any]:
        """
        Get container statistics.

        Returns:
            Dict with table counts by data type, relationship count, and file size
        """
        conn = self._get_connection()
        try:
            stats: Dict[str, Any] = {}
            rows = conn.execute(
                "SELECT data_type, COUNT(*) AS n FROM gpkg_contents GROUP BY data_type"
            ).fetchall()
            stats['tables_by_type'] = {row['data_type']: row['n'] for row in rows}
            stats['total_extensions'] = conn.execute(
                "SELECT COUNT(*) FROM gpkg_extensions"
            ).fetchone()[0]

            has_relations = conn.execute(
                "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = 'gpkgext_relations'"
            ).fetchone()
            stats['total_relationships'] = conn.execute(
                "SELECT COUNT(*) FROM gpkgext_relations"
            ).fetchone()[0] if has_relations else 0

            stats['db_size_bytes'] = self.db_path.stat().st_size if self.db_path.exists() else 0
            return stats
        except sqlite3.Error as e:
            raise StorageError(f"Failed to read container statistics: {e}") from e
        finally:
            conn.close()
