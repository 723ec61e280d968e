"""
SQLite Table Operations

Creates user data tables and answers questions about them: does a table
exist, which columns does it have, and what contents type is it registered
as.
"""

import sqlite3
from typing import Any, List, Optional, Sequence

from featurestyle.logging_config import logger
from featurestyle.exceptions import ConfigurationError, StorageError
from featurestyle.attributes.columns import AttributesTable, Column
from featurestyle.geometry import GeometryType
from featurestyle.storage.config import (
    DATA_TYPE_ATTRIBUTES,
    DATA_TYPE_FEATURES,
)
from featurestyle.sql import placeholders, quote_identifier, quote_list


MEDIA_COLUMNS = (
    Column("id", "INTEGER", primary_key=True),
    Column("data", "BLOB", not_null=True),
    Column("content_type", "TEXT", not_null=True),
)


class SQLiteTableOperations:
    """
    Table lookup and creation.

    All methods accept an optional connection for transaction support.
    """

    def __init__(self, get_connection_func):
        """
        Initialize with a connection factory function.

        Args:
            get_connection_func: Callable that returns a new SQLite connection
        """
        self._get_connection = get_connection_func

    # ========== LOOKUPS ==========

    def table_exists(self, table_name: str, conn: Optional[sqlite3.Connection] = None) -> bool:
        _conn = conn or self._get_connection()
        try:
            row = _conn.execute(
                "SELECT 1 FROM sqlite_master WHERE type IN ('table', 'view') AND name = ?",
                (table_name,),
            ).fetchone()
            return row is not None
        finally:
            if not conn:
                _conn.close()

    def get_columns(self, table_name: str, conn: Optional[sqlite3.Connection] = None) -> List[str]:
        """Column names in declaration order; empty if the table does not exist."""
        _conn = conn or self._get_connection()
        try:
            rows = _conn.execute(f"PRAGMA table_info({quote_identifier(table_name)})").fetchall()
            return [row["name"] for row in rows]
        finally:
            if not conn:
                _conn.close()

    def get_primary_key(self, table_name: str, conn: Optional[sqlite3.Connection] = None) -> Optional[str]:
        _conn = conn or self._get_connection()
        try:
            rows = _conn.execute(f"PRAGMA table_info({quote_identifier(table_name)})").fetchall()
            for row in rows:
                if row["pk"]:
                    return row["name"]
            return None
        finally:
            if not conn:
                _conn.close()

    def get_table_type(self, table_name: str, conn: Optional[sqlite3.Connection] = None) -> Optional[str]:
        """The gpkg_contents data_type of a table, or None if unregistered."""
        _conn = conn or self._get_connection()
        try:
            row = _conn.execute(
                "SELECT data_type FROM gpkg_contents WHERE table_name = ?", (table_name,)
            ).fetchone()
            return row["data_type"] if row else None
        finally:
            if not conn:
                _conn.close()

    def is_feature_table(self, table_name: str) -> bool:
        return self.get_table_type(table_name) == DATA_TYPE_FEATURES

    def get_feature_tables(self) -> List[str]:
        conn = self._get_connection()
        try:
            rows = conn.execute(
                "SELECT table_name FROM gpkg_contents WHERE data_type = ? ORDER BY table_name",
                (DATA_TYPE_FEATURES,),
            ).fetchall()
            return [row["table_name"] for row in rows]
        finally:
            conn.close()

    def get_geometry_type(self, table_name: str) -> Optional[GeometryType]:
        """Declared geometry type of a feature table."""
        conn = self._get_connection()
        try:
            row = conn.execute(
                "SELECT geometry_type_name FROM gpkg_geometry_columns WHERE table_name = ?",
                (table_name,),
            ).fetchone()
            return GeometryType.from_name(row["geometry_type_name"]) if row else None
        finally:
            conn.close()

    # ========== CREATION ==========

    def register_contents(self, table_name: str, data_type: str, conn: sqlite3.Connection,
                          description: str = "") -> None:
        conn.execute(
            """
            INSERT INTO gpkg_contents (table_name, data_type, identifier, description)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(table_name) DO UPDATE SET data_type = excluded.data_type
            """,
            (table_name, data_type, table_name, description),
        )

    def create_feature_table(
        self,
        table_name: str,
        geometry_type: GeometryType = GeometryType.GEOMETRY,
        geometry_column: str = "geom",
        columns: Optional[Sequence[Column]] = None,
        conn: Optional[sqlite3.Connection] = None,
    ) -> None:
        """
        Create a feature table with an integer id, an opaque geometry BLOB and
        any extra property columns, and register it as ``features``.
        """
        if self.table_exists(table_name, conn):
            raise ConfigurationError(f"Table already exists: {table_name}")

        defs = [
            f"{quote_identifier('id')} INTEGER PRIMARY KEY AUTOINCREMENT",
            f"{quote_identifier(geometry_column)} BLOB",
        ]
        defs.extend(c.definition() for c in (columns or ()))

        _conn = conn or self._get_connection()
        try:
            _conn.execute(f"CREATE TABLE {quote_identifier(table_name)} ({', '.join(defs)})")
            self.register_contents(table_name, DATA_TYPE_FEATURES, _conn)
            _conn.execute(
                """
                INSERT INTO gpkg_geometry_columns (table_name, column_name, geometry_type_name)
                VALUES (?, ?, ?)
                """,
                (table_name, geometry_column, GeometryType.from_name(geometry_type).value),
            )
            if not conn:
                _conn.commit()
            logger.debug(f"Created feature table {table_name}")
        except sqlite3.Error as e:
            if not conn:
                _conn.rollback()
            raise StorageError(f"Failed to create feature table {table_name}: {e}") from e
        finally:
            if not conn:
                _conn.close()

    def create_attributes_table(
        self,
        table: AttributesTable,
        data_type: str = DATA_TYPE_ATTRIBUTES,
        conn: Optional[sqlite3.Connection] = None,
    ) -> None:
        """Create an attribute table from its layout (no-op if it exists) and register it."""
        _conn = conn or self._get_connection()
        try:
            _conn.execute(table.create_sql())
            self.register_contents(table.table_name, data_type, _conn)
            if not conn:
                _conn.commit()
            logger.debug(f"Created attributes table {table.table_name}")
        except sqlite3.Error as e:
            if not conn:
                _conn.rollback()
            raise StorageError(f"Failed to create attributes table {table.table_name}: {e}") from e
        finally:
            if not conn:
                _conn.close()

    def create_media_table(self, table_name: str, conn: Optional[sqlite3.Connection] = None) -> AttributesTable:
        """Create a table holding binary ``data`` with its ``content_type``."""
        table = AttributesTable(table_name, MEDIA_COLUMNS)
        self.create_attributes_table(table, conn=conn)
        return table

    def insert_feature(self, table_name: str, conn: Optional[sqlite3.Connection] = None, **values: Any) -> int:
        """Insert a feature row; returns its id."""
        _conn = conn or self._get_connection()
        try:
            if values:
                sql = (f"INSERT INTO {quote_identifier(table_name)} ({quote_list(values)})"
                       f" VALUES ({placeholders(len(values))})")
                cursor = _conn.execute(sql, list(values.values()))
            else:
                cursor = _conn.execute(f"INSERT INTO {quote_identifier(table_name)} DEFAULT VALUES")
            if not conn:
                _conn.commit()
            return cursor.lastrowid
        except sqlite3.Error as e:
            raise StorageError(f"Failed to insert feature into {table_name}: {e}") from e
        finally:
            if not conn:
                _conn.close()

    def drop_table(self, table_name: str, conn: Optional[sqlite3.Connection] = None) -> None:
        """Drop a table and its contents registration. Missing tables are ignored."""
        _conn = conn or self._get_connection()
        try:
            _conn.execute(f"DROP TABLE IF EXISTS {quote_identifier(table_name)}")
            _conn.execute("DELETE FROM gpkg_contents WHERE table_name = ?", (table_name,))
            if not conn:
                _conn.commit()
            logger.debug(f"Dropped table {table_name}")
        except sqlite3.Error as e:
            raise StorageError(f"Failed to drop table {table_name}: {e}") from e
        finally:
            if not conn:
                _conn.close()
