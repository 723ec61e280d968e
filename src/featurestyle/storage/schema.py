"""
SQLite Schema Definitions

Core container tables and schema initialization logic. Extension tables
(relationship catalog, mapping tables, style tables) are created on demand
by the modules that own them.
"""

import sqlite3
from featurestyle.logging_config import logger
from featurestyle.exceptions import StorageError
from featurestyle.storage.config import SCHEMA_VERSION


SCHEMA_SQL = f"""
-- Contents table: one row per user data table
CREATE TABLE IF NOT EXISTS gpkg_contents (
    table_name TEXT NOT NULL PRIMARY KEY,
    data_type TEXT NOT NULL,
    identifier TEXT UNIQUE,
    description TEXT DEFAULT '',
    last_change DATETIME NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
);

-- Geometry columns: the geometry column and type of each feature table
CREATE TABLE IF NOT EXISTS gpkg_geometry_columns (
    table_name TEXT NOT NULL,
    column_name TEXT NOT NULL,
    geometry_type_name TEXT NOT NULL,
    srs_id INTEGER NOT NULL DEFAULT 0,
    z TINYINT NOT NULL DEFAULT 0,
    m TINYINT NOT NULL DEFAULT 0,

    CONSTRAINT pk_geom_cols PRIMARY KEY (table_name, column_name),
    FOREIGN KEY (table_name) REFERENCES gpkg_contents(table_name) ON DELETE CASCADE
);

-- Extensions: which extensions are in use, and for which tables/columns
CREATE TABLE IF NOT EXISTS gpkg_extensions (
    table_name TEXT,
    column_name TEXT,
    extension_name TEXT NOT NULL,
    definition TEXT NOT NULL,
    scope TEXT NOT NULL,

    CONSTRAINT ge_tce UNIQUE (table_name, column_name, extension_name)
);

CREATE INDEX IF NOT EXISTS idx_extensions_name ON gpkg_extensions(extension_name);

-- Metadata table
CREATE TABLE IF NOT EXISTS featurestyle_metadata (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);

INSERT OR IGNORE INTO featurestyle_metadata (key, value) VALUES ('schema_version', '{SCHEMA_VERSION}');
INSERT OR IGNORE INTO featurestyle_metadata (key, value) VALUES ('created_at', strftime('%s', 'now'));
"""


def init_schema(conn: sqlite3.Connection, db_path: str) -> None:
    """
    Initialize core container schema if not exists.

    Args:
        conn: SQLite connection
        db_path: Path to database file (for logging)

    Raises:
        StorageError: If schema initialization fails
    """
    try:
        conn.executescript(SCHEMA_SQL)
        logger.debug(f"Initialized container schema at {db_path}")
    except sqlite3.Error as e:
        raise StorageError(f"Failed to initialize container schema: {e}") from e
