"""
Container Facade

Public API for the SQLite-backed container. Delegates to specialized modules:
- persistence: Connection management, transactions, metadata
- tables: Table creation and type lookups
"""

from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

from featurestyle.attributes.columns import AttributesTable, Column
from featurestyle.geometry import GeometryType
from featurestyle.storage.persistence import SQLitePersistence
from featurestyle.storage.tables import SQLiteTableOperations


class Container:
    """
    A file-backed relational container (GeoPackage-style SQLite file).

    Args:
        path: Path to the container file, or a directory to create one in
    """

    def __init__(self, path: Union[str, Path]):
        self.persistence = SQLitePersistence(path)
        self.tables = SQLiteTableOperations(self.persistence._get_connection)

        self.db_path = self.persistence.db_path

    # ========== CONNECTION & TRANSACTION MANAGEMENT ==========

    def _get_connection(self):
        """Get database connection with optimized settings."""
        return self.persistence._get_connection()

    def transaction(self):
        """Context manager for atomic transactions."""
        return self.persistence.transaction()

    # ========== TABLE OPERATIONS ==========

    def table_exists(self, table_name: str) -> bool:
        return self.tables.table_exists(table_name)

    def get_columns(self, table_name: str) -> List[str]:
        return self.tables.get_columns(table_name)

    def get_primary_key(self, table_name: str) -> Optional[str]:
        return self.tables.get_primary_key(table_name)

    def get_table_type(self, table_name: str) -> Optional[str]:
        return self.tables.get_table_type(table_name)

    def is_feature_table(self, table_name: str) -> bool:
        return self.tables.is_feature_table(table_name)

    def get_feature_tables(self) -> List[str]:
        return self.tables.get_feature_tables()

    def get_geometry_type(self, table_name: str) -> Optional[GeometryType]:
        return self.tables.get_geometry_type(table_name)

    def create_feature_table(self, table_name: str,
                             geometry_type: GeometryType = GeometryType.GEOMETRY,
                             geometry_column: str = "geom",
                             columns: Optional[Sequence[Column]] = None):
        """Create and register a feature table."""
        return self.tables.create_feature_table(table_name, geometry_type, geometry_column, columns)

    def create_attributes_table(self, table: AttributesTable, conn=None):
        """Create and register an attributes table from its column layout."""
        return self.tables.create_attributes_table(table, conn=conn)

    def create_media_table(self, table_name: str) -> AttributesTable:
        return self.tables.create_media_table(table_name)

    def insert_feature(self, table_name: str, **values: Any) -> int:
        return self.tables.insert_feature(table_name, **values)

    def drop_table(self, table_name: str, conn=None):
        return self.tables.drop_table(table_name, conn)

    # ========== METADATA & STATS ==========

    def get_metadata(self, key: str):
        """Get metadata value by key."""
        return self.persistence.get_metadata(key)

    def set_metadata(self, key: str, value: str, conn=None):
        """Set metadata key-value pair."""
        return self.persistence.set_metadata(key, value, conn)

    def get_stats(self):
        """Get container statistics."""
        return self.persistence.get_stats()
