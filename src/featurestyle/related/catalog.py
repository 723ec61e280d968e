"""
Relationship Catalog

Declares, lists, and removes many-to-many relationships between tables. Each
relationship is a gpkgext_relations row plus the mapping table it names.
Extension registration (gpkg_extensions) is catalog state as well, read and
written through the ExtensionRegistry the catalog owns.
"""

import sqlite3
from enum import Enum
from typing import List, Optional, Sequence, Union

from featurestyle.logging_config import logger
from featurestyle.exceptions import ConfigurationError, StorageError
from featurestyle.attributes.columns import Column
from featurestyle.related.mapping import (
    REQUIRED_COLUMNS,
    MappingResolver,
    MappingRowStore,
)
from featurestyle.schemas import ExtendedRelation, ExtensionRecord
from featurestyle.sql import quote_identifier
from featurestyle.storage.config import DATA_TYPE_ATTRIBUTES, DATA_TYPE_FEATURES, DATA_TYPE_TILES

RELATIONS_TABLE = "gpkgext_relations"
RELATED_TABLES_EXTENSION = "related_tables"
RELATED_TABLES_DEFINITION = "http://docs.opengeospatial.org/is/18-000/18-000.html"

RELATIONS_SQL = f"""
CREATE TABLE IF NOT EXISTS {RELATIONS_TABLE} (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    base_table_name TEXT NOT NULL,
    base_primary_column TEXT NOT NULL DEFAULT 'id',
    related_table_name TEXT NOT NULL,
    related_primary_column TEXT NOT NULL DEFAULT 'id',
    relation_name TEXT NOT NULL,
    mapping_table_name TEXT NOT NULL UNIQUE
)
"""


class RelationType(str, Enum):
    """Well-known relationship kinds. Other names are user-defined kinds."""
    FEATURES = "features"
    SIMPLE_ATTRIBUTES = "simple_attributes"
    MEDIA = "media"
    TILES = "tiles"
    ATTRIBUTES = "attributes"

    @property
    def data_types(self):
        """gpkg_contents data types accepted for the related table."""
        return {
            RelationType.FEATURES: (DATA_TYPE_FEATURES,),
            RelationType.SIMPLE_ATTRIBUTES: (DATA_TYPE_ATTRIBUTES, "simple_attributes"),
            RelationType.MEDIA: (DATA_TYPE_ATTRIBUTES, "media"),
            RelationType.TILES: (DATA_TYPE_TILES,),
            RelationType.ATTRIBUTES: (DATA_TYPE_ATTRIBUTES,),
        }[self]


RelationKind = Union[RelationType, str]

MEDIA_REQUIRED_COLUMNS = ("data", "content_type")


def relation_name(kind: RelationKind) -> str:
    return kind.value if isinstance(kind, Enum) else str(kind)


def mapping_table_name_for(base_table: str, kind: RelationKind) -> str:
    """Deterministic mapping table name: ``<base>_<kind>``."""
    return f"{base_table}_{relation_name(kind)}"


def _record_to_relation(row: sqlite3.Row) -> ExtendedRelation:
    return ExtendedRelation(
        id=row["id"],
        base_table_name=row["base_table_name"],
        base_primary_column=row["base_primary_column"],
        related_table_name=row["related_table_name"],
        related_primary_column=row["related_primary_column"],
        relation_name=row["relation_name"],
        mapping_table_name=row["mapping_table_name"],
    )


def _table_exists(conn: sqlite3.Connection, name: str) -> bool:
    return conn.execute(
        "SELECT 1 FROM sqlite_master WHERE type IN ('table', 'view') AND name = ?", (name,)
    ).fetchone() is not None


class ExtensionRegistry:
    """
    Reads and writes gpkg_extensions rows.

    ``table_name=None`` on ``has``/``delete`` matches every row of the
    extension; ``register`` with ``table_name=None`` registers at container
    level.
    """

    def __init__(self, get_connection_func):
        self._get_connection = get_connection_func

    def register(self, extension_name: str, definition: str, table_name: Optional[str] = None,
                 column_name: Optional[str] = None, scope: str = "read-write",
                 conn: Optional[sqlite3.Connection] = None) -> None:
        _conn = conn or self._get_connection()
        try:
            # UNIQUE treats NULLs as distinct, so check with IS before inserting
            exists = _conn.execute(
                """
                SELECT 1 FROM gpkg_extensions
                WHERE extension_name = ? AND table_name IS ? AND column_name IS ?
                """,
                (extension_name, table_name, column_name),
            ).fetchone()
            if not exists:
                _conn.execute(
                    """
                    INSERT INTO gpkg_extensions (table_name, column_name, extension_name, definition, scope)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (table_name, column_name, extension_name, definition, scope),
                )
                logger.debug(f"Registered extension {extension_name} for {table_name or '<container>'}")
            if not conn:
                _conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to register extension {extension_name}: {e}") from e
        finally:
            if not conn:
                _conn.close()

    def has(self, extension_name: str, table_name: Optional[str] = None) -> bool:
        sql = "SELECT 1 FROM gpkg_extensions WHERE extension_name = ?"
        params = [extension_name]
        if table_name is not None:
            sql += " AND table_name = ?"
            params.append(table_name)

        conn = self._get_connection()
        try:
            return conn.execute(sql + " LIMIT 1", params).fetchone() is not None
        except sqlite3.Error as e:
            raise StorageError(f"Failed to check extension {extension_name}: {e}") from e
        finally:
            conn.close()

    def delete(self, extension_name: str, table_name: Optional[str] = None,
               conn: Optional[sqlite3.Connection] = None) -> int:
        sql = "DELETE FROM gpkg_extensions WHERE extension_name = ?"
        params = [extension_name]
        if table_name is not None:
            sql += " AND table_name = ?"
            params.append(table_name)

        _conn = conn or self._get_connection()
        try:
            deleted = _conn.execute(sql, params).rowcount
            if not conn:
                _conn.commit()
            return deleted
        except sqlite3.Error as e:
            raise StorageError(f"Failed to delete extension {extension_name}: {e}") from e
        finally:
            if not conn:
                _conn.close()

    def list(self, extension_name: Optional[str] = None) -> List[ExtensionRecord]:
        sql = "SELECT table_name, column_name, extension_name, definition, scope FROM gpkg_extensions"
        params = []
        if extension_name is not None:
            sql += " WHERE extension_name = ?"
            params.append(extension_name)

        conn = self._get_connection()
        try:
            return [ExtensionRecord(**dict(row)) for row in conn.execute(sql, params).fetchall()]
        except sqlite3.Error as e:
            raise StorageError(f"Failed to list extensions: {e}") from e
        finally:
            conn.close()


class RelationshipCatalog:
    """
    Catalog of declared relationships for one container.

    Args:
        container: The Container whose gpkgext_relations table this manages
    """

    def __init__(self, container):
        self.container = container
        self._get_connection = container._get_connection
        self.extensions = ExtensionRegistry(self._get_connection)
        self.resolver = MappingResolver(self._get_connection)

    # ========== DECLARATION ==========

    def _validate_tables(self, conn: sqlite3.Connection, base_table: str, base_column: str,
                         related_table: str, related_column: str, kind: RelationKind) -> None:
        tables = self.container.tables
        for label, table, column in (("Base", base_table, base_column),
                                     ("Related", related_table, related_column)):
            if not tables.table_exists(table, conn):
                raise ConfigurationError(f"{label} table does not exist: {table}")
            if column not in tables.get_columns(table, conn):
                raise ConfigurationError(
                    f"{label} table {table} has no primary column '{column}'"
                )

        try:
            known = RelationType(relation_name(kind))
        except ValueError:
            return

        data_type = tables.get_table_type(related_table, conn)
        if known is RelationType.MEDIA:
            columns = tables.get_columns(related_table, conn)
            missing = [c for c in MEDIA_REQUIRED_COLUMNS if c not in columns]
            if missing:
                raise ConfigurationError(
                    f"Media table {related_table} is missing columns: {', '.join(missing)}"
                )
        elif data_type not in known.data_types:
            raise ConfigurationError(
                f"Related table {related_table} must be a {known.value} table"
                f" for a '{known.value}' relationship. Actual Type: {data_type}"
            )

    def declare_relationship(
        self,
        base_table: str,
        base_column: str,
        related_table: str,
        related_column: str,
        kind: RelationKind,
        mapping_table_name: Optional[str] = None,
        extra_columns: Sequence[Column] = (),
    ) -> ExtendedRelation:
        """
        Declare a relationship, creating its mapping table if needed.

        Declaring the same (base, related, kind, mapping table) again is a
        no-op that returns the existing descriptor.

        Raises:
            ConfigurationError: If a table or key column is missing, the related
                table has the wrong type, or the mapping table name is already
                used by a different relationship
        """
        name = relation_name(kind)
        mapping_table_name = mapping_table_name or mapping_table_name_for(base_table, name)
        relation = ExtendedRelation(
            base_table_name=base_table,
            base_primary_column=base_column,
            related_table_name=related_table,
            related_primary_column=related_column,
            relation_name=name,
            mapping_table_name=mapping_table_name,
        )

        try:
            with self.container.transaction() as conn:
                self._validate_tables(conn, base_table, base_column, related_table, related_column, name)
                conn.execute(RELATIONS_SQL)

                existing = conn.execute(
                    f"SELECT * FROM {RELATIONS_TABLE} WHERE mapping_table_name = ?",
                    (mapping_table_name,),
                ).fetchone()
                if existing is not None:
                    existing = _record_to_relation(existing)
                    if existing.key() != relation.key():
                        raise ConfigurationError(
                            f"Mapping table {mapping_table_name} already backs relationship"
                            f" {existing.relation_name} between {existing.base_table_name}"
                            f" and {existing.related_table_name}"
                        )

                if _table_exists(conn, mapping_table_name):
                    columns = self.container.tables.get_columns(mapping_table_name, conn)
                    if not all(c in columns for c in REQUIRED_COLUMNS):
                        raise ConfigurationError(
                            f"Table {mapping_table_name} exists but is not a mapping table"
                        )
                else:
                    MappingRowStore(self._get_connection, relation).create(extra_columns, conn)

                self.extensions.register(RELATED_TABLES_EXTENSION, RELATED_TABLES_DEFINITION,
                                         table_name=RELATIONS_TABLE, conn=conn)
                self.extensions.register(RELATED_TABLES_EXTENSION, RELATED_TABLES_DEFINITION,
                                         table_name=mapping_table_name, conn=conn)

                if existing is not None:
                    return existing

                cursor = conn.execute(
                    f"""
                    INSERT INTO {RELATIONS_TABLE} (base_table_name, base_primary_column,
                        related_table_name, related_primary_column, relation_name, mapping_table_name)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (base_table, base_column, related_table, related_column, name, mapping_table_name),
                )
                relation.id = cursor.lastrowid
        except sqlite3.Error as e:
            raise StorageError.for_relation(f"Failed to declare relationship: {e}", relation) from e

        logger.info(
            f"Declared {name} relationship {base_table} -> {related_table} via {mapping_table_name}"
        )
        return relation

    # ========== QUERIES ==========

    def _relations_table_exists(self, conn: sqlite3.Connection) -> bool:
        return _table_exists(conn, RELATIONS_TABLE)

    def list_relationships(self, base_table: Optional[str] = None,
                           related_table: Optional[str] = None,
                           kind: Optional[RelationKind] = None) -> List[ExtendedRelation]:
        """Relationships matching every given filter, in declaration order."""
        clauses, params = [], []
        if base_table is not None:
            clauses.append("base_table_name = ?")
            params.append(base_table)
        if related_table is not None:
            clauses.append("related_table_name = ?")
            params.append(related_table)
        if kind is not None:
            clauses.append("relation_name = ?")
            params.append(relation_name(kind))

        sql = f"SELECT * FROM {RELATIONS_TABLE}"
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)

        conn = self._get_connection()
        try:
            if not self._relations_table_exists(conn):
                return []
            return [_record_to_relation(row) for row in conn.execute(sql + " ORDER BY id", params)]
        except sqlite3.Error as e:
            raise StorageError(f"Failed to list relationships: {e}") from e
        finally:
            conn.close()

    def get_relationship(self, mapping_table_name: str) -> Optional[ExtendedRelation]:
        conn = self._get_connection()
        try:
            if not self._relations_table_exists(conn):
                return None
            row = conn.execute(
                f"SELECT * FROM {RELATIONS_TABLE} WHERE mapping_table_name = ?",
                (mapping_table_name,),
            ).fetchone()
            return _record_to_relation(row) if row else None
        except sqlite3.Error as e:
            raise StorageError(f"Failed to get relationship {mapping_table_name}: {e}") from e
        finally:
            conn.close()

    def has_relationship(self, base_table: str, related_table: Optional[str] = None,
                         kind: Optional[RelationKind] = None) -> bool:
        return bool(self.list_relationships(base_table, related_table, kind))

    def has_relationships(self, base_table: Optional[str] = None) -> bool:
        return bool(self.list_relationships(base_table))

    def mapping_store(self, relation: ExtendedRelation) -> MappingRowStore:
        return MappingRowStore(self._get_connection, relation)

    # ========== REMOVAL ==========

    def remove_relationship(self, relation: ExtendedRelation) -> bool:
        """
        Drop a relationship's mapping table and catalog row.

        When the last relationship goes, the related tables extension is
        deregistered and its catalog table dropped. Removing a relationship
        that does not exist is a no-op.

        Returns:
            True if a catalog row was removed
        """
        mapping_table = relation.mapping_table_name
        try:
            with self.container.transaction() as conn:
                if not self._relations_table_exists(conn):
                    return False

                removed = conn.execute(
                    f"""
                    DELETE FROM {RELATIONS_TABLE}
                    WHERE mapping_table_name = ? AND base_table_name = ?
                        AND related_table_name = ? AND relation_name = ?
                    """,
                    (mapping_table, relation.base_table_name, relation.related_table_name,
                     relation.relation_name),
                ).rowcount
                if not removed:
                    return False

                conn.execute(f"DROP TABLE IF EXISTS {quote_identifier(mapping_table)}")
                self.extensions.delete(RELATED_TABLES_EXTENSION, mapping_table, conn)

                remaining = conn.execute(f"SELECT COUNT(*) FROM {RELATIONS_TABLE}").fetchone()[0]
                if remaining == 0:
                    self.extensions.delete(RELATED_TABLES_EXTENSION, conn=conn)
                    conn.execute(f"DROP TABLE IF EXISTS {RELATIONS_TABLE}")
                    logger.info("Removed last relationship; related tables extension deregistered")
        except sqlite3.Error as e:
            raise StorageError.for_relation(f"Failed to remove relationship: {e}", relation) from e

        logger.info(f"Removed {relation.relation_name} relationship via {mapping_table}")
        return True

    def remove_relationships(self, base_table: str, related_table: Optional[str] = None,
                             kind: Optional[RelationKind] = None) -> int:
        """Remove every relationship matching the filters; returns how many were removed."""
        return sum(
            1 for relation in self.list_relationships(base_table, related_table, kind)
            if self.remove_relationship(relation)
        )
