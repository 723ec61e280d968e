"""
Feature Style Extension

Stores styles and icons for feature tables using declared relationships.
Eight relationship kinds cover two row types (style, icon), two scopes
(feature, table) and two tiers (per geometry type, default). Each kind has
its own mapping table named ``<feature_table>_<kind>``, so each can be
created, detected and dropped on its own.

Feature-scope mappings use feature ids as base ids. Table-scope mappings use
the feature table's contents id (see the contents id table) as the base id.
"""

import sqlite3
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from featurestyle.logging_config import logger
from featurestyle.exceptions import ConfigurationError, StorageError
from featurestyle.attributes.columns import AttributesTable, Column
from featurestyle.attributes.dao import AttributesDao
from featurestyle.config import get_config_value
from featurestyle.geometry import GeometryType
from featurestyle.related.catalog import RelationshipCatalog
from featurestyle.schemas import ExtendedRelation
from featurestyle.sql import quote_identifier
from featurestyle.style.rows import IconRow, StyleRow, icon_table, style_table
from featurestyle.style.sets import FeatureStyle, FeatureStyles, Icons, Styles

EXTENSION_NAME = "nga_feature_style"
EXTENSION_DEFINITION = "http://ngageoint.github.io/GeoPackage/docs/extensions/feature-style.html"
CONTENTS_ID_EXTENSION = "nga_contents_id"
CONTENTS_ID_DEFINITION = "http://ngageoint.github.io/GeoPackage/docs/extensions/contents-id.html"

COLUMN_GEOMETRY_TYPE_NAME = "geometry_type_name"
GEOMETRY_TYPE_COLUMN = Column(COLUMN_GEOMETRY_TYPE_NAME, "TEXT", not_null=True)

GeometryKey = Optional[Union[GeometryType, str]]


class StyleRelation(str, Enum):
    """The eight style/icon relationship kinds."""
    STYLE = "style"
    STYLE_DEFAULT = "style_default"
    TABLE_STYLE = "table_style"
    TABLE_STYLE_DEFAULT = "table_style_default"
    ICON = "icon"
    ICON_DEFAULT = "icon_default"
    TABLE_ICON = "table_icon"
    TABLE_ICON_DEFAULT = "table_icon_default"

    @property
    def is_icon(self) -> bool:
        return "icon" in self.value

    @property
    def is_table(self) -> bool:
        return self.value.startswith("table_")

    @property
    def is_default(self) -> bool:
        return self.value.endswith("_default")

    @classmethod
    def of(cls, icon: bool, table: bool, default: bool) -> "StyleRelation":
        name = ("table_" if table else "") + ("icon" if icon else "style") + ("_default" if default else "")
        return cls(name)

    @classmethod
    def pair(cls, icon: bool, table: bool) -> Tuple["StyleRelation", "StyleRelation"]:
        """(per geometry type, default) kinds of one row type and scope."""
        return cls.of(icon, table, False), cls.of(icon, table, True)


_ALL = object()


class FeatureStyleExtension:
    """
    Style and icon storage for the feature tables of one container.

    Args:
        container: The Container to operate on
        catalog: Relationship catalog to declare mappings through (created if omitted)
    """

    def __init__(self, container, catalog: Optional[RelationshipCatalog] = None):
        self.container = container
        self.catalog = catalog or RelationshipCatalog(container)
        self._get_connection = container._get_connection

        self.style_table: AttributesTable = style_table()
        self.icon_table: AttributesTable = icon_table()
        self.contents_id_table: str = get_config_value("styles.contents_id_table", "nga_contents_id")

        self.style_dao = AttributesDao(self._get_connection, self.style_table)
        self.icon_dao = AttributesDao(self._get_connection, self.icon_table)

    # ========== NAMES & LOOKUPS ==========

    @staticmethod
    def mapping_table_name(table_name: str, kind: StyleRelation) -> str:
        return f"{table_name}_{StyleRelation(kind).value}"

    def _require_feature_table(self, table_name: str) -> None:
        if not self.container.is_feature_table(table_name):
            raise ConfigurationError(
                f"Table must be a feature table. Table: {table_name},"
                f" Actual Type: {self.container.get_table_type(table_name)}"
            )

    def _dao(self, icon: bool) -> AttributesDao:
        return self.icon_dao if icon else self.style_dao

    def get_relationship(self, table_name: str, kind: StyleRelation) -> Optional[ExtendedRelation]:
        return self.catalog.get_relationship(self.mapping_table_name(table_name, kind))

    def has_relationship(self, table_name: str, kind: StyleRelation) -> bool:
        return self.get_relationship(table_name, kind) is not None

    def get_tables(self) -> List[str]:
        """Feature tables with the extension registered."""
        return sorted({
            record.table_name for record in self.catalog.extensions.list(EXTENSION_NAME)
            if record.table_name is not None
        })

    def has(self, table_name: Optional[str] = None) -> bool:
        return self.catalog.extensions.has(EXTENSION_NAME, table_name)

    # ========== CONTENTS IDS ==========

    def _create_contents_id_table(self) -> None:
        try:
            with self.container.transaction() as conn:
                conn.execute(
                    f"""
                    CREATE TABLE IF NOT EXISTS {quote_identifier(self.contents_id_table)} (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        table_name TEXT NOT NULL UNIQUE
                    )
                    """
                )
                self.catalog.extensions.register(CONTENTS_ID_EXTENSION, CONTENTS_ID_DEFINITION,
                                                 table_name=self.contents_id_table, conn=conn)
        except sqlite3.Error as e:
            raise StorageError(f"Failed to create {self.contents_id_table}: {e}") from e

    def get_contents_id(self, table_name: str, create: bool = False) -> Optional[int]:
        """
        Integer id standing in for a table in table-scope mappings.

        Args:
            table_name: Feature table name
            create: Assign an id if the table has none yet
        """
        if not self.container.table_exists(self.contents_id_table):
            if not create:
                return None
            self._create_contents_id_table()

        name = quote_identifier(self.contents_id_table)
        try:
            with self.container.transaction() as conn:
                row = conn.execute(f"SELECT id FROM {name} WHERE table_name = ?", (table_name,)).fetchone()
                if row is not None:
                    return row["id"]
                if not create:
                    return None
                return conn.execute(f"INSERT INTO {name} (table_name) VALUES (?)", (table_name,)).lastrowid
        except sqlite3.Error as e:
            raise StorageError(f"Failed to get contents id of {table_name}: {e}") from e

    # ========== RELATIONSHIPS ==========

    def create_relationship(self, table_name: str, kind: StyleRelation) -> ExtendedRelation:
        """
        Declare one style/icon relationship for a feature table.

        Creates the style or icon table and, for table scope, the contents id
        table as needed. Idempotent.
        """
        kind = StyleRelation(kind)
        self._require_feature_table(table_name)

        related = self.icon_table if kind.is_icon else self.style_table
        if not self.container.table_exists(related.table_name):
            self.container.create_attributes_table(related)

        if kind.is_table:
            if not self.container.table_exists(self.contents_id_table):
                self._create_contents_id_table()
            base_table, base_column = self.contents_id_table, "id"
        else:
            base_table = table_name
            base_column = self.container.get_primary_key(table_name) or "id"

        relation = self.catalog.declare_relationship(
            base_table,
            base_column,
            related.table_name,
            related.pk_column.name,
            kind.value,
            self.mapping_table_name(table_name, kind),
            extra_columns=() if kind.is_default else (GEOMETRY_TYPE_COLUMN,),
        )
        self.catalog.extensions.register(EXTENSION_NAME, EXTENSION_DEFINITION, table_name=table_name)
        return relation

    def create_relationships(self, table_name: str) -> None:
        for kind in StyleRelation:
            self.create_relationship(table_name, kind)

    def _create_pair(self, table_name: str, icon: bool, table: bool) -> None:
        for kind in StyleRelation.pair(icon, table):
            self.create_relationship(table_name, kind)

    def _has_pair(self, table_name: str, icon: bool, table: bool) -> bool:
        return any(self.has_relationship(table_name, kind) for kind in StyleRelation.pair(icon, table))

    def create_style_relationship(self, table_name: str) -> None:
        self._create_pair(table_name, icon=False, table=False)

    def has_style_relationship(self, table_name: str) -> bool:
        return self._has_pair(table_name, icon=False, table=False)

    def create_table_style_relationship(self, table_name: str) -> None:
        self._create_pair(table_name, icon=False, table=True)

    def has_table_style_relationship(self, table_name: str) -> bool:
        return self._has_pair(table_name, icon=False, table=True)

    def create_icon_relationship(self, table_name: str) -> None:
        self._create_pair(table_name, icon=True, table=False)

    def has_icon_relationship(self, table_name: str) -> bool:
        return self._has_pair(table_name, icon=True, table=False)

    def create_table_icon_relationship(self, table_name: str) -> None:
        self._create_pair(table_name, icon=True, table=True)

    def has_table_icon_relationship(self, table_name: str) -> bool:
        return self._has_pair(table_name, icon=True, table=True)

    def delete_relationship(self, table_name: str, kind: StyleRelation) -> bool:
        """
        Drop one relationship. Deregisters the extension for the table once
        none of its style relationships remain.
        """
        relation = self.get_relationship(table_name, kind)
        removed = self.catalog.remove_relationship(relation) if relation is not None else False

        if not any(self.has_relationship(table_name, k) for k in StyleRelation):
            self.catalog.extensions.delete(EXTENSION_NAME, table_name)
        return removed

    def delete_relationships(self, table_name: Optional[str] = None) -> None:
        """Drop every style relationship of a table, or of all tables."""
        tables = [table_name] if table_name is not None else self.get_tables()
        for table in tables:
            for kind in StyleRelation:
                self.delete_relationship(table, kind)
            logger.info(f"Deleted style relationships for {table}")

    def delete_style_relationship(self, table_name: str) -> None:
        for kind in StyleRelation.pair(icon=False, table=False):
            self.delete_relationship(table_name, kind)

    def delete_table_style_relationship(self, table_name: str) -> None:
        for kind in StyleRelation.pair(icon=False, table=True):
            self.delete_relationship(table_name, kind)

    def delete_icon_relationship(self, table_name: str) -> None:
        for kind in StyleRelation.pair(icon=True, table=False):
            self.delete_relationship(table_name, kind)

    def delete_table_icon_relationship(self, table_name: str) -> None:
        for kind in StyleRelation.pair(icon=True, table=True):
            self.delete_relationship(table_name, kind)

    def remove_extension(self) -> None:
        """Drop all style relationships, the style/icon/contents id tables and their registrations."""
        self.delete_relationships()
        with self.container.transaction() as conn:
            for name in (self.style_table.table_name, self.icon_table.table_name):
                self.container.drop_table(name, conn)
            conn.execute(f"DROP TABLE IF EXISTS {quote_identifier(self.contents_id_table)}")
            self.catalog.extensions.delete(EXTENSION_NAME, conn=conn)
            self.catalog.extensions.delete(CONTENTS_ID_EXTENSION, conn=conn)
        logger.info("Removed feature style extension")

    # ========== GENERIC READS ==========

    def _read(self, table_name: str, base_id: Optional[int], icon: bool,
              table: bool) -> Optional[Union[Styles, Icons]]:
        """Rows mapped from a base id across both tiers, or None if there are none."""
        if base_id is None:
            return None

        typed_kind, default_kind = StyleRelation.pair(icon, table)
        keyed: Dict[Optional[GeometryType], int] = {}

        typed = self.get_relationship(table_name, typed_kind)
        if typed is not None:
            for mapping in self.catalog.mapping_store(typed).rows_for_base(base_id):
                geometry_type = GeometryType.from_name(mapping.extra[COLUMN_GEOMETRY_TYPE_NAME])
                keyed[geometry_type] = mapping.related_id

        default = self.get_relationship(table_name, default_kind)
        if default is not None:
            related_ids = self.catalog.resolver.mappings_for_base(default, base_id)
            if related_ids:
                keyed[None] = min(related_ids)

        if not keyed:
            return None

        dao = self._dao(icon)
        by_id = {row.id: row for row in dao.query_for_ids(keyed.values())}
        result = Icons(table_scope=table) if icon else Styles(table_scope=table)
        view = IconRow if icon else StyleRow
        for geometry_type, related_id in keyed.items():
            row = by_id.get(related_id)
            if row is not None:
                result._set(view(row), geometry_type)
        return None if result.is_empty() else result

    def _write(self, table_name: str, base_id: int, row, geometry_type: GeometryKey,
               icon: bool, table: bool) -> None:
        """Replace the mapping for one key; a None row just deletes it."""
        geometry_type = GeometryType.from_name(geometry_type)
        if row is None:
            self._delete(table_name, base_id, icon, table, geometry_type=geometry_type)
            return

        kind = StyleRelation.of(icon, table, default=geometry_type is None)
        relation = self.create_relationship(table_name, kind)
        store = self.catalog.mapping_store(relation)

        where = {} if geometry_type is None else {COLUMN_GEOMETRY_TYPE_NAME: geometry_type.value}
        inserted = False
        try:
            with self.container.transaction() as conn:
                store.delete_by_base(base_id, conn, **where)
                if row.has_id():
                    related_id = row.id
                else:
                    related_id = self._dao(icon).insert(row.row, conn)
                    inserted = True
                store.insert(base_id, related_id, conn, **where)
        except Exception:
            # the insert was rolled back, so its id no longer names a stored row
            if inserted:
                row.id = None
            raise

        logger.debug(f"Set {kind.value} of {table_name}:{base_id} -> {related_id}")

    def _delete(self, table_name: str, base_id: Optional[int], icon: bool, table: bool,
                geometry_type=_ALL) -> int:
        """
        Delete mappings of a base id (all ids when base_id is None).

        geometry_type selects one key; None is the default tier; omit for both tiers.
        """
        typed_kind, default_kind = StyleRelation.pair(icon, table)
        if geometry_type is _ALL:
            targets = [(typed_kind, {}), (default_kind, {})]
        else:
            geometry_type = GeometryType.from_name(geometry_type)
            if geometry_type is None:
                targets = [(default_kind, {})]
            else:
                targets = [(typed_kind, {COLUMN_GEOMETRY_TYPE_NAME: geometry_type.value})]

        deleted = 0
        for kind, where in targets:
            relation = self.get_relationship(table_name, kind)
            if relation is None:
                continue
            store = self.catalog.mapping_store(relation)
            if base_id is None:
                deleted += store.delete_all()
            else:
                deleted += store.delete_by_base(base_id, **where)
        return deleted

    def _all_ids(self, table_name: str, icon: bool, table: bool) -> List[int]:
        ids = set()
        for kind in StyleRelation.pair(icon, table):
            relation = self.get_relationship(table_name, kind)
            if relation is not None:
                ids.update(self.catalog.mapping_store(relation).unique_related_ids())
        return sorted(ids)

    # ========== TABLE SCOPE: READ ==========

    def get_table_feature_styles(self, table_name: str) -> Optional[FeatureStyles]:
        styles = self.get_table_styles(table_name)
        icons = self.get_table_icons(table_name)
        if styles is None and icons is None:
            return None
        return FeatureStyles(styles, icons)

    def get_table_styles(self, table_name: str) -> Optional[Styles]:
        return self._read(table_name, self.get_contents_id(table_name), icon=False, table=True)

    def get_table_style(self, table_name: str, geometry_type: GeometryKey) -> Optional[StyleRow]:
        styles = self.get_table_styles(table_name)
        return styles.get_style(geometry_type) if styles is not None else None

    def get_table_style_default(self, table_name: str) -> Optional[StyleRow]:
        return self.get_table_style(table_name, None)

    def get_table_icons(self, table_name: str) -> Optional[Icons]:
        return self._read(table_name, self.get_contents_id(table_name), icon=True, table=True)

    def get_table_icon(self, table_name: str, geometry_type: GeometryKey) -> Optional[IconRow]:
        icons = self.get_table_icons(table_name)
        return icons.get_icon(geometry_type) if icons is not None else None

    def get_table_icon_default(self, table_name: str) -> Optional[IconRow]:
        return self.get_table_icon(table_name, None)

    # ========== TABLE SCOPE: WRITE ==========

    def _table_base_id(self, table_name: str) -> int:
        self._require_feature_table(table_name)
        return self.get_contents_id(table_name, create=True)

    def set_table_feature_styles(self, table_name: str, feature_styles: Optional[FeatureStyles]) -> None:
        self.set_table_styles(table_name, feature_styles.styles if feature_styles else None)
        self.set_table_icons(table_name, feature_styles.icons if feature_styles else None)

    def set_table_styles(self, table_name: str, styles: Optional[Styles]) -> None:
        self.delete_table_styles(table_name)
        if styles is None:
            return
        if styles.get_default() is not None:
            self.set_table_style_default(table_name, styles.get_default())
        for geometry_type in styles.geometry_types():
            self.set_table_style(table_name, geometry_type, styles.get_exact(geometry_type))

    def set_table_style_default(self, table_name: str, style: Optional[StyleRow]) -> None:
        self.set_table_style(table_name, None, style)

    def set_table_style(self, table_name: str, geometry_type: GeometryKey, style: Optional[StyleRow]) -> None:
        if style is None:
            self.delete_table_style(table_name, geometry_type)
            return
        self._write(table_name, self._table_base_id(table_name), style, geometry_type,
                    icon=False, table=True)

    def set_table_icons(self, table_name: str, icons: Optional[Icons]) -> None:
        self.delete_table_icons(table_name)
        if icons is None:
            return
        if icons.get_default() is not None:
            self.set_table_icon_default(table_name, icons.get_default())
        for geometry_type in icons.geometry_types():
            self.set_table_icon(table_name, geometry_type, icons.get_exact(geometry_type))

    def set_table_icon_default(self, table_name: str, icon: Optional[IconRow]) -> None:
        self.set_table_icon(table_name, None, icon)

    def set_table_icon(self, table_name: str, geometry_type: GeometryKey, icon: Optional[IconRow]) -> None:
        if icon is None:
            self.delete_table_icon(table_name, geometry_type)
            return
        self._write(table_name, self._table_base_id(table_name), icon, geometry_type,
                    icon=True, table=True)

    # ========== TABLE SCOPE: DELETE ==========

    def delete_table_feature_styles(self, table_name: str) -> None:
        self.delete_table_styles(table_name)
        self.delete_table_icons(table_name)

    def delete_table_styles(self, table_name: str) -> int:
        contents_id = self.get_contents_id(table_name)
        if contents_id is None:
            return 0
        return self._delete(table_name, contents_id, icon=False, table=True)

    def delete_table_style_default(self, table_name: str) -> int:
        return self.delete_table_style(table_name, None)

    def delete_table_style(self, table_name: str, geometry_type: GeometryKey) -> int:
        contents_id = self.get_contents_id(table_name)
        if contents_id is None:
            return 0
        return self._delete(table_name, contents_id, icon=False, table=True, geometry_type=geometry_type)

    def delete_table_icons(self, table_name: str) -> int:
        contents_id = self.get_contents_id(table_name)
        if contents_id is None:
            return 0
        return self._delete(table_name, contents_id, icon=True, table=True)

    def delete_table_icon_default(self, table_name: str) -> int:
        return self.delete_table_icon(table_name, None)

    def delete_table_icon(self, table_name: str, geometry_type: GeometryKey) -> int:
        contents_id = self.get_contents_id(table_name)
        if contents_id is None:
            return 0
        return self._delete(table_name, contents_id, icon=True, table=True, geometry_type=geometry_type)

    # ========== FEATURE SCOPE: READ ==========

    def get_feature_styles(self, table_name: str, feature_id: int) -> Optional[FeatureStyles]:
        styles = self.get_styles(table_name, feature_id)
        icons = self.get_icons(table_name, feature_id)
        if styles is None and icons is None:
            return None
        return FeatureStyles(styles, icons)

    def get_feature_style(self, table_name: str, feature_id: int,
                          geometry_type: GeometryKey = None) -> Optional[FeatureStyle]:
        """Style and icon of a feature, falling back to table scope. None if neither exists."""
        style = self.get_style(table_name, feature_id, geometry_type)
        icon = self.get_icon(table_name, feature_id, geometry_type)
        if style is None and icon is None:
            return None
        return FeatureStyle(style, icon)

    def get_feature_style_default(self, table_name: str, feature_id: int) -> Optional[FeatureStyle]:
        return self.get_feature_style(table_name, feature_id, None)

    def get_styles(self, table_name: str, feature_id: int) -> Optional[Styles]:
        return self._read(table_name, feature_id, icon=False, table=False)

    def get_style(self, table_name: str, feature_id: int, geometry_type: GeometryKey = None,
                  table_style: bool = True) -> Optional[StyleRow]:
        """
        Style of a feature: feature scope first, then (if table_style) table scope.
        Within each scope the geometry type match wins over the default.
        """
        styles = self.get_styles(table_name, feature_id)
        style = styles.get_style(geometry_type) if styles is not None else None
        if style is None and table_style:
            style = self.get_table_style(table_name, geometry_type)
        return style

    def get_style_default(self, table_name: str, feature_id: int,
                          table_style: bool = True) -> Optional[StyleRow]:
        return self.get_style(table_name, feature_id, None, table_style)

    def get_icons(self, table_name: str, feature_id: int) -> Optional[Icons]:
        return self._read(table_name, feature_id, icon=True, table=False)

    def get_icon(self, table_name: str, feature_id: int, geometry_type: GeometryKey = None,
                 table_icon: bool = True) -> Optional[IconRow]:
        icons = self.get_icons(table_name, feature_id)
        icon = icons.get_icon(geometry_type) if icons is not None else None
        if icon is None and table_icon:
            icon = self.get_table_icon(table_name, geometry_type)
        return icon

    def get_icon_default(self, table_name: str, feature_id: int,
                         table_icon: bool = True) -> Optional[IconRow]:
        return self.get_icon(table_name, feature_id, None, table_icon)

    # ========== FEATURE SCOPE: WRITE ==========

    def set_feature_styles(self, table_name: str, feature_id: int,
                           feature_styles: Optional[FeatureStyles]) -> None:
        self.set_styles(table_name, feature_id, feature_styles.styles if feature_styles else None)
        self.set_icons(table_name, feature_id, feature_styles.icons if feature_styles else None)

    def set_feature_style(self, table_name: str, feature_id: int, geometry_type: GeometryKey,
                          feature_style: Optional[FeatureStyle]) -> None:
        self.set_style(table_name, feature_id, geometry_type,
                       feature_style.style if feature_style else None)
        self.set_icon(table_name, feature_id, geometry_type,
                      feature_style.icon if feature_style else None)

    def set_feature_style_default(self, table_name: str, feature_id: int,
                                  feature_style: Optional[FeatureStyle]) -> None:
        self.set_feature_style(table_name, feature_id, None, feature_style)

    def set_styles(self, table_name: str, feature_id: int, styles: Optional[Styles]) -> None:
        self.delete_styles(table_name, feature_id)
        if styles is None:
            return
        if styles.get_default() is not None:
            self.set_style_default(table_name, feature_id, styles.get_default())
        for geometry_type in styles.geometry_types():
            self.set_style(table_name, feature_id, geometry_type, styles.get_exact(geometry_type))

    def set_style(self, table_name: str, feature_id: int, geometry_type: GeometryKey,
                  style: Optional[StyleRow]) -> None:
        self._write(table_name, feature_id, style, geometry_type, icon=False, table=False)

    def set_style_default(self, table_name: str, feature_id: int, style: Optional[StyleRow]) -> None:
        self.set_style(table_name, feature_id, None, style)

    def set_icons(self, table_name: str, feature_id: int, icons: Optional[Icons]) -> None:
        self.delete_icons(table_name, feature_id)
        if icons is None:
            return
        if icons.get_default() is not None:
            self.set_icon_default(table_name, feature_id, icons.get_default())
        for geometry_type in icons.geometry_types():
            self.set_icon(table_name, feature_id, geometry_type, icons.get_exact(geometry_type))

    def set_icon(self, table_name: str, feature_id: int, geometry_type: GeometryKey,
                 icon: Optional[IconRow]) -> None:
        self._write(table_name, feature_id, icon, geometry_type, icon=True, table=False)

    def set_icon_default(self, table_name: str, feature_id: int, icon: Optional[IconRow]) -> None:
        self.set_icon(table_name, feature_id, None, icon)

    # ========== FEATURE SCOPE: DELETE ==========

    def delete_all_feature_styles(self, table_name: str) -> None:
        self.delete_all_styles(table_name)
        self.delete_all_icons(table_name)

    def delete_all_styles(self, table_name: str) -> int:
        return self._delete(table_name, None, icon=False, table=False)

    def delete_all_icons(self, table_name: str) -> int:
        return self._delete(table_name, None, icon=True, table=False)

    def delete_feature_styles(self, table_name: str, feature_id: int) -> None:
        self.delete_styles(table_name, feature_id)
        self.delete_icons(table_name, feature_id)

    def delete_styles(self, table_name: str, feature_id: int) -> int:
        return self._delete(table_name, feature_id, icon=False, table=False)

    def delete_style(self, table_name: str, feature_id: int, geometry_type: GeometryKey) -> int:
        return self._delete(table_name, feature_id, icon=False, table=False, geometry_type=geometry_type)

    def delete_style_default(self, table_name: str, feature_id: int) -> int:
        return self.delete_style(table_name, feature_id, None)

    def delete_icons(self, table_name: str, feature_id: int) -> int:
        return self._delete(table_name, feature_id, icon=True, table=False)

    def delete_icon(self, table_name: str, feature_id: int, geometry_type: GeometryKey) -> int:
        return self._delete(table_name, feature_id, icon=True, table=False, geometry_type=geometry_type)

    def delete_icon_default(self, table_name: str, feature_id: int) -> int:
        return self.delete_icon(table_name, feature_id, None)

    # ========== IDS ==========

    def get_all_table_style_ids(self, table_name: str) -> List[int]:
        return self._all_ids(table_name, icon=False, table=True)

    def get_all_style_ids(self, table_name: str) -> List[int]:
        return self._all_ids(table_name, icon=False, table=False)

    def get_all_table_icon_ids(self, table_name: str) -> List[int]:
        return self._all_ids(table_name, icon=True, table=True)

    def get_all_icon_ids(self, table_name: str) -> List[int]:
        return self._all_ids(table_name, icon=True, table=False)
