"""
Feature Table Styles

Per-table handle over the feature style extension. Resolves a feature's
style and icon through four tiers, first hit wins:

1. feature scope, matching geometry type
2. feature scope, default
3. table scope, matching geometry type
4. table scope, default

Table-scope sets are cached per handle. Table-scope writes go straight to
storage and then clear the matching cache slot; they never patch the cache.
"""

from typing import Optional, Tuple, Union

from featurestyle.geometry import GeometryType
from featurestyle.logging_config import logger
from featurestyle.schemas import FeatureRow
from featurestyle.style.cache import ICONS, STYLES, TableStyleCache
from featurestyle.style.extension import FeatureStyleExtension, GeometryKey, StyleRelation
from featurestyle.style.rows import IconRow, StyleRow
from featurestyle.style.sets import FeatureStyle, FeatureStyles, Icons, Styles

FeatureRef = Union[int, FeatureRow]


def _feature_key(feature: FeatureRef, geometry_type: GeometryKey) -> Tuple[int, Optional[GeometryType]]:
    """Feature id plus geometry type; a FeatureRow supplies its own type when none is given."""
    if isinstance(feature, FeatureRow):
        if geometry_type is None:
            geometry_type = feature.geometry_type
        return feature.id, GeometryType.from_name(geometry_type)
    return feature, GeometryType.from_name(geometry_type)


def _feature_id(feature: FeatureRef) -> int:
    return feature.id if isinstance(feature, FeatureRow) else feature


class FeatureTableStyles:
    """
    Styles and icons of one feature table.

    Args:
        container: The Container holding the table
        table_name: Feature table name
        extension: Shared FeatureStyleExtension (created if omitted)

    Raises:
        ConfigurationError: If the table is not a feature table
    """

    def __init__(self, container, table_name: str, extension: Optional[FeatureStyleExtension] = None):
        self.extension = extension or FeatureStyleExtension(container)
        self.table_name = table_name
        self.extension._require_feature_table(table_name)
        self._cache = TableStyleCache(table_name)

    # ========== RELATIONSHIPS ==========

    def create_relationships(self) -> None:
        self.extension.create_relationships(self.table_name)

    def create_style_relationship(self) -> None:
        self.extension.create_style_relationship(self.table_name)

    def has_style_relationship(self) -> bool:
        return self.extension.has_style_relationship(self.table_name)

    def create_table_style_relationship(self) -> None:
        self.extension.create_table_style_relationship(self.table_name)

    def has_table_style_relationship(self) -> bool:
        return self.extension.has_table_style_relationship(self.table_name)

    def create_icon_relationship(self) -> None:
        self.extension.create_icon_relationship(self.table_name)

    def has_icon_relationship(self) -> bool:
        return self.extension.has_icon_relationship(self.table_name)

    def create_table_icon_relationship(self) -> None:
        self.extension.create_table_icon_relationship(self.table_name)

    def has_table_icon_relationship(self) -> bool:
        return self.extension.has_table_icon_relationship(self.table_name)

    def has_relationship(self, kind: StyleRelation) -> bool:
        return self.extension.has_relationship(self.table_name, kind)

    def delete_relationships(self) -> None:
        self.extension.delete_relationships(self.table_name)
        self.clear_cached_table_feature_styles()

    # ========== TABLE SCOPE: READ ==========

    def _load_table_styles(self) -> Styles:
        styles = self.get_table_styles()
        return styles if styles is not None else Styles(table_scope=True)

    def _load_table_icons(self) -> Icons:
        icons = self.get_table_icons()
        return icons if icons is not None else Icons(table_scope=True)

    def get_table_feature_styles(self) -> Optional[FeatureStyles]:
        return self.extension.get_table_feature_styles(self.table_name)

    def get_table_styles(self) -> Optional[Styles]:
        """Table styles straight from storage (uncached)."""
        return self.extension.get_table_styles(self.table_name)

    def get_cached_table_styles(self) -> Optional[Styles]:
        """Table styles from the cache, loading them on first use. None when there are none."""
        styles = self._cache.get_or_load(STYLES, self._load_table_styles)
        return None if styles.is_empty() else styles

    def get_table_style(self, geometry_type: GeometryKey) -> Optional[StyleRow]:
        return self.extension.get_table_style(self.table_name, geometry_type)

    def get_table_style_default(self) -> Optional[StyleRow]:
        return self.extension.get_table_style_default(self.table_name)

    def get_table_icons(self) -> Optional[Icons]:
        """Table icons straight from storage (uncached)."""
        return self.extension.get_table_icons(self.table_name)

    def get_cached_table_icons(self) -> Optional[Icons]:
        icons = self._cache.get_or_load(ICONS, self._load_table_icons)
        return None if icons.is_empty() else icons

    def get_table_icon(self, geometry_type: GeometryKey) -> Optional[IconRow]:
        return self.extension.get_table_icon(self.table_name, geometry_type)

    def get_table_icon_default(self) -> Optional[IconRow]:
        return self.extension.get_table_icon_default(self.table_name)

    # ========== RESOLUTION ==========

    def get_feature_styles(self, feature: FeatureRef) -> Optional[FeatureStyles]:
        """Feature-scope styles and icons only (no table fallback)."""
        return self.extension.get_feature_styles(self.table_name, _feature_id(feature))

    def get_feature_style(self, feature: FeatureRef, geometry_type: GeometryKey = None) -> Optional[FeatureStyle]:
        """
        Resolved style and icon of a feature.

        Returns None when neither a style nor an icon resolves.
        """
        style = self.get_style(feature, geometry_type)
        icon = self.get_icon(feature, geometry_type)
        if style is None and icon is None:
            return None
        return FeatureStyle(style, icon)

    def get_feature_style_default(self, feature: FeatureRef) -> Optional[FeatureStyle]:
        """Resolution with no geometry type: only the two default tiers apply."""
        style = self.get_style_default(feature)
        icon = self.get_icon_default(feature)
        if style is None and icon is None:
            return None
        return FeatureStyle(style, icon)

    def get_styles(self, feature: FeatureRef) -> Optional[Styles]:
        return self.extension.get_styles(self.table_name, _feature_id(feature))

    def _resolve_style(self, feature_id: int, geometry_type: Optional[GeometryType]) -> Optional[StyleRow]:
        style = self.extension.get_style(self.table_name, feature_id, geometry_type, table_style=False)
        if style is None:
            styles = self.get_cached_table_styles()
            if styles is not None:
                style = styles.get_style(geometry_type)
        return style

    def get_style(self, feature: FeatureRef, geometry_type: GeometryKey = None) -> Optional[StyleRow]:
        feature_id, geometry_type = _feature_key(feature, geometry_type)
        return self._resolve_style(feature_id, geometry_type)

    def get_style_default(self, feature: FeatureRef) -> Optional[StyleRow]:
        return self._resolve_style(_feature_id(feature), None)

    def get_icons(self, feature: FeatureRef) -> Optional[Icons]:
        return self.extension.get_icons(self.table_name, _feature_id(feature))

    def _resolve_icon(self, feature_id: int, geometry_type: Optional[GeometryType]) -> Optional[IconRow]:
        icon = self.extension.get_icon(self.table_name, feature_id, geometry_type, table_icon=False)
        if icon is None:
            icons = self.get_cached_table_icons()
            if icons is not None:
                icon = icons.get_icon(geometry_type)
        return icon

    def get_icon(self, feature: FeatureRef, geometry_type: GeometryKey = None) -> Optional[IconRow]:
        feature_id, geometry_type = _feature_key(feature, geometry_type)
        return self._resolve_icon(feature_id, geometry_type)

    def get_icon_default(self, feature: FeatureRef) -> Optional[IconRow]:
        return self._resolve_icon(_feature_id(feature), None)

    # ========== TABLE SCOPE: WRITE ==========

    def set_table_feature_styles(self, feature_styles: Optional[FeatureStyles]) -> None:
        try:
            self.extension.set_table_feature_styles(self.table_name, feature_styles)
        finally:
            self.clear_cached_table_feature_styles()

    def set_table_styles(self, styles: Optional[Styles]) -> None:
        try:
            self.extension.set_table_styles(self.table_name, styles)
        finally:
            self.clear_cached_table_styles()

    def set_table_style_default(self, style: Optional[StyleRow]) -> None:
        try:
            self.extension.set_table_style_default(self.table_name, style)
        finally:
            self.clear_cached_table_styles()

    def set_table_style(self, geometry_type: GeometryKey, style: Optional[StyleRow]) -> None:
        try:
            self.extension.set_table_style(self.table_name, geometry_type, style)
        finally:
            self.clear_cached_table_styles()

    def set_table_icons(self, icons: Optional[Icons]) -> None:
        try:
            self.extension.set_table_icons(self.table_name, icons)
        finally:
            self.clear_cached_table_icons()

    def set_table_icon_default(self, icon: Optional[IconRow]) -> None:
        try:
            self.extension.set_table_icon_default(self.table_name, icon)
        finally:
            self.clear_cached_table_icons()

    def set_table_icon(self, geometry_type: GeometryKey, icon: Optional[IconRow]) -> None:
        try:
            self.extension.set_table_icon(self.table_name, geometry_type, icon)
        finally:
            self.clear_cached_table_icons()

    # ========== TABLE SCOPE: DELETE ==========

    def delete_table_feature_styles(self) -> None:
        try:
            self.extension.delete_table_feature_styles(self.table_name)
        finally:
            self.clear_cached_table_feature_styles()

    def delete_table_styles(self) -> None:
        try:
            self.extension.delete_table_styles(self.table_name)
        finally:
            self.clear_cached_table_styles()

    def delete_table_style_default(self) -> None:
        try:
            self.extension.delete_table_style_default(self.table_name)
        finally:
            self.clear_cached_table_styles()

    def delete_table_style(self, geometry_type: GeometryKey) -> None:
        try:
            self.extension.delete_table_style(self.table_name, geometry_type)
        finally:
            self.clear_cached_table_styles()

    def delete_table_icons(self) -> None:
        try:
            self.extension.delete_table_icons(self.table_name)
        finally:
            self.clear_cached_table_icons()

    def delete_table_icon_default(self) -> None:
        try:
            self.extension.delete_table_icon_default(self.table_name)
        finally:
            self.clear_cached_table_icons()

    def delete_table_icon(self, geometry_type: GeometryKey) -> None:
        try:
            self.extension.delete_table_icon(self.table_name, geometry_type)
        finally:
            self.clear_cached_table_icons()

    # ========== FEATURE SCOPE: WRITE & DELETE ==========

    def set_feature_styles(self, feature: FeatureRef, feature_styles: Optional[FeatureStyles]) -> None:
        self.extension.set_feature_styles(self.table_name, _feature_id(feature), feature_styles)

    def set_feature_style(self, feature: FeatureRef, geometry_type: GeometryKey,
                          feature_style: Optional[FeatureStyle]) -> None:
        self.extension.set_feature_style(self.table_name, _feature_id(feature), geometry_type, feature_style)

    def set_feature_style_default(self, feature: FeatureRef, feature_style: Optional[FeatureStyle]) -> None:
        self.extension.set_feature_style_default(self.table_name, _feature_id(feature), feature_style)

    def set_styles(self, feature: FeatureRef, styles: Optional[Styles]) -> None:
        self.extension.set_styles(self.table_name, _feature_id(feature), styles)

    def set_style(self, feature: FeatureRef, geometry_type: GeometryKey, style: Optional[StyleRow]) -> None:
        self.extension.set_style(self.table_name, _feature_id(feature), geometry_type, style)

    def set_style_default(self, feature: FeatureRef, style: Optional[StyleRow]) -> None:
        self.extension.set_style_default(self.table_name, _feature_id(feature), style)

    def set_icons(self, feature: FeatureRef, icons: Optional[Icons]) -> None:
        self.extension.set_icons(self.table_name, _feature_id(feature), icons)

    def set_icon(self, feature: FeatureRef, geometry_type: GeometryKey, icon: Optional[IconRow]) -> None:
        self.extension.set_icon(self.table_name, _feature_id(feature), geometry_type, icon)

    def set_icon_default(self, feature: FeatureRef, icon: Optional[IconRow]) -> None:
        self.extension.set_icon_default(self.table_name, _feature_id(feature), icon)

    def delete_all_feature_styles(self) -> None:
        self.extension.delete_all_feature_styles(self.table_name)

    def delete_all_styles(self) -> None:
        self.extension.delete_all_styles(self.table_name)

    def delete_all_icons(self) -> None:
        self.extension.delete_all_icons(self.table_name)

    def delete_feature_styles(self, feature: FeatureRef) -> None:
        self.extension.delete_feature_styles(self.table_name, _feature_id(feature))

    def delete_styles(self, feature: FeatureRef) -> None:
        self.extension.delete_styles(self.table_name, _feature_id(feature))

    def delete_style(self, feature: FeatureRef, geometry_type: GeometryKey) -> None:
        self.extension.delete_style(self.table_name, _feature_id(feature), geometry_type)

    def delete_style_default(self, feature: FeatureRef) -> None:
        self.extension.delete_style_default(self.table_name, _feature_id(feature))

    def delete_icons(self, feature: FeatureRef) -> None:
        self.extension.delete_icons(self.table_name, _feature_id(feature))

    def delete_icon(self, feature: FeatureRef, geometry_type: GeometryKey) -> None:
        self.extension.delete_icon(self.table_name, _feature_id(feature), geometry_type)

    def delete_icon_default(self, feature: FeatureRef) -> None:
        self.extension.delete_icon_default(self.table_name, _feature_id(feature))

    # ========== CACHE ==========

    def clear_cached_table_feature_styles(self) -> None:
        self._cache.clear(STYLES, ICONS)
        logger.debug(f"Cleared cached table styles and icons for {self.table_name}")

    def clear_cached_table_styles(self) -> None:
        self._cache.clear(STYLES)

    def clear_cached_table_icons(self) -> None:
        self._cache.clear(ICONS)
