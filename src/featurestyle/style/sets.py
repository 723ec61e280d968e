"""
Style and icon sets keyed by geometry type.

A set holds at most one default row (key None) and at most one row per
geometry type. Setting a key replaces whatever row it held.
"""

from dataclasses import dataclass
from typing import Dict, Generic, List, Optional, TypeVar, Union

from featurestyle.geometry import GeometryType
from featurestyle.style.rows import IconRow, StyleRow

RowT = TypeVar("RowT")
GeometryKey = Optional[Union[GeometryType, str]]


class _GeometryKeyedRows(Generic[RowT]):

    def __init__(self, table_scope: bool = False):
        self.table_scope = table_scope
        self._default: Optional[RowT] = None
        self._by_type: Dict[GeometryType, RowT] = {}

    def _set(self, row: Optional[RowT], geometry_type: GeometryKey) -> None:
        geometry_type = GeometryType.from_name(geometry_type)
        if geometry_type is None:
            self._default = row
        elif row is None:
            self._by_type.pop(geometry_type, None)
        else:
            self._by_type[geometry_type] = row

    def _get(self, geometry_type: GeometryKey) -> Optional[RowT]:
        geometry_type = GeometryType.from_name(geometry_type)
        if geometry_type is not None and geometry_type in self._by_type:
            return self._by_type[geometry_type]
        return self._default

    def geometry_types(self) -> List[GeometryType]:
        return list(self._by_type)

    def has_default(self) -> bool:
        return self._default is not None

    def all(self) -> List[RowT]:
        """Default row first (if any), then per-type rows."""
        rows = [self._default] if self._default is not None else []
        rows.extend(self._by_type.values())
        return rows

    def is_empty(self) -> bool:
        return self._default is None and not self._by_type

    def __len__(self) -> int:
        return len(self._by_type) + (1 if self._default is not None else 0)


class Styles(_GeometryKeyedRows[StyleRow]):
    """Styles of one feature or one table, keyed by geometry type."""

    def set_style(self, style: Optional[StyleRow], geometry_type: GeometryKey = None) -> None:
        self._set(style, geometry_type)

    def set_default(self, style: Optional[StyleRow]) -> None:
        self._set(style, None)

    def get_style(self, geometry_type: GeometryKey = None) -> Optional[StyleRow]:
        """Exact geometry type match, else the default."""
        return self._get(geometry_type)

    def get_default(self) -> Optional[StyleRow]:
        return self._default

    def get_exact(self, geometry_type: GeometryKey) -> Optional[StyleRow]:
        geometry_type = GeometryType.from_name(geometry_type)
        return self._default if geometry_type is None else self._by_type.get(geometry_type)


class Icons(_GeometryKeyedRows[IconRow]):
    """Icons of one feature or one table, keyed by geometry type."""

    def set_icon(self, icon: Optional[IconRow], geometry_type: GeometryKey = None) -> None:
        self._set(icon, geometry_type)

    def set_default(self, icon: Optional[IconRow]) -> None:
        self._set(icon, None)

    def get_icon(self, geometry_type: GeometryKey = None) -> Optional[IconRow]:
        """Exact geometry type match, else the default."""
        return self._get(geometry_type)

    def get_default(self) -> Optional[IconRow]:
        return self._default

    def get_exact(self, geometry_type: GeometryKey) -> Optional[IconRow]:
        geometry_type = GeometryType.from_name(geometry_type)
        return self._default if geometry_type is None else self._by_type.get(geometry_type)


@dataclass
class FeatureStyle:
    """The style and icon resolved for one feature; either may be None."""
    style: Optional[StyleRow] = None
    icon: Optional[IconRow] = None

    def has_style(self) -> bool:
        return self.style is not None

    def has_icon(self) -> bool:
        return self.icon is not None


@dataclass
class FeatureStyles:
    """All styles and icons of one feature or table."""
    styles: Optional[Styles] = None
    icons: Optional[Icons] = None
