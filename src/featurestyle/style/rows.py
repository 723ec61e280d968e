"""
Style and icon rows.

Both are thin typed views over a generic AttributeRow. The column layouts
below decide which domain validator guards each column.
"""

from typing import Optional

from featurestyle.attributes.columns import AttributesTable, Column
from featurestyle.attributes.domains import (
    validate_color,
    validate_non_negative,
    validate_opacity,
    validate_unit_interval,
)
from featurestyle.attributes.row import AttributeRow
from featurestyle.config import get_config_value
from featurestyle.style.color import Color

COLUMN_ID = "id"
COLUMN_NAME = "name"
COLUMN_DESCRIPTION = "description"
COLUMN_COLOR = "color"
COLUMN_OPACITY = "opacity"
COLUMN_WIDTH = "width"
COLUMN_FILL_COLOR = "fill_color"
COLUMN_FILL_OPACITY = "fill_opacity"
COLUMN_DATA = "data"
COLUMN_CONTENT_TYPE = "content_type"
COLUMN_HEIGHT = "height"
COLUMN_ANCHOR_U = "anchor_u"
COLUMN_ANCHOR_V = "anchor_v"


def style_table(table_name: Optional[str] = None) -> AttributesTable:
    return AttributesTable(
        table_name or get_config_value("styles.style_table", "nga_style"),
        (
            Column(COLUMN_ID, "INTEGER", primary_key=True),
            Column(COLUMN_NAME, "TEXT"),
            Column(COLUMN_DESCRIPTION, "TEXT"),
            Column(COLUMN_COLOR, "TEXT", validator=validate_color),
            Column(COLUMN_OPACITY, "REAL", validator=validate_opacity),
            Column(COLUMN_WIDTH, "REAL", validator=validate_non_negative),
            Column(COLUMN_FILL_COLOR, "TEXT", validator=validate_color),
            Column(COLUMN_FILL_OPACITY, "REAL", validator=validate_opacity),
        ),
    )


def icon_table(table_name: Optional[str] = None) -> AttributesTable:
    return AttributesTable(
        table_name or get_config_value("styles.icon_table", "nga_icon"),
        (
            Column(COLUMN_ID, "INTEGER", primary_key=True),
            Column(COLUMN_DATA, "BLOB", not_null=True),
            Column(COLUMN_CONTENT_TYPE, "TEXT", not_null=True),
            Column(COLUMN_NAME, "TEXT"),
            Column(COLUMN_DESCRIPTION, "TEXT"),
            Column(COLUMN_WIDTH, "REAL", validator=validate_non_negative),
            Column(COLUMN_HEIGHT, "REAL", validator=validate_non_negative),
            Column(COLUMN_ANCHOR_U, "REAL", validator=validate_unit_interval),
            Column(COLUMN_ANCHOR_V, "REAL", validator=validate_unit_interval),
        ),
    )


def _color_of(hex_color: Optional[str], opacity: Optional[float]) -> Optional[Color]:
    if hex_color is None and opacity is None:
        return None
    return Color(hex_color, opacity)


class _RowView:
    """Shared plumbing for the typed views."""

    def __init__(self, row: AttributeRow):
        self.row = row

    @property
    def table(self) -> AttributesTable:
        return self.row.table

    @property
    def id(self) -> Optional[int]:
        return self.row.id

    @id.setter
    def id(self, value: Optional[int]):
        self.row.id = value

    def has_id(self) -> bool:
        return self.row.has_id()

    @property
    def name(self) -> Optional[str]:
        return self.row.get(COLUMN_NAME)

    @name.setter
    def name(self, value: Optional[str]):
        self.row.set(COLUMN_NAME, value)

    @property
    def description(self) -> Optional[str]:
        return self.row.get(COLUMN_DESCRIPTION)

    @description.setter
    def description(self, value: Optional[str]):
        self.row.set(COLUMN_DESCRIPTION, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _RowView):
            return NotImplemented
        return type(self) is type(other) and self.row == other.row

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.row.values()!r})"


class StyleRow(_RowView):
    """
    A style record: stroke color/opacity/width and fill color/opacity.

    Usage:
        style = StyleRow()
        style.hex_color = "f00"        # stored as "#F00"
        style.width = 2.0
        style.fill_color = Color("#00FF00", 0.5)
    """

    def __init__(self, row: Optional[AttributeRow] = None, table: Optional[AttributesTable] = None):
        super().__init__(row if row is not None else AttributeRow(table or style_table()))

    @property
    def hex_color(self) -> Optional[str]:
        return self.row.get(COLUMN_COLOR)

    @hex_color.setter
    def hex_color(self, value: Optional[str]):
        self.row.set(COLUMN_COLOR, value)

    @property
    def opacity(self) -> Optional[float]:
        return self.row.get(COLUMN_OPACITY)

    @opacity.setter
    def opacity(self, value: Optional[float]):
        self.row.set(COLUMN_OPACITY, value)

    @property
    def color(self) -> Optional[Color]:
        return _color_of(self.hex_color, self.opacity)

    @color.setter
    def color(self, value: Optional[Color]):
        hex_color = value.hex if value is not None else None
        opacity = value.opacity if value is not None else None
        self.row.set(COLUMN_COLOR, hex_color)
        self.row.set(COLUMN_OPACITY, opacity)

    @property
    def width(self) -> Optional[float]:
        return self.row.get(COLUMN_WIDTH)

    @width.setter
    def width(self, value: Optional[float]):
        self.row.set(COLUMN_WIDTH, value)

    @property
    def fill_hex_color(self) -> Optional[str]:
        return self.row.get(COLUMN_FILL_COLOR)

    @fill_hex_color.setter
    def fill_hex_color(self, value: Optional[str]):
        self.row.set(COLUMN_FILL_COLOR, value)

    @property
    def fill_opacity(self) -> Optional[float]:
        return self.row.get(COLUMN_FILL_OPACITY)

    @fill_opacity.setter
    def fill_opacity(self, value: Optional[float]):
        self.row.set(COLUMN_FILL_OPACITY, value)

    @property
    def fill_color(self) -> Optional[Color]:
        return _color_of(self.fill_hex_color, self.fill_opacity)

    @fill_color.setter
    def fill_color(self, value: Optional[Color]):
        hex_color = value.hex if value is not None else None
        opacity = value.opacity if value is not None else None
        self.row.set(COLUMN_FILL_COLOR, hex_color)
        self.row.set(COLUMN_FILL_OPACITY, opacity)

    def copy(self) -> "StyleRow":
        return StyleRow(self.row.copy())


class IconRow(_RowView):
    """An icon record: image bytes, content type, display size and anchor."""

    def __init__(self, row: Optional[AttributeRow] = None, table: Optional[AttributesTable] = None):
        super().__init__(row if row is not None else AttributeRow(table or icon_table()))

    @property
    def data(self) -> Optional[bytes]:
        return self.row.get(COLUMN_DATA)

    @data.setter
    def data(self, value: Optional[bytes]):
        self.row.set(COLUMN_DATA, value)

    @property
    def content_type(self) -> Optional[str]:
        return self.row.get(COLUMN_CONTENT_TYPE)

    @content_type.setter
    def content_type(self, value: Optional[str]):
        self.row.set(COLUMN_CONTENT_TYPE, value)

    @property
    def width(self) -> Optional[float]:
        return self.row.get(COLUMN_WIDTH)

    @width.setter
    def width(self, value: Optional[float]):
        self.row.set(COLUMN_WIDTH, value)

    @property
    def height(self) -> Optional[float]:
        return self.row.get(COLUMN_HEIGHT)

    @height.setter
    def height(self, value: Optional[float]):
        self.row.set(COLUMN_HEIGHT, value)

    @property
    def anchor_u(self) -> Optional[float]:
        return self.row.get(COLUMN_ANCHOR_U)

    @anchor_u.setter
    def anchor_u(self, value: Optional[float]):
        self.row.set(COLUMN_ANCHOR_U, value)

    @property
    def anchor_v(self) -> Optional[float]:
        return self.row.get(COLUMN_ANCHOR_V)

    @anchor_v.setter
    def anchor_v(self, value: Optional[float]):
        self.row.set(COLUMN_ANCHOR_V, value)

    def copy(self) -> "IconRow":
        return IconRow(self.row.copy())
