"""
Generic attribute row.

A row is an ordered set of named values governed by an AttributesTable
layout. Writes run through the column's domain validator first, so a
rejected value never reaches the row.
"""

from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from featurestyle.attributes.columns import AttributesTable


class AttributeRow:
    """Row of an attribute table, addressed by column name."""

    def __init__(self, table: AttributesTable, values: Optional[Mapping[str, Any]] = None):
        self.table = table
        self._values: Dict[str, Any] = table.empty_values()
        if values:
            for name, value in values.items():
                self.set(name, value)

    @classmethod
    def from_db(cls, table: AttributesTable, record: Mapping[str, Any]) -> "AttributeRow":
        """Build a row from a stored record without re-validating it."""
        row = cls(table)
        for name in table.column_names:
            if name in record.keys():
                row._values[name] = record[name]
        return row

    @property
    def id(self) -> Optional[int]:
        return self._values[self.table.pk_column.name]

    @id.setter
    def id(self, value: Optional[int]):
        self._values[self.table.pk_column.name] = value

    def has_id(self) -> bool:
        return self.id is not None

    def get(self, name: str) -> Any:
        self.table.column(name)
        return self._values[name]

    def set(self, name: str, value: Any) -> None:
        """
        Validate and store a value.

        Raises:
            KeyError: If the layout has no such column
            ValidationError: If the value is outside the column domain
        """
        column = self.table.column(name)
        self._values[name] = column.validate(value)

    def values(self) -> Dict[str, Any]:
        return dict(self._values)

    def value_items(self) -> Tuple[Tuple[str, Any], ...]:
        """Non-primary-key (name, value) pairs in layout order."""
        return tuple((c.name, self._values[c.name]) for c in self.table.value_columns)

    def copy(self) -> "AttributeRow":
        """Independent row sharing the same layout reference."""
        clone = AttributeRow(self.table)
        clone._values = dict(self._values)
        return clone

    def __iter__(self) -> Iterator[str]:
        return iter(self.table.column_names)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AttributeRow):
            return NotImplemented
        return self.table.table_name == other.table.table_name and self._values == other._values

    def __repr__(self) -> str:
        return f"AttributeRow({self.table.table_name}, {self._values!r})"
