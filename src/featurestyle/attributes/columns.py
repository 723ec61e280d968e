"""
Column layouts for attribute tables.

A layout is fixed when its table is created. Rows hold a reference to the
layout; they never change it.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Optional, Tuple

from featurestyle.sql import literal, quote_identifier

Validator = Callable[[Any, str], Any]


@dataclass(frozen=True)
class Column:
    """One column of an attribute table."""
    name: str
    data_type: str = "TEXT"
    not_null: bool = False
    primary_key: bool = False
    default: Any = None
    validator: Optional[Validator] = field(default=None, compare=False)

    def validate(self, value: Any) -> Any:
        if self.validator is None:
            return value
        return self.validator(value, self.name)

    def definition(self) -> str:
        """Column clause for CREATE TABLE."""
        if self.primary_key:
            return f"{quote_identifier(self.name)} INTEGER PRIMARY KEY AUTOINCREMENT"
        parts = [quote_identifier(self.name), self.data_type]
        if self.not_null:
            parts.append("NOT NULL")
        if self.default is not None:
            parts.append(f"DEFAULT {literal(self.default)}")
        return " ".join(parts)


@dataclass(frozen=True)
class AttributesTable:
    """Table name plus its ordered column layout."""
    table_name: str
    columns: Tuple[Column, ...]

    def __post_init__(self):
        names = [c.name for c in self.columns]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate column names in {self.table_name}: {names}")
        if sum(1 for c in self.columns if c.primary_key) != 1:
            raise ValueError(f"Table {self.table_name} needs exactly one primary key column")

    @property
    def column_names(self) -> Tuple[str, ...]:
        return tuple(c.name for c in self.columns)

    @property
    def pk_column(self) -> Column:
        return next(c for c in self.columns if c.primary_key)

    @property
    def value_columns(self) -> Tuple[Column, ...]:
        """All columns except the primary key."""
        return tuple(c for c in self.columns if not c.primary_key)

    def has_column(self, name: str) -> bool:
        return name in self.column_names

    def column(self, name: str) -> Column:
        for c in self.columns:
            if c.name == name:
                return c
        raise KeyError(f"No column '{name}' in table {self.table_name}")

    def with_name(self, table_name: str) -> "AttributesTable":
        return replace(self, table_name=table_name)

    def create_sql(self) -> str:
        cols = ",\n    ".join(c.definition() for c in self.columns)
        return f"CREATE TABLE IF NOT EXISTS {quote_identifier(self.table_name)} (\n    {cols}\n)"

    def empty_values(self) -> Dict[str, Any]:
        return {c.name: None for c in self.columns}
