"""
SQL helpers shared by the storage, catalog and attribute modules.
"""

import math
import re
from typing import Iterable

from featurestyle.exceptions import ConfigurationError

_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_\-]*$")


def quote_identifier(name: str) -> str:
    """
    Quote a table or column name for interpolation into SQL.

    Names come from catalog rows and caller arguments, so they are restricted
    to a safe character set before quoting.
    """
    if not name or not _IDENTIFIER_PATTERN.match(name):
        raise ConfigurationError(f"Invalid SQL identifier: {name!r}")
    return f'"{name}"'


def quote_list(names: Iterable[str]) -> str:
    return ", ".join(quote_identifier(n) for n in names)


def placeholders(count: int) -> str:
    return ", ".join("?" for _ in range(count))


def literal(value) -> str:
    """Render a constant as an SQL literal, e.g. for a column DEFAULT clause."""
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ConfigurationError(f"No SQL literal for {value!r}")
        return repr(value)
    if isinstance(value, bytes):
        return f"X'{value.hex()}'"
    text = str(value).replace("'", "''")
    return f"'{text}'"
