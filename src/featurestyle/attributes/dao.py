"""
Attribute table CRUD operations.

Follows the storage layer convention: every method opens its own connection
unless a transaction connection is passed in.
"""

import sqlite3
from typing import Iterable, List, Optional

from featurestyle.logging_config import logger
from featurestyle.exceptions import StorageError
from featurestyle.attributes.columns import AttributesTable
from featurestyle.attributes.row import AttributeRow
from featurestyle.sql import placeholders, quote_identifier, quote_list


class AttributesDao:
    """
    Reads and writes AttributeRows of a single attribute table.
    """

    def __init__(self, get_connection_func, table: AttributesTable):
        """
        Args:
            get_connection_func: Callable that returns a new SQLite connection
            table: Column layout of the table this DAO serves
        """
        self._get_connection = get_connection_func
        self.table = table
        self._name = quote_identifier(table.table_name)
        self._pk = quote_identifier(table.pk_column.name)

    @property
    def table_name(self) -> str:
        return self.table.table_name

    def new_row(self) -> AttributeRow:
        return AttributeRow(self.table)

    def _fail(self, action: str, e: Exception) -> StorageError:
        return StorageError(f"Failed to {action} in {self.table_name}: {e}")

    def table_exists(self) -> bool:
        conn = self._get_connection()
        try:
            return conn.execute(
                "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ?",
                (self.table_name,),
            ).fetchone() is not None
        finally:
            conn.close()

    def create_table(self, conn: Optional[sqlite3.Connection] = None) -> None:
        _conn = conn or self._get_connection()
        try:
            _conn.execute(self.table.create_sql())
            if not conn:
                _conn.commit()
            logger.debug(f"Created attribute table {self.table_name}")
        except sqlite3.Error as e:
            raise self._fail("create table", e) from e
        finally:
            if not conn:
                _conn.close()

    def insert(self, row: AttributeRow, conn: Optional[sqlite3.Connection] = None) -> int:
        """
        Insert a row and assign it the new id.

        Returns:
            The new row id
        """
        items = row.value_items()
        names = [name for name, _ in items]
        params = [value for _, value in items]
        if row.has_id():
            names.append(self.table.pk_column.name)
            params.append(row.id)

        _conn = conn or self._get_connection()
        try:
            cursor = _conn.execute(
                f"INSERT INTO {self._name} ({quote_list(names)}) VALUES ({placeholders(len(names))})",
                params,
            )
            row.id = cursor.lastrowid
            if not conn:
                _conn.commit()
            return row.id
        except sqlite3.Error as e:
            raise self._fail("insert row", e) from e
        finally:
            if not conn:
                _conn.close()

    def update(self, row: AttributeRow, conn: Optional[sqlite3.Connection] = None) -> int:
        """Update a stored row by id. Returns the number of rows changed."""
        if not row.has_id():
            raise ValueError("Cannot update a row without an id")
        items = row.value_items()
        assignments = ", ".join(f"{quote_identifier(name)} = ?" for name, _ in items)

        _conn = conn or self._get_connection()
        try:
            cursor = _conn.execute(
                f"UPDATE {self._name} SET {assignments} WHERE {self._pk} = ?",
                [value for _, value in items] + [row.id],
            )
            if not conn:
                _conn.commit()
            return cursor.rowcount
        except sqlite3.Error as e:
            raise self._fail("update row", e) from e
        finally:
            if not conn:
                _conn.close()

    def query_for_id(self, row_id: int) -> Optional[AttributeRow]:
        rows = self.query_for_ids([row_id])
        return rows[0] if rows else None

    def query_for_ids(self, row_ids: Iterable[int]) -> List[AttributeRow]:
        """Fetch rows by id, ordered by id. Missing ids are skipped."""
        ids = list(dict.fromkeys(row_ids))
        if not ids:
            return []

        conn = self._get_connection()
        try:
            records = conn.execute(
                f"SELECT * FROM {self._name} WHERE {self._pk} IN ({placeholders(len(ids))})"
                f" ORDER BY {self._pk}",
                ids,
            ).fetchall()
            return [AttributeRow.from_db(self.table, r) for r in records]
        except sqlite3.Error as e:
            raise self._fail("query rows", e) from e
        finally:
            conn.close()

    def query_all(self) -> List[AttributeRow]:
        conn = self._get_connection()
        try:
            records = conn.execute(f"SELECT * FROM {self._name} ORDER BY {self._pk}").fetchall()
            return [AttributeRow.from_db(self.table, r) for r in records]
        except sqlite3.Error as e:
            raise self._fail("query rows", e) from e
        finally:
            conn.close()

    def delete_by_id(self, row_id: int, conn: Optional[sqlite3.Connection] = None) -> int:
        return self.delete_by_ids([row_id], conn)

    def delete_by_ids(self, row_ids: Iterable[int], conn: Optional[sqlite3.Connection] = None) -> int:
        ids = list(row_ids)
        if not ids:
            return 0

        _conn = conn or self._get_connection()
        try:
            cursor = _conn.execute(
                f"DELETE FROM {self._name} WHERE {self._pk} IN ({placeholders(len(ids))})", ids
            )
            if not conn:
                _conn.commit()
            return cursor.rowcount
        except sqlite3.Error as e:
            raise self._fail("delete rows", e) from e
        finally:
            if not conn:
                _conn.close()

    def count(self) -> int:
        conn = self._get_connection()
        try:
            return conn.execute(f"SELECT COUNT(*) FROM {self._name}").fetchone()[0]
        except sqlite3.Error as e:
            raise self._fail("count rows", e) from e
        finally:
            conn.close()
