"""
Mapping tables and the resolver that reads them.

A mapping table backs exactly one declared relationship. It holds
(base_id, related_id) pairs plus any extra columns the relationship kind
needs. It has no primary key and no uniqueness constraint, so the same pair
may repeat.
"""

import sqlite3
from typing import Any, Dict, List, Optional, Sequence, Tuple

from featurestyle.logging_config import logger
from featurestyle.exceptions import StorageError
from featurestyle.attributes.columns import Column
from featurestyle.schemas import ExtendedRelation, MappingRow
from featurestyle.sql import placeholders, quote_identifier, quote_list

COLUMN_BASE_ID = "base_id"
COLUMN_RELATED_ID = "related_id"
REQUIRED_COLUMNS = (COLUMN_BASE_ID, COLUMN_RELATED_ID)


def mapping_table_sql(table_name: str, extra_columns: Sequence[Column] = ()) -> str:
    defs = [
        f"{quote_identifier(COLUMN_BASE_ID)} INTEGER NOT NULL",
        f"{quote_identifier(COLUMN_RELATED_ID)} INTEGER NOT NULL",
    ]
    defs.extend(c.definition() for c in extra_columns)
    return f"CREATE TABLE IF NOT EXISTS {quote_identifier(table_name)} ({', '.join(defs)})"


def _where(first_column: str, first_value: Any, where: Dict[str, Any]) -> Tuple[str, List[Any]]:
    clauses = [f"{quote_identifier(first_column)} = ?"]
    params = [first_value]
    for name, value in where.items():
        if value is None:
            clauses.append(f"{quote_identifier(name)} IS NULL")
        else:
            clauses.append(f"{quote_identifier(name)} = ?")
            params.append(value)
    return " AND ".join(clauses), params


class MappingRowStore:
    """
    Row-level access to the mapping table of one relationship.

    All write methods accept an optional connection for transaction support.
    """

    def __init__(self, get_connection_func, relation: ExtendedRelation):
        """
        Args:
            get_connection_func: Callable that returns a new SQLite connection
            relation: Descriptor of the relationship this table backs
        """
        self._get_connection = get_connection_func
        self.relation = relation
        self._name = quote_identifier(relation.mapping_table_name)

    @property
    def table_name(self) -> str:
        return self.relation.mapping_table_name

    def _fail(self, action: str, e: Exception) -> StorageError:
        return StorageError.for_relation(f"Failed to {action}: {e}", self.relation)

    def create(self, extra_columns: Sequence[Column] = (), conn: Optional[sqlite3.Connection] = None) -> None:
        _conn = conn or self._get_connection()
        try:
            _conn.execute(mapping_table_sql(self.table_name, extra_columns))
            if not conn:
                _conn.commit()
            logger.debug(f"Created mapping table {self.table_name}")
        except sqlite3.Error as e:
            raise self._fail("create mapping table", e) from e
        finally:
            if not conn:
                _conn.close()

    def exists(self) -> bool:
        conn = self._get_connection()
        try:
            return conn.execute(
                "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ?",
                (self.table_name,),
            ).fetchone() is not None
        finally:
            conn.close()

    def columns(self) -> List[str]:
        conn = self._get_connection()
        try:
            rows = conn.execute(f"PRAGMA table_info({self._name})").fetchall()
            return [row["name"] for row in rows]
        finally:
            conn.close()

    def insert(self, base_id: int, related_id: int, conn: Optional[sqlite3.Connection] = None,
               **extra: Any) -> None:
        names = [COLUMN_BASE_ID, COLUMN_RELATED_ID, *extra.keys()]
        params = [base_id, related_id, *extra.values()]

        _conn = conn or self._get_connection()
        try:
            _conn.execute(
                f"INSERT INTO {self._name} ({quote_list(names)}) VALUES ({placeholders(len(names))})",
                params,
            )
            if not conn:
                _conn.commit()
        except sqlite3.Error as e:
            raise self._fail("insert mapping", e) from e
        finally:
            if not conn:
                _conn.close()

    def _query_rows(self, column: str, value: int, where: Dict[str, Any]) -> List[MappingRow]:
        clause, params = _where(column, value, where)
        conn = self._get_connection()
        try:
            records = conn.execute(f"SELECT * FROM {self._name} WHERE {clause}", params).fetchall()
        except sqlite3.Error as e:
            raise self._fail("query mappings", e) from e
        finally:
            conn.close()

        rows = []
        for record in records:
            extra = {k: record[k] for k in record.keys() if k not in REQUIRED_COLUMNS}
            rows.append(MappingRow(base_id=record[COLUMN_BASE_ID],
                                   related_id=record[COLUMN_RELATED_ID],
                                   extra=extra))
        return rows

    def rows_for_base(self, base_id: int, **where: Any) -> List[MappingRow]:
        return self._query_rows(COLUMN_BASE_ID, base_id, where)

    def rows_for_related(self, related_id: int, **where: Any) -> List[MappingRow]:
        return self._query_rows(COLUMN_RELATED_ID, related_id, where)

    def _delete(self, clause: str, params: List[Any], conn: Optional[sqlite3.Connection]) -> int:
        _conn = conn or self._get_connection()
        try:
            cursor = _conn.execute(f"DELETE FROM {self._name} WHERE {clause}", params)
            if not conn:
                _conn.commit()
            return cursor.rowcount
        except sqlite3.Error as e:
            raise self._fail("delete mappings", e) from e
        finally:
            if not conn:
                _conn.close()

    def delete_by_base(self, base_id: int, conn: Optional[sqlite3.Connection] = None, **where: Any) -> int:
        """Delete the mappings of a base id, optionally narrowed by extra column values."""
        clause, params = _where(COLUMN_BASE_ID, base_id, where)
        return self._delete(clause, params, conn)

    def delete_by_related(self, related_id: int, conn: Optional[sqlite3.Connection] = None,
                          **where: Any) -> int:
        clause, params = _where(COLUMN_RELATED_ID, related_id, where)
        return self._delete(clause, params, conn)

    def delete_all(self, conn: Optional[sqlite3.Connection] = None) -> int:
        return self._delete("1 = 1", [], conn)

    def count(self) -> int:
        conn = self._get_connection()
        try:
            return conn.execute(f"SELECT COUNT(*) FROM {self._name}").fetchone()[0]
        except sqlite3.Error as e:
            raise self._fail("count mappings", e) from e
        finally:
            conn.close()

    def unique_related_ids(self) -> List[int]:
        conn = self._get_connection()
        try:
            rows = conn.execute(
                f"SELECT DISTINCT {quote_identifier(COLUMN_RELATED_ID)} FROM {self._name}"
            ).fetchall()
            return [row[0] for row in rows]
        except sqlite3.Error as e:
            raise self._fail("query related ids", e) from e
        finally:
            conn.close()


class MappingResolver:
    """
    Resolves ids across a relationship.

    Read-only; each call opens its own connection, so concurrent readers need
    no coordination here.
    """

    def __init__(self, get_connection_func):
        self._get_connection = get_connection_func

    def _collect(self, relation: ExtendedRelation, select_column: str, where_column: str,
                 value: int, action: str) -> List[int]:
        sql = (
            f"SELECT {quote_identifier(select_column)}"
            f" FROM {quote_identifier(relation.mapping_table_name)}"
            f" WHERE {quote_identifier(where_column)} = ?"
        )
        conn = self._get_connection()
        try:
            ids = {row[0] for row in conn.execute(sql, (value,))}
        except sqlite3.Error as e:
            raise StorageError.for_relation(f"Failed to get {action}", relation) from e
        finally:
            conn.close()
        return list(ids)

    def mappings_for_base(self, relation: ExtendedRelation, base_id: int) -> List[int]:
        """Distinct related ids mapped from a base id. Order is unspecified."""
        return self._collect(relation, COLUMN_RELATED_ID, COLUMN_BASE_ID, base_id, "mappings")

    def mappings_for_related(self, relation: ExtendedRelation, related_id: int) -> List[int]:
        """Distinct base ids mapped to a related id. Order is unspecified."""
        return self._collect(relation, COLUMN_BASE_ID, COLUMN_RELATED_ID, related_id,
                             "reverse mappings")

    def legacy_mappings_for_related(self, relation: ExtendedRelation, related_id: int) -> List[int]:
        """
        Reverse lookup that collects the related_id column instead of base_id.

        Older readers behaved this way; the result is at most ``[related_id]``.
        Kept so compatibility tests can compare both behaviors.
        """
        return self._collect(relation, COLUMN_RELATED_ID, COLUMN_RELATED_ID, related_id,
                             "reverse mappings")

    def has_mapping(self, relation: ExtendedRelation, base_id: int, related_id: int) -> bool:
        sql = (
            f"SELECT 1 FROM {quote_identifier(relation.mapping_table_name)}"
            f" WHERE {quote_identifier(COLUMN_BASE_ID)} = ?"
            f" AND {quote_identifier(COLUMN_RELATED_ID)} = ? LIMIT 1"
        )
        conn = self._get_connection()
        try:
            return conn.execute(sql, (base_id, related_id)).fetchone() is not None
        except sqlite3.Error as e:
            raise StorageError.for_relation("Failed to check mapping", relation) from e
        finally:
            conn.close()
