"""
Tests for attribute layouts, rows, and the attributes DAO.
"""

import pytest

from featurestyle.attributes import AttributeRow, AttributesDao, AttributesTable, Column
from featurestyle.attributes.domains import validate_opacity
from featurestyle.exceptions import StorageError, ValidationError
from featurestyle.style.rows import IconRow, StyleRow, icon_table, style_table


def _layout(name="notes"):
    return AttributesTable(name, (
        Column("id", "INTEGER", primary_key=True),
        Column("title", "TEXT", not_null=True),
        Column("opacity", "REAL", validator=validate_opacity),
    ))


class TestAttributesTable:
    pytestmark = pytest.mark.fast

    def test_layout_accessors(self):
        table = _layout()
        assert table.column_names == ("id", "title", "opacity")
        assert table.pk_column.name == "id"
        assert [c.name for c in table.value_columns] == ["title", "opacity"]
        assert table.has_column("title")
        assert not table.has_column("missing")

    def test_unknown_column(self):
        with pytest.raises(KeyError):
            _layout().column("missing")

    def test_requires_single_primary_key(self):
        with pytest.raises(ValueError):
            AttributesTable("bad", (Column("a"), Column("b")))
        with pytest.raises(ValueError):
            AttributesTable("bad", (Column("a", primary_key=True), Column("b", primary_key=True)))

    def test_rejects_duplicate_columns(self):
        with pytest.raises(ValueError):
            AttributesTable("bad", (Column("id", primary_key=True), Column("x"), Column("x")))

    def test_with_name_keeps_columns(self):
        table = _layout().with_name("other")
        assert table.table_name == "other"
        assert table.column_names == ("id", "title", "opacity")

    def test_create_sql(self):
        sql = _layout().create_sql()
        assert '"id" INTEGER PRIMARY KEY AUTOINCREMENT' in sql
        assert '"title" TEXT NOT NULL' in sql

    @pytest.mark.parametrize("default, clause", [
        ("it's", "DEFAULT 'it''s'"),
        (True, "DEFAULT 1"),
        (False, "DEFAULT 0"),
        (0.5, "DEFAULT 0.5"),
        (7, "DEFAULT 7"),
    ])
    def test_default_is_sql_literal(self, default, clause):
        assert Column("value", "TEXT", default=default).definition() == f'"value" TEXT {clause}'


class TestAttributeRow:
    pytestmark = pytest.mark.fast

    def test_set_validates_before_storing(self):
        row = AttributeRow(_layout())
        row.set("opacity", 0.4)

        with pytest.raises(ValidationError):
            row.set("opacity", 1.4)
        # rejected write leaves the previous value
        assert row.get("opacity") == 0.4

    def test_initial_values_are_validated(self):
        with pytest.raises(ValidationError):
            AttributeRow(_layout(), {"opacity": -1})

    def test_unknown_column(self):
        row = AttributeRow(_layout())
        with pytest.raises(KeyError):
            row.set("missing", 1)
        with pytest.raises(KeyError):
            row.get("missing")

    def test_id(self):
        row = AttributeRow(_layout())
        assert row.id is None
        assert not row.has_id()
        row.id = 7
        assert row.has_id()
        assert row.values()["id"] == 7

    def test_copy_is_independent(self):
        row = AttributeRow(_layout(), {"title": "a"})
        clone = row.copy()
        assert clone == row
        assert clone.table is row.table

        clone.set("title", "b")
        assert row.get("title") == "a"
        assert clone != row

    def test_value_items_skip_primary_key(self):
        row = AttributeRow(_layout(), {"title": "a", "opacity": 1})
        row.id = 3
        assert row.value_items() == (("title", "a"), ("opacity", 1.0))

    def test_from_db_skips_validation(self):
        row = AttributeRow.from_db(_layout(), {"id": 1, "title": "t", "opacity": 9.0})
        assert row.get("opacity") == 9.0


class TestStyleAndIconRows:
    pytestmark = pytest.mark.fast

    def test_style_row_color_columns(self):
        style = StyleRow()
        style.hex_color = "f00"
        style.opacity = 0.5
        assert style.hex_color == "#F00"
        assert style.color.hex == "#F00"
        assert style.color.opacity == 0.5

        style.width = 0
        assert style.width == 0.0
        with pytest.raises(ValidationError):
            style.width = -1

    def test_style_row_color_composite(self):
        from featurestyle.style.color import Color

        style = StyleRow()
        assert style.fill_color is None
        style.fill_color = Color("#00ff00", 0.25)
        assert style.fill_hex_color == "#00FF00"
        assert style.fill_opacity == 0.25

        style.fill_color = None
        assert style.fill_hex_color is None
        assert style.fill_opacity is None

    def test_icon_row_domains(self):
        icon = IconRow()
        icon.anchor_u = 0.0
        icon.anchor_v = 1.0
        icon.height = 32
        with pytest.raises(ValidationError):
            icon.anchor_v = 1.01
        with pytest.raises(ValidationError):
            icon.height = -3

    def test_style_copy(self):
        style = StyleRow()
        style.name = "red"
        clone = style.copy()
        clone.name = "blue"
        assert style.name == "red"


class TestAttributesDao:
    pytestmark = pytest.mark.integration

    @pytest.fixture
    def dao(self, container):
        dao = AttributesDao(container._get_connection, _layout())
        dao.create_table()
        return dao

    def test_insert_assigns_id(self, dao):
        row = dao.new_row()
        row.set("title", "first")
        row_id = dao.insert(row)

        assert row.id == row_id
        stored = dao.query_for_id(row_id)
        assert stored == row

    def test_update(self, dao):
        row = AttributeRow(dao.table, {"title": "a"})
        dao.insert(row)
        row.set("title", "b")
        assert dao.update(row) == 1
        assert dao.query_for_id(row.id).get("title") == "b"

    def test_update_without_id(self, dao):
        with pytest.raises(ValueError):
            dao.update(AttributeRow(dao.table, {"title": "a"}))

    def test_query_for_ids_orders_and_skips_missing(self, dao):
        ids = [dao.insert(AttributeRow(dao.table, {"title": str(i)})) for i in range(3)]
        rows = dao.query_for_ids([ids[2], 999, ids[0], ids[2]])
        assert [r.id for r in rows] == [ids[0], ids[2]]

    def test_delete_and_count(self, dao):
        ids = [dao.insert(AttributeRow(dao.table, {"title": str(i)})) for i in range(3)]
        assert dao.count() == 3
        assert dao.delete_by_ids(ids[:2]) == 2
        assert dao.count() == 1
        assert [r.id for r in dao.query_all()] == [ids[2]]
        assert dao.delete_by_ids([]) == 0

    def test_constraint_failure_is_storage_error(self, dao):
        with pytest.raises(StorageError):
            dao.insert(dao.new_row())  # title is NOT NULL

    def test_column_defaults_apply(self, container):
        layout = AttributesTable("flags", (
            Column("id", "INTEGER", primary_key=True),
            Column("label", "TEXT", default="it's"),
            Column("visible", "BOOLEAN", default=True),
        ))
        AttributesDao(container._get_connection, layout).create_table()

        conn = container._get_connection()
        try:
            conn.execute('INSERT INTO flags DEFAULT VALUES')
            conn.commit()
            row = conn.execute("SELECT label, visible FROM flags").fetchone()
        finally:
            conn.close()
        assert row["label"] == "it's"
        assert row["visible"] == 1

    def test_missing_table(self, container):
        dao = AttributesDao(container._get_connection, _layout("absent"))
        assert not dao.table_exists()
        with pytest.raises(StorageError):
            dao.count()

    def test_style_table_round_trip(self, container):
        dao = AttributesDao(container._get_connection, style_table())
        dao.create_table()
        style = StyleRow()
        style.hex_color = "#123456"
        style.width = 1.5
        dao.insert(style.row)

        stored = StyleRow(dao.query_for_id(style.id))
        assert stored == style
        assert stored.color.to_rgb() == (0x12, 0x34, 0x56)

    def test_icon_table_round_trip(self, container):
        dao = AttributesDao(container._get_connection, icon_table())
        dao.create_table()
        icon = IconRow()
        icon.data = b"\x89PNG"
        icon.content_type = "image/png"
        dao.insert(icon.row)

        stored = IconRow(dao.query_for_id(icon.id))
        assert stored.data == b"\x89PNG"
        assert stored.content_type == "image/png"
