"""
Tests for the container storage layer.

Tests cover:
- Container initialization and metadata
- Feature, attribute and media table creation
- Table type lookups
- Transactions and statistics
- Configuration overrides
"""

import pytest

from featurestyle.attributes.columns import AttributesTable, Column
from featurestyle.exceptions import ConfigurationError
from featurestyle.geometry import GeometryType
from featurestyle.storage import Container

pytestmark = pytest.mark.integration


def test_container_initialization(temp_dir):
    """A file path is used as-is; the core schema is created."""
    container = Container(temp_dir / "a.gpkg")

    assert container.db_path == temp_dir / "a.gpkg"
    assert container.db_path.exists()
    assert container.get_metadata("schema_version") == "1.0"
    for table in ("gpkg_contents", "gpkg_geometry_columns", "gpkg_extensions"):
        assert container.table_exists(table)


def test_container_directory(temp_dir):
    """A directory path gets the configured default file name."""
    container = Container(temp_dir / "nested")
    assert container.db_path == temp_dir / "nested" / "container.gpkg"
    assert container.db_path.exists()


def test_reopen_keeps_data(temp_dir):
    path = temp_dir / "reopen.gpkg"
    Container(path).create_feature_table("roads", GeometryType.LINESTRING)

    reopened = Container(path)
    assert reopened.is_feature_table("roads")
    assert reopened.get_geometry_type("roads") is GeometryType.LINESTRING


def test_metadata(container):
    container.set_metadata("owner", "survey")
    assert container.get_metadata("owner") == "survey"
    container.set_metadata("owner", "mapping")
    assert container.get_metadata("owner") == "mapping"
    assert container.get_metadata("missing") is None


def test_feature_table(container):
    container.create_feature_table("trees", GeometryType.POINT, columns=[Column("species")])

    assert container.is_feature_table("trees")
    assert container.get_table_type("trees") == "features"
    assert container.get_feature_tables() == ["trees"]
    assert container.get_primary_key("trees") == "id"
    assert container.get_columns("trees") == ["id", "geom", "species"]

    first = container.insert_feature("trees", species="oak")
    second = container.insert_feature("trees")
    assert second == first + 1


def test_feature_table_already_exists(container):
    container.create_feature_table("trees")
    with pytest.raises(ConfigurationError):
        container.create_feature_table("trees")


def test_attributes_and_media_tables(container):
    table = AttributesTable("notes", (Column("id", "INTEGER", primary_key=True), Column("body")))
    container.create_attributes_table(table)
    media = container.create_media_table("photos")

    assert container.get_table_type("notes") == "attributes"
    assert not container.is_feature_table("notes")
    assert media.has_column("data")
    assert set(container.get_columns("photos")) == {"id", "data", "content_type"}


def test_missing_table_lookups(container):
    assert not container.table_exists("nothing")
    assert container.get_table_type("nothing") is None
    assert not container.is_feature_table("nothing")
    assert container.get_geometry_type("nothing") is None


def test_drop_table(container):
    container.create_feature_table("trees")
    container.drop_table("trees")
    assert not container.table_exists("trees")
    assert container.get_table_type("trees") is None
    # missing tables are ignored
    container.drop_table("trees")


def test_transaction_rolls_back(container):
    container.create_feature_table("trees")

    with pytest.raises(RuntimeError):
        with container.transaction() as conn:
            conn.execute('INSERT INTO "trees" DEFAULT VALUES')
            raise RuntimeError("boom")

    conn = container._get_connection()
    try:
        assert conn.execute('SELECT COUNT(*) FROM "trees"').fetchone()[0] == 0
    finally:
        conn.close()


def test_stats(container):
    container.create_feature_table("trees")
    container.create_media_table("photos")

    stats = container.get_stats()
    assert stats["tables_by_type"] == {"features": 1, "attributes": 1}
    assert stats["total_relationships"] == 0
    assert stats["db_size_bytes"] > 0


def test_invalid_identifier(container):
    with pytest.raises(ConfigurationError):
        container.create_feature_table('bad"; DROP TABLE gpkg_contents; --')


def test_config_file_overrides_table_names(temp_dir, monkeypatch):
    from featurestyle.config import get_config_value
    from featurestyle.style.rows import style_table

    config = temp_dir / "featurestyle.toml"
    config.write_text('[styles]\nstyle_table = "custom_style"\n\n[storage]\nfile_name = "custom.gpkg"\n')
    monkeypatch.setenv("FEATURESTYLE_CONFIG", str(config))

    assert get_config_value("styles.style_table") == "custom_style"
    assert get_config_value("styles.icon_table") == "nga_icon"
    assert get_config_value("nothing.here", "fallback") == "fallback"
    assert style_table().table_name == "custom_style"
    assert Container(temp_dir / "data").db_path.name == "custom.gpkg"
