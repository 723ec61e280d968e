"""
Tests for the relationship catalog and extension registry.
"""

import pytest

from featurestyle.attributes.columns import AttributesTable, Column
from featurestyle.exceptions import ConfigurationError, StorageError
from featurestyle.geometry import GeometryType
from featurestyle.related import RelationType, RelationshipCatalog, mapping_table_name_for
from featurestyle.related.catalog import RELATED_TABLES_EXTENSION, RELATIONS_TABLE
from featurestyle.schemas import ExtendedRelation

pytestmark = pytest.mark.integration


@pytest.fixture
def tables(container):
    """trees (features), parks (features), photos (media), notes (attributes)."""
    container.create_feature_table("trees", GeometryType.POINT)
    container.create_feature_table("parks", GeometryType.POLYGON)
    container.create_media_table("photos")
    container.create_attributes_table(
        AttributesTable("notes", (Column("id", "INTEGER", primary_key=True), Column("body")))
    )
    return container


class TestDeclare:

    def test_declare_creates_mapping_table(self, catalog, tables):
        relation = catalog.declare_relationship("trees", "id", "photos", "id", RelationType.MEDIA)

        assert relation.id is not None
        assert relation.mapping_table_name == "trees_media"
        assert relation.relation_name == "media"
        assert tables.table_exists("trees_media")
        assert set(tables.get_columns("trees_media")) == {"base_id", "related_id"}
        assert catalog.get_relationship("trees_media") == relation

    def test_declare_is_idempotent(self, catalog, tables):
        first = catalog.declare_relationship("trees", "id", "photos", "id", "media")
        second = catalog.declare_relationship("trees", "id", "photos", "id", RelationType.MEDIA)

        assert second.id == first.id
        assert len(catalog.list_relationships()) == 1
        assert len(catalog.extensions.list(RELATED_TABLES_EXTENSION)) == 2

    def test_extra_columns(self, catalog, tables):
        relation = catalog.declare_relationship(
            "trees", "id", "notes", "id", "annotations",
            extra_columns=[Column("weight", "REAL")],
        )
        assert "weight" in tables.get_columns(relation.mapping_table_name)

    def test_mapping_table_name_conflict(self, catalog, tables):
        catalog.declare_relationship("trees", "id", "photos", "id", "media", "shared_mapping")

        with pytest.raises(ConfigurationError) as exc:
            catalog.declare_relationship("parks", "id", "notes", "id", "attributes", "shared_mapping")
        assert "already backs" in str(exc.value)

    def test_existing_non_mapping_table(self, catalog, tables):
        with pytest.raises(ConfigurationError):
            catalog.declare_relationship("trees", "id", "notes", "id", "attributes", "parks")
        assert catalog.list_relationships() == []

    @pytest.mark.parametrize("base, base_col, related, related_col", [
        ("missing", "id", "photos", "id"),
        ("trees", "id", "missing", "id"),
        ("trees", "nope", "photos", "id"),
        ("trees", "id", "photos", "nope"),
    ])
    def test_missing_tables_and_columns(self, catalog, tables, base, base_col, related, related_col):
        with pytest.raises(ConfigurationError):
            catalog.declare_relationship(base, base_col, related, related_col, "media")

    def test_related_table_type_checked(self, catalog, tables):
        with pytest.raises(ConfigurationError) as exc:
            catalog.declare_relationship("trees", "id", "notes", "id", RelationType.FEATURES)
        assert "Actual Type: attributes" in str(exc.value)

        with pytest.raises(ConfigurationError):
            catalog.declare_relationship("trees", "id", "notes", "id", RelationType.MEDIA)

        relation = catalog.declare_relationship("trees", "id", "parks", "id", RelationType.FEATURES)
        assert relation.mapping_table_name == "trees_features"

    def test_user_defined_kind_skips_type_check(self, catalog, tables):
        relation = catalog.declare_relationship("trees", "id", "parks", "id", "grows_in")
        assert relation.relation_name == "grows_in"
        assert relation.mapping_table_name == mapping_table_name_for("trees", "grows_in")


class TestQueries:

    @pytest.fixture
    def declared(self, catalog, tables):
        return [
            catalog.declare_relationship("trees", "id", "photos", "id", "media"),
            catalog.declare_relationship("trees", "id", "notes", "id", "attributes"),
            catalog.declare_relationship("parks", "id", "photos", "id", "media"),
        ]

    def test_empty_catalog(self, catalog, tables):
        assert catalog.list_relationships() == []
        assert catalog.get_relationship("trees_media") is None
        assert not catalog.has_relationships()

    def test_list_filters(self, catalog, declared):
        assert catalog.list_relationships() == declared
        assert catalog.list_relationships(base_table="trees") == declared[:2]
        assert catalog.list_relationships(related_table="photos") == [declared[0], declared[2]]
        assert catalog.list_relationships(base_table="parks", kind="media") == [declared[2]]
        assert catalog.list_relationships(kind=RelationType.TILES) == []

    def test_has(self, catalog, declared):
        assert catalog.has_relationships()
        assert catalog.has_relationships("parks")
        assert catalog.has_relationship("trees", "notes")
        assert not catalog.has_relationship("parks", "notes")
        assert not catalog.has_relationship("trees", kind="features")


class TestRemove:

    def test_remove_one_of_several(self, catalog, tables):
        media = catalog.declare_relationship("trees", "id", "photos", "id", "media")
        notes = catalog.declare_relationship("trees", "id", "notes", "id", "attributes")

        assert catalog.remove_relationship(media)

        assert not tables.table_exists("trees_media")
        assert not catalog.extensions.has(RELATED_TABLES_EXTENSION, "trees_media")
        assert catalog.extensions.has(RELATED_TABLES_EXTENSION, RELATIONS_TABLE)
        assert catalog.list_relationships() == [notes]

    def test_remove_last_deregisters_extension(self, catalog, tables):
        relation = catalog.declare_relationship("trees", "id", "photos", "id", "media")

        assert catalog.remove_relationship(relation)

        assert not tables.table_exists(RELATIONS_TABLE)
        assert not catalog.extensions.has(RELATED_TABLES_EXTENSION)
        assert catalog.list_relationships() == []

    def test_remove_missing_is_noop(self, catalog, tables):
        relation = catalog.declare_relationship("trees", "id", "photos", "id", "media")
        assert catalog.remove_relationship(relation)
        assert not catalog.remove_relationship(relation)

    def test_remove_relationships(self, catalog, tables):
        catalog.declare_relationship("trees", "id", "photos", "id", "media")
        catalog.declare_relationship("trees", "id", "notes", "id", "attributes")
        catalog.declare_relationship("parks", "id", "photos", "id", "media")

        assert catalog.remove_relationships("trees") == 2
        assert [r.base_table_name for r in catalog.list_relationships()] == ["parks"]
        assert catalog.remove_relationships("trees") == 0

    def test_redeclare_after_remove(self, catalog, tables):
        relation = catalog.declare_relationship("trees", "id", "photos", "id", "media")
        catalog.remove_relationship(relation)

        again = catalog.declare_relationship("trees", "id", "photos", "id", "media")
        assert tables.table_exists(again.mapping_table_name)
        assert catalog.extensions.has(RELATED_TABLES_EXTENSION, RELATIONS_TABLE)


class TestStorageFailures:

    @pytest.fixture
    def malformed(self, tables):
        """A catalog table left behind without the relationship columns."""
        conn = tables._get_connection()
        try:
            conn.execute(f"CREATE TABLE {RELATIONS_TABLE} (id INTEGER PRIMARY KEY)")
            conn.commit()
        finally:
            conn.close()
        return tables

    def test_get_relationship(self, catalog, malformed):
        with pytest.raises(StorageError):
            catalog.get_relationship("trees_media")

    def test_declare_relationship_rolls_back(self, catalog, malformed):
        with pytest.raises(StorageError) as exc:
            catalog.declare_relationship("trees", "id", "photos", "id", "media")
        assert exc.value.mapping_table == "trees_media"
        assert not malformed.table_exists("trees_media")
        assert not catalog.extensions.has(RELATED_TABLES_EXTENSION)

    def test_remove_relationship(self, catalog, malformed):
        relation = ExtendedRelation(
            base_table_name="trees", base_primary_column="id",
            related_table_name="photos", related_primary_column="id",
            relation_name="media", mapping_table_name="trees_media",
        )
        with pytest.raises(StorageError) as exc:
            catalog.remove_relationship(relation)
        assert exc.value.relation_name == "media"


class TestExtensionRegistry:

    def test_register_once(self, catalog):
        for _ in range(2):
            catalog.extensions.register("my_ext", "http://example.com/ext")
        assert len(catalog.extensions.list("my_ext")) == 1

    def test_table_scoped_rows(self, catalog):
        catalog.extensions.register("my_ext", "def", table_name="a")
        catalog.extensions.register("my_ext", "def", table_name="b")

        assert catalog.extensions.has("my_ext")
        assert catalog.extensions.has("my_ext", "a")
        assert not catalog.extensions.has("my_ext", "c")

        assert catalog.extensions.delete("my_ext", "a") == 1
        assert [r.table_name for r in catalog.extensions.list("my_ext")] == ["b"]
        assert catalog.extensions.delete("my_ext") == 1
        assert not catalog.extensions.has("my_ext")

    def test_stats_count_relationships(self, container, catalog, tables):
        catalog.declare_relationship("trees", "id", "photos", "id", "media")
        assert container.get_stats()["total_relationships"] == 1


def test_catalog_shares_container(container):
    assert RelationshipCatalog(container).container is container


def test_declared_relationship_is_visible(catalog, tables):
    catalog.declare_relationship("trees", "id", "photos", "id", "media")
    catalog.declare_relationship("trees", "id", "photos", "id", "media")

    assert catalog.has_relationship("trees", "photos", "media")
    assert len(catalog.list_relationships("trees", "photos", "media")) == 1
    assert tables.table_exists("trees_media")
