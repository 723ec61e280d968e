from pydantic import BaseModel, Field
from typing import Any, Dict, Optional

from featurestyle.geometry import GeometryType


class ExtendedRelation(BaseModel):
    """
    Describes one declared many-to-many relationship (a gpkgext_relations row).
    """
    id: Optional[int] = None
    base_table_name: str
    base_primary_column: str = "id"
    related_table_name: str
    related_primary_column: str = "id"
    relation_name: str
    mapping_table_name: str

    def key(self):
        """Identity tuple used for idempotent declaration."""
        return (self.base_table_name, self.related_table_name,
                self.relation_name, self.mapping_table_name)


class ExtensionRecord(BaseModel):
    """
    A gpkg_extensions row: marks an extension as in use for a table/column.
    """
    table_name: Optional[str] = None
    column_name: Optional[str] = None
    extension_name: str
    definition: str
    scope: str = "read-write"


class MappingRow(BaseModel):
    """
    One (base_id, related_id) pair from a mapping table, plus any extra columns.
    """
    base_id: int
    related_id: int
    extra: Dict[str, Any] = Field(default_factory=dict)


class FeatureRow(BaseModel):
    """
    The parts of a feature the style engine needs: its id and geometry type.
    """
    id: int
    geometry_type: Optional[GeometryType] = None
