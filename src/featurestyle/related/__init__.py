"""
Related tables: the relationship catalog, mapping tables, and mapping resolver.
"""

from featurestyle.related.catalog import (
    ExtensionRegistry,
    RelationType,
    RelationshipCatalog,
    mapping_table_name_for,
)
from featurestyle.related.mapping import MappingResolver, MappingRowStore

__all__ = [
    "ExtensionRegistry",
    "RelationType",
    "RelationshipCatalog",
    "mapping_table_name_for",
    "MappingResolver",
    "MappingRowStore",
]
