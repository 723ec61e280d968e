"""
featurestyle - Related tables and feature styles for GeoPackage-style containers

Declares many-to-many relationships between tables of a SQLite container and
resolves feature styles and icons through feature- and table-scope tiers.
"""

__version__ = "1.0.0"

from featurestyle.exceptions import (
    ConfigurationError,
    FeatureStyleError,
    StorageError,
    ValidationError,
)
from featurestyle.geometry import GeometryType
from featurestyle.related import MappingResolver, RelationType, RelationshipCatalog
from featurestyle.schemas import ExtendedRelation, FeatureRow
from featurestyle.storage import Container
from featurestyle.style import (
    Color,
    FeatureStyle,
    FeatureStyleExtension,
    FeatureStyles,
    FeatureTableStyles,
    IconRow,
    Icons,
    StyleRelation,
    StyleRow,
    Styles,
)

__all__ = [
    "__version__",
    "ConfigurationError",
    "FeatureStyleError",
    "StorageError",
    "ValidationError",
    "GeometryType",
    "MappingResolver",
    "RelationType",
    "RelationshipCatalog",
    "ExtendedRelation",
    "FeatureRow",
    "Container",
    "Color",
    "FeatureStyle",
    "FeatureStyleExtension",
    "FeatureStyles",
    "FeatureTableStyles",
    "IconRow",
    "Icons",
    "StyleRelation",
    "StyleRow",
    "Styles",
]
