"""
Feature styles: style and icon records, their sets, and the per-table
resolution engine.
"""

from featurestyle.style.cache import TableStyleCache
from featurestyle.style.color import Color
from featurestyle.style.extension import FeatureStyleExtension, StyleRelation
from featurestyle.style.rows import IconRow, StyleRow
from featurestyle.style.sets import FeatureStyle, FeatureStyles, Icons, Styles
from featurestyle.style.table_styles import FeatureTableStyles

__all__ = [
    "TableStyleCache",
    "Color",
    "FeatureStyleExtension",
    "StyleRelation",
    "IconRow",
    "StyleRow",
    "FeatureStyle",
    "FeatureStyles",
    "Icons",
    "Styles",
    "FeatureTableStyles",
]
