"""
Attribute tables: column layouts, domain validation, rows, and CRUD.
"""

from featurestyle.attributes.columns import AttributesTable, Column
from featurestyle.attributes.dao import AttributesDao
from featurestyle.attributes.row import AttributeRow

__all__ = ["AttributesTable", "Column", "AttributesDao", "AttributeRow"]
