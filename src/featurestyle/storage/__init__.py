"""
Storage layer: the SQLite-backed container the catalog and style engine run on.
"""

from featurestyle.storage.facade import Container

__all__ = ["Container"]
