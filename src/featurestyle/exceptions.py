# Custom exceptions for featurestyle

from typing import Any, Optional


class FeatureStyleError(Exception):
    """Base exception for all application-specific errors."""
    pass


class ConfigurationError(FeatureStyleError):
    """Raised when a table is missing or is not the type an operation requires."""
    pass


class ValidationError(FeatureStyleError):
    """Raised when a value falls outside its column domain."""

    def __init__(self, field: str, value: Any, message: str):
        self.field = field
        self.value = value
        super().__init__(f"{message}, invalid value: {value!r}")


class StorageError(FeatureStyleError):
    """
    Raised when a query or statement against the backing store fails.

    Carries the relationship context the failing statement ran under so the
    caller can tell which mapping table was involved.
    """

    def __init__(
        self,
        message: str,
        relation_name: Optional[str] = None,
        base_table: Optional[str] = None,
        related_table: Optional[str] = None,
        mapping_table: Optional[str] = None,
    ):
        self.relation_name = relation_name
        self.base_table = base_table
        self.related_table = related_table
        self.mapping_table = mapping_table

        if mapping_table:
            message = (
                f"{message} for relationship '{mapping_table}'"
                f" ({relation_name}) between {base_table} and {related_table}"
            )
        super().__init__(message)

    @classmethod
    def for_relation(cls, message: str, relation) -> "StorageError":
        """Build an error annotated with an ExtendedRelation's names."""
        return cls(
            message,
            relation_name=relation.relation_name,
            base_table=relation.base_table_name,
            related_table=relation.related_table_name,
            mapping_table=relation.mapping_table_name,
        )
