"""
Semantic type -> SQL column type mapping.
"""

from typing import Any

from errors import SchemaError
from schema_registry.models import SemanticType


SQL_TYPE_MAP = {
    SemanticType.INT32: "INTEGER",
    SemanticType.INT64: "BIGINT",
    SemanticType.FLOAT32: "REAL",
    SemanticType.FLOAT64: "DOUBLE PRECISION",
    SemanticType.TEXT: "TEXT",
}


def resolve_type(declared: Any) -> SemanticType:
    """
    Resolve a declared type tag to a SemanticType.
    Accepts a SemanticType or its string value (case-insensitive).
    """
    if isinstance(declared, SemanticType):
        return declared
    if isinstance(declared, str):
        try:
            return SemanticType(declared.strip().lower())
        except ValueError:
            pass
    raise SchemaError(f"Unsupported field type {declared!r}")


def map_type(semantic_type: Any) -> str:
    """Get the SQL column type for a semantic type."""
    if not isinstance(semantic_type, SemanticType) or semantic_type not in SQL_TYPE_MAP:
        raise SchemaError(f"Unsupported field type {semantic_type!r}")
    return SQL_TYPE_MAP[semantic_type]
