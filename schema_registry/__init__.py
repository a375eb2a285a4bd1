"""
Schema registry package - record layouts registered once and shared by all generators.
"""

from schema_registry.models import (
    SemanticType,
    FieldSpec,
    RecordSchema
)

from schema_registry.type_mapper import (
    SQL_TYPE_MAP,
    map_type,
    resolve_type
)

from schema_registry.registry import (
    SchemaRegistry,
    REGISTRY
)

__all__ = [
    'SemanticType',
    'FieldSpec',
    'RecordSchema',
    'SQL_TYPE_MAP',
    'map_type',
    'resolve_type',
    'SchemaRegistry',
    'REGISTRY'
]

__version__ = "1.0.0"
