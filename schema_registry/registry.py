"""
Schema registry - the single source of truth for record layouts.
Schemas are registered once at setup time and read by every generator afterwards.
"""

import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from pydantic import ValidationError

from errors import SchemaError
from schema_registry.models import FieldSpec, RecordSchema, check_identifier
from schema_registry.type_mapper import map_type, resolve_type

logger = logging.getLogger(__name__)


class SchemaRegistry:
    """
    Holds one RecordSchema per record type.
    Keys are record type identities (a class, or a plain string name).
    """

    def __init__(self):
        self._schemas: Dict[Any, RecordSchema] = {}

    def register(
        self,
        record_type: Any,
        fields: Iterable[Tuple[str, Any]],
        table_name: Optional[str] = None
    ) -> RecordSchema:
        """
        Register the ordered (name, declared type) fields of a record type.
        Fails on the first unsupported field and registers nothing.
        """
        if isinstance(fields, Mapping):
            fields = fields.items()

        table = table_name or self._default_table_name(record_type)
        check_identifier(table, "table name")

        field_specs = []
        for name, declared in fields:
            check_identifier(name, "field name")
            try:
                semantic_type = resolve_type(declared)
                map_type(semantic_type)
            except SchemaError as e:
                raise SchemaError(f"Field '{name}' of '{table}': {e}") from e
            field_specs.append(FieldSpec(name=name, semantic_type=semantic_type))

        try:
            schema = RecordSchema(
                table_name=table,
                fields=tuple(field_specs),
                record_type=record_type
            )
        except ValidationError as e:
            raise SchemaError(f"Invalid schema for '{table}': {e}") from e

        if record_type in self._schemas:
            logger.debug(f"Replacing schema for {table}")
        self._schemas[record_type] = schema
        logger.debug(f"Registered {table}: {', '.join(schema.field_names)}")
        return schema

    def table(self, fields: Iterable[Tuple[str, Any]], table_name: Optional[str] = None):
        """Class decorator form of register()."""
        def decorator(cls):
            self.register(cls, fields, table_name)
            return cls
        return decorator

    def lookup(self, record_type: Any) -> RecordSchema:
        """Get the schema of a registered record type."""
        if isinstance(record_type, RecordSchema):
            return record_type
        if record_type not in self._schemas:
            raise SchemaError(f"Record type {self._display_name(record_type)} is not registered")
        return self._schemas[record_type]

    def unregister(self, record_type: Any) -> None:
        self._schemas.pop(record_type, None)

    def clear(self) -> None:
        self._schemas.clear()

    def __contains__(self, record_type: Any) -> bool:
        return record_type in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)

    @staticmethod
    def _default_table_name(record_type: Any) -> str:
        if isinstance(record_type, str):
            return record_type
        name = getattr(record_type, "__name__", None)
        if not name:
            raise SchemaError(f"Cannot derive a table name from {record_type!r}")
        return name

    @staticmethod
    def _display_name(record_type: Any) -> str:
        return getattr(record_type, "__name__", repr(record_type))


# Default registry
REGISTRY = SchemaRegistry()
