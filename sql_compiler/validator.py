"""
Record validation layer.
Validates a record instance against its schema before insert parameters are bound.
"""

from typing import Any, List

from errors import BuilderContractError
from schema_registry.models import RecordSchema
from sql_compiler.params import BoundValue


class RecordValidator:
    """
    Validates record instances against a schema.
    Ensures:
    1. Every schema field is readable on the record
    2. Every value matches its field's semantic type
    3. Integer and float values fit their column range
    """

    def validate_record(self, schema: RecordSchema, record: Any) -> List[str]:
        """
        Validate a record against its schema.
        Returns list of validation errors, empty list if valid.
        """
        errors = []

        for field in schema.fields:
            try:
                value = self._read_field(record, field.name)
            except (AttributeError, KeyError):
                errors.append(f"Record has no field '{field.name}'")
                continue

            try:
                BoundValue.of(field.semantic_type, value)
            except BuilderContractError as e:
                errors.append(f"Field '{field.name}': {e}")

        return errors

    def bind_record(self, schema: RecordSchema, record: Any) -> List[BoundValue]:
        """Bound values for a record in insert placeholder order."""
        errors = self.validate_record(schema, record)
        if errors:
            raise BuilderContractError(
                f"Invalid {schema.table_name} record: {'; '.join(errors)}"
            )
        return [
            BoundValue.of(field.semantic_type, self._read_field(record, field.name))
            for field in schema.fields
        ]

    @staticmethod
    def _read_field(record: Any, name: str) -> Any:
        # Plain dicts are accepted for schemas registered without a class
        if isinstance(record, dict):
            return record[name]
        return getattr(record, name)
