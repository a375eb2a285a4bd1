"""
Record schema models.
A schema is the immutable (table name, ordered typed fields) description of a record type.
"""

import re
from typing import Any, Dict, Mapping, Optional, Tuple
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator

from errors import SchemaError


IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class SemanticType(str, Enum):
    """Supported scalar field types. Closed set."""
    INT32 = "int32"
    INT64 = "int64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    TEXT = "text"


def check_identifier(name: str, kind: str = "identifier") -> str:
    """Identifiers are rendered unquoted, so only plain names are allowed."""
    if not isinstance(name, str) or not IDENTIFIER_PATTERN.match(name):
        raise SchemaError(f"Invalid {kind} {name!r}: must match {IDENTIFIER_PATTERN.pattern}")
    return name


class FieldSpec(BaseModel):
    """A single named, typed column of a record."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Field and column name")
    semantic_type: SemanticType = Field(..., description="Scalar type of the field")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return check_identifier(v, "field name")


class RecordSchema(BaseModel):
    """
    Table name plus ordered fields for one record type.
    Field order is significant: it drives column order, insert placeholders and decoding.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    table_name: str = Field(..., description="Physical table name")
    fields: Tuple[FieldSpec, ...] = Field(..., description="Fields in declaration order")

    # Class rows decode into; None decodes to plain dicts
    record_type: Optional[Any] = Field(None, description="Record class")

    @field_validator('table_name')
    @classmethod
    def validate_table_name(cls, v):
        return check_identifier(v, "table name")

    @field_validator('fields')
    @classmethod
    def validate_fields(cls, v):
        if not v:
            raise SchemaError("A record schema needs at least one field")
        seen = set()
        for field in v:
            # PostgreSQL folds unquoted names to lower case
            if field.name.lower() in seen:
                raise SchemaError(f"Duplicate field '{field.name}'")
            seen.add(field.name.lower())
        return v

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(field.name for field in self.fields)

    def get_field(self, name: str) -> FieldSpec:
        """Get a field by name."""
        for field in self.fields:
            if field.name == name:
                return field
        raise SchemaError(f"Field '{name}' not found in schema '{self.table_name}'")

    def has_field(self, name: str) -> bool:
        return any(field.name == name for field in self.fields)

    def decode_row(self, row: Mapping[str, Any]) -> Any:
        """
        Build a record from a result row using the schema's field names.
        PostgreSQL folds unquoted identifiers to lower case, so a lower-case
        column name is accepted for a mixed-case field.
        """
        values: Dict[str, Any] = {}
        for name in self.field_names:
            if name in row:
                values[name] = row[name]
            elif name.lower() in row:
                values[name] = row[name.lower()]
            else:
                raise SchemaError(f"Column '{name}' missing from result row for table '{self.table_name}'")

        if self.record_type is None or isinstance(self.record_type, str):
            return values
        return self.record_type(**values)
