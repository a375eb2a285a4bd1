"""
Tests for schema registry, type mapping and schema models.
"""

import pytest
from dataclasses import dataclass
from pydantic import BaseModel

from errors import SchemaError
from schema_registry.models import SemanticType, FieldSpec, RecordSchema
from schema_registry.type_mapper import map_type, resolve_type
from schema_registry.registry import SchemaRegistry


@dataclass
class User:
    id: int
    name: str


class TestTypeMapper:
    """Test semantic type -> SQL type mapping."""

    def test_all_types_mapped(self):
        """Every semantic type has exactly one SQL type."""
        assert map_type(SemanticType.INT32) == "INTEGER"
        assert map_type(SemanticType.INT64) == "BIGINT"
        assert map_type(SemanticType.FLOAT32) == "REAL"
        assert map_type(SemanticType.FLOAT64) == "DOUBLE PRECISION"
        assert map_type(SemanticType.TEXT) == "TEXT"

    def test_unsupported_type_rejected(self):
        """Values outside the enum are rejected."""
        with pytest.raises(SchemaError, match="Unsupported field type"):
            map_type("bool")
        with pytest.raises(SchemaError):
            map_type(int)

    def test_resolve_declared_type(self):
        """Declared type tags resolve case-insensitively."""
        assert resolve_type("int32") == SemanticType.INT32
        assert resolve_type("Float64") == SemanticType.FLOAT64
        assert resolve_type(SemanticType.TEXT) == SemanticType.TEXT

        with pytest.raises(SchemaError):
            resolve_type("uuid")
        with pytest.raises(SchemaError):
            resolve_type(None)


class TestSchemaRegistry:
    """Test schema registration and lookup."""

    def test_register_and_lookup(self):
        """Registered schema keeps table name and field order."""
        registry = SchemaRegistry()
        schema = registry.register(User, [("id", "int32"), ("name", "text")])

        assert schema.table_name == "User"
        assert schema.field_names == ("id", "name")
        assert schema.fields[0].semantic_type == SemanticType.INT32
        assert registry.lookup(User) is schema
        assert User in registry

    def test_register_with_mapping_and_table_name(self):
        """Fields can be given as an ordered mapping, table name overridden."""
        registry = SchemaRegistry()
        schema = registry.register(
            User,
            {"id": SemanticType.INT64, "name": SemanticType.TEXT},
            table_name="users"
        )

        assert schema.table_name == "users"
        assert schema.field_names == ("id", "name")

    def test_unsupported_type_registers_nothing(self):
        """An unsupported field aborts registration and names the field."""
        registry = SchemaRegistry()

        with pytest.raises(SchemaError, match="active"):
            registry.register(User, [("id", "int32"), ("active", "bool"), ("name", "text")])

        assert User not in registry
        assert len(registry) == 0

    def test_failed_reregistration_keeps_previous_schema(self):
        """A failed re-registration leaves the stored schema alone."""
        registry = SchemaRegistry()
        original = registry.register(User, [("id", "int32")])

        with pytest.raises(SchemaError):
            registry.register(User, [("id", "date")])

        assert registry.lookup(User) is original

    def test_reregistration_replaces(self):
        """Re-registering replaces the schema."""
        registry = SchemaRegistry()
        registry.register(User, [("id", "int32")])
        schema = registry.register(User, [("id", "int64"), ("name", "text")])

        assert registry.lookup(User) is schema
        assert len(registry) == 1

    def test_lookup_unregistered(self):
        """Looking up an unknown record type fails."""
        registry = SchemaRegistry()

        with pytest.raises(SchemaError, match="not registered"):
            registry.lookup(User)

    def test_invalid_identifiers(self):
        """Names that cannot be rendered unquoted are rejected."""
        registry = SchemaRegistry()

        with pytest.raises(SchemaError):
            registry.register(User, [("id; DROP TABLE x", "int32")])
        with pytest.raises(SchemaError):
            registry.register(User, [("id", "int32")], table_name="bad name")

    def test_duplicate_and_empty_fields(self):
        """Field names are unique and at least one field is required."""
        registry = SchemaRegistry()

        with pytest.raises(SchemaError, match="Duplicate"):
            registry.register(User, [("id", "int32"), ("id", "text")])
        with pytest.raises(SchemaError):
            registry.register(User, [])

    def test_case_folded_duplicate_fields(self):
        """Names differing only in case collide once PostgreSQL folds them."""
        registry = SchemaRegistry()

        with pytest.raises(SchemaError, match="Duplicate"):
            registry.register(User, [("id", "int32"), ("Id", "int64")])

        assert User not in registry

    def test_string_key(self):
        """A plain string can identify a record type; it becomes the table name."""
        registry = SchemaRegistry()
        schema = registry.register("events", [("kind", "text")])

        assert schema.table_name == "events"
        assert registry.lookup("events") is schema

    def test_table_decorator(self):
        """The decorator registers the class and returns it unchanged."""
        registry = SchemaRegistry()

        @registry.table([("id", "int32"), ("score", "float64")], table_name="scores")
        class Score(BaseModel):
            id: int
            score: float

        assert registry.lookup(Score).table_name == "scores"
        assert Score(id=1, score=2.5).score == 2.5

    def test_unregister_and_clear(self):
        registry = SchemaRegistry()
        registry.register(User, [("id", "int32")])
        registry.register("other", [("id", "int32")])

        registry.unregister(User)
        assert User not in registry

        registry.clear()
        assert len(registry) == 0


class TestRecordSchema:
    """Test schema model behaviour."""

    def test_schema_is_immutable(self):
        """Schemas and fields are frozen."""
        schema = SchemaRegistry().register(User, [("id", "int32"), ("name", "text")])

        with pytest.raises(Exception):
            schema.table_name = "other"
        with pytest.raises(Exception):
            schema.fields[0].name = "other"

    def test_get_field(self):
        schema = SchemaRegistry().register(User, [("id", "int32"), ("name", "text")])

        assert schema.get_field("name") == FieldSpec(name="name", semantic_type=SemanticType.TEXT)
        assert schema.has_field("id")
        assert not schema.has_field("email")
        with pytest.raises(SchemaError):
            schema.get_field("email")

    def test_decode_row_to_record(self):
        """Rows decode into the record class by field name."""
        schema = SchemaRegistry().register(User, [("id", "int32"), ("name", "text")])

        record = schema.decode_row({"name": "bob", "id": 5})
        assert record == User(id=5, name="bob")

    def test_decode_folded_column_names(self):
        """Unquoted mixed-case names come back lower-cased from PostgreSQL."""
        @dataclass
        class Account:
            accountId: int

        schema = SchemaRegistry().register(Account, [("accountId", "int64")])

        assert schema.decode_row({"accountid": 7}) == Account(accountId=7)

    def test_decode_without_record_class(self):
        """Schemas keyed by name decode to dicts."""
        schema = RecordSchema(
            table_name="events",
            fields=(FieldSpec(name="kind", semantic_type=SemanticType.TEXT),)
        )

        assert schema.decode_row({"kind": "login", "extra": 1}) == {"kind": "login"}

    def test_decode_missing_column(self):
        schema = SchemaRegistry().register(User, [("id", "int32"), ("name", "text")])

        with pytest.raises(SchemaError, match="missing"):
            schema.decode_row({"id": 1})


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
