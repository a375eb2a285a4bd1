"""
Statement compiler: record type -> Statement.
Looks up the registered schema and delegates text generation to SQLTemplates.
"""

from typing import Any

from schema_registry.models import RecordSchema
from schema_registry.registry import REGISTRY, SchemaRegistry
from sql_compiler.filter_builder import FilterQueryBuilder
from sql_compiler.params import Statement
from sql_compiler.templates import SQLTemplates
from sql_compiler.validator import RecordValidator


class RecordSQLCompiler:
    """
    Compiles the statements of registered record types.
    Pure: never touches a connection.
    """

    def __init__(self, registry: SchemaRegistry = REGISTRY):
        self.registry = registry
        self.templates = SQLTemplates()
        self.validator = RecordValidator()

    def schema_for(self, record_type: Any) -> RecordSchema:
        return self.registry.lookup(record_type)

    def create_table(self, record_type: Any) -> Statement:
        schema = self.schema_for(record_type)
        return Statement(
            sql=self.templates.create_table(schema),
            kind="create_table",
            table_name=schema.table_name
        )

    def insert(self, record: Any, record_type: Any = None) -> Statement:
        """
        Insert statement with the record's values bound in field order.
        record_type defaults to the record's class.
        """
        schema = self.schema_for(record_type if record_type is not None else type(record))
        sql, _ = self.templates.insert(schema)
        params = self.validator.bind_record(schema, record)
        return Statement(
            sql=sql,
            params=tuple(params),
            kind="insert",
            table_name=schema.table_name
        )

    def select_all(self, record_type: Any) -> Statement:
        schema = self.schema_for(record_type)
        return Statement(
            sql=self.templates.select_all(schema),
            kind="select",
            table_name=schema.table_name
        )

    def delete_all(self, record_type: Any) -> Statement:
        schema = self.schema_for(record_type)
        return Statement(
            sql=self.templates.delete_all(schema),
            kind="delete",
            table_name=schema.table_name
        )

    def filter(self, record_type: Any) -> FilterQueryBuilder:
        """Fresh filter chain for a registered record type."""
        return FilterQueryBuilder(self.schema_for(record_type))
