"""
SQL templates for deterministic SQL generation.
Same schema ALWAYS produces same SQL.
Identifiers were validated at registration, values only ever travel as $n parameters.
"""

from typing import List, Sequence, Tuple

from errors import BuilderContractError
from schema_registry.models import RecordSchema
from schema_registry.type_mapper import map_type


class SQLTemplates:
    """
    Collection of SQL templates for the statements generated per record schema.
    All templates are deterministic - same inputs produce same SQL.
    """

    @staticmethod
    def build_column_definitions(schema: RecordSchema) -> str:
        """Build '<field> <TYPE>' pairs in field order."""
        return ", ".join(
            f"{field.name} {map_type(field.semantic_type)}" for field in schema.fields
        )

    @staticmethod
    def build_placeholders(count: int, start: int = 1) -> List[str]:
        """Positional placeholders $start..$(start+count-1)."""
        return [f"${i}" for i in range(start, start + count)]

    @staticmethod
    def build_where_clause(conditions: Sequence[str]) -> str:
        """
        Build WHERE clause. Conditions are joined with AND only.
        A WHERE without conditions is not valid SQL.
        """
        if not conditions:
            raise BuilderContractError("A filtered query needs at least one condition")
        return f"WHERE {' AND '.join(conditions)}"

    @staticmethod
    def create_table(schema: RecordSchema) -> str:
        """CREATE TABLE IF NOT EXISTS <table> ( <f1> <T1>, ... )"""
        columns = SQLTemplates.build_column_definitions(schema)
        return f"CREATE TABLE IF NOT EXISTS {schema.table_name} ( {columns} )"

    @staticmethod
    def insert(schema: RecordSchema) -> Tuple[str, Tuple[str, ...]]:
        """
        INSERT INTO <table> (f1, f2, ...) VALUES ($1, $2, ...)
        Returns the SQL and the field names in placeholder order.
        """
        field_names = schema.field_names
        placeholders = SQLTemplates.build_placeholders(len(field_names))
        sql = (
            f"INSERT INTO {schema.table_name} ({', '.join(field_names)}) "
            f"VALUES ({', '.join(placeholders)})"
        )
        return sql, field_names

    @staticmethod
    def select_all(schema: RecordSchema) -> str:
        return f"SELECT * FROM {schema.table_name}"

    @staticmethod
    def delete_all(schema: RecordSchema) -> str:
        return f"DELETE FROM {schema.table_name}"

    @staticmethod
    def select_where(schema: RecordSchema, conditions: Sequence[str]) -> str:
        where_clause = SQLTemplates.build_where_clause(conditions)
        return f"{SQLTemplates.select_all(schema)} {where_clause}"

    @staticmethod
    def delete_where(schema: RecordSchema, conditions: Sequence[str]) -> str:
        where_clause = SQLTemplates.build_where_clause(conditions)
        return f"{SQLTemplates.delete_all(schema)} {where_clause}"

    @staticmethod
    def returning_all(sql: str) -> str:
        """Ask the database to report the affected rows."""
        return f"{sql} RETURNING *"
