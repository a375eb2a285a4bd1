"""
Fluent equality filter for conditional SELECT / DELETE.
"""

from typing import Any, List

from errors import BuilderContractError
from schema_registry.models import RecordSchema
from sql_compiler.params import BoundValue, Statement
from sql_compiler.templates import SQLTemplates


class FilterQueryBuilder:
    """
    Accumulates 'field = $n' conditions and their typed values for one record schema.

    Condition i always uses placeholder $i and params[i-1] is its value.
    One chain, one owner: a builder is not safe to share between threads and
    is consumed by its first select() or delete().

        users = executor.filter(User).id(5).name("bob").select(executor)
    """

    def __init__(self, schema: RecordSchema):
        self.schema = schema
        self.conditions: List[str] = []
        self.params: List[BoundValue] = []
        self.next_placeholder = 1
        self._consumed = False

    def add_equals(self, field_name: str, value: Any) -> "FilterQueryBuilder":
        """Add '<field_name> = $n' bound to value. Returns the same builder."""
        self._ensure_open()

        if not self.schema.has_field(field_name):
            raise BuilderContractError(
                f"'{self.schema.table_name}' has no field '{field_name}'"
            )
        field = self.schema.get_field(field_name)

        try:
            bound_value = BoundValue.of(field.semantic_type, value)
        except BuilderContractError as e:
            raise BuilderContractError(f"{self.schema.table_name}.{field_name}: {e}") from e

        self.conditions.append(f"{field_name} = ${self.next_placeholder}")
        self.params.append(bound_value)
        self.next_placeholder += 1
        return self

    def where(self, **conditions: Any) -> "FilterQueryBuilder":
        """Add one equality per keyword, in keyword order."""
        for field_name, value in conditions.items():
            self.add_equals(field_name, value)
        return self

    def __getattr__(self, name: str):
        # One condition method per field: builder.id(5) == builder.add_equals("id", 5)
        if name.startswith("_") or "schema" not in self.__dict__:
            raise AttributeError(name)
        if not self.schema.has_field(name):
            raise AttributeError(
                f"{type(self).__name__} for '{self.schema.table_name}' has no attribute or field '{name}'"
            )

        def condition(value: Any) -> "FilterQueryBuilder":
            return self.add_equals(name, value)

        condition.__name__ = name
        return condition

    def select_statement(self) -> Statement:
        """Render SELECT ... WHERE without consuming the builder."""
        return Statement(
            sql=SQLTemplates.select_where(self.schema, self.conditions),
            params=tuple(self.params),
            kind="select",
            table_name=self.schema.table_name
        )

    def delete_statement(self) -> Statement:
        """Render DELETE ... WHERE without consuming the builder."""
        return Statement(
            sql=SQLTemplates.delete_where(self.schema, self.conditions),
            params=tuple(self.params),
            kind="delete",
            table_name=self.schema.table_name
        )

    def select(self, executor):
        """Run the filtered SELECT. Returns whatever the executor returns (list or awaitable)."""
        statement = self.select_statement()
        self._consume()
        return executor.run_select(self.schema, statement)

    def delete(self, executor):
        """Run the filtered DELETE and return the deleted records."""
        statement = self.delete_statement()
        self._consume()
        return executor.run_delete(self.schema, statement)

    @property
    def consumed(self) -> bool:
        return self._consumed

    def _consume(self):
        self._ensure_open()
        self._consumed = True

    def _ensure_open(self):
        if self._consumed:
            raise BuilderContractError("Filter builder was already used by select() or delete()")

    def __repr__(self):
        return f"FilterQueryBuilder({self.schema.table_name}, conditions={self.conditions!r}, params={self.params!r})"


def filter(schema: RecordSchema) -> FilterQueryBuilder:
    """Start a new filter chain for a schema."""
    return FilterQueryBuilder(schema)
