"""
Record executors: run compiled statements through an executor adapter and decode rows.
RecordExecutor wraps a synchronous adapter (PostgreSQLConnection),
AsyncRecordExecutor an asynchronous one (PostgreSQLService).
"""

import time
import logging
from typing import Any, List, Sequence, Tuple

from errors import BindingInternalError
from schema_registry.models import RecordSchema
from schema_registry.registry import REGISTRY, SchemaRegistry
from sql_compiler.compiler import RecordSQLCompiler
from sql_compiler.filter_builder import FilterQueryBuilder
from sql_compiler.params import Statement
from sql_compiler.templates import SQLTemplates
from database.connections import PLACEHOLDER_PATTERN

logger = logging.getLogger(__name__)


def prepare_statement(statement: Statement) -> Tuple[str, List[Any]]:
    """
    Final SQL text and driver values for a statement.
    Placeholders $1..$n must line up one-to-one with the bound values.
    """
    values = statement.bound_params()

    indices = {int(i) for i in PLACEHOLDER_PATTERN.findall(statement.sql)}
    if indices != set(range(1, len(values) + 1)):
        raise BindingInternalError(
            f"Placeholders {sorted(indices)} do not match {len(values)} bound values in: {statement.sql}"
        )

    sql = statement.sql
    if statement.kind == "delete":
        # Without RETURNING PostgreSQL reports no deleted rows
        sql = SQLTemplates.returning_all(sql)
    return sql, values


def decode_rows(schema: RecordSchema, rows: Sequence[Any]) -> List[Any]:
    return [schema.decode_row(row) for row in rows]


class _BaseRecordExecutor:
    """Shared statement compilation for the sync and async executors."""

    def __init__(self, adapter, registry: SchemaRegistry = REGISTRY):
        self.adapter = adapter
        self.compiler = RecordSQLCompiler(registry)

    def filter(self, record_type: Any) -> FilterQueryBuilder:
        """Start a filter chain. Finish it with builder.select(executor) or builder.delete(executor)."""
        return self.compiler.filter(record_type)

    def _log_start(self, statement: Statement, sql: str):
        logger.debug(f"Executing {statement.kind} on {statement.table_name}: {sql} params={list(statement.params)}")

    def _log_done(self, statement: Statement, start_time: float, row_count: int = None):
        execution_time = round((time.time() - start_time) * 1000, 2)
        rows = f", {row_count} rows" if row_count is not None else ""
        logger.debug(f"{statement.kind} on {statement.table_name} finished in {execution_time}ms{rows}")

    def _log_failure(self, error: Exception, sql: str):
        logger.error(f"Query execution failed: {error}\nSQL: {sql}")


class RecordExecutor(_BaseRecordExecutor):
    """
    Runs record statements on a synchronous adapter.
    Driver errors are logged with their SQL and re-raised unchanged.
    """

    def create_table(self, record_type: Any) -> None:
        self.run_execute(self.compiler.create_table(record_type))

    def insert(self, record: Any, record_type: Any = None) -> None:
        self.run_execute(self.compiler.insert(record, record_type))

    def select_all(self, record_type: Any) -> List[Any]:
        schema = self.compiler.schema_for(record_type)
        return self.run_select(schema, self.compiler.select_all(record_type))

    def delete_all(self, record_type: Any) -> List[Any]:
        schema = self.compiler.schema_for(record_type)
        return self.run_delete(schema, self.compiler.delete_all(record_type))

    def select(self, builder: FilterQueryBuilder) -> List[Any]:
        return builder.select(self)

    def delete(self, builder: FilterQueryBuilder) -> List[Any]:
        return builder.delete(self)

    def run_execute(self, statement: Statement) -> None:
        sql, values = prepare_statement(statement)
        self._log_start(statement, sql)
        start_time = time.time()
        try:
            self.adapter.execute(sql, values)
        except Exception as e:
            self._log_failure(e, sql)
            raise
        self._log_done(statement, start_time)

    def run_select(self, schema: RecordSchema, statement: Statement) -> List[Any]:
        return decode_rows(schema, self._run_query(statement))

    def run_delete(self, schema: RecordSchema, statement: Statement) -> List[Any]:
        return decode_rows(schema, self._run_query(statement))

    def _run_query(self, statement: Statement) -> List[Any]:
        sql, values = prepare_statement(statement)
        self._log_start(statement, sql)
        start_time = time.time()
        try:
            rows = self.adapter.query(sql, values)
        except Exception as e:
            self._log_failure(e, sql)
            raise
        self._log_done(statement, start_time, len(rows))
        return rows


class AsyncRecordExecutor(_BaseRecordExecutor):
    """
    Runs record statements on an asynchronous adapter.
    Independent filter chains may run concurrently over the same pool.
    """

    async def create_table(self, record_type: Any) -> None:
        await self.run_execute(self.compiler.create_table(record_type))

    async def insert(self, record: Any, record_type: Any = None) -> None:
        await self.run_execute(self.compiler.insert(record, record_type))

    async def select_all(self, record_type: Any) -> List[Any]:
        schema = self.compiler.schema_for(record_type)
        return await self.run_select(schema, self.compiler.select_all(record_type))

    async def delete_all(self, record_type: Any) -> List[Any]:
        schema = self.compiler.schema_for(record_type)
        return await self.run_delete(schema, self.compiler.delete_all(record_type))

    async def select(self, builder: FilterQueryBuilder) -> List[Any]:
        return await builder.select(self)

    async def delete(self, builder: FilterQueryBuilder) -> List[Any]:
        return await builder.delete(self)

    async def run_execute(self, statement: Statement) -> None:
        sql, values = prepare_statement(statement)
        self._log_start(statement, sql)
        start_time = time.time()
        try:
            await self.adapter.execute(sql, values)
        except Exception as e:
            self._log_failure(e, sql)
            raise
        self._log_done(statement, start_time)

    async def run_select(self, schema: RecordSchema, statement: Statement) -> List[Any]:
        return decode_rows(schema, await self._run_query(statement))

    async def run_delete(self, schema: RecordSchema, statement: Statement) -> List[Any]:
        return decode_rows(schema, await self._run_query(statement))

    async def _run_query(self, statement: Statement) -> List[Any]:
        sql, values = prepare_statement(statement)
        self._log_start(statement, sql)
        start_time = time.time()
        try:
            rows = await self.adapter.query(sql, values)
        except Exception as e:
            self._log_failure(e, sql)
            raise
        self._log_done(statement, start_time, len(rows))
        return rows
