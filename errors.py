"""
Error taxonomy for schema registration, SQL generation and parameter binding.
Database driver errors are not wrapped; executors log them with the SQL and re-raise.
"""


class RecordSQLError(Exception):
    """Base class for errors raised before any SQL reaches the database."""


class SchemaError(RecordSQLError, ValueError):
    """Unsupported field type, invalid identifier, or unregistered record type."""


class BuilderContractError(RecordSQLError, ValueError):
    """
    Caller broke the builder contract: value does not match the field type,
    unknown field, empty condition list, or reuse of a consumed builder.
    """


# Terminal query without conditions
QueryError = BuilderContractError


class BindingInternalError(RecordSQLError, RuntimeError):
    """A bound value carries a tag the binder does not know. This is a defect."""


__all__ = [
    'RecordSQLError',
    'SchemaError',
    'BuilderContractError',
    'QueryError',
    'BindingInternalError'
]
