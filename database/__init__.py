"""
Database package: PostgreSQL executor adapters and record executors.
"""

from database.connections import PostgreSQLConnection, to_pyformat
from database.postgres_service import DatabaseConfig, PostgreSQLService
from database.executor import (
    RecordExecutor,
    AsyncRecordExecutor,
    prepare_statement,
    decode_rows
)

__all__ = [
    'PostgreSQLConnection',
    'to_pyformat',
    'DatabaseConfig',
    'PostgreSQLService',
    'RecordExecutor',
    'AsyncRecordExecutor',
    'prepare_statement',
    'decode_rows'
]

__version__ = "1.0.0"
