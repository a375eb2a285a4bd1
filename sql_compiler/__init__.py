"""
SQL compiler package for deterministic SQL generation from record schemas.
Values never appear in SQL text - they travel as typed $n parameters.
"""

from sql_compiler.params import (
    BoundValue,
    Statement,
    bind_parameters
)

from sql_compiler.templates import SQLTemplates
from sql_compiler.filter_builder import FilterQueryBuilder
from sql_compiler.validator import RecordValidator
from sql_compiler.compiler import RecordSQLCompiler

__all__ = [
    'BoundValue',
    'Statement',
    'bind_parameters',
    'SQLTemplates',
    'FilterQueryBuilder',
    'RecordValidator',
    'RecordSQLCompiler'
]

__version__ = "1.0.0"
