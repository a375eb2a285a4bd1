"""
Synchronous PostgreSQL executor adapter (psycopg2).
Generated statements use $n placeholders; they are rewritten to psycopg2 named
parameters here so the same SQL text serves both drivers.
"""

import re
from typing import Any, Dict, List, Optional, Sequence, Tuple
from contextlib import contextmanager
import psycopg2
from psycopg2 import pool
import logging

from config import APP_CONFIG, POSTGRES_CONFIG


PLACEHOLDER_PATTERN = re.compile(r"\$(\d+)")


def to_pyformat(sql: str, params: Optional[Sequence[Any]]) -> Tuple[str, Optional[Dict[str, Any]]]:
    """
    Rewrite $n placeholders to %(pn)s and build the matching parameter dict.
    Without parameters psycopg2 does no interpolation, so the SQL is left untouched.
    """
    if not params:
        return sql, None

    text = PLACEHOLDER_PATTERN.sub(
        lambda m: f"%(p{m.group(1)})s",
        sql.replace("%", "%%")
    )
    named = {f"p{i}": value for i, value in enumerate(params, start=1)}
    return text, named


class PostgreSQLConnection:
    """
    Threaded PostgreSQL connection pool.
    Implements the executor adapter contract: execute() and query().
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, connection_pool=None):
        self.logger = logging.getLogger(__name__)
        self.config = {**POSTGRES_CONFIG, **(config or {})}
        self.pool = connection_pool
        if self.pool is None:
            self._initialize_pool()

    def _initialize_pool(self):
        """Initialize PostgreSQL connection pool."""
        try:
            self.logger.info(f"Connecting to PostgreSQL: {self.config['database']}@{self.config['host']}")

            self.pool = pool.ThreadedConnectionPool(
                minconn=self.config["min_connections"],
                maxconn=self.config["max_connections"],
                host=self.config["host"],
                port=self.config["port"],
                database=self.config["database"],
                user=self.config["user"],
                password=self.config["password"]
            )

            self.logger.info("PostgreSQL connection pool initialized successfully")

        except psycopg2.Error as e:
            self.logger.error(f"Failed to initialize PostgreSQL connection: {e}")
            raise

    @contextmanager
    def get_connection(self):
        """
        Get a PostgreSQL connection from the pool.
        Commits on success, rolls back on error.
        """
        conn = self.pool.getconn()
        try:
            with conn.cursor() as cur:
                cur.execute(f"SET statement_timeout = {int(APP_CONFIG['statement_timeout_ms'])};")

            yield conn
            conn.commit()

        except Exception as e:
            conn.rollback()
            self.logger.error(f"Database error: {e}")
            raise

        finally:
            self.pool.putconn(conn)

    def execute(self, sql: str, params: Optional[Sequence[Any]] = None) -> None:
        """Execute a statement that returns no rows (DDL, INSERT)."""
        text, named = to_pyformat(sql, params)
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(text, named)

    def query(self, sql: str, params: Optional[Sequence[Any]] = None) -> List[Dict[str, Any]]:
        """Execute a statement and return its rows as dicts."""
        text, named = to_pyformat(sql, params)
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(text, named)

                if cur.description is None:
                    return []

                columns = [desc[0] for desc in cur.description]
                return [dict(zip(columns, row)) for row in cur.fetchall()]

    def test_connection(self) -> bool:
        """Test if database is reachable."""
        try:
            rows = self.query("SELECT 1 AS ok")
            return rows[0]["ok"] == 1
        except psycopg2.Error as e:
            self.logger.error(f"Connection test failed: {e}")
            return False

    def close(self):
        """Close all connections."""
        if self.pool:
            self.pool.closeall()
            self.logger.info("PostgreSQL connection pool closed")
