"""
Asynchronous PostgreSQL executor adapter (asyncpg).
asyncpg speaks $n placeholders natively, so generated SQL is sent as is.
"""

import asyncpg
from typing import Any, Dict, List, Optional, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
import logging

from config import APP_CONFIG, POSTGRES_CONFIG

logger = logging.getLogger(__name__)


@dataclass
class DatabaseConfig:
    """Database configuration."""
    host: str = POSTGRES_CONFIG["host"]
    port: int = POSTGRES_CONFIG["port"]
    user: str = POSTGRES_CONFIG["user"]
    password: str = POSTGRES_CONFIG["password"]
    database: str = POSTGRES_CONFIG["database"]
    min_size: int = POSTGRES_CONFIG["min_connections"]
    max_size: int = POSTGRES_CONFIG["max_connections"]
    command_timeout: float = APP_CONFIG["command_timeout"]
    server_settings: Dict[str, str] = field(
        default_factory=lambda: {"statement_timeout": str(APP_CONFIG["statement_timeout_ms"])}
    )


class PostgreSQLService:
    """
    PostgreSQL database service over an asyncpg pool.
    Implements the executor adapter contract: execute() and query().
    """

    def __init__(self, config: Optional[DatabaseConfig] = None, pool=None):
        self.config = config or DatabaseConfig()
        self.pool: Optional[asyncpg.Pool] = pool

    async def connect(self):
        """Connect to PostgreSQL and create connection pool."""
        try:
            self.pool = await asyncpg.create_pool(
                host=self.config.host,
                port=self.config.port,
                user=self.config.user,
                password=self.config.password,
                database=self.config.database,
                min_size=self.config.min_size,
                max_size=self.config.max_size,
                command_timeout=self.config.command_timeout,
                server_settings=self.config.server_settings
            )
            logger.info(f"Connected to PostgreSQL: {self.config.database}@{self.config.host}")

        except (OSError, asyncpg.PostgresError) as e:
            logger.error(f"Failed to connect to PostgreSQL: {e}")
            raise

    async def close(self):
        """Close the connection pool."""
        if self.pool:
            await self.pool.close()
            self.pool = None
            logger.info("Database connection pool closed")

    @asynccontextmanager
    async def get_connection(self):
        """Get a database connection from the pool."""
        if not self.pool:
            raise RuntimeError("Database not connected")

        async with self.pool.acquire() as connection:
            yield connection

    async def execute(self, sql: str, params: Optional[Sequence[Any]] = None) -> None:
        """Execute a statement that returns no rows (DDL, INSERT)."""
        async with self.get_connection() as conn:
            await conn.execute(sql, *(params or []))

    async def query(self, sql: str, params: Optional[Sequence[Any]] = None) -> List[Dict[str, Any]]:
        """Execute a statement and return its rows as dicts."""
        async with self.get_connection() as conn:
            rows = await conn.fetch(sql, *(params or []))
            return [dict(row) for row in rows]

    async def __aenter__(self):
        if not self.pool:
            await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
