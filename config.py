"""
Minimal configuration.
PostgreSQL connection settings and logging, read from the environment (.env supported).
"""

import os
import logging
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


# PostgreSQL Configuration
POSTGRES_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "5432")),
    "database": os.getenv("DB_NAME", "postgres"),
    "user": os.getenv("DB_USER", "postgres"),
    "password": os.getenv("DB_PASSWORD", "postgres"),
    "min_connections": int(os.getenv("DB_MIN_CONN", "1")),
    "max_connections": int(os.getenv("DB_MAX_CONN", "10"))
}

# Application Configuration
APP_CONFIG = {
    "debug": os.getenv("DEBUG", "false").lower() == "true",
    "name": "Record SQL",
    "version": "1.0.0",

    # Query settings
    "statement_timeout_ms": int(os.getenv("DB_STATEMENT_TIMEOUT_MS", "30000")),
    "command_timeout": 60,  # seconds, asyncpg only
}

# Logging Configuration
LOG_CONFIG = {
    "level": "INFO" if not APP_CONFIG["debug"] else "DEBUG",
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
}


def configure_logging(level: str = None):
    """Configure root logging from LOG_CONFIG."""
    logging.basicConfig(
        level=getattr(logging, (level or LOG_CONFIG["level"]).upper()),
        format=LOG_CONFIG["format"]
    )


def check_config():
    """Log the effective database target."""
    logger = logging.getLogger(__name__)

    logger.debug(f"PostgreSQL: {POSTGRES_CONFIG['database']}@{POSTGRES_CONFIG['host']}:{POSTGRES_CONFIG['port']}")

    if not os.getenv("DB_PASSWORD"):
        logger.debug("DB_PASSWORD not set, using default credentials")


# Run config check on import
check_config()
