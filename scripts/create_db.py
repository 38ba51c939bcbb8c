"""Create the configured PostgreSQL database if it does not exist yet.

Requires the `postgres` extra (psycopg2). SQLite databases are created on
first connect, so for them this only creates the tables.
"""

from __future__ import annotations

import logging
from urllib.parse import urlparse

from crm.core.config import get_config
from crm.core.logging import configure_logging
from crm.database.db import create_all

logger = logging.getLogger(__name__)


def create_database(database_url: str) -> bool:
    """Return True when a new database was created."""
    import psycopg2
    from psycopg2 import sql

    result = urlparse(database_url.replace("+psycopg2", ""))
    database = result.path.lstrip("/")
    conn = psycopg2.connect(
        dbname="postgres",
        user=result.username,
        password=result.password,
        host=result.hostname,
        port=result.port,
    )
    conn.autocommit = True
    try:
        with conn.cursor() as cursor:
            cursor.execute("SELECT 1 FROM pg_catalog.pg_database WHERE datname = %s", (database,))
            if cursor.fetchone():
                logger.info("create_db.exists", extra={"event": "create_db.exists", "database": database})
                return False
            cursor.execute(sql.SQL("CREATE DATABASE {}").format(sql.Identifier(database)))
            logger.info("create_db.created", extra={"event": "create_db.created", "database": database})
            return True
    finally:
        conn.close()


if __name__ == "__main__":
    configure_logging()
    url = get_config().DATABASE_URL
    if url.startswith("postgresql"):
        create_database(url)
    else:
        create_all()
