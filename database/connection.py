# database/connection.py
"""
Database connection management.

All queries issued by this service are reads, so connections are opened
in read-only autocommit mode: no transaction is held open and no locks
are taken by us.
"""

import os
import logging
from contextlib import contextmanager
import psycopg2

from .exceptions import DatabaseNotConfigured

log = logging.getLogger(__name__)


def get_db_connection():
    """
    Establishes a read-only connection to the PostgreSQL database.

    Returns:
        psycopg2.connection: Database connection object

    Raises:
        DatabaseNotConfigured: If DATABASE_URL is not set
        psycopg2.Error: If connection fails
    """
    db_url = os.getenv('DATABASE_URL')
    if not db_url:
        log.error("DATABASE_URL environment variable is not set")
        raise DatabaseNotConfigured("DATABASE_URL must be set")

    try:
        conn = psycopg2.connect(db_url)
        conn.set_session(readonly=True, autocommit=True)
        return conn
    except Exception as e:
        log.error(f"Failed to connect to database: {e}")
        raise


@contextmanager
def get_db_connection_context():
    """
    Context manager for database connections, always closes the connection.

    Usage:
        with get_db_connection_context() as conn:
            with conn.cursor() as cursor:
                cursor.execute("SELECT 1")

    Yields:
        psycopg2.connection: Read-only database connection
    """
    conn = None
    try:
        conn = get_db_connection()
        yield conn
    except Exception as e:
        log.error(f"Database operation failed: {e}")
        raise
    finally:
        if conn:
            conn.close()
