# database/collection_sets.py
"""
Default collection-set resolver: expands a set id into its member collection ids.
"""

import logging
from typing import List

from psycopg2 import sql

import config
from .connection import get_db_connection_context

log = logging.getLogger(__name__)


def get_collections_ids(collections_set_id: str, log_prefix: str = "") -> List[str]:
    """
    Returns the ids of the collections belonging to a collection set.
    An unknown set resolves to an empty list.
    """
    log_prefix = f"{log_prefix} [DB.CollectionSets]"

    query = sql.SQL("""
        SELECT collection_id
        FROM {table}
        WHERE collections_set_id = %s
    """).format(table=sql.Identifier(config.COLLECTIONS_SETS_TABLE))

    try:
        with get_db_connection_context() as conn:
            with conn.cursor() as cursor:
                cursor.execute(query, (collections_set_id,))
                rows = cursor.fetchall()
    except Exception as e:
        log.error(f"{log_prefix} ❌ Ошибка при чтении набора '{collections_set_id}': {e}", exc_info=True)
        raise

    collections_ids = [row[0] for row in rows]
    log.info(f"{log_prefix} ✅ Set '{collections_set_id}' -> {len(collections_ids)} collections.")
    return collections_ids
