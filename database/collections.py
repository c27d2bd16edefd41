import logging
from typing import Any, Dict, List, Tuple

from psycopg2 import sql, extras

import config
from .connection import get_db_connection_context
from .filters import TABLE_ALIAS, FilterSet
from .sorting import SortKey

log = logging.getLogger(__name__)

# Alias of the paged sub-query when the top bid is joined in
PAGE_ALIAS = 'x'

# --- Колонки проекции (collections + sample images) ---
COLLECTION_COLUMNS = sql.SQL("""
    collections.id,
    collections.slug,
    collections.name,
    (collections.metadata ->> 'imageUrl')::TEXT AS "image",
    (collections.metadata ->> 'bannerImageUrl')::TEXT AS "banner",
    (collections.metadata ->> 'discordUrl')::TEXT AS "discord_url",
    (collections.metadata ->> 'description')::TEXT AS "description",
    (collections.metadata ->> 'externalUrl')::TEXT AS "external_url",
    (collections.metadata ->> 'twitterUsername')::TEXT AS "twitter_username",
    collections.contract,
    collections.token_set_id,
    collections.token_count,
    (
        SELECT array(
            SELECT tokens.image FROM {tokens_table} AS tokens
            WHERE tokens.collection_id = collections.id
            LIMIT %(sample_images_limit)s
        )
    ) AS sample_images,
    collections.floor_sell_value,
    collections.day1_volume,
    collections.day7_volume,
    collections.day30_volume,
    collections.all_time_volume,
    collections.day1_rank,
    collections.day7_rank,
    collections.day30_rank,
    collections.all_time_rank,
    collections.day1_volume_change,
    collections.day7_volume_change,
    collections.day30_volume_change,
    collections.day1_floor_sell_value,
    collections.day7_floor_sell_value,
    collections.day30_floor_sell_value
""").format(tokens_table=sql.Identifier(config.TOKENS_TABLE))

# Best (highest) bid on the collection's token set, one lookup per paged row
TOP_BID_JOIN = sql.SQL("""
    LEFT JOIN LATERAL (
        SELECT
            token_sets.top_buy_value,
            token_sets.top_buy_maker
        FROM {token_sets_table} AS token_sets
        WHERE token_sets.id = {page}.token_set_id
        ORDER BY token_sets.top_buy_value DESC NULLS LAST
        LIMIT 1
    ) y ON TRUE
""").format(
    token_sets_table=sql.Identifier(config.TOKEN_SETS_TABLE),
    page=sql.Identifier(PAGE_ALIAS),
)


def build_collections_query(
    filters: FilterSet,
    sort_key: SortKey,
    limit: int,
    include_top_bid: bool = False
) -> Tuple[sql.Composed, Dict[str, Any]]:
    """
    Строит SQL-запрос одной страницы коллекций.

    Returns:
        (query, params): psycopg2 Composed query and its named parameters
    """
    where_clause, query_params = filters.to_sql(TABLE_ALIAS)

    page_query = sql.SQL("""
        SELECT {columns}
        FROM {collections_table} AS {alias}
        {where}
        {order_by}
        LIMIT %(limit)s
    """).format(
        columns=COLLECTION_COLUMNS,
        collections_table=sql.Identifier(config.COLLECTIONS_TABLE),
        alias=sql.Identifier(TABLE_ALIAS),
        where=where_clause,
        order_by=sort_key.order_by(TABLE_ALIAS),
    )

    query_params["limit"] = limit
    query_params["sample_images_limit"] = config.SAMPLE_IMAGES_LIMIT

    if not include_top_bid:
        return page_query, query_params

    # The outer SELECT must repeat the ORDER BY: a CTE does not carry its order
    final_query = sql.SQL("""
        WITH {page} AS ({page_query})
        SELECT {page}.*, y.top_buy_value, y.top_buy_maker
        FROM {page}
        {top_bid_join}
        {order_by}
    """).format(
        page=sql.Identifier(PAGE_ALIAS),
        page_query=page_query,
        top_bid_join=TOP_BID_JOIN,
        order_by=sort_key.order_by(PAGE_ALIAS),
    )
    return final_query, query_params


def fetch_collections(
    filters: FilterSet,
    sort_key: SortKey,
    limit: int,
    include_top_bid: bool = False,
    log_prefix: str = ""
) -> List[Dict[str, Any]]:
    """
    Загружает одну страницу коллекций из БД (list[dict]).

    Raises:
        psycopg2.Error / ValueError: Store errors are propagated to the caller
    """
    log_prefix = f"{log_prefix} [DB.FetchCollections]"
    query, query_params = build_collections_query(filters, sort_key, limit, include_top_bid)

    try:
        with get_db_connection_context() as conn:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cursor:
                cursor.execute(query, query_params)
                rows = cursor.fetchall()
    except Exception as e:
        log.error(f"{log_prefix} ❌ Ошибка при чтении из PostgreSQL: {e}", exc_info=True)
        raise

    log.info(f"{log_prefix} ✅ Загружено {len(rows)} коллекций (limit={limit}, sort={sort_key.column}).")
    return [dict(row) for row in rows]
