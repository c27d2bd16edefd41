# services/collections_service.py
"""
Collections listing: filters + sort dimension + keyset pagination.

`list_collections` is the only entry point. Flow:
    1. reject requests without a selective filter
    2. resolve the collection set (if any) BEFORE the main query,
       its ids become part of the predicate set
    3. compose filters, add the resume predicate for the continuation
    4. run ONE query, project rows, derive the next continuation

Store and resolver are injectable so callers (and tests) can swap them.
Nothing is retried here: store errors surface as UpstreamFailure.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

import psycopg2

from database.collection_sets import get_collections_ids
from database.collections import fetch_collections
from database.exceptions import DatabaseNotConfigured, InvalidRequest, UpstreamFailure
from database.filters import FilterSet, compose_filters, has_selective_filter
from database.models import CollectionsPage, CollectionsQuery
from database.sorting import SortKey, resolve_sort_key
from .projection import project_collection

log = logging.getLogger(__name__)

CollectionSetResolver = Callable[..., List[str]]
RowsFetcher = Callable[..., List[Dict[str, Any]]]

# Failures of the store / resolver
STORE_ERRORS = (psycopg2.Error, DatabaseNotConfigured)


def _resolve_collection_set(
    query: CollectionsQuery,
    resolver: CollectionSetResolver,
    log_prefix: str
) -> Optional[List[str]]:
    if not query.collections_set_id:
        return None
    try:
        return list(resolver(query.collections_set_id, log_prefix=log_prefix))
    except STORE_ERRORS as e:
        raise UpstreamFailure(
            f"Collection set '{query.collections_set_id}' could not be resolved: {e}"
        ) from e


def _fetch_rows(
    fetch_rows: RowsFetcher,
    filters: FilterSet,
    sort_key: SortKey,
    query: CollectionsQuery,
    log_prefix: str
) -> List[Dict[str, Any]]:
    try:
        return fetch_rows(
            filters,
            sort_key,
            query.limit,
            include_top_bid=query.include_top_bid,
            log_prefix=log_prefix,
        )
    except STORE_ERRORS as e:
        raise UpstreamFailure(f"Collections query failed: {e}") from e


def list_collections(
    query: CollectionsQuery,
    resolve_collection_set: CollectionSetResolver = get_collections_ids,
    fetch_rows: RowsFetcher = fetch_collections,
    log_prefix: str = "[Collections]"
) -> CollectionsPage:
    """
    Returns one page of collections.

    Raises:
        InvalidRequest: No selective filter (collection set, community, contract, name)
        InvalidCursor: Malformed continuation
        UpstreamFailure: Store or collection-set resolver failed
    """
    if not has_selective_filter(query):
        log.warning(f"{log_prefix} ⚠️ Request rejected: no selective filter.")
        raise InvalidRequest(
            "At least one of collectionsSetId, community, contract, name is required"
        )

    sort_key = resolve_sort_key(query.sort_by, log_prefix=log_prefix)

    # Decode the continuation before touching the store
    resume = None
    if query.continuation is not None:
        resume = sort_key.resume_after(query.continuation)

    collections_ids = _resolve_collection_set(query, resolve_collection_set, log_prefix)
    filters = compose_filters(query, collections_ids, log_prefix=log_prefix)

    if resume is not None:
        filters = filters.with_predicate(resume)

    rows = _fetch_rows(fetch_rows, filters, sort_key, query, log_prefix)

    collections = [project_collection(row, query.include_top_bid) for row in rows]
    continuation = sort_key.next_continuation(rows, query.limit)

    log.info(
        f"{log_prefix} ✅ Отдано {len(collections)} коллекций "
        f"(sort={sort_key.column}, next={'yes' if continuation else 'no'})."
    )
    return CollectionsPage(
        collections=collections,
        continuation=continuation,
        include_top_bid=query.include_top_bid,
    )
