# database/__init__.py
"""
Database module.
Provides the query building blocks for the collections listing.
"""

from .connection import get_db_connection, get_db_connection_context
from .collection_sets import get_collections_ids
from .collections import build_collections_query, fetch_collections
from .filters import Predicate, FilterSet, compose_filters, has_selective_filter
from .sorting import (
    SortKey,
    SORT_KEYS,
    resolve_sort_key,
    encode_continuation,
    decode_continuation
)
from .models import SortBy, CollectionsQuery, Collection, CollectionsPage

__all__ = [
    # Connection
    'get_db_connection',
    'get_db_connection_context',

    # Collection sets
    'get_collections_ids',

    # Collections
    'build_collections_query',
    'fetch_collections',

    # Filters
    'Predicate',
    'FilterSet',
    'compose_filters',
    'has_selective_filter',

    # Sorting / pagination
    'SortKey',
    'SORT_KEYS',
    'resolve_sort_key',
    'encode_continuation',
    'decode_continuation',

    # Models
    'SortBy',
    'CollectionsQuery',
    'Collection',
    'CollectionsPage',
]
