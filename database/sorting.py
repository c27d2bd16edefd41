# database/sorting.py
"""
Sort dimensions and keyset pagination.

Each sort dimension maps to exactly one `SortKey`. The same object emits the
ORDER BY clause, the "resume after" predicate for an incoming continuation
and the continuation for the next page, so these can never disagree on the
column or the direction.

Pagination is keyset-based: the continuation is the value of the sort column
on the last row of a full page, and the next page is `column < value`.
Rows whose value equals the boundary are not re-emitted (strict comparison),
and rows with a NULL value are only reachable on the page where the NULL
tail starts, since a NULL boundary ends the pagination.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Union

from psycopg2 import sql

import config
from .exceptions import InvalidCursor
from .filters import TABLE_ALIAS, Predicate
from .models import SortBy

log = logging.getLogger(__name__)

CONTINUATION_PARAM = 'continuation'


def encode_continuation(value: Any) -> Optional[str]:
    """
    Encodes a sort column value as an opaque continuation token.
    Returns None for a NULL value (nothing can sort after it).
    """
    if value is None:
        return None
    if not isinstance(value, Decimal):
        # str() first: Decimal(float) would expose the binary expansion
        value = Decimal(str(value))
    return format(value, 'f')


def decode_continuation(token: str) -> Decimal:
    """
    Decodes a continuation token back into the sort column value.

    Raises:
        InvalidCursor: If the token is empty, not a number, NaN or infinite
    """
    try:
        value = Decimal(token.strip())
    except (InvalidOperation, ValueError, TypeError, AttributeError) as e:
        raise InvalidCursor(f"Invalid continuation: {token!r}") from e

    if not value.is_finite():
        raise InvalidCursor(f"Invalid continuation: {token!r}")
    return value


@dataclass(frozen=True)
class SortKey:
    """Descending, NULLS LAST ordering on a single volume column."""
    column: str

    def order_by(self, table: str = TABLE_ALIAS) -> sql.Composed:
        return sql.SQL("ORDER BY {column} DESC NULLS LAST").format(
            column=sql.Identifier(table, self.column)
        )

    def resume_after(self, continuation: str) -> Predicate:
        """Predicate selecting the rows that sort after the continuation."""
        return Predicate(
            CONTINUATION_PARAM, self.column, 'lt', decode_continuation(continuation)
        )

    def next_continuation(self, rows: List[Dict[str, Any]], limit: int) -> Optional[str]:
        """
        Continuation for the page after `rows`.
        A page shorter than `limit` is always the last one.
        """
        if not rows or len(rows) != limit:
            return None
        return encode_continuation(rows[-1].get(self.column))


SORT_KEYS = {
    SortBy.ONE_DAY_VOLUME: SortKey('day1_volume'),
    SortBy.SEVEN_DAY_VOLUME: SortKey('day7_volume'),
    SortBy.THIRTY_DAY_VOLUME: SortKey('day30_volume'),
    SortBy.ALL_TIME_VOLUME: SortKey('all_time_volume'),
}

DEFAULT_SORT_KEY = SORT_KEYS[SortBy(config.DEFAULT_SORT_BY)]


def resolve_sort_key(sort_by: Union[SortBy, str, None], log_prefix: str = "") -> SortKey:
    """
    Maps a 'sortBy' value to its SortKey.
    Unknown values fall back to the default (all-time volume) instead of failing.
    """
    if sort_by is None:
        return DEFAULT_SORT_KEY
    try:
        return SORT_KEYS[SortBy(sort_by)]
    except ValueError:
        log.warning(f"{log_prefix} ⚠️ Unknown sortBy '{sort_by}', using '{config.DEFAULT_SORT_BY}'.")
        return DEFAULT_SORT_KEY
