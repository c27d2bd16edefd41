# database/filters.py
"""
Filter composition for the collections query.

Every filter becomes an independent `Predicate`: a column, an operator and a
bound value. Predicates never interpolate user input into SQL, each one
renders to a `psycopg2.sql.Composed` fragment with its own named
placeholder, so the set is commutative: the WHERE clause is the same
conjunction whatever order the filters were applied in.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from psycopg2 import sql

import config
from .models import CollectionsQuery
from .utils import escape_like, to_buffer

log = logging.getLogger(__name__)

# Alias of the collections table in every generated query
TABLE_ALIAS = 'collections'

# Operator name -> SQL operator
OPERATORS = {
    'eq': sql.SQL('='),
    'lt': sql.SQL('<'),
    'in': sql.SQL('IN'),
    'ilike': sql.SQL('ILIKE'),
}


@dataclass(frozen=True)
class Predicate:
    """
    A single parameterized condition on a column of the collections table.

    `param` is the placeholder name, it must be unique within one query.
    """
    param: str
    column: str
    operator: str
    value: Any

    def __post_init__(self):
        if self.operator not in OPERATORS:
            raise ValueError(f"Unknown operator: {self.operator}")

    def to_sql(self, table: str = TABLE_ALIAS) -> Tuple[sql.Composed, Dict[str, Any]]:
        clause = sql.SQL("{column} {op} {placeholder}").format(
            column=sql.Identifier(table, self.column),
            op=OPERATORS[self.operator],
            placeholder=sql.Placeholder(self.param),
        )
        return clause, {self.param: self.value}


@dataclass(frozen=True)
class FilterSet:
    """Composed predicates plus values resolved while composing them."""
    predicates: Tuple[Predicate, ...] = ()
    collections_ids: List[str] = field(default_factory=list)

    def with_predicate(self, predicate: Predicate) -> "FilterSet":
        return FilterSet(
            predicates=self.predicates + (predicate,),
            collections_ids=self.collections_ids,
        )

    def to_sql(self, table: str = TABLE_ALIAS) -> Tuple[sql.Composable, Dict[str, Any]]:
        """
        Renders the conjunction as a WHERE clause (empty SQL if there are no predicates).
        """
        if not self.predicates:
            return sql.SQL(""), {}

        params: Dict[str, Any] = {}
        conditions = []
        for predicate in self.predicates:
            if predicate.param in params:
                raise ValueError(f"Duplicate query parameter: {predicate.param}")
            clause, clause_params = predicate.to_sql(table)
            conditions.append(sql.SQL("({})").format(clause))
            params.update(clause_params)

        where_clause = sql.SQL("WHERE ") + sql.SQL(" AND ").join(conditions)
        return where_clause, params


def has_selective_filter(query: CollectionsQuery) -> bool:
    """
    True if the request narrows the result set enough to be served.
    The sort dimension is not considered selective.
    """
    return any(getattr(query, name) for name in config.SELECTIVE_FILTERS)


def compose_filters(
    query: CollectionsQuery,
    collections_ids: Optional[List[str]] = None,
    log_prefix: str = ""
) -> FilterSet:
    """
    Строит набор независимых предикатов из фильтров запроса.

    Args:
        query: Validated (and lower-cased) request parameters
        collections_ids: Already resolved members of `query.collections_set_id`.
            An empty list adds no predicate at all.
        log_prefix: Prefix for log messages

    Returns:
        FilterSet with one predicate per supplied filter
    """
    filters = FilterSet(collections_ids=list(collections_ids or []))

    if query.community:
        filters = filters.with_predicate(
            Predicate('community', 'community', 'eq', query.community)
        )

    if query.collections_set_id:
        if filters.collections_ids:
            filters = filters.with_predicate(
                Predicate('collections_ids', 'id', 'in', tuple(filters.collections_ids))
            )
        else:
            log.warning(
                f"{log_prefix} ⚠️ Collection set '{query.collections_set_id}' "
                f"resolved to no collections. Filter ignored."
            )

    if query.contract:
        filters = filters.with_predicate(
            Predicate('contract', 'contract', 'eq', to_buffer(query.contract))
        )

    if query.name:
        filters = filters.with_predicate(
            Predicate('name', 'name', 'ilike', f"%{escape_like(query.name)}%")
        )

    if query.slug:
        filters = filters.with_predicate(
            Predicate('slug', 'slug', 'eq', query.slug)
        )

    log.debug(f"{log_prefix} Filters: {[p.param for p in filters.predicates]}")
    return filters
