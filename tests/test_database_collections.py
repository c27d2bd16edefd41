# tests/test_database_collections.py

import pytest
import psycopg2
from psycopg2 import sql, extras
from unittest.mock import MagicMock

from database.collections import build_collections_query, fetch_collections
from database.collection_sets import get_collections_ids
from database.connection import get_db_connection
from database.exceptions import DatabaseNotConfigured
from database.filters import compose_filters
from database.models import CollectionsQuery
from database.sorting import SortKey


def _squash(text: str) -> str:
    return " ".join(text.split())


def _mock_connection(mocker, target, rows=None, error=None):
    """
    Мокает get_db_connection_context() в модуле `target`.
    Возвращает мок курсора.
    """
    mock_cursor = MagicMock()
    mock_cursor.fetchall.return_value = rows or []
    if error is not None:
        mock_cursor.execute.side_effect = error

    mock_conn = MagicMock()
    mock_conn.cursor.return_value.__enter__.return_value = mock_cursor

    mock_ctx = MagicMock()
    mock_ctx.__enter__.return_value = mock_conn
    mocker.patch(f"{target}.get_db_connection_context", return_value=mock_ctx)
    return mock_conn, mock_cursor


# --- build_collections_query ---

def test_page_query_without_top_bid(render):
    filters = compose_filters(CollectionsQuery(community="artblocks"))
    query, params = build_collections_query(filters, SortKey("day7_volume"), limit=5)
    text = _squash(render(query))

    assert 'FROM "collections" AS "collections"' in text
    assert 'WHERE ("collections"."community" = %(community)s)' in text
    assert text.endswith('ORDER BY "collections"."day7_volume" DESC NULLS LAST LIMIT %(limit)s')
    assert 'FROM "tokens" AS tokens' in text
    assert "LATERAL" not in text
    assert params == {"community": "artblocks", "limit": 5, "sample_images_limit": 4}


def test_page_query_without_filters_has_no_where(render):
    query, _ = build_collections_query(compose_filters(CollectionsQuery()), SortKey("day1_volume"), limit=1)
    assert "WHERE (" not in _squash(render(query)).split("AS sample_images")[1]


def test_page_query_with_top_bid_keeps_order(render):
    filters = compose_filters(CollectionsQuery(community="artblocks"))
    query, params = build_collections_query(filters, SortKey("day30_volume"), limit=3, include_top_bid=True)
    text = _squash(render(query))

    assert text.startswith('WITH "x" AS (')
    assert 'SELECT "x".*, y.top_buy_value, y.top_buy_maker FROM "x"' in text
    assert 'LEFT JOIN LATERAL' in text
    assert 'FROM "token_sets" AS token_sets WHERE token_sets.id = "x".token_set_id' in text
    # Outer query re-applies the page order
    assert text.endswith('ORDER BY "x"."day30_volume" DESC NULLS LAST')
    assert params["limit"] == 3


def test_resume_predicate_is_part_of_where(render):
    sort_key = SortKey("all_time_volume")
    filters = compose_filters(CollectionsQuery(name="ape")).with_predicate(sort_key.resume_after("100"))
    query, params = build_collections_query(filters, sort_key, limit=2)
    text = _squash(render(query))

    assert '("collections"."all_time_volume" < %(continuation)s)' in text
    assert str(params["continuation"]) == "100"


# --- fetch_collections ---

def test_fetch_collections_executes_composed_query(mocker):
    mock_conn, mock_cursor = _mock_connection(
        mocker, "database.collections", rows=[{"id": "a"}, {"id": "b"}]
    )
    filters = compose_filters(CollectionsQuery(community="artblocks"))

    rows = fetch_collections(filters, SortKey("day7_volume"), 2, log_prefix="[Test]")

    assert rows == [{"id": "a"}, {"id": "b"}]
    mock_conn.cursor.assert_called_once_with(cursor_factory=extras.RealDictCursor)
    executed_query, executed_params = mock_cursor.execute.call_args[0]
    assert isinstance(executed_query, sql.Composed)
    assert executed_params["community"] == "artblocks"
    assert executed_params["limit"] == 2


def test_fetch_collections_propagates_store_errors(mocker):
    _mock_connection(mocker, "database.collections", error=psycopg2.OperationalError("boom"))
    filters = compose_filters(CollectionsQuery(community="artblocks"))

    with pytest.raises(psycopg2.OperationalError):
        fetch_collections(filters, SortKey("day7_volume"), 2)


# --- get_collections_ids ---

def test_get_collections_ids(mocker):
    _, mock_cursor = _mock_connection(
        mocker, "database.collection_sets", rows=[("a",), ("b",)]
    )

    assert get_collections_ids("set-1") == ["a", "b"]
    assert mock_cursor.execute.call_args[0][1] == ("set-1",)


def test_get_collections_ids_unknown_set(mocker):
    _mock_connection(mocker, "database.collection_sets", rows=[])
    assert get_collections_ids("missing") == []


def test_get_collections_ids_propagates_errors(mocker):
    _mock_connection(mocker, "database.collection_sets", error=psycopg2.OperationalError("boom"))
    with pytest.raises(psycopg2.OperationalError):
        get_collections_ids("set-1")


# --- get_db_connection ---

def test_get_db_connection_requires_database_url(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    with pytest.raises(DatabaseNotConfigured):
        get_db_connection()


def test_get_db_connection_is_readonly(monkeypatch, mocker):
    monkeypatch.setenv("DATABASE_URL", "postgresql://fake/db")
    mock_conn = MagicMock()
    mock_connect = mocker.patch("psycopg2.connect", return_value=mock_conn)

    assert get_db_connection() is mock_conn
    mock_connect.assert_called_once_with("postgresql://fake/db")
    mock_conn.set_session.assert_called_once_with(readonly=True, autocommit=True)
