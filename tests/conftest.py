# tests/conftest.py

import pytest
from psycopg2 import sql


def _render(composable):
    """Renders a psycopg2 Composable without a DB connection."""
    if isinstance(composable, sql.Composed):
        return "".join(_render(part) for part in composable.seq)
    if isinstance(composable, sql.SQL):
        return composable.string
    if isinstance(composable, sql.Identifier):
        return ".".join(f'"{s}"' for s in composable.strings)
    if isinstance(composable, sql.Placeholder):
        return f"%({composable.name})s" if composable.name else "%s"
    raise TypeError(f"Unexpected composable: {composable!r}")


@pytest.fixture
def render():
    """SQL text of a Composed query, identifiers double-quoted."""
    return _render
