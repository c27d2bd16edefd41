# api/endpoints/__init__.py

"""Инициализация всех роутеров API."""

from .health import health_router
from .collections import collections_router

__all__ = [
    "health_router",
    "collections_router",
]
