# services/__init__.py
"""
Модуль Services (Фасад).

Собирает публичные функции и ошибки листинга коллекций
в единый неймспейс 'services':
from services import list_collections, InvalidCursor
"""

# --- Из collections_service.py ---
from .collections_service import list_collections

# --- Из projection.py / formatting.py ---
from .projection import project_collection
from .formatting import format_eth

# --- Ошибки (определены в database/exceptions.py) ---
from database.exceptions import (
    CollectionsError,
    InvalidRequest,
    InvalidCursor,
    UpstreamFailure
)

__all__ = [
    'list_collections',
    'project_collection',
    'format_eth',
    'CollectionsError',
    'InvalidRequest',
    'InvalidCursor',
    'UpstreamFailure',
]
