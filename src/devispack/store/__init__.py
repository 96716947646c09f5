"""Stockage des lignes de templates.

FR: Interface abstraite asynchrone et implémentation en mémoire.
EN: Asynchronous abstract interface and in-memory implementation.
"""

from devispack.store.base import BaseTemplateStore, Row
from devispack.store.errors import StoreConnectionError, StoreError, StoreNotFoundError
from devispack.store.memory import MemoryTemplateStore

__all__ = [
    "BaseTemplateStore",
    "MemoryTemplateStore",
    "Row",
    "StoreConnectionError",
    "StoreError",
    "StoreNotFoundError",
]
