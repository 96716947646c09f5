"""Fixtures partagées pour les tests du stockage."""

import pytest

from devispack.store.base import Row
from devispack.store.memory import MemoryTemplateStore


@pytest.fixture
def memory_store() -> MemoryTemplateStore:
    """Stockage en mémoire vide."""
    return MemoryTemplateStore()


@pytest.fixture
def sample_row() -> Row:
    """Ligne de template minimale."""
    return {
        "user_id": "user-1",
        "name": "Mon devis",
        "type": "quote",
        "template_data": {"blocks": [{"id": "h", "type": "header", "config": {}}]},
        "is_public": False,
    }
