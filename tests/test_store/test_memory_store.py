"""Tests du stockage de templates en mémoire."""

import pytest

from devispack.store import BaseTemplateStore, StoreError, StoreNotFoundError
from devispack.store.memory import MemoryTemplateStore


class TestInsert:
    """Tests de l'insertion."""

    def test_is_a_template_store(self, memory_store: MemoryTemplateStore) -> None:
        assert isinstance(memory_store, BaseTemplateStore)

    async def test_assigns_sequential_ids(self, memory_store, sample_row) -> None:
        first = await memory_store.insert(sample_row)
        second = await memory_store.insert(sample_row)
        assert first["id"] == "TPL-000001"
        assert second["id"] == "TPL-000002"

    async def test_sets_utc_timestamps(self, memory_store, sample_row) -> None:
        row = await memory_store.insert(sample_row)
        assert row["created_at"] == row["updated_at"]
        assert row["created_at"].tzinfo is not None

    async def test_ignores_managed_columns(self, memory_store, sample_row) -> None:
        sample_row["id"] = "forcé"
        sample_row["created_at"] = "hier"
        row = await memory_store.insert(sample_row)
        assert row["id"] == "TPL-000001"
        assert row["created_at"] != "hier"

    async def test_stores_a_copy(self, memory_store, sample_row) -> None:
        """Modifier la ligne d'origine n'altère pas le stockage."""
        row = await memory_store.insert(sample_row)
        sample_row["template_data"]["blocks"].clear()
        stored = await memory_store.fetch(row["id"])
        assert len(stored["template_data"]["blocks"]) == 1


class TestFetch:
    """Tests de la lecture."""

    async def test_returns_copy(self, memory_store, sample_row) -> None:
        row = await memory_store.insert(sample_row)
        fetched = await memory_store.fetch(row["id"])
        fetched["name"] = "Modifié"
        assert (await memory_store.fetch(row["id"]))["name"] == "Mon devis"

    async def test_not_found(self, memory_store) -> None:
        with pytest.raises(StoreNotFoundError, match="TPL-999999"):
            await memory_store.fetch("TPL-999999")

    def test_not_found_is_a_store_error(self) -> None:
        assert issubclass(StoreNotFoundError, StoreError)


class TestUpdate:
    """Tests de la mise à jour."""

    async def test_updates_values(self, memory_store, sample_row) -> None:
        row = await memory_store.insert(sample_row)
        updated = await memory_store.update(row["id"], "user-1", {"name": "Nouveau"})
        assert updated["name"] == "Nouveau"
        assert updated["updated_at"] >= row["updated_at"]
        assert updated["created_at"] == row["created_at"]

    async def test_other_owner_is_not_found(self, memory_store, sample_row) -> None:
        row = await memory_store.insert(sample_row)
        with pytest.raises(StoreNotFoundError):
            await memory_store.update(row["id"], "user-2", {"name": "Volé"})
        assert (await memory_store.fetch(row["id"]))["name"] == "Mon devis"

    async def test_cannot_change_id(self, memory_store, sample_row) -> None:
        row = await memory_store.insert(sample_row)
        updated = await memory_store.update(row["id"], "user-1", {"id": "autre"})
        assert updated["id"] == row["id"]


class TestListByUser:
    """Tests du listing par utilisateur."""

    async def test_filters_by_owner(self, memory_store, sample_row) -> None:
        await memory_store.insert(sample_row)
        await memory_store.insert({**sample_row, "user_id": "user-2"})
        await memory_store.insert(sample_row)
        rows = await memory_store.list_by_user("user-1")
        assert [row["id"] for row in rows] == ["TPL-000001", "TPL-000003"]

    async def test_empty(self, memory_store) -> None:
        assert await memory_store.list_by_user("personne") == []
