"""Stockage de templates en mémoire pour les tests et le développement.

FR: Conserve les lignes dans un dictionnaire. Les lignes retournées sont
    des copies profondes : modifier un résultat n'altère pas le stockage.
EN: Keeps rows in a dict. Returned rows are deep copies.
"""

from __future__ import annotations

import copy
from datetime import datetime, timezone

from devispack.store.base import BaseTemplateStore, Row
from devispack.store.errors import StoreNotFoundError

# Colonnes gérées par le stockage
_MANAGED_COLUMNS = frozenset({"id", "created_at", "updated_at"})


class MemoryTemplateStore(BaseTemplateStore):
    """Stockage de templates en mémoire.

    FR: Identifiants séquentiels ``TPL-000001``, horodatages UTC et contrôle
        du propriétaire lors des mises à jour.
    EN: Sequential ``TPL-000001`` ids, UTC timestamps and owner check on
        update.
    """

    def __init__(self, **kwargs: object) -> None:
        self._rows: dict[str, Row] = {}
        self._counter: int = 0

    def _next_id(self) -> str:
        """Génère un identifiant séquentiel."""
        self._counter += 1
        return f"TPL-{self._counter:06d}"

    def _get_stored(self, template_id: str) -> Row:
        """Récupère une ligne stockée ou lève StoreNotFoundError."""
        stored = self._rows.get(template_id)
        if stored is None:
            msg = f"Template introuvable : {template_id}"
            raise StoreNotFoundError(msg)
        return stored

    async def insert(self, row: Row) -> Row:
        now = datetime.now(timezone.utc)
        stored = {
            key: copy.deepcopy(value)
            for key, value in row.items()
            if key not in _MANAGED_COLUMNS
        }
        stored["id"] = self._next_id()
        stored["created_at"] = now
        stored["updated_at"] = now
        self._rows[stored["id"]] = stored
        return copy.deepcopy(stored)

    async def update(self, template_id: str, user_id: str, values: Row) -> Row:
        stored = self._get_stored(template_id)
        if stored.get("user_id") != user_id:
            msg = f"Template introuvable pour l'utilisateur {user_id} : {template_id}"
            raise StoreNotFoundError(msg)
        for key, value in values.items():
            if key not in _MANAGED_COLUMNS:
                stored[key] = copy.deepcopy(value)
        stored["updated_at"] = datetime.now(timezone.utc)
        return copy.deepcopy(stored)

    async def fetch(self, template_id: str) -> Row:
        return copy.deepcopy(self._get_stored(template_id))

    async def list_by_user(self, user_id: str) -> list[Row]:
        return [
            copy.deepcopy(row)
            for row in self._rows.values()
            if row.get("user_id") == user_id
        ]
