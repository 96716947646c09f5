"""Stockage de templates adossé à l'ORM Django.

FR: Implémente BaseTemplateStore avec l'API asynchrone de l'ORM
    (``acreate``, ``aget``, ``asave``). Les erreurs de base de données sont
    converties en StoreConnectionError.
EN: Implements BaseTemplateStore with the async ORM API. Database errors
    are converted into StoreConnectionError.
"""

from __future__ import annotations

import logging

from django.db import DatabaseError

from devispack.contrib.django.models import STORED_FIELDS, DocumentTemplateRecord
from devispack.store.base import BaseTemplateStore, Row
from devispack.store.errors import StoreConnectionError, StoreNotFoundError

logger = logging.getLogger(__name__)


def _columns(row: Row) -> Row:
    return {key: value for key, value in row.items() if key in STORED_FIELDS}


def _primary_key(template_id: str) -> int:
    try:
        return int(template_id)
    except (TypeError, ValueError) as exc:
        msg = f"Template introuvable : {template_id}"
        raise StoreNotFoundError(msg) from exc


class DjangoTemplateStore(BaseTemplateStore):
    """Stockage de templates dans la table DocumentTemplateRecord."""

    def __init__(self, **kwargs: object) -> None:
        self._manager = DocumentTemplateRecord.objects

    async def _get_record(self, template_id: str, **filters: object) -> DocumentTemplateRecord:
        try:
            return await self._manager.aget(pk=_primary_key(template_id), **filters)
        except DocumentTemplateRecord.DoesNotExist as exc:
            msg = f"Template introuvable : {template_id}"
            raise StoreNotFoundError(msg) from exc
        except DatabaseError as exc:
            raise StoreConnectionError(str(exc)) from exc

    async def insert(self, row: Row) -> Row:
        try:
            record = await self._manager.acreate(**_columns(row))
        except DatabaseError as exc:
            raise StoreConnectionError(str(exc)) from exc
        logger.debug("Enregistrement %s créé", record.pk)
        return record.to_row()

    async def update(self, template_id: str, user_id: str, values: Row) -> Row:
        record = await self._get_record(template_id, user_id=user_id)
        columns = _columns(values)
        for key, value in columns.items():
            setattr(record, key, value)
        try:
            await record.asave(update_fields=[*columns, "updated_at"])
        except DatabaseError as exc:
            raise StoreConnectionError(str(exc)) from exc
        return record.to_row()

    async def fetch(self, template_id: str) -> Row:
        record = await self._get_record(template_id)
        return record.to_row()

    async def list_by_user(self, user_id: str) -> list[Row]:
        try:
            return [record.to_row() async for record in self._manager.filter(user_id=user_id)]
        except DatabaseError as exc:
            raise StoreConnectionError(str(exc)) from exc
