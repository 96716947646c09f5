"""Création, modification et duplication des templates.

FR: Fonctions asynchrones au-dessus d'un BaseTemplateStore. La géométrie de
    page, les styles globaux et les blocs sont stockés ensemble dans la
    colonne JSON ``template_data`` ; les autres champs sont des colonnes.
    Les erreurs du stockage sont enveloppées dans TemplatePersistenceError.
EN: Async functions on top of a BaseTemplateStore. Page geometry, global
    styles and blocks live together in the ``template_data`` JSON column.
    Store errors are wrapped into TemplatePersistenceError.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from devispack.models.template import DocumentTemplate
from devispack.store.base import BaseTemplateStore, Row
from devispack.store.errors import StoreError, StoreNotFoundError
from devispack.templates.errors import TemplateNotFoundError, TemplatePersistenceError

logger = logging.getLogger(__name__)

# Champs modifiables stockés en colonnes
ROW_FIELDS = ("name", "description", "type", "category", "is_public", "is_premium", "price")

# Champs modifiables stockés dans template_data (nom accepté → clé JSON)
DATA_FIELDS = {
    "page_size": "pageSize",
    "pageSize": "pageSize",
    "orientation": "orientation",
    "margins": "margins",
    "global_styles": "globalStyles",
    "globalStyles": "globalStyles",
    "blocks": "blocks",
}

# Colonnes attribuées par le stockage à l'insertion
_STORE_COLUMNS = ("id", "created_at", "updated_at")


# --- Conversion ligne ↔ modèle ---


def template_to_row(template: DocumentTemplate, user_id: str | None = None) -> Row:
    """Convertit un template en ligne de stockage.

    Args:
        template: Le template à convertir.
        user_id: Propriétaire à inscrire (sinon celui du template).

    Returns:
        La ligne, ``template_data`` contenant la géométrie, les styles et
        les blocs au format camelCase.
    """
    return {
        "id": template.id,
        "user_id": user_id if user_id is not None else template.user_id,
        "name": template.name,
        "description": template.description,
        "type": template.type.value,
        "category": template.category,
        "template_data": template.template_data(),
        "is_public": template.is_public,
        "is_premium": template.is_premium,
        "price": template.price,
        "downloads_count": template.downloads_count,
        "rating": template.rating,
        "created_at": template.created_at,
        "updated_at": template.updated_at,
    }


def template_from_row(row: Mapping[str, Any]) -> DocumentTemplate:
    """Reconstruit un template depuis une ligne de stockage."""
    payload = {key: value for key, value in row.items() if key != "template_data"}
    data = row.get("template_data")
    if isinstance(data, Mapping):
        payload.update(data)
    return DocumentTemplate.model_validate(payload)


# --- Accès au stockage ---


async def _fetch_row(store: BaseTemplateStore, template_id: str, operation: str) -> Row:
    try:
        return await store.fetch(template_id)
    except StoreNotFoundError as exc:
        raise TemplateNotFoundError() from exc
    except StoreError as exc:
        msg = f"Failed to {operation} template: {exc}"
        raise TemplatePersistenceError(msg) from exc


async def create_template(
    store: BaseTemplateStore,
    user_id: str,
    template: DocumentTemplate,
) -> DocumentTemplate:
    """Enregistre un nouveau template pour un utilisateur.

    Args:
        store: Le stockage des templates.
        user_id: Le propriétaire du template.
        template: Le template à enregistrer (son ``id`` est ignoré).

    Returns:
        Le template stocké, avec identifiant et horodatages.

    Raises:
        TemplatePersistenceError: Si le stockage échoue.
    """
    row = template_to_row(template, user_id=user_id)
    for column in _STORE_COLUMNS:
        row.pop(column)
    try:
        stored = await store.insert(row)
    except StoreError as exc:
        msg = f"Failed to create template: {exc}"
        raise TemplatePersistenceError(msg) from exc
    logger.info("Template %s créé pour l'utilisateur %s", stored.get("id"), user_id)
    return template_from_row(stored)


async def update_template(
    store: BaseTemplateStore,
    template_id: str,
    user_id: str,
    updates: Mapping[str, Any],
) -> None:
    """Met à jour partiellement un template de l'utilisateur.

    FR: Seuls les champs fournis changent. Les clés de ``template_data``
        (``page_size``, ``orientation``, ``margins``, ``global_styles``,
        ``blocks``) sont fusionnées dans le JSON existant. Le résultat est
        validé avant écriture.
    EN: Only supplied fields change; ``template_data`` keys are merged into
        the existing JSON. The result is validated before writing.

    Args:
        store: Le stockage des templates.
        template_id: Identifiant du template.
        user_id: Propriétaire attendu.
        updates: Champs à modifier.

    Raises:
        ValueError: Si un champ n'est pas modifiable ou si le template
            résultant est invalide.
        TemplateNotFoundError: Si le template n'existe pas ou appartient
            à un autre utilisateur.
        TemplatePersistenceError: Si le stockage échoue.
    """
    unknown = sorted(set(updates) - set(ROW_FIELDS) - set(DATA_FIELDS))
    if unknown:
        msg = f"Champs de template non modifiables : {', '.join(unknown)}"
        raise ValueError(msg)

    current = await _fetch_row(store, template_id, "update")
    merged = dict(current)
    data = dict(current.get("template_data") or {})
    for key, value in updates.items():
        if key in DATA_FIELDS:
            data[DATA_FIELDS[key]] = value
        else:
            merged[key] = value
    merged["template_data"] = data

    normalized = template_to_row(template_from_row(merged))
    values = {key: normalized[key] for key in updates if key in ROW_FIELDS}
    if any(key in DATA_FIELDS for key in updates):
        values["template_data"] = normalized["template_data"]

    try:
        await store.update(template_id, user_id, values)
    except StoreNotFoundError as exc:
        raise TemplateNotFoundError() from exc
    except StoreError as exc:
        msg = f"Failed to update template: {exc}"
        raise TemplatePersistenceError(msg) from exc
    logger.info("Template %s mis à jour (%s)", template_id, ", ".join(sorted(values)))


async def duplicate_template(
    store: BaseTemplateStore,
    template_id: str,
    user_id: str,
) -> DocumentTemplate:
    """Duplique un template pour un utilisateur.

    FR: La copie s'appelle ``"<nom> (copie)"``, appartient à ``user_id``,
        est privée, gratuite et non premium ; ``template_data`` est copié
        en profondeur.
    EN: The copy is named ``"<name> (copie)"``, owned by ``user_id``,
        private, free and not premium; ``template_data`` is deep-copied.

    Raises:
        TemplateNotFoundError: Si le template source n'existe pas.
        TemplatePersistenceError: Si le stockage échoue.
    """
    source = await _fetch_row(store, template_id, "duplicate")
    row: Row = {
        "user_id": user_id,
        "name": f"{source.get('name')} (copie)",
        "description": source.get("description"),
        "type": source.get("type"),
        "category": source.get("category"),
        "template_data": copy.deepcopy(source.get("template_data") or {}),
        "is_public": False,
        "is_premium": False,
        "price": Decimal("0"),
        "downloads_count": 0,
        "rating": None,
    }
    try:
        stored = await store.insert(row)
    except StoreError as exc:
        msg = f"Failed to duplicate template: {exc}"
        raise TemplatePersistenceError(msg) from exc
    logger.info(
        "Template %s dupliqué en %s pour l'utilisateur %s",
        template_id,
        stored.get("id"),
        user_id,
    )
    return template_from_row(stored)


async def get_template(store: BaseTemplateStore, template_id: str) -> DocumentTemplate:
    """Récupère un template par son identifiant.

    Raises:
        TemplateNotFoundError: Si le template n'existe pas.
        TemplatePersistenceError: Si le stockage échoue.
    """
    return template_from_row(await _fetch_row(store, template_id, "fetch"))


async def list_templates(store: BaseTemplateStore, user_id: str) -> list[DocumentTemplate]:
    """Liste les templates d'un utilisateur."""
    try:
        rows = await store.list_by_user(user_id)
    except StoreError as exc:
        msg = f"Failed to list templates: {exc}"
        raise TemplatePersistenceError(msg) from exc
    return [template_from_row(row) for row in rows]
