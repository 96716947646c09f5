"""Substitution des variables ``{{clé}}`` dans un template.

FR: Parcours récursif (listes, dictionnaires, chaînes) de la partie
    ``blocks`` du template. Une clé absente des données reste telle quelle
    dans le résultat pour signaler une donnée manquante à la relecture.
    Le template d'origine n'est jamais modifié.
    Écart volontaire avec une conversion ``str()`` brute : une clé
    présente mais valant ``None`` est remplacée par une chaîne vide, et
    non par le texte ``"None"``.
EN: Recursive traversal of the template's ``blocks``. Keys missing from
    the data are left untouched. The input template is never mutated.
    Deliberate departure from a plain ``str()`` conversion: a key present
    with a ``None`` value becomes an empty string, not ``"None"``.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from devispack.models.template import DocumentTemplate
from devispack.templates.variables import VARIABLE_RE
from devispack.utils.values import to_text


def interpolate_string(text: str, data: Mapping[str, Any]) -> str:
    """Remplace chaque ``{{clé}}`` présente dans ``data`` par sa valeur.

    FR: ``None`` est remplacé par une chaîne vide ; les clés absentes
        restent littérales.
    EN: ``None`` becomes an empty string; missing keys stay literal.
    """

    def replace(match: re.Match[str]) -> str:
        key = match.group(1)
        if key not in data:
            return match.group(0)
        return to_text(data[key])

    return VARIABLE_RE.sub(replace, text)


def interpolate_value(value: Any, data: Mapping[str, Any]) -> Any:
    """Applique la substitution à une valeur JSON quelconque (nouvelle copie)."""
    if isinstance(value, str):
        return interpolate_string(value, data)
    if isinstance(value, list):
        return [interpolate_value(item, data) for item in value]
    if isinstance(value, dict):
        return {key: interpolate_value(item, data) for key, item in value.items()}
    return value


def interpolate_template(
    template: DocumentTemplate, data: Mapping[str, Any]
) -> DocumentTemplate:
    """Retourne une copie du template avec les variables des blocs substituées.

    Args:
        template: Le template source (non modifié).
        data: Les données du document (clés des variables).

    Returns:
        Un nouveau template dont toutes les chaînes sous ``blocks`` ont été
        interpolées. Les métadonnées et la géométrie sont copiées à
        l'identique.
    """
    values: Mapping[str, Any] = data if isinstance(data, Mapping) else {}
    payload = template.model_dump(by_alias=True)
    payload["blocks"] = [_interpolate_block(block, values) for block in payload["blocks"]]
    return DocumentTemplate.model_validate(payload)


def _interpolate_block(block: dict[str, Any], data: Mapping[str, Any]) -> dict[str, Any]:
    result = interpolate_value(block, data)
    # l'identité du bloc ne dépend pas des données (unicité des id)
    result["id"] = block["id"]
    result["type"] = block["type"]
    return result
