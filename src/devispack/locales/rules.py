"""Prédicats partagés par les règles de conformité des packs.

FR: Les données d'un devis proviennent de formulaires : chaque prédicat
    tolère les valeurs absentes, vides ou mal typées sans lever
    d'exception (une valeur illisible est traitée comme absente).
EN: Quote data comes from forms: every predicate tolerates missing,
    blank or mistyped values without raising.
"""

from collections.abc import Callable, Iterable, Mapping
from decimal import Decimal
from typing import Any

from devispack.utils.values import to_decimal

Check = Callable[[Mapping[str, Any]], bool]


def text_value(data: Mapping[str, Any], key: str) -> str:
    """Retourne la valeur texte nettoyée d'un champ, ou une chaîne vide."""
    value = data.get(key)
    return value.strip() if isinstance(value, str) else ""


def is_present(data: Mapping[str, Any], key: str) -> bool:
    """Indique si un champ est renseigné (non nul et non blanc)."""
    value = data.get(key)
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def allowed_tax_rate(rates: Iterable[Decimal]) -> Check:
    """Construit un prédicat vérifiant que ``tax_rate`` est un taux du pays.

    FR: Un taux absent passe ; un taux illisible ou hors liste échoue.
    EN: A missing rate passes; an unreadable or unlisted rate fails.
    """
    allowed = frozenset(rates)

    def check(data: Mapping[str, Any]) -> bool:
        if not is_present(data, "tax_rate"):
            return True
        rate = to_decimal(data.get("tax_rate"))
        return rate is not None and rate in allowed

    return check
