"""Utilitaires de conversion des valeurs libres (formulaires, JSON)."""

from decimal import Decimal, InvalidOperation


def to_decimal(value: object) -> Decimal | None:
    """Convertit une valeur libre en Decimal fini.

    Args:
        value: Nombre, chaîne numérique ou valeur quelconque.

    Returns:
        Le Decimal correspondant, ou None si la valeur n'est pas un nombre
        fini (booléens, None, texte non numérique, NaN, infini).
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        # repr() conserve la valeur affichée (0.1 et non 0.1000000000000000055…)
        result = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip().replace(",", "."))
        except InvalidOperation:
            return None
    else:
        return None
    return result if result.is_finite() else None


def to_text(value: object) -> str:
    """Convertit une valeur en texte affichable (None → chaîne vide)."""
    if value is None:
        return ""
    return str(value)
