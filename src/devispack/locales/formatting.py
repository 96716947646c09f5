"""Formatage des montants, nombres, dates et numéros de documents.

FR: Fonctions pures pilotées par les descripteurs du pack (séparateurs,
    position du symbole, format de date, modèles de numérotation). Une
    entrée illisible ne lève jamais d'exception : un montant non numérique
    est formaté comme zéro, une date illisible est rendue telle quelle.
EN: Pure functions driven by pack descriptors. Unreadable input never
    raises: a non-numeric amount formats as zero, an unparsable date is
    returned unchanged.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

from devispack.locales.registry import get_locale_pack
from devispack.models.enums import CurrencyPosition
from devispack.models.locale import LocalePack
from devispack.utils.values import to_decimal

logger = logging.getLogger(__name__)

_NUMBER_TOKEN_RE = re.compile(r"\{(YYYY|YY|MM|N+)\}")

# Au-delà, une séquence de numérotation est considérée comme illisible
MAX_SEQUENCE_DIGITS = 18


def _group_thousands(digits: str, separator: str) -> str:
    """Insère le séparateur de milliers dans une suite de chiffres."""
    groups = []
    while len(digits) > 3:
        groups.insert(0, digits[-3:])
        digits = digits[:-3]
    groups.insert(0, digits)
    return separator.join(groups)


def _round_half_up(amount: Decimal, decimals: int) -> Decimal | None:
    """Arrondit au demi supérieur ; None si le montant dépasse Emax."""
    quantum = Decimal(1).scaleb(-decimals)
    with localcontext() as ctx:
        if amount.adjusted() > ctx.Emax:
            return None
        ctx.prec = max(ctx.prec, amount.adjusted() + decimals + 2)
        try:
            return amount.quantize(quantum, rounding=ROUND_HALF_UP)
        except InvalidOperation:
            return None


def _format_decimal(
    value: object,
    decimals: int,
    decimal_separator: str,
    thousands_separator: str,
) -> str:
    amount = to_decimal(value)
    if amount is None:
        amount = Decimal(0)

    rounded = _round_half_up(amount, decimals)
    if rounded is None:
        logger.debug("Montant hors limites (%s), formaté comme zéro", value)
        rounded = Decimal(0).scaleb(-decimals)
    negative = rounded < 0
    integer_part, _, fraction = f"{rounded.copy_abs():f}".partition(".")

    formatted = _group_thousands(integer_part, thousands_separator)
    if decimals > 0:
        formatted = f"{formatted}{decimal_separator}{fraction}"
    return f"-{formatted}" if negative else formatted


def format_locale_number(value: object, pack: LocalePack, decimals: int = 2) -> str:
    """Formate un nombre avec les séparateurs de la locale, sans symbole.

    Example:
        >>> format_locale_number(1234.5, get_locale_pack("fr-FR"))
        '1 234,50'
    """
    currency = pack.currency
    return _format_decimal(
        value,
        decimals,
        currency.decimal_separator,
        currency.thousands_separator,
    )


def format_locale_currency(amount: object, pack: LocalePack) -> str:
    """Formate un montant dans la devise de la locale.

    FR: Arrondi commercial (demi supérieur) au nombre de décimales de la
        devise, séparateur de milliers de la locale, symbole placé après
        avec une espace (``1.234,56 €``) ou avant sans espace
        (``CHF1'234.56``). Les montants négatifs sont préfixés par ``-``.
    EN: Half-up rounding, locale grouping, symbol after with a space or
        before without one. Negative amounts carry a leading ``-``.
    """
    currency = pack.currency
    formatted = _format_decimal(
        amount,
        currency.decimals,
        currency.decimal_separator,
        currency.thousands_separator,
    )
    if currency.position == CurrencyPosition.BEFORE:
        return f"{currency.symbol}{formatted}"
    return f"{formatted} {currency.symbol}"


def _parse_date(value: object) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            pass
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def format_locale_date(value: object, pack: LocalePack) -> str:
    """Formate une date selon le format du pack (``DD/MM/YYYY``…).

    Args:
        value: ``date``, ``datetime`` ou chaîne ISO 8601.
        pack: Pack de localisation.

    Returns:
        La date formatée. Une chaîne illisible est renvoyée telle quelle,
        toute autre valeur illisible donne une chaîne vide.
    """
    parsed = _parse_date(value)
    if parsed is None:
        return value if isinstance(value, str) else ""
    return (
        pack.date.format.replace("YYYY", f"{parsed.year:04d}")
        .replace("MM", f"{parsed.month:02d}")
        .replace("DD", f"{parsed.day:02d}")
    )


def _expand_number_format(template: str, sequence: object, when: object) -> str:
    day = when if isinstance(when, date) else date.today()
    seq = to_decimal(sequence)
    if seq is None or seq < 0 or seq.adjusted() >= MAX_SEQUENCE_DIGITS:
        number = 0
    else:
        number = int(seq)
    year = f"{day.year:04d}"

    def replace(match: re.Match[str]) -> str:
        token = match.group(1)
        if token == "YYYY":
            return year
        if token == "YY":
            return year[-2:]
        if token == "MM":
            return f"{day.month:02d}"
        return str(number).zfill(len(token))

    return _NUMBER_TOKEN_RE.sub(replace, template)


def format_quote_number(code: object, sequence: int, when: date | None = None) -> str:
    """Formate un numéro de devis selon le modèle de la locale.

    FR: ``{YYYY}`` année, ``{YY}`` année sur deux chiffres, ``{MM}`` mois,
        ``{NNNN}`` séquence complétée de zéros sur autant de chiffres que
        de ``N`` (jamais tronquée). La date par défaut est aujourd'hui.
        Une séquence négative, illisible ou de plus de 18 chiffres vaut 0.
    EN: Sequence zero-padded to the number of ``N``, never truncated.
        A negative, unreadable or over-18-digit sequence counts as 0.

    Example:
        >>> format_quote_number("fr-BE", 42, date(2024, 1, 15))
        'DEV-2024-0042'
    """
    return _expand_number_format(
        get_locale_pack(code).number_formats.quote, sequence, when
    )


def format_invoice_number(
    code: object, sequence: int, when: date | None = None
) -> str:
    """Formate un numéro de facture selon le modèle de la locale."""
    return _expand_number_format(
        get_locale_pack(code).number_formats.invoice, sequence, when
    )
