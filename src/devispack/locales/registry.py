"""Registre des packs de localisation.

FR: Table statique indexée par ``LocaleCode``. C'est le seul point d'accès
    aux packs : toute valeur externe est validée ici et une valeur
    invalide retombe sur le pack par défaut (fr-BE) sans lever d'exception.
EN: Static table keyed by ``LocaleCode``. This is the only access path to
    packs: external values are validated here and invalid values fall back
    to the default pack (fr-BE) without raising.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from types import MappingProxyType

from devispack.locales import fr_be, fr_ch, fr_fr
from devispack.models.enums import DEFAULT_LOCALE, LocaleCode
from devispack.models.locale import LocalePack, TaxRate

logger = logging.getLogger(__name__)

_PACKS: MappingProxyType[LocaleCode, LocalePack] = MappingProxyType(
    {
        LocaleCode.FR_BE: fr_be.PACK,
        LocaleCode.FR_FR: fr_fr.PACK,
        LocaleCode.FR_CH: fr_ch.PACK,
    }
)

_CODES: frozenset[str] = frozenset(code.value for code in LocaleCode)


def is_valid_locale_code(code: object) -> bool:
    """Indique si ``code`` appartient à l'ensemble des locales supportées.

    FR: Sensible à la casse (``"fr-be"`` est invalide). Toute valeur non
        textuelle est invalide.
    EN: Case-sensitive. Any non-string value is invalid.
    """
    return isinstance(code, str) and code in _CODES


def get_locale_pack(code: object) -> LocalePack:
    """Retourne le pack de ``code``, ou le pack par défaut si invalide.

    Args:
        code: Code de locale (valeur externe, éventuellement invalide).

    Returns:
        Le pack correspondant, ou le pack fr-BE.
    """
    if is_valid_locale_code(code):
        return _PACKS[LocaleCode(code)]
    logger.debug("Locale invalide %r, repli sur %s", code, DEFAULT_LOCALE)
    return _PACKS[DEFAULT_LOCALE]


def get_all_locale_packs() -> list[LocalePack]:
    """Liste tous les packs dans un ordre stable (fr-BE, fr-FR, fr-CH)."""
    return list(_PACKS.values())


def get_tax_rates(code: object) -> list[TaxRate]:
    """Retourne les taux de TVA proposés pour une locale."""
    return list(get_locale_pack(code).tax.rates)


def get_standard_tax_rate(code: object) -> Decimal:
    """Retourne le taux de TVA standard d'une locale."""
    return get_locale_pack(code).tax.standard


def get_quote_locale(value: object) -> LocaleCode:
    """Retourne la locale persistée d'un devis, avec repli sur fr-BE.

    FR: Accesseur défensif pour les valeurs relues en base ou en session :
        ``None``, chaîne vide ou code inconnu donnent la locale par défaut.
    EN: Defensive accessor for persisted values: ``None``, empty or unknown
        codes yield the default locale.
    """
    if is_valid_locale_code(value):
        return LocaleCode(value)
    return DEFAULT_LOCALE


def get_quote_locale_pack(value: object) -> LocalePack:
    """Retourne le pack de la locale persistée d'un devis."""
    return _PACKS[get_quote_locale(value)]
