"""Détection heuristique de la locale.

FR: Déduit la locale d'un utilisateur à partir d'indices libres saisis dans
    les formulaires. Ordre de priorité (le premier indice concluant gagne) :

    1. préfixe du numéro de TVA (``BE``, ``FR``, ``CHE``) ;
    2. nom de pays ou code ISO (alpha-2 / alpha-3) ;
    3. format du code postal (5 chiffres → France, 4 chiffres → Belgique,
       la Suisse partageant ce format, le pays doit lever l'ambiguïté) ;
    4. locale du navigateur (``Accept-Language``) ;
    5. locale par défaut (fr-BE).

EN: Infers a user's locale from free-form form hints, first conclusive
    hint wins. A 4-digit postal code alone resolves to Belgium; Switzerland
    must be identified by VAT number or country.
"""

from __future__ import annotations

import logging
import re
import unicodedata

from devispack.models.enums import DEFAULT_LOCALE, LocaleCode

logger = logging.getLogger(__name__)

_VAT_PREFIXES: tuple[tuple[str, LocaleCode], ...] = (
    ("CHE", LocaleCode.FR_CH),
    ("BE", LocaleCode.FR_BE),
    ("FR", LocaleCode.FR_FR),
)

_COUNTRY_SYNONYMS: dict[str, LocaleCode] = {
    "belgique": LocaleCode.FR_BE,
    "belgium": LocaleCode.FR_BE,
    "belgie": LocaleCode.FR_BE,
    "belgien": LocaleCode.FR_BE,
    "be": LocaleCode.FR_BE,
    "bel": LocaleCode.FR_BE,
    "france": LocaleCode.FR_FR,
    "fr": LocaleCode.FR_FR,
    "fra": LocaleCode.FR_FR,
    "suisse": LocaleCode.FR_CH,
    "switzerland": LocaleCode.FR_CH,
    "schweiz": LocaleCode.FR_CH,
    "svizzera": LocaleCode.FR_CH,
    "swiss": LocaleCode.FR_CH,
    "ch": LocaleCode.FR_CH,
    "che": LocaleCode.FR_CH,
}

_FR_POSTAL_CODE_RE = re.compile(r"^\d{5}$")
_BE_POSTAL_CODE_RE = re.compile(r"^\d{4}$")

_BROWSER_REGIONS: dict[str, LocaleCode] = {
    "be": LocaleCode.FR_BE,
    "ch": LocaleCode.FR_CH,
}


def _normalize(value: str) -> str:
    """Minuscules, sans accents ni espaces superflus."""
    decomposed = unicodedata.normalize("NFKD", value.strip().lower())
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def _hint(value: object) -> str | None:
    """Retourne un indice exploitable (chaîne non vide), sinon None."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def _from_vat_number(vat_number: str) -> LocaleCode | None:
    upper = vat_number.upper()
    for prefix, code in _VAT_PREFIXES:
        if upper.startswith(prefix):
            return code
    return None


def _from_country(country: str) -> LocaleCode | None:
    return _COUNTRY_SYNONYMS.get(_normalize(country))


def _from_postal_code(postal_code: str) -> LocaleCode | None:
    if _FR_POSTAL_CODE_RE.match(postal_code):
        return LocaleCode.FR_FR
    if _BE_POSTAL_CODE_RE.match(postal_code):
        return LocaleCode.FR_BE
    return None


def _from_browser_locale(browser_locale: str) -> LocaleCode | None:
    """Examine les étiquettes d'un en-tête Accept-Language dans l'ordre."""
    for part in browser_locale.split(","):
        tag = part.split(";", 1)[0].strip().lower().replace("_", "-")
        language, _, region = tag.partition("-")
        if language != "fr":
            continue
        return _BROWSER_REGIONS.get(region.split("-", 1)[0], LocaleCode.FR_FR)
    return None


def detect_locale(
    *,
    vat_number: object = None,
    postal_code: object = None,
    country: object = None,
    browser_locale: object = None,
) -> LocaleCode:
    """Détecte la locale la plus probable à partir d'indices libres.

    Args:
        vat_number: Numéro de TVA ou d'entreprise (``BE0123456789``,
            ``CHE-123.456.789``…).
        postal_code: Code postal.
        country: Nom du pays ou code ISO, dans n'importe quelle langue
            nationale.
        browser_locale: Locale ou en-tête ``Accept-Language`` du navigateur.

    Returns:
        La locale détectée, ou fr-BE si aucun indice n'est concluant.
        Les indices absents, vides ou non textuels sont ignorés.
    """
    detectors = (
        (_hint(vat_number), _from_vat_number),
        (_hint(country), _from_country),
        (_hint(postal_code), _from_postal_code),
        (_hint(browser_locale), _from_browser_locale),
    )
    for value, detector in detectors:
        if value is None:
            continue
        code = detector(value)
        if code is not None:
            logger.debug("Locale %s détectée depuis %r", code, value)
            return code
    return DEFAULT_LOCALE
