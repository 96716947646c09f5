"""Moteur de localisation et de conformité (fr-BE, fr-FR, fr-CH).

FR: Taux de TVA, formatage monétaire et des dates, mentions légales,
    validation de conformité, numérotation des devis et factures, détection
    de la locale et références de paiement. Toutes les fonctions sont pures
    et ne lèvent pas d'exception : une locale invalide retombe sur fr-BE.
EN: VAT rates, currency/date formatting, legal mentions, compliance
    validation, document numbering, locale detection and payment
    references. All functions are pure and exception-free.
"""

from devispack.locales.compliance import generate_legal_mentions, validate_compliance
from devispack.locales.detection import detect_locale
from devispack.locales.formatting import (
    format_invoice_number,
    format_locale_currency,
    format_locale_date,
    format_locale_number,
    format_quote_number,
)
from devispack.locales.payments import (
    format_iban,
    generate_epc_payload,
    generate_structured_reference,
    is_valid_epc_data,
    is_valid_structured_reference,
)
from devispack.locales.registry import (
    get_all_locale_packs,
    get_locale_pack,
    get_quote_locale,
    get_quote_locale_pack,
    get_standard_tax_rate,
    get_tax_rates,
    is_valid_locale_code,
)

__all__ = [
    "detect_locale",
    "format_iban",
    "format_invoice_number",
    "format_locale_currency",
    "format_locale_date",
    "format_locale_number",
    "format_quote_number",
    "generate_epc_payload",
    "generate_legal_mentions",
    "generate_structured_reference",
    "get_all_locale_packs",
    "get_locale_pack",
    "get_quote_locale",
    "get_quote_locale_pack",
    "get_standard_tax_rate",
    "get_tax_rates",
    "is_valid_epc_data",
    "is_valid_locale_code",
    "is_valid_structured_reference",
    "validate_compliance",
]
