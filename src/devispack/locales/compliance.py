"""Validation de conformité et mentions légales.

FR: Applique les règles de conformité d'un pack aux données d'un devis et
    compose le bloc de mentions légales. Aucune de ces fonctions ne lève
    d'exception : un échec de conformité est un résultat attendu, remonté
    à l'utilisateur sous forme de messages.
EN: Applies a pack's compliance rules to quote data and composes the legal
    mentions block. None of these functions raise: a compliance failure is
    an expected, user-facing result.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from devispack.locales.registry import get_locale_pack
from devispack.models.enums import Severity
from devispack.models.locale import ComplianceResult, ComplianceRule

logger = logging.getLogger(__name__)


def _rule_passes(rule: ComplianceRule, data: Mapping[str, Any]) -> bool:
    try:
        return rule.passes(data)
    except (ArithmeticError, AttributeError, LookupError, TypeError, ValueError):
        logger.debug("Règle %s non évaluable, considérée en échec", rule.id)
        return False


def validate_compliance(data: object, code: object) -> ComplianceResult:
    """Valide les données d'un devis selon les règles de la locale.

    Args:
        data: Données du devis (dictionnaire de champs). Toute autre valeur
            est traitée comme un devis vide.
        code: Code de locale (repli sur fr-BE si invalide).

    Returns:
        Les messages des règles en échec, classés par sévérité. Le résultat
        est valide si et seulement si aucune règle bloquante n'a échoué.
    """
    pack = get_locale_pack(code)
    values: Mapping[str, Any] = data if isinstance(data, Mapping) else {}

    buckets: dict[Severity, list[str]] = {
        Severity.ERROR: [],
        Severity.WARNING: [],
        Severity.INFO: [],
    }
    for rule in pack.compliance.rules:
        if not _rule_passes(rule, values):
            buckets[rule.severity].append(rule.description)

    errors = buckets[Severity.ERROR]
    return ComplianceResult(
        valid=not errors,
        errors=errors,
        warnings=buckets[Severity.WARNING],
        info=buckets[Severity.INFO],
    )


def generate_legal_mentions(
    code: object,
    *,
    include_data_protection: bool = False,
    include_insurance: bool = False,
    custom_terms: str | None = None,
) -> str:
    """Compose les mentions légales d'un devis.

    FR: Contient toujours la validité du devis, les conditions de paiement,
        les pénalités de retard, le droit de rétractation (si le pays en
        prévoit un) et la juridiction. La protection des données et
        l'assurance ne sont ajoutées que sur demande ; les conditions
        particulières sont ajoutées telles quelles.
    EN: Always contains validity, payment terms, late penalties, withdrawal
        right (when defined) and jurisdiction. Data protection and insurance
        are opt-in; custom terms are appended verbatim.

    Returns:
        Les paragraphes séparés par une ligne vide.
    """
    legal = get_locale_pack(code).legal

    mentions = [
        legal.quote_validity,
        legal.payment_terms,
        legal.late_payment_penalties,
    ]
    if legal.withdrawal_right:
        mentions.append(legal.withdrawal_right)
    mentions.append(legal.jurisdiction)

    if include_data_protection:
        mentions.append(legal.data_protection)
    if include_insurance and legal.professional_insurance:
        mentions.append(legal.professional_insurance)
    if isinstance(custom_terms, str) and custom_terms:
        mentions.append(custom_terms)

    return "\n\n".join(mentions)
