"""Modèles des packs de localisation.

FR: Un pack de localisation regroupe, pour une variante pays/langue, les taux
    de TVA, le format monétaire et de date, les mentions légales, le
    vocabulaire métier, les règles de conformité et les formats de
    numérotation. Tous les modèles sont gelés : un pack est construit une
    fois à l'import et n'est jamais modifié.
EN: A locale pack groups, for one country/language variant, VAT rates,
    currency and date formats, legal mentions, vocabulary, compliance rules
    and numbering formats. All models are frozen.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from devispack.models.enums import CurrencyPosition, LocaleCode, Severity

_WHITESPACE_RE = re.compile(r"\s+")


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class TaxRate(_FrozenModel):
    """Taux de TVA proposé à la saisie d'un devis."""

    value: Decimal = Field(..., ge=0, description="Taux en % / Rate in %")
    label: str = Field(..., description="Libellé affiché / Display label")
    description: str | None = Field(
        default=None,
        description="Cas d'application / When the rate applies",
    )


class TaxConfig(_FrozenModel):
    """Configuration fiscale d'un pays.

    FR: Le taux standard doit figurer dans la liste des taux proposés.
    EN: The standard rate must be listed among the offered rates.
    """

    standard: Decimal = Field(..., gt=0, description="Taux normal / Standard rate")
    reduced: Decimal = Field(..., ge=0, description="Taux réduit / Reduced rate")
    super_reduced: Decimal | None = Field(
        default=None,
        ge=0,
        description="Taux super réduit / Super-reduced rate",
    )
    zero: Decimal = Field(default=Decimal("0"), description="Taux zéro / Zero rate")
    label: str = Field(..., description="Nom de la taxe (TVA, BTW…) / Tax label")
    rates: tuple[TaxRate, ...] = Field(..., min_length=1)

    @model_validator(mode="after")
    def _standard_rate_is_offered(self) -> TaxConfig:
        if self.standard not in {rate.value for rate in self.rates}:
            msg = f"Le taux standard {self.standard} est absent des taux proposés"
            raise ValueError(msg)
        return self


class CurrencyConfig(_FrozenModel):
    """Format monétaire."""

    code: str = Field(..., min_length=3, max_length=3, description="ISO 4217")
    symbol: str
    position: CurrencyPosition
    decimal_separator: str
    thousands_separator: str
    decimals: int = Field(default=2, ge=0)


class DateConfig(_FrozenModel):
    """Format de date (jetons ``DD``, ``MM``, ``YYYY``)."""

    format: str = "DD/MM/YYYY"
    locale: str


class LegalMentions(_FrozenModel):
    """Mentions légales à reproduire sur les devis.

    FR: Rédigées dans la langue du pack. Le droit de rétractation et
        l'assurance professionnelle sont facultatifs selon le pays.
    EN: Written in the pack's language. Withdrawal right and professional
        insurance are optional depending on the country.
    """

    quote_validity: str
    payment_terms: str
    late_payment_penalties: str
    withdrawal_right: str | None = None
    jurisdiction: str
    data_protection: str
    professional_insurance: str | None = None


class Vocabulary(_FrozenModel):
    """Vocabulaire métier.

    FR: Termes communs obligatoires ; les termes propres à un pays
        (``siret``, ``ide``, ``registration_number``…) sont acceptés en plus.
    EN: Mandatory common terms; country-specific terms are allowed as extras.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    quote: str
    invoice: str
    client: str
    provider: str
    vat: str
    vat_number: str
    subtotal: str
    total: str
    deposit: str
    balance: str
    terms: str
    conditions: str
    validity: str
    payment_due: str
    bank_transfer: str
    cash: str

    def term(self, key: str, default: str = "") -> str:
        """Retourne un terme (commun ou spécifique) ou ``default``."""
        value = getattr(self, key, None)
        if value is None and self.model_extra:
            value = self.model_extra.get(key)
        return value if isinstance(value, str) else default


class ComplianceRule(_FrozenModel):
    """Règle de conformité appliquée aux données d'un devis.

    FR: Une règle contrôle soit un champ contre un motif (avec caractère
        obligatoire), soit un prédicat libre pour les règles multi-champs.
        ``description`` est le message présenté à l'utilisateur.
    EN: A rule checks either one field against a pattern (with
        required-ness), or a free predicate for cross-field rules.
        ``description`` is the user-facing message.
    """

    id: str
    field: str
    description: str
    severity: Severity = Severity.ERROR
    pattern: str | None = None
    required: bool = False
    check: Callable[[Mapping[str, Any]], bool] | None = None

    def passes(self, data: Mapping[str, Any]) -> bool:
        """Indique si ``data`` satisfait la règle."""
        if self.check is not None:
            return bool(self.check(data))

        value = data.get(self.field)
        if value is None or (isinstance(value, str) and not value.strip()):
            return not self.required
        if not isinstance(value, str):
            return False
        if self.pattern is None:
            return True
        normalized = _WHITESPACE_RE.sub("", value).upper()
        return re.fullmatch(self.pattern, normalized) is not None


class ComplianceRequirements(_FrozenModel):
    """Exigences de conformité d'un pays.

    FR: ``required_fields`` et ``mandatory_mentions`` alimentent l'éditeur ;
        seules les ``rules`` sont évaluées par ``validate_compliance``.
    EN: ``required_fields`` and ``mandatory_mentions`` feed the editor;
        only ``rules`` are evaluated by ``validate_compliance``.
    """

    required_fields: tuple[str, ...] = Field(..., min_length=1)
    mandatory_mentions: tuple[str, ...] = ()
    rules: tuple[ComplianceRule, ...] = Field(..., min_length=1)


class ComplianceResult(BaseModel):
    """Résultat de la validation de conformité.

    FR: ``valid`` est vrai si et seulement si aucune règle de sévérité
        ``error`` n'a échoué.
    EN: ``valid`` is true iff no ``error`` rule failed.
    """

    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    info: list[str] = Field(default_factory=list)


class NumberFormats(_FrozenModel):
    """Formats de numérotation (``{YYYY}``, ``{YY}``, ``{MM}``, ``{NNNN}``…)."""

    quote: str
    invoice: str


class OfficialContacts(_FrozenModel):
    """Organismes officiels de référence pour les litiges."""

    consumer_protection: str | None = None
    trade_register: str | None = None
    tax_authority: str | None = None


class LocalePack(_FrozenModel):
    """Pack de localisation complet.

    FR: Valeur immuable indexée par ``LocaleCode``. Accessible uniquement via
        le registre (``devispack.locales``), qui garantit le repli vers le
        pack par défaut.
    EN: Immutable value keyed by ``LocaleCode``. Reachable only through the
        registry (``devispack.locales``), which guarantees the fallback.
    """

    code: LocaleCode
    name: str
    country: str
    flag: str
    tax: TaxConfig
    currency: CurrencyConfig
    date: DateConfig
    legal: LegalMentions
    vocabulary: Vocabulary
    compliance: ComplianceRequirements
    number_formats: NumberFormats
    official_contacts: OfficialContacts = Field(default_factory=OfficialContacts)
