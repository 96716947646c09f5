"""Pack de localisation : Suisse romande (fr-CH).

FR: TVA suisse (8,1 % / 3,8 % / 2,6 % / 0 %), montants au format
    CHF1'234.56, dates DD.MM.YYYY, numéro IDE obligatoire et QR-facture.
EN: Swiss VAT, CHF1'234.56 amounts, DD.MM.YYYY dates, mandatory UID
    number and QR-bill hints.
"""

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from devispack.locales.rules import allowed_tax_rate, is_present, text_value
from devispack.models.enums import CurrencyPosition, LocaleCode, Severity
from devispack.models.locale import (
    ComplianceRequirements,
    ComplianceRule,
    CurrencyConfig,
    DateConfig,
    LegalMentions,
    LocalePack,
    NumberFormats,
    OfficialContacts,
    TaxConfig,
    TaxRate,
    Vocabulary,
)
from devispack.utils.values import to_decimal

_RATES = (Decimal("0"), Decimal("2.6"), Decimal("3.8"), Decimal("8.1"))

VAT_REGISTRATION_THRESHOLD = Decimal("100000")
"""Chiffre d'affaires au-delà duquel l'assujettissement est obligatoire."""


def _registered_above_threshold(data: Mapping[str, Any]) -> bool:
    revenue = to_decimal(data.get("annual_revenue"))
    if revenue is None or revenue <= VAT_REGISTRATION_THRESHOLD:
        return True
    return is_present(data, "vat_number")


def _swiss_iban(data: Mapping[str, Any]) -> bool:
    iban = text_value(data, "iban")
    return not iban or iban.upper().startswith("CH")


def _currency_is_chf(data: Mapping[str, Any]) -> bool:
    currency = text_value(data, "currency")
    return not currency or currency.upper() == "CHF"


PACK = LocalePack(
    code=LocaleCode.FR_CH,
    name="Français (Suisse)",
    country="Suisse",
    flag="🇨🇭",
    tax=TaxConfig(
        standard=Decimal("8.1"),
        reduced=Decimal("2.6"),
        zero=Decimal("0"),
        label="TVA",
        rates=(
            TaxRate(
                value=Decimal("0"),
                label="0% (Exonéré)",
                description="Exportations, services médicaux, formations",
            ),
            TaxRate(
                value=Decimal("2.6"),
                label="2,6% (Réduit)",
                description="Alimentation, médicaments, livres, journaux",
            ),
            TaxRate(
                value=Decimal("3.8"),
                label="3,8% (Hébergement)",
                description="Services d'hébergement",
            ),
            TaxRate(
                value=Decimal("8.1"),
                label="8,1% (Normal)",
                description="Taux standard applicable",
            ),
        ),
    ),
    currency=CurrencyConfig(
        code="CHF",
        symbol="CHF",
        position=CurrencyPosition.BEFORE,
        decimal_separator=".",
        thousands_separator="'",
        decimals=2,
    ),
    date=DateConfig(format="DD.MM.YYYY", locale="fr-CH"),
    legal=LegalMentions(
        quote_validity=(
            "Ce devis est valable 30 jours à compter de sa date d'établissement."
        ),
        payment_terms=(
            "Paiement net à 30 jours. Un escompte de 2% est accordé pour "
            "paiement comptant."
        ),
        late_payment_penalties=(
            "En cas de retard de paiement, des intérêts moratoires de 5% l'an "
            "seront appliqués (Art. 104 CO)."
        ),
        jurisdiction=(
            "Le for juridique est au siège de l'entreprise. Le droit suisse est "
            "applicable."
        ),
        data_protection=(
            "Vos données sont traitées conformément à la Loi fédérale sur la "
            "protection des données (LPD)."
        ),
        professional_insurance=(
            "Entreprise au bénéfice d'une assurance responsabilité civile "
            "professionnelle."
        ),
    ),
    vocabulary=Vocabulary(
        quote="Devis",
        invoice="Facture",
        client="Client",
        provider="Prestataire",
        vat="TVA",
        vat_number="N° IDE-TVA",
        subtotal="Total hors TVA",
        total="Total TTC",
        deposit="Acompte",
        balance="Solde",
        terms="CG",
        conditions="Conditions particulières",
        validity="Validité",
        payment_due="Échéance",
        bank_transfer="Virement bancaire",
        cash="Comptant",
        ide="Numéro IDE",
        rc="Registre du Commerce",
        canton="Canton",
        qr_bill="QR-facture",
    ),
    compliance=ComplianceRequirements(
        required_fields=(
            "company_name",
            "ide_number",
            "address",
            "quote_number",
            "date",
            "client_name",
            "description",
            "quantity",
            "unit_price",
            "vat_rate",
            "total",
        ),
        mandatory_mentions=(
            "Numéro IDE (Identification des entreprises)",
            "Raison sociale complète",
            "Siège de l'entreprise",
            "Numéro de TVA si assujetti",
        ),
        rules=(
            ComplianceRule(
                id="ide_format",
                field="ide_number",
                description="Le numéro IDE doit être au format CHE-XXX.XXX.XXX",
                severity=Severity.ERROR,
                pattern=r"^CHE-?\d{3}\.?\d{3}\.?\d{3}$",
                required=True,
            ),
            ComplianceRule(
                id="vat_format_ch",
                field="vat_number",
                description=(
                    "Le numéro de TVA suisse doit être au format "
                    "CHE-XXX.XXX.XXX TVA"
                ),
                severity=Severity.ERROR,
                pattern=r"^CHE-?\d{3}\.?\d{3}\.?\d{3}(TVA|MWST|IVA)?$",
            ),
            ComplianceRule(
                id="vat_threshold",
                field="vat_number",
                description=(
                    "L'assujettissement à la TVA est obligatoire au-delà de "
                    "CHF 100'000 de CA"
                ),
                severity=Severity.WARNING,
                check=_registered_above_threshold,
            ),
            ComplianceRule(
                id="qr_bill_iban",
                field="iban",
                description=(
                    "Pour la QR-facture, un IBAN suisse (QR-IBAN) est recommandé"
                ),
                severity=Severity.INFO,
                check=_swiss_iban,
            ),
            ComplianceRule(
                id="currency_mismatch_ch",
                field="currency",
                description=(
                    "En Suisse, les devis doivent être en CHF (franc suisse), "
                    "pas en EUR"
                ),
                severity=Severity.WARNING,
                check=_currency_is_chf,
            ),
            ComplianceRule(
                id="non_standard_vat_ch",
                field="tax_rate",
                description=(
                    "Le taux TVA utilisé diffère du taux standard suisse (8.1%). "
                    "Taux disponibles: 0%, 2.6%, 3.8%, 8.1%"
                ),
                severity=Severity.INFO,
                check=allowed_tax_rate(_RATES),
            ),
        ),
    ),
    number_formats=NumberFormats(
        quote="OFF-{YYYY}-{NNNN}",
        invoice="FACT-{YYYY}-{NNNN}",
    ),
    official_contacts=OfficialContacts(
        consumer_protection="SECO - https://www.seco.admin.ch",
        trade_register="Zefix - https://www.zefix.ch",
        tax_authority="AFC - https://www.estv.admin.ch",
    ),
)
