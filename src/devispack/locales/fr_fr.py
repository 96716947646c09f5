"""Pack de localisation : France (fr-FR).

FR: TVA française (20 % / 10 % / 5,5 % / 2,1 % / 0 %), montants au format
    1 234,56 €, SIRET obligatoire, pénalités de l'art. L441-10 du Code de
    commerce et garantie décennale pour les métiers du bâtiment.
EN: French VAT, 1 234,56 € amounts, mandatory SIRET, French legal
    mentions and ten-year building warranty.
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

_RATES = (
    Decimal("0"),
    Decimal("2.1"),
    Decimal("5.5"),
    Decimal("10"),
    Decimal("20"),
)

BUILDING_SECTORS = frozenset(
    {"CONSTRUCTION", "RENOVATION", "TOITURE", "ELECTRICITE", "PLOMBERIE", "CHAUFFAGE"}
)
"""Secteurs soumis à l'assurance décennale / Sectors requiring it."""

FRANCHISE_MENTION = "art. 293 B"
"""Référence de la franchise en base de TVA (CGI) / VAT exemption mention."""


def _auto_entrepreneur_mention(data: Mapping[str, Any]) -> bool:
    if not data.get("is_auto_entrepreneur"):
        return True
    if to_decimal(data.get("tax_rate")) != 0:
        return True
    return FRANCHISE_MENTION.lower() in text_value(data, "notes").lower()


def _decennale_declared(data: Mapping[str, Any]) -> bool:
    if text_value(data, "sector").upper() not in BUILDING_SECTORS:
        return True
    return is_present(data, "decennale_number")


PACK = LocalePack(
    code=LocaleCode.FR_FR,
    name="Français (France)",
    country="France",
    flag="🇫🇷",
    tax=TaxConfig(
        standard=Decimal("20"),
        reduced=Decimal("10"),
        super_reduced=Decimal("5.5"),
        zero=Decimal("0"),
        label="TVA",
        rates=(
            TaxRate(
                value=Decimal("0"),
                label="0% (Exonéré)",
                description="Activités exonérées, DOM-TOM",
            ),
            TaxRate(
                value=Decimal("2.1"),
                label="2,1% (Super réduit)",
                description="Médicaments remboursés, presse",
            ),
            TaxRate(
                value=Decimal("5.5"),
                label="5,5% (Réduit)",
                description="Alimentation, énergie, travaux rénovation énergétique",
            ),
            TaxRate(
                value=Decimal("10"),
                label="10% (Intermédiaire)",
                description="Restauration, travaux logement, transport",
            ),
            TaxRate(
                value=Decimal("20"),
                label="20% (Normal)",
                description="Taux standard applicable",
            ),
        ),
    ),
    currency=CurrencyConfig(
        code="EUR",
        symbol="€",
        position=CurrencyPosition.AFTER,
        decimal_separator=",",
        thousands_separator=" ",
        decimals=2,
    ),
    date=DateConfig(format="DD/MM/YYYY", locale="fr-FR"),
    legal=LegalMentions(
        quote_validity=(
            "Ce devis est valable 30 jours à compter de sa date d'émission, "
            "sauf indication contraire."
        ),
        payment_terms=(
            "Paiement à 30 jours date de facture. Pas d'escompte pour paiement "
            "anticipé."
        ),
        late_payment_penalties=(
            "En cas de retard de paiement, une pénalité de 3 fois le taux "
            "d'intérêt légal sera appliquée, ainsi qu'une indemnité forfaitaire "
            "de 40€ pour frais de recouvrement (Art. L441-10 Code de commerce)."
        ),
        withdrawal_right=(
            "Conformément au Code de la consommation (Art. L221-18), le "
            "consommateur dispose d'un délai de 14 jours pour exercer son droit "
            "de rétractation."
        ),
        jurisdiction=(
            "Tout litige relatif au présent devis sera soumis à la compétence "
            "exclusive des tribunaux français."
        ),
        data_protection=(
            "Conformément à la loi Informatique et Libertés et au RGPD, vous "
            "disposez d'un droit d'accès, de rectification et de suppression de "
            "vos données."
        ),
        professional_insurance=(
            "Garantie décennale et assurance responsabilité civile "
            "professionnelle souscrites."
        ),
    ),
    vocabulary=Vocabulary(
        quote="Devis",
        invoice="Facture",
        client="Client",
        provider="Prestataire",
        vat="TVA",
        vat_number="N° TVA intracommunautaire",
        subtotal="Total HT",
        total="Total TTC",
        deposit="Acompte",
        balance="Solde à payer",
        terms="CGV",
        conditions="Conditions particulières",
        validity="Validité du devis",
        payment_due="Date d'échéance",
        bank_transfer="Virement bancaire",
        cash="Espèces",
        siret="SIRET",
        siren="SIREN",
        rcs="RCS",
        ape="Code APE",
        decennale="Garantie décennale",
    ),
    compliance=ComplianceRequirements(
        required_fields=(
            "company_name",
            "siret",
            "address",
            "quote_number",
            "date",
            "client_name",
            "client_address",
            "description",
            "quantity",
            "unit_price",
            "vat_rate",
            "total_ht",
            "total_ttc",
        ),
        mandatory_mentions=(
            "Numéro SIRET",
            "Numéro RCS et ville",
            "Forme juridique et capital social",
            "Adresse du siège social",
            "Numéro de TVA intracommunautaire",
            'Mention "TVA non applicable, art. 293 B du CGI" si auto-entrepreneur',
        ),
        rules=(
            ComplianceRule(
                id="siret_format",
                field="siret",
                description="Le SIRET doit contenir 14 chiffres",
                severity=Severity.ERROR,
                pattern=r"^\d{14}$",
                required=True,
            ),
            ComplianceRule(
                id="vat_format_fr",
                field="vat_number",
                description=(
                    "Le numéro de TVA français doit être au format FR XX XXXXXXXXX"
                ),
                severity=Severity.ERROR,
                pattern=r"^FR\s?\d{2}\s?\d{9}$",
            ),
            ComplianceRule(
                id="auto_entrepreneur_mention",
                field="notes",
                description=(
                    "Mention obligatoire pour auto-entrepreneur exonéré de TVA"
                ),
                severity=Severity.ERROR,
                check=_auto_entrepreneur_mention,
            ),
            ComplianceRule(
                id="decennale_required",
                field="decennale_number",
                description=(
                    "Garantie décennale obligatoire pour travaux du bâtiment"
                ),
                severity=Severity.WARNING,
                check=_decennale_declared,
            ),
            ComplianceRule(
                id="non_standard_vat_fr",
                field="tax_rate",
                description=(
                    "Le taux TVA utilisé diffère du taux standard français (20%). "
                    "Taux disponibles: 0%, 2.1%, 5.5%, 10%, 20%"
                ),
                severity=Severity.INFO,
                check=allowed_tax_rate(_RATES),
            ),
        ),
    ),
    number_formats=NumberFormats(
        quote="D{YYYY}{MM}-{NNN}",
        invoice="F{YYYY}{MM}-{NNN}",
    ),
    official_contacts=OfficialContacts(
        consumer_protection="DGCCRF - https://www.economie.gouv.fr/dgccrf",
        trade_register="Infogreffe - https://www.infogreffe.fr",
        tax_authority="impots.gouv.fr - https://www.impots.gouv.fr",
    ),
)
