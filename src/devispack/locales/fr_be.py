"""Pack de localisation : Belgique francophone (fr-BE).

FR: TVA belge (21 % / 12 % / 6 % / 0 %), montants au format 1.234,56 €,
    mentions du Code de droit économique et de la loi du 2 août 2002.
EN: Belgian VAT, 1.234,56 € amounts, Belgian legal mentions.
"""

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from devispack.locales.rules import allowed_tax_rate
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

_RATES = (Decimal("0"), Decimal("6"), Decimal("12"), Decimal("21"))


def _deposit_within_consumer_limit(data: Mapping[str, Any]) -> bool:
    if not data.get("is_consumer"):
        return True
    percent = to_decimal(data.get("deposit_percent"))
    return percent is None or percent <= 50


PACK = LocalePack(
    code=LocaleCode.FR_BE,
    name="Français (Belgique)",
    country="Belgique",
    flag="🇧🇪",
    tax=TaxConfig(
        standard=Decimal("21"),
        reduced=Decimal("12"),
        super_reduced=Decimal("6"),
        zero=Decimal("0"),
        label="TVA",
        rates=(
            TaxRate(
                value=Decimal("0"),
                label="0% (Exonéré)",
                description="Services médicaux, formations, etc.",
            ),
            TaxRate(
                value=Decimal("6"),
                label="6% (Super réduit)",
                description="Rénovation logement >10 ans, alimentation de base",
            ),
            TaxRate(
                value=Decimal("12"),
                label="12% (Réduit)",
                description="Restauration, logement social",
            ),
            TaxRate(
                value=Decimal("21"),
                label="21% (Normal)",
                description="Taux standard applicable",
            ),
        ),
    ),
    currency=CurrencyConfig(
        code="EUR",
        symbol="€",
        position=CurrencyPosition.AFTER,
        decimal_separator=",",
        thousands_separator=".",
        decimals=2,
    ),
    date=DateConfig(format="DD/MM/YYYY", locale="fr-BE"),
    legal=LegalMentions(
        quote_validity=(
            "Ce devis est valable 30 jours à compter de sa date d'émission."
        ),
        payment_terms="Paiement à 30 jours date de facture, sauf accord contraire.",
        late_payment_penalties=(
            "En cas de retard de paiement, des intérêts de retard de 10% par an "
            "seront appliqués, ainsi qu'une indemnité forfaitaire de 40€ pour "
            "frais de recouvrement (Loi du 2 août 2002)."
        ),
        withdrawal_right=(
            "Conformément au Code de droit économique, le consommateur dispose "
            "d'un délai de 14 jours pour exercer son droit de rétractation pour "
            "les contrats conclus à distance."
        ),
        jurisdiction=(
            "Tout litige relatif au présent devis sera soumis aux tribunaux "
            "compétents de l'arrondissement judiciaire du prestataire."
        ),
        data_protection=(
            "Vos données personnelles sont traitées conformément au RGPD. Pour "
            "plus d'informations, consultez notre politique de confidentialité."
        ),
        professional_insurance=(
            "Entreprise assurée en responsabilité civile professionnelle."
        ),
    ),
    vocabulary=Vocabulary(
        quote="Devis",
        invoice="Facture",
        client="Client",
        provider="Prestataire",
        vat="TVA",
        vat_number="Numéro de TVA",
        subtotal="Sous-total HTVA",
        total="Total TVAC",
        deposit="Acompte",
        balance="Solde",
        terms="Conditions générales",
        conditions="Conditions particulières",
        validity="Validité",
        payment_due="Échéance",
        bank_transfer="Virement bancaire",
        cash="Espèces",
        registration_number="Numéro BCE",
        social_security="ONSS",
        work_permit="Permis de travail",
        structured_reference="Communication structurée",
    ),
    compliance=ComplianceRequirements(
        required_fields=(
            "company_name",
            "vat_number",
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
            "Numéro de TVA de l'entreprise",
            "Numéro BCE (Banque-Carrefour des Entreprises)",
            "Conditions de paiement",
            "Validité du devis",
        ),
        rules=(
            ComplianceRule(
                id="vat_format_be",
                field="vat_number",
                description=(
                    "Le numéro de TVA belge doit être au format BE0XXX.XXX.XXX"
                ),
                severity=Severity.ERROR,
                pattern=r"^BE[01]?\d{3}\.?\d{3}\.?\d{3}$",
                required=True,
            ),
            ComplianceRule(
                id="deposit_max_50",
                field="deposit_percent",
                description=(
                    "L'acompte ne peut généralement pas dépasser 50% pour les "
                    "particuliers"
                ),
                severity=Severity.WARNING,
                check=_deposit_within_consumer_limit,
            ),
            ComplianceRule(
                id="non_standard_vat_be",
                field="tax_rate",
                description=(
                    "Le taux TVA utilisé diffère du taux standard belge (21%). "
                    "Taux disponibles: 0%, 6%, 12%, 21%"
                ),
                severity=Severity.INFO,
                check=allowed_tax_rate(_RATES),
            ),
        ),
    ),
    number_formats=NumberFormats(
        quote="DEV-{YYYY}-{NNNN}",
        invoice="FAC-{YYYY}-{NNNN}",
    ),
    official_contacts=OfficialContacts(
        consumer_protection="SPF Économie - https://economie.fgov.be",
        trade_register="BCE - https://kbopub.economie.fgov.be",
        tax_authority="SPF Finances - https://finances.belgium.be",
    ),
)
