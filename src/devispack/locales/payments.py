"""Références de paiement : communication structurée belge et QR EPC.

FR: - Communication structurée belge (``+++XXX/XXXX/XXXXX+++``) : dix
      chiffres tirés du numéro de facture suivis d'un contrôle modulo 97.
    - Charge utile du QR code EPC (EPC069-12, version 002) pour les
      virements SEPA, lisible par les applications bancaires.
EN: Belgian structured creditor reference and EPC069-12 SEPA credit
    transfer QR payload.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal

from devispack.utils.values import to_decimal

_NON_DIGIT_RE = re.compile(r"\D")
_WHITESPACE_RE = re.compile(r"\s+")
_STRUCTURED_REFERENCE_RE = re.compile(r"^\+\+\+(\d{3})/(\d{4})/(\d{5})\+\+\+$")

EPC_CURRENCIES = frozenset({"EUR", "CHF"})
"""Devises acceptées dans le QR EPC / Accepted EPC currencies."""

EPC_NAME_MAX_LENGTH = 70
EPC_REMITTANCE_MAX_LENGTH = 140
IBAN_MIN_LENGTH = 15


def _mod97_check(digits: str) -> int:
    checksum = int(digits) % 97
    return checksum or 97


def generate_structured_reference(number: object) -> str:
    """Génère une communication structurée belge à partir d'un numéro.

    FR: Les chiffres du numéro (``FAC-2024-0042`` → ``20240042``) sont
        complétés à gauche par des zéros ou réduits aux dix derniers, puis
        suivis du reste de leur division par 97 (97 si le reste est nul).
    EN: The digits of the number are left-padded or cut to the last ten,
        then followed by their mod-97 remainder (97 when zero).

    Example:
        >>> generate_structured_reference("FAC-2024-0042")
        '+++002/0240/04222+++'
    """
    digits = _NON_DIGIT_RE.sub("", str(number)).zfill(10)[-10:]
    full = f"{digits}{_mod97_check(digits):02d}"
    return f"+++{full[:3]}/{full[3:7]}/{full[7:]}+++"


def is_valid_structured_reference(value: object) -> bool:
    """Vérifie le format et la clé modulo 97 d'une communication structurée."""
    if not isinstance(value, str):
        return False
    match = _STRUCTURED_REFERENCE_RE.match(value.strip())
    if match is None:
        return False
    full = "".join(match.groups())
    return _mod97_check(full[:10]) == int(full[10:])


def format_iban(iban: str) -> str:
    """Formate un IBAN pour l'affichage (groupes de 4 caractères).

    Example:
        >>> format_iban("be68539007547034")
        'BE68 5390 0754 7034'
    """
    clean = _WHITESPACE_RE.sub("", iban).upper()
    return " ".join(clean[i : i + 4] for i in range(0, len(clean), 4))


def _epc_amount(amount: object, currency: str) -> str:
    value = to_decimal(amount)
    if value is None:
        return ""
    rounded = value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{currency}{rounded}"


def generate_epc_payload(
    beneficiary_name: str,
    iban: str,
    amount: object,
    currency: str = "EUR",
    bic: str | None = None,
    reference: str | None = None,
    remittance_info: str | None = None,
) -> str:
    """Construit la charge utile d'un QR code de virement SEPA (EPC069-12).

    FR: Douze lignes : ``BCD``, version ``002``, jeu de caractères ``1``
        (UTF-8), ``SCT``, BIC, bénéficiaire (70 car. max), IBAN sans
        espaces, montant (``EUR12.50``), code motif (vide), référence
        structurée, communication libre (140 car. max), information
        bénéficiaire (vide).
    EN: Twelve newline-separated lines per EPC069-12 version 002.

    Args:
        beneficiary_name: Nom du bénéficiaire.
        iban: IBAN du bénéficiaire (espaces tolérés).
        amount: Montant à payer.
        currency: Code devise (``EUR`` ou ``CHF``).
        bic: BIC du bénéficiaire (facultatif).
        reference: Référence structurée (facultative).
        remittance_info: Communication libre (facultative).

    Returns:
        La charge utile à encoder dans le QR code.
    """
    lines = [
        "BCD",
        "002",
        "1",
        "SCT",
        bic or "",
        beneficiary_name[:EPC_NAME_MAX_LENGTH],
        _WHITESPACE_RE.sub("", iban),
        _epc_amount(amount, currency),
        "",
        reference or "",
        (remittance_info or "")[:EPC_REMITTANCE_MAX_LENGTH],
        "",
    ]
    return "\n".join(lines)


def is_valid_epc_data(
    beneficiary_name: object,
    iban: object,
    amount: object,
    currency: object,
) -> bool:
    """Indique si les données permettent de générer un QR EPC exploitable."""
    if not isinstance(beneficiary_name, str) or not beneficiary_name.strip():
        return False
    if not isinstance(iban, str) or len(_WHITESPACE_RE.sub("", iban)) < IBAN_MIN_LENGTH:
        return False
    value = to_decimal(amount)
    if value is None or value <= 0:
        return False
    return isinstance(currency, str) and currency in EPC_CURRENCIES
