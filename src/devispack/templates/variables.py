"""Catalogue des variables de template.

FR: Variables ``{{clé}}`` proposées dans l'éditeur, avec un libellé et un
    exemple. Le catalogue n'est pas contraignant : une variable absente
    des données reste visible telle quelle dans le rendu.
EN: ``{{key}}`` variables offered by the editor, with a label and an
    example. Not enforced at render time.
"""

import re

from pydantic import BaseModel, ConfigDict

VARIABLE_RE = re.compile(r"\{\{(\w+)\}\}")
"""Motif d'une variable ``{{clé}}`` / Variable placeholder pattern."""


class TemplateVariable(BaseModel):
    """Variable proposée par l'éditeur de templates."""

    model_config = ConfigDict(frozen=True)

    label: str
    example: str


def _var(label: str, example: str) -> TemplateVariable:
    return TemplateVariable(label=label, example=example)


TEMPLATE_VARIABLES: dict[str, TemplateVariable] = {
    # Document
    "document_number": _var("Numéro de document", "D2024-00001"),
    "document_date": _var("Date du document", "26/01/2024"),
    "valid_until": _var("Valide jusqu'au", "26/02/2024"),
    "due_date": _var("Date d'échéance", "26/02/2024"),
    # Entreprise
    "company_name": _var("Nom entreprise", "Mon Entreprise SPRL"),
    "company_address": _var("Adresse entreprise", "Rue Example 123"),
    "company_postal_code": _var("Code postal entreprise", "1000"),
    "company_city": _var("Ville entreprise", "Bruxelles"),
    "company_phone": _var("Téléphone entreprise", "+32 2 123 45 67"),
    "company_email": _var("Email entreprise", "contact@monentreprise.be"),
    "company_vat": _var("N° TVA entreprise", "BE0123.456.789"),
    "company_iban": _var("IBAN entreprise", "BE00 0000 0000 0000"),
    "company_bic": _var("BIC entreprise", "GEBABEBB"),
    # Client
    "client_name": _var("Nom client", "Client SPRL"),
    "client_address": _var("Adresse client", "Avenue du Client 456"),
    "client_postal_code": _var("Code postal client", "2000"),
    "client_city": _var("Ville client", "Anvers"),
    "client_email": _var("Email client", "contact@client.be"),
    "client_phone": _var("Téléphone client", "+32 3 987 65 43"),
    "client_vat": _var("N° TVA client", "BE0987.654.321"),
    # Montants
    "subtotal": _var("Sous-total HT", "1 000,00 €"),
    "tax_rate": _var("Taux TVA", "21%"),
    "tax_amount": _var("Montant TVA", "210,00 €"),
    "total": _var("Total TTC", "1 210,00 €"),
    "total_in_words": _var("Total en lettres", "Mille deux cent dix euros"),
    "amount_paid": _var("Montant payé", "0,00 €"),
    "amount_due": _var("Montant dû", "1 210,00 €"),
    # Paiement
    "structured_reference": _var("Communication structurée", "+++123/4567/89012+++"),
    "payment_terms": _var("Conditions de paiement", "Paiement à 30 jours"),
    # Autres
    "current_date": _var("Date actuelle", "26/01/2024"),
    "page_number": _var("Numéro de page", "1"),
    "total_pages": _var("Total pages", "2"),
}


def find_variables(text: str) -> list[str]:
    """Liste les clés ``{{clé}}`` présentes dans un texte, dans l'ordre.

    Example:
        >>> find_variables("Devis {{document_number}} pour {{client_name}}")
        ['document_number', 'client_name']
    """
    if not isinstance(text, str):
        return []
    return VARIABLE_RE.findall(text)


def variable_label(key: str) -> str:
    """Libellé d'une variable du catalogue (la clé elle-même si inconnue)."""
    variable = TEMPLATE_VARIABLES.get(key)
    return variable.label if variable is not None else key


def example_data() -> dict[str, object]:
    """Données d'exemple pour l'aperçu d'un template dans l'éditeur.

    FR: Les exemples du catalogue, complétés de deux postes et des montants
        bruts correspondants (formatés au rendu selon la locale).
    EN: Catalogue examples plus two line items and raw amounts.
    """
    data: dict[str, object] = {key: variable.example for key, variable in TEMPLATE_VARIABLES.items()}
    data.update(
        {
            "items": [
                {"description": "Prestation exemple", "quantity": 1, "unit": "forfait",
                 "unit_price": 800, "total": 800},
                {"description": "Fournitures", "quantity": 4, "unit": "pce",
                 "unit_price": 50, "total": 200},
            ],
            "subtotal": 1000,
            "tax_rate": 21,
            "tax_amount": 210,
            "total": 1210,
            "amount_due": 1210,
            "notes": "Merci pour votre confiance.",
        }
    )
    return data
