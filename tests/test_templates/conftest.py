"""Fixtures partagées pour les tests du moteur de templates."""

import pytest

from devispack.models.template import DocumentTemplate


@pytest.fixture
def sample_data() -> dict:
    """Données d'un devis de plomberie en Belgique."""
    return {
        "company_name": "Plomberie Dupont SRL",
        "company_address": "Rue Haute 12",
        "company_postal_code": "1000",
        "company_city": "Bruxelles",
        "company_phone": "+32 2 123 45 67",
        "company_email": "contact@dupont.be",
        "company_vat": "BE0123.456.789",
        "company_iban": "BE68539007547034",
        "client_name": "Marie Lambert",
        "client_address": "Avenue Louise 200",
        "client_postal_code": "1050",
        "client_city": "Ixelles",
        "document_number": "DEV-2024-0042",
        "document_date": "2024-01-15",
        "valid_until": "2024-02-14",
        "items": [
            {"description": "Tuyau", "quantity": 2, "unit": "m", "unit_price": 10},
            {"description": "Coude", "quantity": 4, "unit": "u", "unit_price": 3},
        ],
        "subtotal": 32,
        "tax_rate": 21,
        "tax_amount": 6.72,
        "total": 38.72,
    }


@pytest.fixture
def items_template() -> DocumentTemplate:
    """Template réduit à un tableau des postes."""
    return DocumentTemplate.model_validate(
        {
            "name": "Tableau seul",
            "blocks": [
                {
                    "id": "items",
                    "type": "items_table",
                    "order": 0,
                    "config": {
                        "columns": [
                            {"id": "desc", "header": "Description", "field": "description"},
                            {"id": "qty", "header": "Qté", "field": "quantity",
                             "align": "center"},
                            {"id": "unit", "header": "Unité", "field": "unit"},
                            {"id": "price", "header": "P.U.", "field": "unit_price",
                             "align": "right", "format": "currency"},
                        ],
                        "showItemNumbers": True,
                        "alternateRowColors": True,
                    },
                },
            ],
        }
    )


@pytest.fixture
def text_template() -> DocumentTemplate:
    """Template avec variables, bloc masqué et notes."""
    return DocumentTemplate.model_validate(
        {
            "name": "Devis {{document_number}}",
            "blocks": [
                {
                    "id": "intro",
                    "type": "text",
                    "order": 2,
                    "config": {"content": "Bonjour {{client_name}}, voici {{missing_key}}."},
                },
                {
                    "id": "header",
                    "type": "header",
                    "order": 0,
                    "config": {"title": "DEVIS {{document_number}}"},
                },
                {
                    "id": "secret",
                    "type": "text",
                    "order": 1,
                    "visible": False,
                    "config": {"content": "CONTENU-MASQUE"},
                },
                {
                    "id": "notes",
                    "type": "notes",
                    "order": 3,
                    "config": {"title": "Remarques"},
                },
            ],
        }
    )
