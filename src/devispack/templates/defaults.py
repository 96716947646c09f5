"""Templates intégrés proposés à tous les utilisateurs."""

from devispack.models.enums import TemplateType
from devispack.models.template import DocumentTemplate

_CLASSIC_QUOTE = {
    "name": "Classique Professionnel",
    "type": TemplateType.QUOTE,
    "category": "Classique",
    "pageSize": "A4",
    "orientation": "portrait",
    "margins": {"top": 40, "right": 40, "bottom": 40, "left": 40},
    "globalStyles": {
        "primaryColor": "#1E3A5F",
        "secondaryColor": "#C9A962",
        "fontFamily": "Helvetica",
        "baseFontSize": 10,
    },
    "blocks": [
        {
            "id": "header-1",
            "type": "header",
            "order": 0,
            "visible": True,
            "config": {"showLogo": True, "logoPosition": "left", "title": "DEVIS"},
            "style": {"marginBottom": "20px"},
        },
        {
            "id": "info-row",
            "type": "document_info",
            "order": 1,
            "visible": True,
            "config": {},
            "style": {
                "display": "flex",
                "justifyContent": "space-between",
                "marginBottom": "20px",
            },
        },
        {
            "id": "client-info",
            "type": "client_info",
            "order": 2,
            "visible": True,
            "config": {},
            "style": {"marginBottom": "20px"},
        },
        {
            "id": "items-table",
            "type": "items_table",
            "order": 3,
            "visible": True,
            "config": {
                "columns": [
                    {"id": "desc", "header": "Description", "field": "description",
                     "width": "40%", "align": "left"},
                    {"id": "qty", "header": "Qté", "field": "quantity",
                     "width": "10%", "align": "center"},
                    {"id": "unit", "header": "Unité", "field": "unit",
                     "width": "10%", "align": "center"},
                    {"id": "price", "header": "P.U. HT", "field": "unit_price",
                     "width": "20%", "align": "right", "format": "currency"},
                    {"id": "total", "header": "Total HT", "field": "total",
                     "width": "20%", "align": "right", "format": "currency"},
                ],
                "showItemNumbers": True,
                "alternateRowColors": True,
            },
            "style": {"marginBottom": "20px"},
        },
        {
            "id": "totals",
            "type": "totals",
            "order": 4,
            "visible": True,
            "config": {"showSubtotal": True, "showTax": True, "showTotal": True},
            "style": {"marginBottom": "20px"},
        },
        {
            "id": "notes",
            "type": "notes",
            "order": 5,
            "visible": True,
            "config": {},
            "style": {"marginBottom": "20px"},
        },
        {
            "id": "footer",
            "type": "footer",
            "order": 6,
            "visible": True,
            "config": {
                "showPageNumbers": True,
                "legalText": (
                    "Devis valable 30 jours. Paiement selon conditions convenues."
                ),
            },
            "style": {},
        },
    ],
}

_COMPACT_INVOICE = {
    "name": "Facture Compacte",
    "type": TemplateType.INVOICE,
    "category": "Moderne",
    "pageSize": "A4",
    "orientation": "portrait",
    "margins": {"top": 30, "right": 30, "bottom": 30, "left": 30},
    "globalStyles": {
        "primaryColor": "#0F766E",
        "secondaryColor": "#F59E0B",
        "fontFamily": "Helvetica",
        "baseFontSize": 9,
    },
    "blocks": [
        {
            "id": "header",
            "type": "header",
            "order": 0,
            "config": {"showLogo": True, "title": "FACTURE"},
            "style": {"marginBottom": "12px"},
        },
        {
            "id": "company",
            "type": "company_info",
            "order": 1,
            "style": {"marginBottom": "12px"},
        },
        {
            "id": "client",
            "type": "client_info",
            "order": 2,
            "style": {"marginBottom": "12px"},
        },
        {
            "id": "document",
            "type": "document_info",
            "order": 3,
            "config": {"variables": ["document_number", "document_date", "due_date"]},
            "style": {"marginBottom": "12px"},
        },
        {
            "id": "items",
            "type": "items_table",
            "order": 4,
            "config": {
                "columns": [
                    {"id": "desc", "header": "Description", "field": "description",
                     "width": "50%"},
                    {"id": "qty", "header": "Qté", "field": "quantity",
                     "width": "10%", "align": "center", "format": "number"},
                    {"id": "price", "header": "P.U. HT", "field": "unit_price",
                     "width": "20%", "align": "right", "format": "currency"},
                    {"id": "total", "header": "Total HT", "field": "total",
                     "width": "20%", "align": "right", "format": "currency"},
                ],
            },
        },
        {
            "id": "totals",
            "type": "totals",
            "order": 5,
            "config": {
                "showSubtotal": True,
                "showTax": True,
                "showTotal": True,
                "showAmountInWords": True,
            },
            "style": {"marginBottom": "12px"},
        },
        {
            "id": "payment",
            "type": "text",
            "order": 6,
            "config": {
                "content": (
                    "Paiement par virement sur le compte {{company_iban}}\n"
                    "Communication : {{structured_reference}}"
                ),
                "variables": ["company_iban", "structured_reference"],
            },
        },
        {
            "id": "payment-qr",
            "type": "qr_code",
            "order": 7,
            "config": {"epcPayment": True, "qrSize": 110},
            "style": {"textAlign": "right"},
        },
        {
            "id": "footer",
            "type": "footer",
            "order": 8,
            "config": {"showPageNumbers": True},
        },
    ],
}

DEFAULT_TEMPLATES: tuple[DocumentTemplate, ...] = (
    DocumentTemplate.model_validate(_CLASSIC_QUOTE),
    DocumentTemplate.model_validate(_COMPACT_INVOICE),
)
"""Templates intégrés / Built-in templates."""


def get_default_template(name: str) -> DocumentTemplate:
    """Retourne une copie indépendante d'un template intégré.

    Raises:
        KeyError: Si aucun template intégré ne porte ce nom.
    """
    for template in DEFAULT_TEMPLATES:
        if template.name == name:
            return template.model_copy(deep=True)
    msg = f"Template intégré inconnu : {name}"
    raise KeyError(msg)
