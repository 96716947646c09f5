"""Énumérations pour les packs de localisation et les templates de documents.

FR: Codes de locale supportés, niveaux de sévérité de conformité, types de
    documents et de blocs de template, formats de page.
EN: Supported locale codes, compliance severities, document and template
    block types, page formats.
"""

from enum import StrEnum


class LocaleCode(StrEnum):
    """Code de locale (variante pays/langue).

    FR: Ensemble fermé des variantes supportées. Toute valeur externe doit
        passer par ``is_valid_locale_code`` avant d'être utilisée.
    EN: Closed set of supported variants. External values must go through
        ``is_valid_locale_code`` before use.
    """

    FR_BE = "fr-BE"
    """Français (Belgique) / French (Belgium)"""

    FR_FR = "fr-FR"
    """Français (France) / French (France)"""

    FR_CH = "fr-CH"
    """Français (Suisse) / French (Switzerland)"""


DEFAULT_LOCALE = LocaleCode.FR_BE
"""Locale de repli pour toute valeur absente ou invalide / Fallback locale."""


class CurrencyPosition(StrEnum):
    """Position du symbole monétaire par rapport au montant."""

    BEFORE = "before"
    """Avant le montant, sans espace (CHF1'234.56) / Before, no space"""

    AFTER = "after"
    """Après le montant, avec espace (1.234,56 €) / After, with a space"""


class Severity(StrEnum):
    """Sévérité d'une règle de conformité.

    FR: Seules les erreurs rendent un devis non conforme ; les avertissements
        et informations sont remontés à l'utilisateur sans bloquer.
    EN: Only errors make a quote non-compliant; warnings and info are
        surfaced without blocking.
    """

    ERROR = "error"
    """Bloquant / Blocking"""

    WARNING = "warning"
    """Avertissement / Warning"""

    INFO = "info"
    """Information / Info"""


class TemplateType(StrEnum):
    """Type de document produit par un template."""

    QUOTE = "quote"
    """Devis / Quote"""

    INVOICE = "invoice"
    """Facture / Invoice"""

    CONTRACT = "contract"
    """Contrat / Contract"""

    DELIVERY_NOTE = "delivery_note"
    """Bon de livraison / Delivery note"""


class BlockType(StrEnum):
    """Type de bloc de template.

    FR: Ensemble fermé des blocs connus du moteur de rendu. Un type inconnu
        (template produit par une version plus récente) est conservé tel quel
        et rendu vide.
    EN: Closed set of blocks known to the renderer. Unknown types are kept
        as-is and render empty.
    """

    HEADER = "header"
    COMPANY_INFO = "company_info"
    CLIENT_INFO = "client_info"
    DOCUMENT_INFO = "document_info"
    ITEMS_TABLE = "items_table"
    TOTALS = "totals"
    NOTES = "notes"
    FOOTER = "footer"
    SIGNATURE = "signature"
    TEXT = "text"
    IMAGE = "image"
    SPACER = "spacer"
    DIVIDER = "divider"
    QR_CODE = "qr_code"
    WATERMARK = "watermark"


class PageSize(StrEnum):
    """Format de page."""

    A4 = "A4"
    LETTER = "Letter"
    LEGAL = "Legal"


class Orientation(StrEnum):
    """Orientation de page."""

    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class ColumnAlign(StrEnum):
    """Alignement d'une colonne de tableau."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class ColumnFormat(StrEnum):
    """Format d'affichage des valeurs d'une colonne de tableau."""

    TEXT = "text"
    """Valeur brute / Raw value"""

    NUMBER = "number"
    """Nombre avec séparateurs de la locale / Locale-grouped number"""

    CURRENCY = "currency"
    """Montant formaté selon la devise de la locale / Locale currency"""

    PERCENTAGE = "percentage"
    """Pourcentage / Percentage"""


class SignatureType(StrEnum):
    """Présentation du bloc signature."""

    LINE = "line"
    """Ligne de signature / Signature line"""

    BOX = "box"
    """Cadre de signature / Signature box"""

    DIGITAL = "digital"
    """Marqueur de signature électronique / Digital signature marker"""
