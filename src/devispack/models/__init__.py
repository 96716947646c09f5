"""Modèles de données Pydantic : packs de localisation et templates."""

from devispack.models.enums import (
    DEFAULT_LOCALE,
    BlockType,
    LocaleCode,
    Severity,
    TemplateType,
)
from devispack.models.locale import (
    ComplianceResult,
    ComplianceRule,
    LocalePack,
    TaxRate,
)
from devispack.models.template import (
    BlockStyle,
    DocumentTemplate,
    GlobalStyles,
    Margins,
    TableColumn,
    TemplateBlock,
    UnknownBlock,
)

__all__ = [
    "DEFAULT_LOCALE",
    "BlockStyle",
    "BlockType",
    "ComplianceResult",
    "ComplianceRule",
    "DocumentTemplate",
    "GlobalStyles",
    "LocaleCode",
    "LocalePack",
    "Margins",
    "Severity",
    "TableColumn",
    "TaxRate",
    "TemplateBlock",
    "TemplateType",
    "UnknownBlock",
]
