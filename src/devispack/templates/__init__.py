"""Moteur de templates de devis et factures.

FR: Interpolation des variables ``{{clé}}``, rendu HTML des blocs,
    templates intégrés et persistance (création, mise à jour, duplication).
EN: ``{{key}}`` interpolation, HTML block rendering, built-in templates and
    persistence (create, update, duplicate).
"""

from devispack.templates.crud import (
    create_template,
    duplicate_template,
    get_template,
    list_templates,
    template_from_row,
    template_to_row,
    update_template,
)
from devispack.templates.defaults import DEFAULT_TEMPLATES, get_default_template
from devispack.templates.errors import (
    TemplateError,
    TemplateNotFoundError,
    TemplatePersistenceError,
)
from devispack.templates.interpolation import interpolate_template
from devispack.templates.renderer import (
    BaseRenderer,
    HTMLRenderer,
    RenderResult,
    generate_html_preview,
    render_block,
)
from devispack.templates.variables import TEMPLATE_VARIABLES, find_variables

__all__ = [
    "BaseRenderer",
    "DEFAULT_TEMPLATES",
    "HTMLRenderer",
    "RenderResult",
    "TEMPLATE_VARIABLES",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplatePersistenceError",
    "create_template",
    "duplicate_template",
    "find_variables",
    "generate_html_preview",
    "get_default_template",
    "get_template",
    "interpolate_template",
    "list_templates",
    "render_block",
    "template_from_row",
    "template_to_row",
    "update_template",
]
