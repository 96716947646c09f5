"""Vues Django pour les templates de documents.

FR: Vues CBV asynchrones : aperçu HTML d'un template enregistré ou envoyé
    par l'éditeur, liste des templates d'un utilisateur et détection de la
    locale. Pas de dépendance à Django REST Framework.
EN: Async CBV views: HTML preview of a stored or posted template, template
    listing and locale detection. No DRF dependency.
"""

import json
import logging

from django.http import Http404, HttpResponse, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt
from pydantic import ValidationError

from devispack.contrib.django.conf import get_default_locale, get_setting, get_store_instance
from devispack.locales.detection import detect_locale
from devispack.locales.registry import get_locale_pack, is_valid_locale_code
from devispack.models.template import DocumentTemplate
from devispack.templates.crud import get_template, list_templates
from devispack.templates.errors import TemplateNotFoundError
from devispack.templates.renderer import generate_html_preview
from devispack.templates.variables import example_data

logger = logging.getLogger(__name__)

HTML_CONTENT_TYPE = "text/html; charset=utf-8"


class LocaleMixin:
    """Mixin résolvant la locale demandée (paramètre ``locale`` ou défaut)."""

    def get_locale(self, request) -> str:
        requested = request.GET.get("locale")
        if is_valid_locale_code(requested):
            return requested
        return get_default_locale()


class TemplatePreviewView(LocaleMixin, View):
    """Aperçu HTML d'un template enregistré avec des données d'exemple (GET)."""

    async def get(self, request, template_id: str) -> HttpResponse:
        """Rend le template avec les exemples du catalogue de variables."""
        try:
            template = await get_template(get_store_instance(), template_id)
        except TemplateNotFoundError as exc:
            raise Http404("Template introuvable.") from exc

        html = generate_html_preview(template, example_data(), locale=self.get_locale(request))
        return HttpResponse(html, content_type=HTML_CONTENT_TYPE)


@method_decorator(csrf_exempt, name="dispatch")
class LivePreviewView(LocaleMixin, View):
    """Aperçu HTML d'un template en cours d'édition (POST JSON)."""

    async def post(self, request) -> HttpResponse:
        """Corps attendu : ``{"template": {...}, "data": {...}}``."""
        try:
            payload = json.loads(request.body or b"{}")
        except json.JSONDecodeError:
            return JsonResponse({"error": "Corps JSON invalide."}, status=400)
        if not isinstance(payload, dict):
            return JsonResponse({"error": "Corps JSON invalide."}, status=400)

        try:
            template = DocumentTemplate.model_validate(payload.get("template"))
        except ValidationError as exc:
            return JsonResponse(
                {
                    "error": "Template invalide.",
                    "details": [error["msg"] for error in exc.errors(include_url=False)],
                },
                status=400,
            )

        data = payload.get("data")
        if not isinstance(data, dict):
            data = example_data()
        html = generate_html_preview(template, data, locale=self.get_locale(request))
        return HttpResponse(html, content_type=HTML_CONTENT_TYPE)


class TemplateListView(View):
    """Liste les templates d'un utilisateur (GET ``?user_id=``)."""

    async def get(self, request) -> JsonResponse:
        user_id = request.GET.get("user_id")
        if not user_id:
            return JsonResponse({"error": "Paramètre user_id requis."}, status=400)

        templates = await list_templates(get_store_instance(), user_id)
        page_size = int(get_setting("PAGE_SIZE"))
        return JsonResponse(
            {
                "count": len(templates),
                "results": [
                    {
                        "id": template.id,
                        "name": template.name,
                        "type": template.type.value,
                        "category": template.category,
                        "is_public": template.is_public,
                        "updated_at": (
                            template.updated_at.isoformat() if template.updated_at else None
                        ),
                    }
                    for template in templates[:page_size]
                ],
            }
        )


class LocaleDetectionView(View):
    """Détecte la locale d'un client (GET).

    FR: Indices lus dans les paramètres ``vat``, ``postal_code`` et
        ``country`` puis dans l'en-tête ``Accept-Language``.
    EN: Hints read from query parameters then the Accept-Language header.
    """

    async def get(self, request) -> JsonResponse:
        code = detect_locale(
            vat_number=request.GET.get("vat"),
            postal_code=request.GET.get("postal_code"),
            country=request.GET.get("country"),
            browser_locale=request.headers.get("Accept-Language"),
        )
        pack = get_locale_pack(code)
        return JsonResponse(
            {
                "locale": code.value,
                "name": pack.name,
                "currency": pack.currency.code,
                "standard_tax_rate": str(pack.tax.standard),
            }
        )
