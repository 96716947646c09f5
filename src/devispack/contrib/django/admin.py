"""Configuration de l'admin Django pour les templates de documents."""

import logging

from asgiref.sync import async_to_sync
from django.contrib import admin, messages

from devispack.contrib.django.conf import get_store_instance
from devispack.contrib.django.models import DocumentTemplateRecord
from devispack.templates.crud import duplicate_template
from devispack.templates.errors import TemplateError

logger = logging.getLogger(__name__)


@admin.register(DocumentTemplateRecord)
class DocumentTemplateRecordAdmin(admin.ModelAdmin):
    """Administration des templates de documents."""

    list_display = [
        "name",
        "user_id",
        "type",
        "category",
        "is_public",
        "is_premium",
        "updated_at",
    ]
    list_filter = ["type", "is_public", "is_premium"]
    search_fields = ["name", "user_id", "category"]
    readonly_fields = ["downloads_count", "rating", "created_at", "updated_at"]

    fieldsets = [
        (
            "Description",
            {
                "fields": ["user_id", "name", "description", "type", "category"],
            },
        ),
        (
            "Contenu",
            {
                "fields": ["template_data"],
            },
        ),
        (
            "Marketplace",
            {
                "fields": ["is_public", "is_premium", "price", "downloads_count", "rating"],
            },
        ),
        (
            "Horodatage",
            {
                "fields": ["created_at", "updated_at"],
            },
        ),
    ]
    actions = ["duplicate_templates"]

    @admin.action(description="Dupliquer les templates sélectionnés")
    def duplicate_templates(self, request, queryset):
        """Duplique chaque template pour son propriétaire."""
        store = get_store_instance()
        count = 0

        for record in queryset:
            try:
                async_to_sync(duplicate_template)(store, str(record.pk), record.user_id)
                count += 1
            except TemplateError:
                logger.exception("Erreur lors de la duplication du template %s", record.pk)
                self.message_user(
                    request,
                    f"Erreur lors de la duplication de {record.name}.",
                    messages.ERROR,
                )

        if count:
            self.message_user(
                request,
                f"{count} template(s) dupliqué(s) avec succès.",
                messages.SUCCESS,
            )
