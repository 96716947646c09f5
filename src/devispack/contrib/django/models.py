"""Modèles Django pour les templates de documents.

FR: Une ligne par template. La géométrie de page, les styles globaux et
    les blocs sont stockés dans le champ JSON ``template_data``, comme dans
    la ligne manipulée par devispack.store. Convertible vers/depuis le
    modèle Pydantic DocumentTemplate.
EN: One row per template; page geometry, global styles and blocks live in
    the ``template_data`` JSON field. Convertible to/from DocumentTemplate.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from django.db import models

from devispack.models.enums import TemplateType
from devispack.models.template import DocumentTemplate
from devispack.templates.crud import template_from_row, template_to_row


class TemplateTypeChoices(models.TextChoices):
    """Types de documents produits par un template."""

    QUOTE = TemplateType.QUOTE.value, "Devis"
    INVOICE = TemplateType.INVOICE.value, "Facture"
    CONTRACT = TemplateType.CONTRACT.value, "Contrat"
    DELIVERY_NOTE = TemplateType.DELIVERY_NOTE.value, "Bon de livraison"


class DocumentTemplateRecord(models.Model):
    """Template de document enregistré.

    FR: Les colonnes reprennent celles d'une ligne de stockage ; l'identifiant
        exposé est la clé primaire sous forme de chaîne.
    EN: Columns mirror a store row; the exposed id is the primary key as a
        string.
    """

    # --- Propriété ---
    user_id = models.CharField("propriétaire", max_length=64, db_index=True)

    # --- Description ---
    name = models.CharField("nom", max_length=200)
    description = models.TextField("description", blank=True, null=True)
    type = models.CharField(
        "type de document",
        max_length=20,
        choices=TemplateTypeChoices.choices,
        default=TemplateTypeChoices.QUOTE,
    )
    category = models.CharField("catégorie", max_length=100, blank=True, null=True)

    # --- Contenu ---
    template_data = models.JSONField("contenu du template", default=dict)

    # --- Marketplace ---
    is_public = models.BooleanField("public", default=False)
    is_premium = models.BooleanField("premium", default=False)
    price = models.DecimalField("prix", max_digits=10, decimal_places=2, default=Decimal("0"))
    downloads_count = models.PositiveIntegerField("téléchargements", default=0)
    rating = models.FloatField("note", blank=True, null=True)

    # --- Horodatage ---
    created_at = models.DateTimeField("créé le", auto_now_add=True)
    updated_at = models.DateTimeField("modifié le", auto_now=True)

    class Meta:
        verbose_name = "template de document"
        verbose_name_plural = "templates de documents"
        ordering = ["created_at", "pk"]

    def __str__(self) -> str:
        return f"Template {self.name}"

    # --- Conversion ---

    def to_row(self) -> dict[str, Any]:
        """Convertit l'enregistrement en ligne de stockage."""
        return {
            "id": str(self.pk),
            "user_id": self.user_id,
            "name": self.name,
            "description": self.description,
            "type": self.type,
            "category": self.category,
            "template_data": self.template_data,
            "is_public": self.is_public,
            "is_premium": self.is_premium,
            "price": self.price,
            "downloads_count": self.downloads_count,
            "rating": self.rating,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def to_pydantic(self) -> DocumentTemplate:
        """Convertit l'enregistrement en template Pydantic."""
        return template_from_row(self.to_row())

    @classmethod
    def from_pydantic(cls, template: DocumentTemplate, user_id: str) -> DocumentTemplateRecord:
        """Crée un enregistrement (non sauvé) depuis un template Pydantic."""
        row = template_to_row(template, user_id=user_id)
        return cls(**{field: row[field] for field in STORED_FIELDS})


# Colonnes écrites par l'application (hors clé primaire et horodatages)
STORED_FIELDS = (
    "user_id",
    "name",
    "description",
    "type",
    "category",
    "template_data",
    "is_public",
    "is_premium",
    "price",
    "downloads_count",
    "rating",
)
