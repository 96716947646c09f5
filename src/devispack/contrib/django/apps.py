"""Configuration de l'application Django pour les templates de documents."""

from django.apps import AppConfig


class DevispackConfig(AppConfig):
    """Configuration de l'app Django devispack."""

    name = "devispack.contrib.django"
    label = "devispack"
    verbose_name = "Templates de devis et factures"
    default_auto_field = "django.db.models.BigAutoField"
