"""Configuration de devispack via les settings Django.

FR: Helper pour accéder aux paramètres DEVISPACK définis dans settings.py.
    Fournit des valeurs par défaut, la locale par défaut validée et un
    instanciateur dynamique du stockage des templates.
EN: Helper for accessing DEVISPACK settings defined in settings.py.
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.utils.module_loading import import_string

from devispack.locales.registry import get_quote_locale, is_valid_locale_code
from devispack.models.enums import LocaleCode
from devispack.store.base import BaseTemplateStore

logger = logging.getLogger(__name__)

DEFAULTS: dict[str, object] = {
    "DEFAULT_LOCALE": "fr-BE",
    "TEMPLATE_STORE_CLASS": "devispack.contrib.django.store.DjangoTemplateStore",
    "PAGE_SIZE": 50,
}


def get_setting(name: str) -> object:
    """Retourne la valeur d'un paramètre DEVISPACK.

    FR: Cherche dans settings.DEVISPACK[name], puis dans les défauts.
    EN: Looks up settings.DEVISPACK[name], then falls back to defaults.
    """
    if name not in DEFAULTS:
        msg = f"Paramètre DEVISPACK inconnu : {name}"
        raise KeyError(msg)
    user_settings = getattr(settings, "DEVISPACK", {})
    return user_settings.get(name, DEFAULTS[name])


def get_default_locale() -> LocaleCode:
    """Locale par défaut configurée, fr-BE si la valeur est invalide."""
    configured = get_setting("DEFAULT_LOCALE")
    if not is_valid_locale_code(configured):
        logger.debug("DEVISPACK['DEFAULT_LOCALE'] invalide (%r), repli sur fr-BE", configured)
    return get_quote_locale(configured)


def get_store_instance() -> BaseTemplateStore:
    """Instancie dynamiquement le stockage de templates configuré.

    Raises:
        ValueError: Si TEMPLATE_STORE_CLASS est vide.
        ImportError: Si le chemin de classe est introuvable.
    """
    store_class_path = get_setting("TEMPLATE_STORE_CLASS")
    if not store_class_path:
        msg = (
            "DEVISPACK['TEMPLATE_STORE_CLASS'] n'est pas configuré. "
            "Spécifiez le chemin complet de la classe de stockage."
        )
        raise ValueError(msg)

    store_class = import_string(store_class_path)
    return store_class()
