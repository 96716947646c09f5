"""Hiérarchie d'exceptions du stockage des templates.

FR: Exceptions typées levées par les implémentations de BaseTemplateStore.
EN: Typed exceptions raised by BaseTemplateStore implementations.
"""


class StoreError(Exception):
    """Erreur de base pour toutes les opérations de stockage.

    FR: Classe parente des exceptions du stockage de lignes.
    EN: Base class for row store exceptions.
    """


class StoreNotFoundError(StoreError):
    """Ligne introuvable.

    FR: Identifiant inconnu, ou ligne appartenant à un autre utilisateur
        lors d'une mise à jour.
    EN: Unknown identifier, or row owned by another user on update.
    """


class StoreConnectionError(StoreError):
    """Erreur de connexion vers le stockage.

    FR: Base indisponible, timeout ou erreur de transport.
    EN: Database unavailable, timeout or transport error.
    """
