"""Interface abstraite pour le stockage des templates.

FR: Le stockage manipule des lignes (dictionnaires) dont les colonnes sont
    celles de la table des templates : ``id``, ``user_id``, ``name``,
    ``description``, ``type``, ``category``, ``template_data`` (JSON),
    ``is_public``, ``is_premium``, ``price``, ``downloads_count``,
    ``rating``, ``created_at``, ``updated_at``. L'identifiant et les
    horodatages sont attribués par le stockage.
EN: The store handles rows (dicts) shaped like the templates table. The
    identifier and timestamps are assigned by the store.
"""

from abc import ABCMeta, abstractmethod
from typing import Any

Row = dict[str, Any]


class BaseTemplateStore(metaclass=ABCMeta):
    """Classe de base abstraite pour les stockages de templates.

    FR: Les implémentations concrètes (mémoire, ORM Django…) héritent de
        cette classe. Toutes les opérations sont asynchrones.
    EN: Concrete stores (memory, Django ORM…) inherit from this class.
        All operations are asynchronous.
    """

    @abstractmethod
    async def insert(self, row: Row) -> Row:
        """Insère une nouvelle ligne.

        Args:
            row: Les colonnes à insérer (``id`` et horodatages ignorés).

        Returns:
            La ligne stockée, avec son identifiant et ses horodatages.

        Raises:
            StoreConnectionError: Si le stockage est indisponible.
        """
        ...

    @abstractmethod
    async def update(self, template_id: str, user_id: str, values: Row) -> Row:
        """Met à jour les colonnes fournies d'une ligne de l'utilisateur.

        Args:
            template_id: Identifiant de la ligne.
            user_id: Propriétaire attendu de la ligne.
            values: Les colonnes à modifier, les autres restent inchangées.

        Returns:
            La ligne après mise à jour.

        Raises:
            StoreNotFoundError: Si la ligne n'existe pas ou appartient à
                un autre utilisateur.
            StoreConnectionError: Si le stockage est indisponible.
        """
        ...

    @abstractmethod
    async def fetch(self, template_id: str) -> Row:
        """Récupère une ligne par son identifiant.

        Raises:
            StoreNotFoundError: Si la ligne n'existe pas.
            StoreConnectionError: Si le stockage est indisponible.
        """
        ...

    @abstractmethod
    async def list_by_user(self, user_id: str) -> list[Row]:
        """Liste les lignes d'un utilisateur, par ordre de création."""
        ...
