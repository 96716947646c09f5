"""Exceptions des opérations de persistance des templates.

FR: Les erreurs du stockage sont enveloppées dans TemplatePersistenceError
    (la cause reste accessible via ``__cause__``).
EN: Store errors are wrapped into TemplatePersistenceError (the cause is
    kept on ``__cause__``).
"""


class TemplateError(Exception):
    """Erreur de base des opérations sur les templates."""


class TemplatePersistenceError(TemplateError):
    """Échec d'écriture ou de lecture d'un template.

    FR: Message de la forme ``Failed to <opération> template: <cause>``.
    EN: Message shaped ``Failed to <operation> template: <cause>``.
    """


class TemplateNotFoundError(TemplateError):
    """Template introuvable (ou non modifiable par l'utilisateur)."""

    def __init__(self, message: str = "Template not found") -> None:
        super().__init__(message)
