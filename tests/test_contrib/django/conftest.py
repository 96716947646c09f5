"""Configuration pytest pour les tests Django.

FR: Configure Django avec SQLite in-memory pour les tests.
EN: Configures Django with in-memory SQLite for tests.
"""

import django
from django.conf import settings


def pytest_configure() -> None:
    """Configure Django pour les tests."""
    if not settings.configured:
        settings.configure(
            DATABASES={
                "default": {
                    "ENGINE": "django.db.backends.sqlite3",
                    "NAME": ":memory:",
                },
            },
            INSTALLED_APPS=[
                "django.contrib.admin",
                "django.contrib.contenttypes",
                "django.contrib.auth",
                "django.contrib.messages",
                "django.contrib.sessions",
                "devispack.contrib.django",
            ],
            ROOT_URLCONF="devispack.contrib.django.urls",
            DEFAULT_AUTO_FIELD="django.db.models.BigAutoField",
            SECRET_KEY="devispack-tests",
            USE_TZ=True,
        )
        django.setup()


import pytest  # noqa: E402

from devispack.templates.defaults import get_default_template  # noqa: E402


@pytest.fixture
def classic_template():
    """Fixture : template intégré « Classique Professionnel »."""
    return get_default_template("Classique Professionnel")


@pytest.fixture
def template_record(db, classic_template):
    """Fixture : template enregistré en base pour l'utilisateur user-1."""
    from devispack.contrib.django.models import DocumentTemplateRecord

    record = DocumentTemplateRecord.from_pydantic(classic_template, user_id="user-1")
    record.category = "Classique"
    record.save()
    return record
