"""Fixtures partagées pour les tests des packs de localisation."""

import pytest

from devispack.locales import get_locale_pack
from devispack.models.locale import LocalePack


@pytest.fixture
def fr_be() -> LocalePack:
    """Pack Belgique francophone."""
    return get_locale_pack("fr-BE")


@pytest.fixture
def fr_fr() -> LocalePack:
    """Pack France."""
    return get_locale_pack("fr-FR")


@pytest.fixture
def fr_ch() -> LocalePack:
    """Pack Suisse romande."""
    return get_locale_pack("fr-CH")
