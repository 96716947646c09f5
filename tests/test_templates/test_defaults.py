"""Tests des templates intégrés et du catalogue de variables."""

import pytest

from devispack.models.enums import BlockType, TemplateType
from devispack.models.template import UnknownBlock
from devispack.templates import DEFAULT_TEMPLATES, TEMPLATE_VARIABLES, get_default_template
from devispack.templates.variables import example_data, find_variables, variable_label


class TestDefaultTemplates:
    """Tests des templates intégrés."""

    def test_names(self):
        assert [template.name for template in DEFAULT_TEMPLATES] == [
            "Classique Professionnel",
            "Facture Compacte",
        ]

    @pytest.mark.parametrize("template", DEFAULT_TEMPLATES, ids=lambda t: t.name)
    def test_all_blocks_are_known(self, template):
        assert not any(isinstance(block, UnknownBlock) for block in template.blocks)
        assert {block.type for block in template.blocks} <= {t.value for t in BlockType}

    def test_classic_layout(self):
        template = get_default_template("Classique Professionnel")
        assert template.type == TemplateType.QUOTE
        assert [block.type for block in template.visible_blocks()] == [
            "header",
            "document_info",
            "client_info",
            "items_table",
            "totals",
            "notes",
            "footer",
        ]

    def test_compact_invoice_has_payment_qr(self):
        template = get_default_template("Facture Compacte")
        assert template.type == TemplateType.INVOICE
        qr = next(block for block in template.blocks if block.type == "qr_code")
        assert qr.config.epc_payment is True

    def test_copies_are_independent(self):
        copy = get_default_template("Classique Professionnel")
        copy.blocks.clear()
        assert get_default_template("Classique Professionnel").blocks

    def test_unknown_name(self):
        with pytest.raises(KeyError, match="inconnu"):
            get_default_template("Baroque")


class TestVariableCatalogue:
    """Catalogue des variables de l'éditeur."""

    def test_labels(self):
        assert variable_label("document_number") == "Numéro de document"
        assert variable_label("inconnue") == "inconnue"

    def test_templates_only_use_catalogued_variables(self):
        for template in DEFAULT_TEMPLATES:
            for block in template.blocks:
                text = str(block.model_dump())
                for key in find_variables(text):
                    assert key in TEMPLATE_VARIABLES

    def test_example_data_covers_catalogue(self):
        data = example_data()
        assert set(TEMPLATE_VARIABLES) <= set(data)
        assert len(data["items"]) == 2
