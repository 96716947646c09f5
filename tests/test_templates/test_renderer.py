"""Tests du rendu HTML des templates.

FR: Vérifie la structure du document, l'ordre et la visibilité des blocs,
    le formatage localisé et la robustesse face aux données incomplètes.
EN: Verifies document structure, block order and visibility, localized
    formatting and robustness against incomplete data.
"""

import logging

import pytest
from lxml import html as lxml_html

from devispack.locales import get_locale_pack
from devispack.models.template import (
    DocumentTemplate,
    GlobalStyles,
    ImageBlock,
    NotesBlock,
    QRCodeBlock,
    SignatureBlock,
    TextBlock,
    TotalsBlock,
    UnknownBlock,
    WatermarkBlock,
)
from devispack.templates import (
    HTMLRenderer,
    generate_html_preview,
    get_default_template,
    render_block,
)


def _parse(document: str):
    """Parse le HTML et retourne l'élément racine."""
    return lxml_html.document_fromstring(document)


def _fragment(fragment: str):
    return lxml_html.fragment_fromstring(fragment)


class TestDocumentShell:
    """Structure du document HTML."""

    def test_doctype_and_language(self, items_template, sample_data):
        document = generate_html_preview(items_template, sample_data, locale="fr-FR")
        assert document.startswith("<!DOCTYPE html>")
        assert _parse(document).get("lang") == "fr-FR"

    def test_page_setup_and_styles(self, items_template, sample_data):
        document = generate_html_preview(items_template, sample_data)
        style = _parse(document).find(".//style").text
        assert "size: A4 portrait" in style
        assert "margin: 40px 40px 40px 40px" in style
        assert "--primary-color: #1E3A5F" in style
        assert ".bg-primary" in style

    def test_css_values_cannot_escape_stylesheet(self, sample_data):
        template = DocumentTemplate(
            name="T",
            global_styles=GlobalStyles(primary_color="red;}</style><script>alert(1)</script>"),
        )
        document = generate_html_preview(template, sample_data)
        assert "<script>" not in document

    def test_locale_from_data(self, items_template, sample_data):
        sample_data["locale"] = "fr-CH"
        assert _parse(generate_html_preview(items_template, sample_data)).get("lang") == "fr-CH"

    def test_explicit_locale_wins(self, items_template, sample_data):
        sample_data["locale"] = "fr-CH"
        document = generate_html_preview(items_template, sample_data, locale="fr-FR")
        assert _parse(document).get("lang") == "fr-FR"

    def test_invalid_locale_falls_back(self, items_template, sample_data):
        document = generate_html_preview(items_template, sample_data, locale="xx")
        assert _parse(document).get("lang") == "fr-BE"

    def test_render_result_save(self, items_template, sample_data, tmp_path):
        result = HTMLRenderer().render(items_template, sample_data, locale="fr-CH")
        assert result.locale == "fr-CH"
        target = tmp_path / "devis.html"
        result.save(str(target))
        assert target.read_text(encoding="utf-8") == result.html


class TestItemsTable:
    """Tableau des postes."""

    @pytest.mark.parametrize(
        ("locale", "expected"),
        [
            ("fr-BE", ["10,00 €", "3,00 €"]),
            ("fr-FR", ["10,00 €", "3,00 €"]),
            ("fr-CH", ["CHF10.00", "CHF3.00"]),
        ],
    )
    def test_two_items_with_currency_column(self, items_template, sample_data, locale, expected):
        root = _parse(generate_html_preview(items_template, sample_data, locale=locale))
        rows = root.xpath("//table[contains(@class, 'block-items_table')]/tbody/tr")
        assert len(rows) == 2
        cells = [[cell.text_content() for cell in row.findall("td")] for row in rows]
        assert cells[0] == ["1", "Tuyau", "2", "m", expected[0]]
        assert cells[1] == ["2", "Coude", "4", "u", expected[1]]

    def test_header_row(self, items_template, sample_data):
        root = _parse(generate_html_preview(items_template, sample_data))
        headers = [th.text_content() for th in root.xpath("//thead/tr/th")]
        assert headers == ["#", "Description", "Qté", "Unité", "P.U."]
        assert root.xpath("//thead/tr")[0].get("class") == "bg-primary"

    def test_zebra_striping(self, items_template, sample_data):
        root = _parse(generate_html_preview(items_template, sample_data))
        styles = [row.get("style") for row in root.xpath("//tbody/tr")]
        assert styles == ["background-color: white;", "background-color: #f5f5f5;"]

    def test_no_items(self, items_template, sample_data):
        del sample_data["items"]
        root = _parse(generate_html_preview(items_template, sample_data))
        assert root.xpath("//tbody/tr") == []
        assert len(root.xpath("//thead/tr/th")) == 5

    def test_malformed_items_keep_their_row(self, items_template, sample_data):
        sample_data["items"] = [{"description": "Tuyau", "unit_price": "abc"}, "ligne libre"]
        root = _parse(generate_html_preview(items_template, sample_data))
        rows = root.xpath("//tbody/tr")
        assert len(rows) == 2
        assert rows[0].findall("td")[4].text_content() == "abc"
        assert rows[1].findall("td")[1].text_content() == ""

    def test_number_and_percentage_formats(self, sample_data):
        template = DocumentTemplate.model_validate(
            {
                "name": "T",
                "blocks": [
                    {
                        "id": "items",
                        "type": "items_table",
                        "config": {
                            "columns": [
                                {"id": "q", "header": "Q", "field": "quantity",
                                 "format": "number"},
                                {"id": "r", "header": "R", "field": "discount",
                                 "format": "percentage"},
                            ],
                        },
                    }
                ],
            }
        )
        sample_data["items"] = [{"quantity": 1500, "discount": 12.5}]
        root = _parse(generate_html_preview(template, sample_data, locale="fr-BE"))
        cells = [td.text_content() for td in root.xpath("//tbody/tr/td")]
        assert cells == ["1.500", "12,50 %"]


class TestVisibilityAndOrder:
    """Ordre et visibilité des blocs."""

    def test_invisible_block_is_not_rendered(self, text_template, sample_data):
        document = generate_html_preview(text_template, sample_data)
        assert "CONTENU-MASQUE" not in document
        assert 'data-block-id="secret"' not in document

    def test_blocks_follow_order(self, text_template, sample_data):
        sample_data["notes"] = "Accès par la cour."
        root = _parse(generate_html_preview(text_template, sample_data))
        ids = [element.get("data-block-id") for element in root.xpath("//body/*")]
        assert ids == ["header", "intro", "notes"]

    def test_variables_substituted_in_blocks(self, text_template, sample_data):
        root = _parse(generate_html_preview(text_template, sample_data))
        assert root.xpath("//h1")[0].text_content() == "DEVIS DEV-2024-0042"
        intro = root.xpath("//*[@data-block-id='intro']")[0]
        assert intro.text_content() == "Bonjour Marie Lambert, voici {{missing_key}}."


class TestNotes:
    """Bloc des remarques."""

    @pytest.mark.parametrize("notes", [None, "", "   \n "])
    def test_blank_notes_omit_block(self, text_template, sample_data, notes):
        sample_data["notes"] = notes
        document = generate_html_preview(text_template, sample_data)
        assert 'data-block-id="notes"' not in document

    def test_absent_notes_omit_block(self, text_template, sample_data):
        document = generate_html_preview(text_template, sample_data)
        assert "block-notes" not in document

    def test_notes_text_verbatim(self, text_template, sample_data):
        sample_data["notes"] = "Travaux <urgents> & propres"
        root = _parse(generate_html_preview(text_template, sample_data))
        notes = root.xpath("//*[@data-block-id='notes']")[0]
        assert "Travaux <urgents> & propres" in notes.text_content()
        assert notes.text_content().startswith("Remarques:")

    def test_multiline_notes(self):
        block = NotesBlock(id="n")
        fragment = render_block(block, {"notes": "ligne 1\nligne 2"}, GlobalStyles())
        assert len(_fragment(fragment).findall("br")) == 2


class TestClassicTemplate:
    """Rendu complet du template intégré classique."""

    def test_full_document(self, sample_data):
        template = get_default_template("Classique Professionnel")
        root = _parse(generate_html_preview(template, sample_data, locale="fr-BE"))
        text = root.text_content()
        assert "DEVIS" in text
        assert "Marie Lambert" in text
        assert "Sous-total HTVA: 32,00 €" in text
        assert "TVA (21 %): 6,72 €" in text
        assert "Total TVAC: 38,72 €" in text
        assert "Page {{page_number}} / {{total_pages}}" in text
        assert "None" not in text

    def test_french_vocabulary(self, sample_data):
        template = get_default_template("Classique Professionnel")
        root = _parse(generate_html_preview(template, sample_data, locale="fr-FR"))
        total = root.xpath("//*[contains(@class, 'total') and contains(@class, 'bold')]")[0]
        assert total.text_content().endswith("38,72 €")
        assert "primary" in total.get("class")
        assert "border-top: 2px solid" in total.get("style")

    def test_document_info_dates_are_localized(self, sample_data):
        template = get_default_template("Classique Professionnel")
        root = _parse(generate_html_preview(template, sample_data, locale="fr-CH"))
        values = [td.text_content() for td in root.xpath("//table[@class='document-info']//td")]
        assert values == ["DEV-2024-0042", "15.01.2024", "14.02.2024"]

    def test_empty_data_renders_without_none(self):
        template = get_default_template("Classique Professionnel")
        document = generate_html_preview(template, {})
        assert "None" not in _parse(document).text_content()


class TestCompanyAndClient:
    """Blocs de coordonnées."""

    def test_company_lines(self, sample_data):
        template = get_default_template("Facture Compacte")
        root = _parse(generate_html_preview(template, sample_data, locale="fr-BE"))
        company = root.xpath("//*[@data-block-id='company']")[0].text_content()
        assert "Plomberie Dupont SRL" in company
        assert "1000 Bruxelles" in company
        assert "Tél: +32 2 123 45 67" in company
        assert "Numéro de TVA: BE0123.456.789" in company
        assert "IBAN: BE68 5390 0754 7034" in company

    def test_client_label_from_vocabulary(self, sample_data):
        template = get_default_template("Facture Compacte")
        root = _parse(generate_html_preview(template, sample_data))
        client = root.xpath("//*[@data-block-id='client']")[0].text_content()
        assert client.startswith("Client:")
        assert "1050 Ixelles" in client

    def test_header_logo_only_with_data(self, sample_data):
        template = get_default_template("Facture Compacte")
        assert "<img" not in generate_html_preview(template, sample_data)
        sample_data["company_logo"] = "https://cdn.example.com/logo.png"
        root = _parse(generate_html_preview(template, sample_data))
        assert root.xpath("//img/@src") == ["https://cdn.example.com/logo.png"]


class TestOtherBlocks:
    """Rendu des blocs secondaires via render_block()."""

    styles = GlobalStyles()

    def test_totals_amount_in_words(self):
        block = TotalsBlock.model_validate(
            {"id": "t", "config": {"showTotal": True, "showAmountInWords": True}}
        )
        fragment = render_block(
            block,
            {"total": 1210, "total_in_words": "Mille deux cent dix euros"},
            self.styles,
            get_locale_pack("fr-BE"),
        )
        element = _fragment(fragment)
        assert "Total TVAC: 1.210,00 €" in element.text_content()
        assert "Mille deux cent dix euros" in element.text_content()

    def test_totals_preformatted_amounts_are_kept(self):
        block = TotalsBlock.model_validate({"id": "t", "config": {"showSubtotal": True}})
        fragment = render_block(block, {"subtotal": "1 000,00 €"}, self.styles)
        assert "1 000,00 €" in _fragment(fragment).text_content()

    def test_signature_variants(self):
        for signature_type, marker in [
            ("line", "signature-line"),
            ("box", "signature-box"),
            ("digital", "signature-digital"),
        ]:
            block = SignatureBlock.model_validate(
                {"id": "s", "config": {"signatureType": signature_type, "showDate": True}}
            )
            fragment = render_block(block, {}, self.styles)
            assert marker in fragment
            assert "Date : ____________" in fragment

    def test_text_newlines(self):
        block = TextBlock.model_validate({"id": "t", "config": {"content": "a\nb\nc"}})
        element = _fragment(render_block(block, {}, self.styles))
        assert len(element.findall("br")) == 2
        assert element.text_content() == "abc"

    def test_image_without_url_is_skipped(self):
        assert render_block(ImageBlock(id="i"), {}, self.styles) == ""

    def test_image(self):
        block = ImageBlock.model_validate({"id": "i", "config": {"imageUrl": "https://x/y.png"}})
        assert _fragment(render_block(block, {}, self.styles)).xpath("//img/@src") == [
            "https://x/y.png"
        ]

    def test_spacer_and_divider(self):
        spacer = render_block(
            DocumentTemplate.model_validate(
                {"name": "T", "blocks": [{"id": "s", "type": "spacer", "config": {"height": "35px"}}]}
            ).blocks[0],
            {},
            self.styles,
        )
        assert "height: 35px" in spacer
        divider = render_block(
            DocumentTemplate.model_validate(
                {"name": "T", "blocks": [{"id": "d", "type": "divider", "config": {"thickness": 2}}]}
            ).blocks[0],
            {},
            self.styles,
        )
        assert divider.startswith("<hr")
        assert "border-top: 2px solid #C9A962" in divider

    def test_qr_code_with_static_payload(self):
        block = QRCodeBlock.model_validate({"id": "q", "config": {"qrData": "https://pay.example"}})
        element = _fragment(render_block(block, {}, self.styles))
        qr = element.xpath("//*[@data-qr-payload]")[0]
        assert qr.get("data-qr-payload") == "https://pay.example"
        assert qr.get("data-qr-size") == "120"

    def test_qr_code_epc_payment(self, sample_data):
        block = QRCodeBlock.model_validate({"id": "q", "config": {"epcPayment": True}})
        sample_data["structured_reference"] = "+++002/0240/04222+++"
        element = _fragment(render_block(block, sample_data, self.styles, get_locale_pack("fr-BE")))
        payload = element.xpath("//*[@data-qr-payload]")[0].get("data-qr-payload")
        lines = payload.split("\n")
        assert lines[0] == "BCD"
        assert lines[5] == "Plomberie Dupont SRL"
        assert lines[7] == "EUR38.72"
        assert lines[9] == "+++002/0240/04222+++"
        assert lines[10] == "DEV-2024-0042"

    def test_qr_code_epc_without_iban_is_skipped(self, sample_data):
        del sample_data["company_iban"]
        block = QRCodeBlock.model_validate({"id": "q", "config": {"epcPayment": True}})
        assert render_block(block, sample_data, self.styles) == ""

    def test_watermark(self):
        block = WatermarkBlock.model_validate(
            {"id": "w", "config": {"watermarkText": "BROUILLON", "watermarkOpacity": 0.2}}
        )
        fragment = render_block(block, {}, self.styles)
        assert "BROUILLON" in fragment
        assert "opacity: 0.2" in fragment
        assert "rotate(-45deg)" in fragment

    def test_empty_watermark_is_skipped(self):
        assert render_block(WatermarkBlock(id="w"), {}, self.styles) == ""

    def test_unknown_block_renders_nothing(self):
        block = UnknownBlock(id="g", type="gallery")
        assert render_block(block, {}, self.styles) == ""


class TestRobustness:
    """Le rendu ne lève jamais d'exception à cause des données."""

    def test_failing_block_is_blank_and_logged(self, monkeypatch, text_template, sample_data, caplog):
        def explode(*args, **kwargs):
            raise RuntimeError("boom")

        renderer = HTMLRenderer()
        monkeypatch.setitem(renderer._builders, TextBlock, explode)
        with caplog.at_level(logging.WARNING, logger="devispack.templates.renderer"):
            result = renderer.render(text_template, sample_data)
        assert 'data-block-id="intro"' not in result.html
        assert 'data-block-id="header"' in result.html
        assert "Erreur de rendu du bloc intro" in caplog.text

    @pytest.mark.parametrize("data", [None, [], "texte", 42])
    def test_non_mapping_data(self, text_template, data):
        document = generate_html_preview(text_template, data)
        assert document.startswith("<!DOCTYPE html>")

    def test_control_characters_are_dropped(self, text_template, sample_data):
        sample_data["client_name"] = "Marie\x00\x1b Lambert"
        document = generate_html_preview(text_template, sample_data)
        assert "Marie Lambert" in document

    def test_odd_values(self, sample_data):
        template = get_default_template("Facture Compacte")
        sample_data.update(
            {
                "company_name": 12,
                "items": [{"quantity": None, "unit_price": float("nan"), "total": [1, 2]}],
                "total": {"montant": 3},
                "tax_rate": "abc",
                "company_iban": 123,
            }
        )
        document = generate_html_preview(template, sample_data)
        assert len(_parse(document).xpath("//tbody/tr")) == 1
