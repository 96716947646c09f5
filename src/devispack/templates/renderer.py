"""Rendu HTML des templates de documents.

FR: Construit l'arbre HTML avec lxml, bloc par bloc, puis le sérialise.
    Le rendu ne lève jamais d'exception à cause des données : un bloc en
    erreur est journalisé et rendu vide, un type de bloc inconnu n'est pas
    rendu. Les montants sont formatés selon le pack de la locale active et
    les libellés proviennent de son vocabulaire.
EN: Builds the HTML tree with lxml, block by block, then serializes it.
    Rendering never raises because of the data: a failing block is logged
    and rendered empty, unknown block types are skipped. Amounts follow the
    active locale pack and labels come from its vocabulary.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from decimal import Decimal
from typing import Any

from lxml import etree

from devispack.locales.formatting import (
    format_locale_currency,
    format_locale_date,
    format_locale_number,
)
from devispack.locales.payments import (
    format_iban,
    generate_epc_payload,
    is_valid_epc_data,
)
from devispack.locales.registry import get_quote_locale_pack
from devispack.models.enums import ColumnFormat, SignatureType
from devispack.models.locale import LocalePack
from devispack.models.template import (
    ClientInfoBlock,
    CompanyInfoBlock,
    DividerBlock,
    DocumentInfoBlock,
    DocumentTemplate,
    FooterBlock,
    GlobalStyles,
    HeaderBlock,
    ImageBlock,
    ItemsTableBlock,
    NotesBlock,
    QRCodeBlock,
    SignatureBlock,
    SpacerBlock,
    TemplateBlock,
    TextBlock,
    TotalsBlock,
    WatermarkBlock,
)
from devispack.templates.interpolation import interpolate_template
from devispack.templates.variables import variable_label
from devispack.utils.values import to_decimal, to_text

logger = logging.getLogger(__name__)

DOCTYPE = "<!DOCTYPE html>"

# Caractères refusés par lxml dans le texte et les attributs
_XML_INVALID_RE = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")
# Caractères permettant de sortir d'une déclaration CSS
_CSS_UNSAFE_RE = re.compile(r"[<>{};]")

_DATE_VARIABLES = frozenset({"document_date", "valid_until", "due_date", "current_date"})

ZEBRA_COLOR = "#f5f5f5"


def _clean(value: object) -> str:
    """Texte affichable et compatible XML (None → chaîne vide)."""
    return _XML_INVALID_RE.sub("", to_text(value))


def _css_value(value: object) -> str:
    return _CSS_UNSAFE_RE.sub("", _clean(value))


def _px(value: float) -> str:
    return f"{value:g}px"


def _join_css(*parts: str) -> str:
    return "; ".join(part for part in parts if part)


def _append_text(element: etree._Element, text: object) -> None:
    """Ajoute du texte à un élément, les retours à la ligne devenant ``<br>``."""
    for index, line in enumerate(_clean(text).split("\n")):
        if index:
            br = etree.SubElement(element, "br")
            br.tail = line
        elif len(element):
            element[-1].tail = (element[-1].tail or "") + line
        else:
            element.text = (element.text or "") + line


def _sub(
    parent: etree._Element,
    tag: str,
    text: object = None,
    **attrib: str,
) -> etree._Element:
    """Crée un sous-élément ; ``class_`` désigne l'attribut ``class``."""
    attributes = {key.rstrip("_").replace("_", "-"): _clean(value) for key, value in attrib.items()}
    element = etree.SubElement(parent, tag, attributes)
    if text is not None:
        _append_text(element, text)
    return element


def _integral_decimals(value: Decimal) -> int:
    return 0 if value == value.to_integral_value() else 2


class RenderResult:
    """Résultat du rendu d'un template.

    FR: Contient le document HTML et la locale utilisée pour le formatage.
    EN: Holds the HTML document and the locale used for formatting.
    """

    def __init__(self, html: str, pack: LocalePack) -> None:
        self.html = html
        self.pack = pack

    @property
    def locale(self) -> str:
        return str(self.pack.code)

    def save(self, path: str) -> None:
        """Sauvegarde le document HTML dans un fichier (UTF-8)."""
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.html)


class BaseRenderer(ABC):
    """Classe de base abstraite pour les moteurs de rendu de templates.

    FR: Un moteur de rendu transforme un template et des données en
        document. Le contrat est indépendant du format de sortie.
    EN: A renderer turns a template and data into a document. The contract
        is output-format agnostic.
    """

    @abstractmethod
    def render(
        self,
        template: DocumentTemplate,
        data: Mapping[str, Any],
        *,
        locale: str | None = None,
    ) -> RenderResult:
        """Interpole puis rend le template complet.

        Args:
            template: Le template à rendre.
            data: Les données du document.
            locale: Locale à utiliser (sinon ``data["locale"]``, sinon fr-BE).

        Returns:
            RenderResult contenant le document rendu.
        """
        ...

    @abstractmethod
    def render_block(
        self,
        block: TemplateBlock,
        data: Mapping[str, Any],
        global_styles: GlobalStyles,
        pack: LocalePack | None = None,
    ) -> str:
        """Rend un bloc seul ; chaîne vide si le bloc n'est pas rendu."""
        ...


class HTMLRenderer(BaseRenderer):
    """Moteur de rendu HTML.

    FR: Chaque type de bloc a sa méthode de construction ``_build_*`` qui
        retourne un élément lxml, ou None quand le bloc ne produit rien
        (notes vides, image sans URL, type inconnu…).
    EN: Each block type has a ``_build_*`` method returning an lxml element,
        or None when the block produces nothing.
    """

    def __init__(self) -> None:
        self._builders: dict[type, Callable[..., etree._Element | None]] = {
            HeaderBlock: self._build_header,
            CompanyInfoBlock: self._build_company_info,
            ClientInfoBlock: self._build_client_info,
            DocumentInfoBlock: self._build_document_info,
            ItemsTableBlock: self._build_items_table,
            TotalsBlock: self._build_totals,
            NotesBlock: self._build_notes,
            FooterBlock: self._build_footer,
            SignatureBlock: self._build_signature,
            TextBlock: self._build_text,
            ImageBlock: self._build_image,
            SpacerBlock: self._build_spacer,
            DividerBlock: self._build_divider,
            QRCodeBlock: self._build_qr_code,
            WatermarkBlock: self._build_watermark,
        }

    # --- Points d'entrée ---

    def render(
        self,
        template: DocumentTemplate,
        data: Mapping[str, Any],
        *,
        locale: str | None = None,
    ) -> RenderResult:
        """Interpole le template puis rend ses blocs visibles dans l'ordre."""
        values: Mapping[str, Any] = data if isinstance(data, Mapping) else {}
        pack = get_quote_locale_pack(locale if locale is not None else values.get("locale"))
        interpolated = interpolate_template(template, values)

        html = etree.Element("html", lang=str(pack.code))
        head = etree.SubElement(html, "head")
        etree.SubElement(head, "meta", charset="UTF-8")
        etree.SubElement(head, "title").text = _clean(interpolated.name)
        etree.SubElement(head, "style").text = self._stylesheet(interpolated)

        body = etree.SubElement(html, "body")
        for block in interpolated.visible_blocks():
            element = self._build_safely(block, values, interpolated.global_styles, pack)
            if element is not None:
                body.append(element)

        document = etree.tostring(html, method="html", encoding="unicode", doctype=DOCTYPE)
        return RenderResult(html=document, pack=pack)

    def render_block(
        self,
        block: TemplateBlock,
        data: Mapping[str, Any],
        global_styles: GlobalStyles,
        pack: LocalePack | None = None,
    ) -> str:
        """Rend un bloc en fragment HTML ; chaîne vide si rien n'est rendu."""
        values: Mapping[str, Any] = data if isinstance(data, Mapping) else {}
        active_pack = pack if pack is not None else get_quote_locale_pack(values.get("locale"))
        element = self._build_safely(block, values, global_styles, active_pack)
        if element is None:
            return ""
        return etree.tostring(element, method="html", encoding="unicode")

    def _build_safely(
        self,
        block: TemplateBlock,
        data: Mapping[str, Any],
        styles: GlobalStyles,
        pack: LocalePack,
    ) -> etree._Element | None:
        builder = self._builders.get(type(block))
        if builder is None:
            logger.debug("Bloc %s de type %s ignoré au rendu", block.id, block.type)
            return None
        try:
            return builder(block, data, styles, pack)
        except Exception:
            logger.warning("Erreur de rendu du bloc %s (%s)", block.id, block.type, exc_info=True)
            return None

    # --- Document ---

    def _stylesheet(self, template: DocumentTemplate) -> str:
        """Feuille de style : format de page et variables globales."""
        styles = template.global_styles
        margins = template.margins
        return "\n".join(
            [
                "@page {",
                f"  size: {template.page_size} {template.orientation};",
                f"  margin: {_px(margins.top)} {_px(margins.right)} "
                f"{_px(margins.bottom)} {_px(margins.left)};",
                "}",
                ":root {",
                f"  --primary-color: {_css_value(styles.primary_color)};",
                f"  --secondary-color: {_css_value(styles.secondary_color)};",
                f"  --font-family: {_css_value(styles.font_family)};",
                f"  --base-font-size: {styles.base_font_size:g}pt;",
                "}",
                "body { font-family: var(--font-family), sans-serif; "
                "font-size: var(--base-font-size); color: #333; line-height: 1.4; }",
                ".primary { color: var(--primary-color); }",
                ".secondary { color: var(--secondary-color); }",
                ".bg-primary { background-color: var(--primary-color); color: white; }",
                "table { width: 100%; border-collapse: collapse; }",
                "th, td { padding: 8px; text-align: left; }",
                ".text-right { text-align: right; }",
                ".text-center { text-align: center; }",
                ".bold { font-weight: bold; }",
            ]
        )

    def _root(self, block: TemplateBlock, tag: str = "div", extra_css: str = "") -> etree._Element:
        """Élément racine d'un bloc, portant son style et son identifiant."""
        return etree.Element(
            tag,
            {
                "class": f"block block-{block.type}",
                "data-block-id": _clean(block.id),
                "style": _clean(_join_css(block.style.to_css(), extra_css)),
            },
        )

    # --- Formatage des valeurs ---

    def _amount(self, value: object, pack: LocalePack) -> str:
        """Montant formaté si numérique, texte tel quel sinon."""
        if to_decimal(value) is not None:
            return format_locale_currency(value, pack)
        if isinstance(value, str) and value.strip():
            return _clean(value)
        return format_locale_currency(0, pack)

    def _cell(self, value: object, fmt: ColumnFormat, pack: LocalePack) -> str:
        number = to_decimal(value)
        if number is None or fmt == ColumnFormat.TEXT:
            return _clean(value)
        if fmt == ColumnFormat.CURRENCY:
            return format_locale_currency(number, pack)
        formatted = format_locale_number(number, pack, _integral_decimals(number))
        if fmt == ColumnFormat.PERCENTAGE:
            return f"{formatted} %"
        return formatted

    # --- Blocs ---

    def _build_header(self, block: HeaderBlock, data, styles, pack) -> etree._Element:
        root = self._root(block)
        logo = data.get("company_logo")
        if block.config.show_logo and isinstance(logo, str) and logo:
            _sub(
                root,
                "img",
                src=logo,
                alt="Logo",
                class_=f"logo logo-{block.config.logo_position}",
                style="max-height: 60px;",
            )
        _sub(
            root,
            "h1",
            block.config.title or "DOCUMENT",
            class_="primary",
            style="font-size: 24pt; margin: 0;",
        )
        return root

    def _build_company_info(self, block: CompanyInfoBlock, data, styles, pack) -> etree._Element:
        vocabulary = pack.vocabulary
        root = self._root(block)
        if block.config.title:
            _sub(root, "div", block.config.title, class_="secondary")
        _sub(root, "strong", data.get("company_name"), class_="primary")
        lines = [
            _clean(data.get("company_address")),
            " ".join(
                part
                for part in (_clean(data.get("company_postal_code")), _clean(data.get("company_city")))
                if part
            ),
        ]
        if data.get("company_phone"):
            lines.append(f"Tél: {_clean(data.get('company_phone'))}")
        lines.append(_clean(data.get("company_email")))
        if data.get("company_vat"):
            lines.append(f"{vocabulary.vat_number}: {_clean(data.get('company_vat'))}")
        if data.get("company_registration"):
            label = vocabulary.term("registration_number") or vocabulary.term("siret") or vocabulary.term("ide")
            lines.append(f"{label}: {_clean(data.get('company_registration'))}")
        if isinstance(data.get("company_iban"), str) and data.get("company_iban"):
            lines.append(f"IBAN: {format_iban(data['company_iban'])}")
        for line in lines:
            etree.SubElement(root, "br")
            _append_text(root, line)
        return root

    def _build_client_info(self, block: ClientInfoBlock, data, styles, pack) -> etree._Element:
        root = self._root(block)
        _sub(root, "strong", f"{block.config.title or pack.vocabulary.client}:")
        etree.SubElement(root, "br")
        _sub(root, "strong", data.get("client_name"))
        lines = [
            _clean(data.get("client_address")),
            " ".join(
                part
                for part in (_clean(data.get("client_postal_code")), _clean(data.get("client_city")))
                if part
            ),
            _clean(data.get("client_email")),
        ]
        if data.get("client_vat"):
            lines.append(f"{pack.vocabulary.vat_number}: {_clean(data.get('client_vat'))}")
        for line in lines:
            etree.SubElement(root, "br")
            _append_text(root, line)
        return root

    def _build_document_info(self, block: DocumentInfoBlock, data, styles, pack) -> etree._Element:
        root = self._root(block)
        table = _sub(root, "table", class_="document-info")
        for key in block.config.variables:
            value = data.get(key)
            if key in _DATE_VARIABLES:
                value = format_locale_date(value, pack)
            row = _sub(table, "tr")
            _sub(row, "th", variable_label(key), class_="primary")
            _sub(row, "td", value)
        return root

    def _build_items_table(self, block: ItemsTableBlock, data, styles, pack) -> etree._Element:
        config = block.config
        items = data.get("items")
        if not isinstance(items, (list, tuple)):
            items = []

        table = self._root(block, tag="table")
        header_row = _sub(_sub(table, "thead"), "tr", class_="bg-primary")
        if config.show_item_numbers:
            _sub(header_row, "th", "#", style="width: 5%; text-align: center;")
        for column in config.columns:
            _sub(
                header_row,
                "th",
                column.header,
                style=_join_css(
                    f"width: {column.width}" if column.width else "",
                    f"text-align: {column.align}",
                ),
            )

        body = _sub(table, "tbody")
        for index, item in enumerate(items):
            values: Mapping[str, Any] = item if isinstance(item, Mapping) else {}
            background = ZEBRA_COLOR if config.alternate_row_colors and index % 2 else "white"
            row = _sub(body, "tr", class_="item-row", style=f"background-color: {background};")
            if config.show_item_numbers:
                _sub(row, "td", index + 1, class_="text-center")
            for column in config.columns:
                _sub(
                    row,
                    "td",
                    self._cell(values.get(column.field), column.format, pack),
                    style=f"text-align: {column.align};",
                )
        return table

    def _build_totals(self, block: TotalsBlock, data, styles, pack) -> etree._Element:
        config = block.config
        vocabulary = pack.vocabulary
        root = self._root(block, extra_css="text-align: right")

        if config.show_subtotal:
            line = _sub(root, "div", f"{vocabulary.subtotal}: ", class_="subtotal")
            _sub(line, "strong", self._amount(data.get("subtotal"), pack))
        if config.show_tax:
            rate = to_decimal(data.get("tax_rate"))
            if rate is None:
                rate = pack.tax.standard
            rate_label = format_locale_number(rate, pack, _integral_decimals(rate))
            line = _sub(root, "div", f"{vocabulary.vat} ({rate_label} %): ", class_="tax")
            _sub(line, "strong", self._amount(data.get("tax_amount"), pack))
        if config.show_total:
            _sub(
                root,
                "div",
                f"{vocabulary.total}: {self._amount(data.get('total'), pack)}",
                class_="primary bold total",
                style=(
                    "font-size: 14pt; "
                    f"border-top: 2px solid {_css_value(styles.primary_color)}; "
                    "padding-top: 8px; margin-top: 8px;"
                ),
            )
        words = data.get("total_in_words")
        if config.show_amount_in_words and isinstance(words, str) and words.strip():
            _sub(root, "div", words, class_="amount-in-words", style="font-style: italic;")
        return root

    def _build_notes(self, block: NotesBlock, data, styles, pack) -> etree._Element | None:
        notes = data.get("notes")
        if not isinstance(notes, str) or not notes.strip():
            return None
        root = self._root(
            block,
            extra_css=(
                "background-color: #fffbeb; padding: 12px; "
                "border-left: 3px solid #f59e0b"
            ),
        )
        _sub(root, "strong", f"{block.config.title or 'Notes'}:")
        etree.SubElement(root, "br")
        _append_text(root, notes)
        return root

    def _build_footer(self, block: FooterBlock, data, styles, pack) -> etree._Element:
        root = self._root(
            block,
            extra_css=(
                "border-top: 1px solid #ddd; padding-top: 10px; "
                "font-size: 8pt; color: #666"
            ),
        )
        _append_text(root, block.config.legal_text)
        if block.config.show_page_numbers:
            _sub(
                root,
                "div",
                "Page {{page_number}} / {{total_pages}}",
                class_="page-number",
                style="text-align: center;",
            )
        return root

    def _build_signature(self, block: SignatureBlock, data, styles, pack) -> etree._Element:
        config = block.config
        root = self._root(block)
        _sub(root, "p", config.label or f"Signature du {pack.vocabulary.client.lower()}")
        if config.signature_type == SignatureType.BOX:
            _sub(root, "div", class_="signature-box",
                 style="border: 1px solid #333; height: 80px; width: 250px;")
        elif config.signature_type == SignatureType.DIGITAL:
            _sub(root, "div", "Signature électronique", class_="signature-digital",
                 data_signature="digital",
                 style="border: 1px dashed #999; padding: 12px; width: 250px;")
        else:
            _sub(root, "div", class_="signature-line",
                 style="border-bottom: 1px solid #333; height: 40px; width: 250px;")
        if config.show_date:
            signed_on = data.get("signature_date")
            shown = format_locale_date(signed_on, pack) if signed_on else "____________"
            _sub(root, "p", f"Date : {shown}", class_="signature-date")
        return root

    def _build_text(self, block: TextBlock, data, styles, pack) -> etree._Element:
        root = self._root(block)
        _append_text(root, block.config.content)
        return root

    def _build_image(self, block: ImageBlock, data, styles, pack) -> etree._Element | None:
        if not block.config.image_url:
            return None
        root = self._root(block)
        _sub(root, "img", src=block.config.image_url, alt=block.config.image_alt,
             style="max-width: 100%;")
        return root

    def _build_spacer(self, block: SpacerBlock, data, styles, pack) -> etree._Element:
        return self._root(block, extra_css=f"height: {_css_value(block.config.height)}")

    def _build_divider(self, block: DividerBlock, data, styles, pack) -> etree._Element:
        color = block.config.color or styles.secondary_color
        return self._root(
            block,
            tag="hr",
            extra_css=(
                "border: none; "
                f"border-top: {block.config.thickness}px solid {_css_value(color)}"
            ),
        )

    def _epc_payload(self, data: Mapping[str, Any], pack: LocalePack) -> str | None:
        amount = data.get("amount_due", data.get("total"))
        name = data.get("company_name")
        iban = data.get("company_iban")
        if not is_valid_epc_data(name, iban, amount, pack.currency.code):
            logger.debug("Données insuffisantes pour le QR de paiement EPC")
            return None
        reference = data.get("structured_reference")
        remittance = data.get("document_number")
        bic = data.get("company_bic")
        return generate_epc_payload(
            beneficiary_name=name,
            iban=iban,
            amount=amount,
            currency=pack.currency.code,
            bic=bic if isinstance(bic, str) else None,
            reference=reference if isinstance(reference, str) else None,
            remittance_info=_clean(remittance) or None,
        )

    def _build_qr_code(self, block: QRCodeBlock, data, styles, pack) -> etree._Element | None:
        config = block.config
        payload = self._epc_payload(data, pack) if config.epc_payment else config.qr_data
        if not payload:
            return None
        root = self._root(block)
        _sub(
            root,
            "div",
            class_="qr-code",
            data_qr_payload=payload,
            data_qr_size=str(config.qr_size),
            style=f"width: {config.qr_size}px; height: {config.qr_size}px;",
        )
        return root

    def _build_watermark(self, block: WatermarkBlock, data, styles, pack) -> etree._Element | None:
        config = block.config
        if not config.watermark_text and not config.watermark_image:
            return None
        root = self._root(
            block,
            extra_css=(
                "position: fixed; top: 50%; left: 50%; "
                "transform: translate(-50%, -50%) rotate(-45deg); "
                f"opacity: {config.watermark_opacity:g}; pointer-events: none; z-index: -1; "
                f"font-size: 72pt; color: {_css_value(styles.primary_color)}"
            ),
        )
        if config.watermark_image:
            _sub(root, "img", src=config.watermark_image, alt="", style="max-width: 100%;")
        else:
            _append_text(root, config.watermark_text)
        return root


_default_renderer = HTMLRenderer()


def generate_html_preview(
    template: DocumentTemplate,
    data: Mapping[str, Any],
    *,
    locale: str | None = None,
) -> str:
    """Interpole le template et le rend en document HTML complet.

    Args:
        template: Le template à rendre.
        data: Les données du document.
        locale: Locale active (sinon ``data["locale"]``, sinon fr-BE).

    Returns:
        Le document HTML.
    """
    return _default_renderer.render(template, data, locale=locale).html


def render_block(
    block: TemplateBlock,
    data: Mapping[str, Any],
    global_styles: GlobalStyles,
    pack: LocalePack | None = None,
) -> str:
    """Rend un bloc seul en fragment HTML (chaîne vide si non rendu)."""
    return _default_renderer.render_block(block, data, global_styles, pack)
