"""Modèles des templates de documents (devis, factures, contrats…).

FR: Un template est une liste ordonnée de blocs typés. Chaque type de bloc
    porte sa propre configuration (union discriminée par ``type``) ; un type
    inconnu est conservé tel quel dans ``UnknownBlock`` pour rester
    compatible avec les templates produits par une version plus récente.
    Le format d'échange (colonne ``template_data``) utilise des clés
    camelCase (``pageSize``, ``globalStyles``, ``showLogo``…) ; les modèles
    acceptent indifféremment camelCase et snake_case.
EN: A template is an ordered list of typed blocks. Each block type carries
    its own configuration (tagged union on ``type``); unknown types are
    kept as ``UnknownBlock``. The wire format uses camelCase keys; models
    accept both camelCase and snake_case.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from devispack.models.enums import (
    BlockType,
    ColumnAlign,
    ColumnFormat,
    Orientation,
    PageSize,
    SignatureType,
    TemplateType,
)

logger = logging.getLogger(__name__)


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


# --- Style ---


class BlockStyle(_CamelModel):
    """Propriétés de style d'un bloc, communes à tous les types.

    FR: Sous-ensemble de propriétés CSS ; seules les valeurs renseignées
        sont émises par ``to_css``.
    EN: Subset of CSS properties; only set values are emitted.
    """

    width: str | None = None
    height: str | None = None
    min_height: str | None = None
    max_width: str | None = None

    margin: str | None = None
    margin_top: str | None = None
    margin_bottom: str | None = None
    margin_left: str | None = None
    margin_right: str | None = None
    padding: str | None = None
    padding_top: str | None = None
    padding_bottom: str | None = None
    padding_left: str | None = None
    padding_right: str | None = None

    background_color: str | None = None
    color: str | None = None
    border_color: str | None = None
    border_width: str | None = None
    border_style: Literal["solid", "dashed", "dotted", "none"] | None = None
    border_radius: str | None = None

    font_size: str | None = None
    font_weight: Literal["normal", "bold", "light"] | None = None
    font_family: str | None = None
    text_align: Literal["left", "center", "right", "justify"] | None = None

    display: Literal["block", "flex", "grid"] | None = None
    flex_direction: Literal["row", "column"] | None = None
    justify_content: str | None = None
    align_items: str | None = None
    gap: str | None = None

    def to_css(self) -> str:
        """Sérialise le style en déclarations CSS (``margin-bottom: 20px``)."""
        declarations = [
            f"{name.replace('_', '-')}: {value}"
            for name, value in self.model_dump(exclude_none=True).items()
        ]
        return "; ".join(declarations)


# --- Configuration par type de bloc ---


class HeaderConfig(_CamelModel):
    """En-tête : logo facultatif et titre du document."""

    show_logo: bool = False
    logo_position: ColumnAlign = ColumnAlign.LEFT
    title: str | None = None


class CompanyInfoConfig(_CamelModel):
    """Coordonnées du prestataire."""

    title: str | None = None


class ClientInfoConfig(_CamelModel):
    """Coordonnées du client."""

    title: str | None = None


class DocumentInfoConfig(_CamelModel):
    """Métadonnées du document (numéro, date, validité)."""

    variables: list[str] = Field(
        default_factory=lambda: ["document_number", "document_date", "valid_until"],
        description="Variables affichées / Displayed variables",
    )


class TableColumn(_CamelModel):
    """Colonne du tableau des postes."""

    id: str
    header: str
    field: str
    width: str | None = None
    align: ColumnAlign = ColumnAlign.LEFT
    format: ColumnFormat = ColumnFormat.TEXT


class ItemsTableConfig(_CamelModel):
    """Tableau des postes du devis."""

    columns: list[TableColumn] = Field(default_factory=list)
    show_item_numbers: bool = False
    alternate_row_colors: bool = False


class TotalsConfig(_CamelModel):
    """Lignes de totaux affichées."""

    show_subtotal: bool = False
    show_tax: bool = False
    show_total: bool = False
    show_amount_in_words: bool = False


class NotesConfig(_CamelModel):
    """Remarques libres du devis."""

    title: str | None = None


class FooterConfig(_CamelModel):
    """Pied de page : texte légal et numérotation des pages."""

    legal_text: str = ""
    show_page_numbers: bool = False


class SignatureConfig(_CamelModel):
    """Zone de signature du client."""

    signature_type: SignatureType = SignatureType.LINE
    show_date: bool = False
    label: str | None = None


class TextConfig(_CamelModel):
    """Texte libre (les variables sont substituées en amont)."""

    content: str = ""
    variables: list[str] = Field(default_factory=list)


class ImageConfig(_CamelModel):
    """Image unique désignée par son URL."""

    image_url: str | None = None
    image_alt: str = ""


class SpacerConfig(_CamelModel):
    """Espace vertical fixe."""

    height: str = "20px"


class DividerConfig(_CamelModel):
    """Ligne de séparation horizontale."""

    color: str | None = None
    thickness: int = Field(default=1, ge=0)


class QRCodeConfig(_CamelModel):
    """QR code : contenu libre ou virement SEPA (EPC)."""

    qr_data: str | None = None
    qr_size: int = Field(default=120, gt=0)
    epc_payment: bool = Field(
        default=False,
        description=(
            "Générer un QR de virement EPC depuis les données du document / "
            "Build an EPC transfer payload from the document data"
        ),
    )


class WatermarkConfig(_CamelModel):
    """Filigrane semi-transparent (texte ou image)."""

    watermark_text: str | None = None
    watermark_image: str | None = None
    watermark_opacity: float = Field(default=0.1, ge=0, le=1)


# --- Blocs ---


class _BaseBlock(_CamelModel):
    id: str = Field(..., min_length=1)
    order: int = 0
    visible: bool = True
    style: BlockStyle = Field(default_factory=BlockStyle)


class HeaderBlock(_BaseBlock):
    type: Literal["header"] = "header"
    config: HeaderConfig = Field(default_factory=HeaderConfig)


class CompanyInfoBlock(_BaseBlock):
    type: Literal["company_info"] = "company_info"
    config: CompanyInfoConfig = Field(default_factory=CompanyInfoConfig)


class ClientInfoBlock(_BaseBlock):
    type: Literal["client_info"] = "client_info"
    config: ClientInfoConfig = Field(default_factory=ClientInfoConfig)


class DocumentInfoBlock(_BaseBlock):
    type: Literal["document_info"] = "document_info"
    config: DocumentInfoConfig = Field(default_factory=DocumentInfoConfig)


class ItemsTableBlock(_BaseBlock):
    type: Literal["items_table"] = "items_table"
    config: ItemsTableConfig = Field(default_factory=ItemsTableConfig)


class TotalsBlock(_BaseBlock):
    type: Literal["totals"] = "totals"
    config: TotalsConfig = Field(default_factory=TotalsConfig)


class NotesBlock(_BaseBlock):
    type: Literal["notes"] = "notes"
    config: NotesConfig = Field(default_factory=NotesConfig)


class FooterBlock(_BaseBlock):
    type: Literal["footer"] = "footer"
    config: FooterConfig = Field(default_factory=FooterConfig)


class SignatureBlock(_BaseBlock):
    type: Literal["signature"] = "signature"
    config: SignatureConfig = Field(default_factory=SignatureConfig)


class TextBlock(_BaseBlock):
    type: Literal["text"] = "text"
    config: TextConfig = Field(default_factory=TextConfig)


class ImageBlock(_BaseBlock):
    type: Literal["image"] = "image"
    config: ImageConfig = Field(default_factory=ImageConfig)


class SpacerBlock(_BaseBlock):
    type: Literal["spacer"] = "spacer"
    config: SpacerConfig = Field(default_factory=SpacerConfig)


class DividerBlock(_BaseBlock):
    type: Literal["divider"] = "divider"
    config: DividerConfig = Field(default_factory=DividerConfig)


class QRCodeBlock(_BaseBlock):
    type: Literal["qr_code"] = "qr_code"
    config: QRCodeConfig = Field(default_factory=QRCodeConfig)


class WatermarkBlock(_BaseBlock):
    type: Literal["watermark"] = "watermark"
    config: WatermarkConfig = Field(default_factory=WatermarkConfig)


class UnknownBlock(_BaseBlock):
    """Bloc de type inconnu ou invalide.

    FR: Conserve la configuration brute pour ne rien perdre à
        l'enregistrement ; n'est jamais rendu.
    EN: Keeps the raw configuration so nothing is lost on save; never
        rendered.
    """

    type: str = "unknown"
    config: dict[str, Any] = Field(default_factory=dict)


_UNKNOWN_TAG = "unknown"
_KNOWN_BLOCK_TYPES = frozenset(block_type.value for block_type in BlockType)


def _block_tag(value: Any) -> str:
    """Retourne l'étiquette de la variante de bloc à valider."""
    if isinstance(value, dict):
        block_type = value.get("type")
    else:
        block_type = getattr(value, "type", None)
    if isinstance(block_type, str) and block_type in _KNOWN_BLOCK_TYPES:
        return block_type
    return _UNKNOWN_TAG


TemplateBlock = Annotated[
    Union[
        Annotated[HeaderBlock, Tag("header")],
        Annotated[CompanyInfoBlock, Tag("company_info")],
        Annotated[ClientInfoBlock, Tag("client_info")],
        Annotated[DocumentInfoBlock, Tag("document_info")],
        Annotated[ItemsTableBlock, Tag("items_table")],
        Annotated[TotalsBlock, Tag("totals")],
        Annotated[NotesBlock, Tag("notes")],
        Annotated[FooterBlock, Tag("footer")],
        Annotated[SignatureBlock, Tag("signature")],
        Annotated[TextBlock, Tag("text")],
        Annotated[ImageBlock, Tag("image")],
        Annotated[SpacerBlock, Tag("spacer")],
        Annotated[DividerBlock, Tag("divider")],
        Annotated[QRCodeBlock, Tag("qr_code")],
        Annotated[WatermarkBlock, Tag("watermark")],
        Annotated[UnknownBlock, Tag(_UNKNOWN_TAG)],
    ],
    Discriminator(_block_tag),
]
"""Bloc de template, discriminé par ``type`` / Template block union."""


def _safe_int(value: object, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    try:
        return int(str(value))
    except ValueError:
        return default


def _raw_block_id(raw: object) -> str | None:
    block_id = raw.get("id") if isinstance(raw, dict) else getattr(raw, "id", None)
    return block_id if isinstance(block_id, str) and block_id else None


def _free_block_id(index: int, taken: set[str]) -> str:
    """Identifiant ``block-<index>`` absent de ``taken`` (suffixé au besoin)."""
    candidate = f"block-{index}"
    suffix = 1
    while candidate in taken:
        suffix += 1
        candidate = f"block-{index}-{suffix}"
    return candidate


def _fallback_block(raw: object, index: int, taken: set[str]) -> UnknownBlock:
    """Conserve un bloc invalide sous forme d'``UnknownBlock`` brut.

    FR: Un bloc sans identifiant reçoit ``block-<index>``, rendu unique
        parmi les identifiants de ``taken``.
    EN: A block without an id gets ``block-<index>``, made unique among
        ``taken``.
    """
    if isinstance(raw, UnknownBlock):
        return raw
    if isinstance(raw, BaseModel):
        raw = raw.model_dump(by_alias=True)
    values: dict[str, Any] = raw if isinstance(raw, dict) else {}
    config = values.get("config")
    block_id = _raw_block_id(values) or _free_block_id(index, taken)
    block_type = values.get("type")
    return UnknownBlock.model_construct(
        id=block_id,
        type=block_type if isinstance(block_type, str) else _UNKNOWN_TAG,
        order=_safe_int(values.get("order", index), index),
        visible=bool(values.get("visible", True)),
        config=config if isinstance(config, dict) else {},
        style=BlockStyle(),
    )


# --- Template ---


class Margins(_CamelModel):
    """Marges de page en pixels."""

    top: float = Field(default=40, ge=0)
    right: float = Field(default=40, ge=0)
    bottom: float = Field(default=40, ge=0)
    left: float = Field(default=40, ge=0)


class GlobalStyles(_CamelModel):
    """Styles partagés par tous les blocs."""

    primary_color: str = "#1E3A5F"
    secondary_color: str = "#C9A962"
    font_family: str = "Helvetica"
    base_font_size: float = Field(default=10, gt=0)


class DocumentTemplate(BaseModel):
    """Template de document complet.

    FR: Les métadonnées de ligne (``user_id``, ``is_public``…) restent en
        snake_case, comme les colonnes de la table ; la géométrie de page
        et les styles globaux utilisent les clés camelCase du format
        ``template_data``.
    EN: Row metadata stays snake_case like the table columns; page geometry
        and global styles use the camelCase ``template_data`` keys.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = Field(default=None, description="Identifiant / Identifier")
    user_id: str | None = Field(default=None, description="Propriétaire / Owner")
    name: str = Field(..., min_length=1, description="Nom / Name")
    description: str | None = None
    type: TemplateType = TemplateType.QUOTE
    category: str | None = None

    page_size: PageSize = Field(default=PageSize.A4, alias="pageSize")
    orientation: Orientation = Orientation.PORTRAIT
    margins: Margins = Field(default_factory=Margins)
    global_styles: GlobalStyles = Field(
        default_factory=GlobalStyles,
        alias="globalStyles",
    )
    blocks: list[TemplateBlock] = Field(default_factory=list)

    is_public: bool = False
    is_premium: bool = False
    price: Decimal = Field(default=Decimal("0"), ge=0)
    downloads_count: int = Field(default=0, ge=0)
    rating: float | None = Field(default=None, ge=0, le=5)

    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("blocks", mode="wrap")
    @classmethod
    def _keep_invalid_blocks(
        cls, value: Any, handler: ValidatorFunctionWrapHandler
    ) -> list[Any]:
        """Valide les blocs un par un ; un bloc invalide devient inconnu."""
        if not isinstance(value, (list, tuple)):
            return handler(value)

        taken = {block_id for block_id in map(_raw_block_id, value) if block_id}
        blocks: list[Any] = []
        for index, raw in enumerate(value):
            try:
                blocks.extend(handler([raw]))
            except ValidationError as exc:
                logger.warning(
                    "Bloc %s invalide, conservé sans rendu : %s",
                    index,
                    exc.errors(include_url=False),
                )
                fallback = _fallback_block(raw, index, taken)
                taken.add(fallback.id)
                blocks.append(fallback)
        return blocks

    @model_validator(mode="after")
    def _unique_block_ids(self) -> DocumentTemplate:
        seen: set[str] = set()
        for block in self.blocks:
            if block.id in seen:
                msg = f"Identifiant de bloc en double : {block.id}"
                raise ValueError(msg)
            seen.add(block.id)
        return self

    def visible_blocks(self) -> list[TemplateBlock]:
        """Blocs visibles triés par ``order`` (tri stable)."""
        return sorted(
            (block for block in self.blocks if block.visible),
            key=lambda block: block.order,
        )

    def template_data(self) -> dict[str, Any]:
        """Retourne le contenu de la colonne ``template_data`` (camelCase)."""
        return self.model_dump(
            mode="json",
            by_alias=True,
            include={"page_size", "orientation", "margins", "global_styles", "blocks"},
        )
