"""
Pydantic data models for evidence report composition.

This module defines the inputs of the report engine: evidence items, the
report configuration, and the user-authored custom template model (pages,
blocks, background, decorations, settings). All models are immutable;
the engine reads them and never writes back.

Field names are snake_case in Python. Every field also accepts the
camelCase spelling produced by the template editor (``showBorder``,
``accentColor``, ...).
"""

from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union
from uuid import uuid4

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel


def _new_id() -> str:
    return uuid4().hex


class _ReportModel(BaseModel):
    """Common configuration: frozen, camelCase aliases, snake_case names."""
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


# =============================================================================
# Enumerations
# =============================================================================

class EvidenceStatus(str, Enum):
    """Outcome recorded for a captured evidence item."""
    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"


class TemplateId(str, Enum):
    """Report layout strategies."""
    CLASSIC = "classic"
    MODERN = "modern"
    CREATIVE = "creative"
    CUSTOM = "custom"


class ReportLayout(str, Enum):
    """Legacy layout selector (A = classic, B = modern)."""
    A = "A"
    B = "B"


class OutputFormat(str, Enum):
    """Output encodings produced by the report generator."""
    PDF = "pdf"
    DOCX = "docx"


class LogoAlignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    SPLIT = "split"


class LogoGap(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class PageKind(str, Enum):
    """Advisory tag on an authored page. Does not change rendering."""
    COVER = "cover"
    CONTENT = "content"
    SUMMARY = "summary"
    INDEX = "index"
    CONCLUSION = "conclusion"


class BlockType(str, Enum):
    """Closed set of block kinds understood by the dynamic interpreter."""
    HEADER = "header"
    FOOTER = "footer"
    TEXT = "text"
    SUMMARY = "summary"
    CONCLUSION = "conclusion"
    TOC = "toc"
    LOGO = "logo"
    TABLE = "table"
    GRID = "grid"
    EVIDENCE_LOOP = "evidence-loop"
    PAGE_BREAK = "page-break"
    UNKNOWN = "unknown"  # Any tag the interpreter does not recognise

    @classmethod
    def parse(cls, value: Any) -> "BlockType":
        """Map a raw tag (including the editor's legacy spellings) to a kind."""
        if isinstance(value, cls):
            return value
        tag = str(value or "").strip().lower()
        tag = _BLOCK_TYPE_ALIASES.get(tag, tag)
        try:
            return cls(tag)
        except ValueError:
            return cls.UNKNOWN


_BLOCK_TYPE_ALIASES = {
    "evidence": "evidence-loop",
    "evidence_loop": "evidence-loop",
    "page_break": "page-break",
    "pagebreak": "page-break",
}


class HeaderVariant(str, Enum):
    CLASSIC = "classic"
    MODERN = "modern"


class EvidenceLayout(str, Enum):
    """Image/description placement inside an evidence loop."""
    TOP_BOTTOM = "top-bottom"
    SPLIT_LEFT = "split-left"
    SPLIT_RIGHT = "split-right"


class BlockAlignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class BackgroundPattern(str, Enum):
    NONE = "none"
    CIRCLES = "circles"
    GRID_DOTS = "grid-dots"
    WAVES = "waves"
    HEXAGONS = "hexagons"


class DecorationShape(str, Enum):
    CIRCLE = "circle"
    SQUARE = "square"
    TRIANGLE = "triangle"
    WAVE = "wave"


# =============================================================================
# Evidence
# =============================================================================

class CaptureMetadata(_ReportModel):
    """System context recorded when the evidence was captured."""
    model_config = ConfigDict(extra="allow")

    os: Optional[str] = Field(None, description="Operating system of the capturing host")
    resolution: Optional[str] = Field(None, description="Screen resolution, e.g. '1920x1080'")
    application: Optional[str] = Field(None, description="Foreground application at capture time")
    captured_at: Optional[datetime] = Field(None, description="Capture timestamp")


class EvidenceItem(_ReportModel):
    """A single captured piece of evidence."""
    id: str = Field(default_factory=_new_id, description="Evidence identifier")
    image: Optional[Union[str, bytes]] = Field(
        None,
        validation_alias=AliasChoices("image", "thumbnail"),
        description="Image payload: raw bytes, a data URI, or an opaque media reference",
    )
    title: str = Field("", description="Short evidence title")
    description: str = Field("", description="Free-text description")
    status: EvidenceStatus = Field(EvidenceStatus.PENDING, description="Evidence outcome")
    metadata: Optional[CaptureMetadata] = Field(None, description="Optional capture metadata")


# =============================================================================
# Palette
# =============================================================================

class StatusColors(_ReportModel):
    bg: str
    text: str


class ColorPalette(_ReportModel):
    """Named theme colours applied across a rendered report."""
    primary: str
    secondary: str
    text_main: str
    text_light: str
    bg_light: str
    status_success: StatusColors
    status_fail: StatusColors


# =============================================================================
# Custom template: block content payloads
# =============================================================================

class BlockContent(_ReportModel):
    """Content payload of blocks that carry none (page-break, unknown)."""


class HeaderContent(BlockContent):
    title: str = ""
    logo: Optional[str] = Field(None, description="Optional small logo image source")
    show_date: bool = False


class FooterContent(BlockContent):
    text: str = ""
    show_page_number: bool = False


class TextContent(BlockContent):
    text: str = ""


class TocContent(BlockContent):
    title: str = "Table of Contents"


class LogoContent(BlockContent):
    image: Optional[str] = None
    width: float = Field(150, ge=0, le=500, description="Width in builder pixels (0-500)")
    alignment: BlockAlignment = BlockAlignment.LEFT


class TableContent(BlockContent):
    rows: int = Field(3, ge=1)
    cols: int = Field(3, ge=1)
    data: List[List[str]] = Field(default_factory=list, description="Editor-only cell text")


class GridContent(BlockContent):
    columns: int = Field(2, ge=1)
    images: List[str] = Field(default_factory=list)


class EvidenceLoopContent(BlockContent):
    layout: EvidenceLayout = EvidenceLayout.SPLIT_RIGHT


BLOCK_CONTENT_MODELS = {
    BlockType.HEADER: HeaderContent,
    BlockType.FOOTER: FooterContent,
    BlockType.TEXT: TextContent,
    BlockType.SUMMARY: TextContent,
    BlockType.CONCLUSION: TextContent,
    BlockType.TOC: TocContent,
    BlockType.LOGO: LogoContent,
    BlockType.TABLE: TableContent,
    BlockType.GRID: GridContent,
    BlockType.EVIDENCE_LOOP: EvidenceLoopContent,
    BlockType.PAGE_BREAK: BlockContent,
    BlockType.UNKNOWN: BlockContent,
}


# =============================================================================
# Custom template: structure
# =============================================================================

class BlockSettings(_ReportModel):
    show_border: bool = False
    variant: HeaderVariant = HeaderVariant.CLASSIC
    border_width: Optional[float] = Field(None, ge=0, description="Block border width in px")


class TemplateBlock(_ReportModel):
    """A typed content unit inside an authored page."""
    id: str = Field(default_factory=_new_id)
    type: BlockType
    raw_type: Optional[str] = Field(None, description="Original tag of an unrecognised block")
    content: BlockContent = Field(default_factory=BlockContent)
    settings: BlockSettings = Field(default_factory=BlockSettings)

    @model_validator(mode="before")
    @classmethod
    def _parse_typed_content(cls, data: Any) -> Any:
        """Resolve the block kind and validate the content against it."""
        if not isinstance(data, dict):
            return data
        data = dict(data)

        raw = data.get("type")
        block_type = BlockType.parse(raw)
        if block_type is BlockType.UNKNOWN and raw != BlockType.UNKNOWN.value:
            if "rawType" not in data:
                data.setdefault("raw_type", str(raw))
        data["type"] = block_type

        content_model = BLOCK_CONTENT_MODELS[block_type]
        content = data.get("content")
        if content is None or isinstance(content, dict):
            data["content"] = content_model.model_validate(content or {})
        elif isinstance(content, BlockContent) and not isinstance(content, content_model):
            data["content"] = content_model.model_validate(content.model_dump())

        # Older editor builds stored the header variant on the block itself
        if "variant" in data:
            variant = data.pop("variant")
            settings = data.get("settings")
            if settings is None:
                data["settings"] = {"variant": variant}
            elif isinstance(settings, dict) and "variant" not in settings:
                data["settings"] = {**settings, "variant": variant}
        return data


class TemplatePage(_ReportModel):
    """An authored page: an ordered container of blocks."""
    id: str = Field(default_factory=_new_id)
    kind: PageKind = Field(
        PageKind.CONTENT,
        validation_alias=AliasChoices("kind", "type"),
    )
    blocks: List[TemplateBlock] = Field(default_factory=list)
    order: int = 0


class Background(_ReportModel):
    pattern: BackgroundPattern = BackgroundPattern.NONE
    color: str = "#e2e8f0"
    opacity: float = Field(1.0, ge=0.0, le=1.0)


class Decoration(_ReportModel):
    """A freestanding shape positioned in page millimetres."""
    id: str = Field(default_factory=_new_id)
    shape: DecorationShape = Field(..., validation_alias=AliasChoices("shape", "type"))
    x: float = 0.0
    y: float = 0.0
    width: float = Field(40.0, ge=0)
    height: float = Field(40.0, ge=0)
    color: Optional[str] = None
    opacity: Optional[float] = Field(None, ge=0.0, le=1.0)
    border_width: Optional[float] = Field(None, ge=0, description="Border width in px")
    z_index: int = 0

    @field_validator("shape", mode="before")
    @classmethod
    def _legacy_shape(cls, value: Any) -> Any:
        if value == "wave_decoration":
            return DecorationShape.WAVE
        return value


class TemplateSettings(_ReportModel):
    """Template-wide style settings, each independently overridable."""
    accent_color: Optional[str] = None
    block_border_width: Optional[float] = Field(None, ge=0)
    decoration_border_width: Optional[float] = Field(None, ge=0)
    global_decoration_opacity: Optional[float] = Field(None, ge=0.0, le=1.0)
    global_border_width: Optional[float] = Field(
        None, ge=0, description="Legacy fallback for both border widths"
    )
    replay_decorations: bool = Field(
        True, description="Draw decorations on every physical page (False: first page only)"
    )


class CustomTemplate(_ReportModel):
    """User-authored report description consumed by the dynamic interpreter."""
    id: str = Field(default_factory=_new_id)
    name: str = "Untitled Template"
    pages: List[TemplatePage] = Field(default_factory=list)
    background: Optional[Background] = None
    decorations: List[Decoration] = Field(default_factory=list)
    settings: TemplateSettings = Field(default_factory=TemplateSettings)

    @model_validator(mode="before")
    @classmethod
    def _migrate_pages(cls, data: Any) -> Any:
        """Wrap legacy flat block lists into a page and order the pages."""
        if not isinstance(data, dict):
            return data
        data = dict(data)

        pages = data.get("pages") or []
        legacy_blocks = data.pop("blocks", None) or []
        if not pages:
            pages = [{"kind": PageKind.CONTENT, "blocks": legacy_blocks, "order": 0}]

        def _order(page: Any) -> int:
            if isinstance(page, dict):
                return page.get("order", 0) or 0
            return getattr(page, "order", 0)

        data["pages"] = sorted(pages, key=_order)
        return data

    @property
    def blocks(self) -> List[TemplateBlock]:
        """All blocks in document order."""
        return [block for page in self.pages for block in page.blocks]


# =============================================================================
# Report configuration
# =============================================================================

class ReportConfig(_ReportModel):
    """Complete configuration of one report render."""
    layout: ReportLayout = Field(ReportLayout.A, description="Deprecated: use template_id")
    template_id: Optional[TemplateId] = None
    theme: str = "default"
    title: str = "EVIDENCE REPORT"
    title_color: Optional[str] = None
    subtitle: str = "TEST EVIDENCE"
    subtitle_color: Optional[str] = None
    project_name: Optional[str] = None
    author: str = "QA Engineer"
    show_logo_symbol: bool = True
    show_logo_text: bool = True
    custom_logo_symbol: Optional[str] = None
    custom_logo_text: Optional[str] = None
    logo_alignment: LogoAlignment = LogoAlignment.SPLIT
    logo_gap: LogoGap = LogoGap.MEDIUM
    custom_template: Optional[CustomTemplate] = None
    report_date: Optional[date] = Field(None, description="Date printed on the report (default: today)")

    @field_validator("theme")
    @classmethod
    def _known_theme(cls, value: str) -> str:
        """Theme keys come from a closed set; reject anything else here."""
        from evidence_report.themes import REPORT_THEMES

        if value not in REPORT_THEMES:
            raise ValueError(
                f"Unknown theme '{value}'. Must be one of: {', '.join(REPORT_THEMES)}"
            )
        return value

    def effective_date(self) -> date:
        return self.report_date or date.today()


__all__ = [
    "BLOCK_CONTENT_MODELS",
    "Background",
    "BackgroundPattern",
    "BlockAlignment",
    "BlockContent",
    "BlockSettings",
    "BlockType",
    "CaptureMetadata",
    "ColorPalette",
    "CustomTemplate",
    "Decoration",
    "DecorationShape",
    "EvidenceItem",
    "EvidenceLayout",
    "EvidenceLoopContent",
    "EvidenceStatus",
    "FooterContent",
    "GridContent",
    "HeaderContent",
    "HeaderVariant",
    "LogoAlignment",
    "LogoContent",
    "LogoGap",
    "OutputFormat",
    "PageKind",
    "ReportConfig",
    "ReportLayout",
    "StatusColors",
    "TableContent",
    "TemplateBlock",
    "TemplateId",
    "TemplatePage",
    "TemplateSettings",
    "TextContent",
    "TocContent",
]
