"""
Per-type block renderers for the dynamic layout.

Each renderer draws one block starting at the cursor position ``y`` and
returns the cursor just below what it drew. The inter-block gap and the
optional border are added by the caller. Renderers are looked up in a
table keyed by ``BlockType`` that covers every kind, ``UNKNOWN`` included.
"""

import logging
from typing import TYPE_CHECKING, Callable, Dict, Optional, Sequence

from evidence_report.geometry import (
    CONTENT_WIDTH_MM,
    LEFT_MARGIN_MM,
    LINE_HEIGHT_MM,
    builder_px_to_mm,
)
from evidence_report.images import ImageLoadResult
from evidence_report.models import (
    BlockAlignment,
    BlockType,
    EvidenceItem,
    EvidenceLayout,
    HeaderVariant,
    TemplateBlock,
)
from evidence_report.templates.base import WHITE

if TYPE_CHECKING:
    from evidence_report.templates.dynamic import DynamicTemplate

logger = logging.getLogger(__name__)

EVIDENCE_BREAK_RESERVE = 60
TABLE_ROW_HEIGHT = 10
HEADER_LOGO_WIDTH = 30
HEADER_LOGO_HEIGHT = 15

SECTION_CAPTIONS = {
    BlockType.SUMMARY: "Executive Summary",
    BlockType.CONCLUSION: "Conclusion",
}

TOC_LINES = (
    "1. Executive Summary ................................. 1",
    "2. Evidence Detail ........................................ 2",
    "3. Conclusion ................................................. 5",
)


class BlockRenderer:
    """Draws blocks for one ``DynamicTemplate`` render."""

    def __init__(self, template: "DynamicTemplate", evidence: Sequence[EvidenceItem] = ()):
        self.template = template
        self.canvas = template.canvas
        self.theme = template.theme
        self.paginator = template.paginator
        self.evidence = list(evidence)
        self._renderers: Dict[BlockType, Callable[[TemplateBlock, float], float]] = {
            BlockType.HEADER: self.render_header,
            BlockType.FOOTER: self.render_footer,
            BlockType.TEXT: self.render_text,
            BlockType.SUMMARY: self.render_text,
            BlockType.CONCLUSION: self.render_text,
            BlockType.TOC: self.render_toc,
            BlockType.LOGO: self.render_logo,
            BlockType.TABLE: self.render_table,
            BlockType.GRID: self.render_grid,
            BlockType.EVIDENCE_LOOP: self.render_evidence_loop,
            BlockType.PAGE_BREAK: self.render_page_break,
            BlockType.UNKNOWN: self.render_unknown,
        }

    def render(self, block: TemplateBlock, y: float) -> float:
        return self._renderers[block.type](block, y)

    # ------------------------------------------------------------------
    # Renderers
    # ------------------------------------------------------------------

    def render_header(self, block: TemplateBlock, y: float) -> float:
        c = self.canvas
        content = block.content
        if block.settings.variant == HeaderVariant.MODERN:
            # Full-width band centred on the cursor line
            c.set_fill_color(self.theme.primary)
            c.rect(0, y - 20, c.page_width, 40, fill=True, stroke=False)
            if content.logo:
                self._header_logo(content.logo, LEFT_MARGIN_MM, y - 5)
            c.set_font(24, bold=True)
            c.set_text_color(WHITE)
            c.text(content.title, 60, y + 5)
            if content.show_date:
                c.set_font(10)
                c.text(self.template.current_date, 180, y + 5, align="right")
            return y + 30

        if content.logo and self._header_logo(content.logo, LEFT_MARGIN_MM, y):
            y += HEADER_LOGO_HEIGHT + 5
        c.set_font(24, bold=True)
        c.set_text_color(self.theme.primary)
        c.text(content.title, LEFT_MARGIN_MM, y)
        y += 10
        if content.show_date:
            c.set_font(10)
            c.set_text_color(self.theme.text_light)
            c.text(self.template.current_date, LEFT_MARGIN_MM, y)
            y += 10
        return y

    def _header_logo(self, source: str, x: float, y: float) -> bool:
        image = self.template.load_image(source)
        if image is None:
            logger.warning("Header logo skipped: image unavailable")
            return False
        self.canvas.image(image, x, y, HEADER_LOGO_WIDTH, HEADER_LOGO_HEIGHT)
        return True

    def render_footer(self, block: TemplateBlock, y: float) -> float:
        c = self.canvas
        c.set_stroke_color(self.theme.text_light)
        c.set_line_width(0.2)
        c.line(LEFT_MARGIN_MM, y, LEFT_MARGIN_MM + CONTENT_WIDTH_MM, y)

        c.set_font(9)
        c.set_text_color(self.theme.text_light)
        c.text(block.content.text, c.page_width / 2, y + 5, align="center")
        if block.content.show_page_number:
            c.text(f"Page {c.page_number}", LEFT_MARGIN_MM + CONTENT_WIDTH_MM, y + 5, align="right")
        return y + 15

    def render_text(self, block: TemplateBlock, y: float) -> float:
        c = self.canvas
        caption = SECTION_CAPTIONS.get(block.type)
        if caption:
            c.set_font(14, bold=True)
            c.set_text_color(self.theme.primary)
            c.text(caption, LEFT_MARGIN_MM, y)
            y += 7

        c.set_font(11)
        c.set_text_color(self.theme.text_main)
        lines = c.split_text(block.content.text, CONTENT_WIDTH_MM)
        c.text(lines, LEFT_MARGIN_MM, y)
        return y + len(lines) * LINE_HEIGHT_MM

    def render_toc(self, block: TemplateBlock, y: float) -> float:
        """Static three-entry index; it does not reflect the real content."""
        c = self.canvas
        c.set_font(14, bold=True)
        c.set_text_color(self.theme.text_main)
        c.text(block.content.title, LEFT_MARGIN_MM, y)
        y += 10

        c.set_font(10)
        c.text(list(TOC_LINES), LEFT_MARGIN_MM, y, line_height=6)
        y += 6 * (len(TOC_LINES) - 1)
        return y + 10

    def render_logo(self, block: TemplateBlock, y: float) -> float:
        content = block.content
        if not content.image:
            return y
        image = self.template.load_image(content.image)
        if image is None:
            logger.warning("Logo block %s skipped: image unavailable", block.id)
            return y

        width = builder_px_to_mm(content.width)
        height = image.height_for_width(width)
        if content.alignment == BlockAlignment.CENTER:
            x = (self.canvas.page_width - width) / 2
        elif content.alignment == BlockAlignment.RIGHT:
            x = LEFT_MARGIN_MM + CONTENT_WIDTH_MM - width
        else:
            x = LEFT_MARGIN_MM
        self.canvas.image(image, x, y, width, height)
        return y + height

    def render_table(self, block: TemplateBlock, y: float) -> float:
        """Empty bordered grid; cell text is never rendered."""
        c = self.canvas
        rows, cols = block.content.rows, block.content.cols
        cell_width = CONTENT_WIDTH_MM / cols

        c.set_stroke_color(self.theme.text_light)
        c.set_fill_color(WHITE)
        c.set_line_width(0.2)
        for i in range(rows):
            for j in range(cols):
                c.rect(
                    LEFT_MARGIN_MM + j * cell_width,
                    y + i * TABLE_ROW_HEIGHT,
                    cell_width,
                    TABLE_ROW_HEIGHT,
                )
        return y + rows * TABLE_ROW_HEIGHT

    def render_grid(self, block: TemplateBlock, y: float) -> float:
        """Fixed 2x2 scaffold box."""
        c = self.canvas
        c.set_font(10)
        c.set_text_color(self.theme.text_light)
        c.text("[Image Grid Placeholder]", LEFT_MARGIN_MM, y)

        c.set_stroke_color(self.theme.text_light)
        c.set_line_width(0.2)
        c.rect(20, y + 2, 80, 80)
        c.line(60, y + 2, 60, y + 82)
        c.line(20, y + 42, 100, y + 42)
        return y + 90

    def render_page_break(self, block: TemplateBlock, y: float) -> float:
        self.paginator.force_break()
        return self.paginator.cursor

    def render_unknown(self, block: TemplateBlock, y: float) -> float:
        logger.warning(
            "Skipping block %s with unrecognised type %r", block.id, block.raw_type or "unknown"
        )
        return y

    # ------------------------------------------------------------------
    # Evidence loop
    # ------------------------------------------------------------------

    def render_evidence_loop(self, block: TemplateBlock, y: float) -> float:
        c = self.canvas
        layout = block.content.layout

        for index, item in enumerate(self.evidence):
            self.paginator.cursor = y
            if self.paginator.break_if_needed(EVIDENCE_BREAK_RESERVE):
                y = self.paginator.cursor

            c.set_font(14, bold=True)
            c.set_text_color(self.theme.primary)
            c.text(f"{index + 1}. {item.title}", LEFT_MARGIN_MM, y)
            y += 7

            badge = self.template.status_colors(item.status)
            c.set_fill_color(badge.bg)
            c.rounded_rect(LEFT_MARGIN_MM, y - 4, 20, 6, 2, fill=True)
            c.set_font(8, bold=True)
            c.set_text_color(badge.text)
            c.text(item.status.value.upper(), LEFT_MARGIN_MM + 2, y)
            y += 8

            c.set_font(10)
            c.set_text_color(self.theme.text_main)
            result = self.template.image_loader.load(item.image) if item.image else None
            if result is None:
                y = self._description(item, LEFT_MARGIN_MM, y, CONTENT_WIDTH_MM)
            elif layout == EvidenceLayout.TOP_BOTTOM:
                y += self._place_image(result, 40, y, 130) + 5
                y = self._description(item, LEFT_MARGIN_MM, y, CONTENT_WIDTH_MM)
            elif layout == EvidenceLayout.SPLIT_LEFT:
                height = self._place_image(result, LEFT_MARGIN_MM, y, 80)
                self._description(item, 105, y + 5, 85)
                y += max(height, 20) + 5
            else:
                desc_height = self._description(item, LEFT_MARGIN_MM, y + 5, 80) - (y + 5)
                height = self._place_image(result, 110, y, 80)
                y += max(height, desc_height) + 5

            y += 10

        self.paginator.cursor = y
        return y

    def _description(self, item: EvidenceItem, x: float, y: float, width: float) -> float:
        """Draw the wrapped description; returns the cursor below it."""
        if not item.description:
            return y
        c = self.canvas
        c.set_font(10)
        c.set_text_color(self.theme.text_main)
        lines = c.split_text(item.description, width)
        c.text(lines, x, y)
        return y + len(lines) * LINE_HEIGHT_MM

    def _place_image(self, result: Optional[ImageLoadResult], x: float, y: float, width: float) -> float:
        """Draw an evidence image at ``width``; returns the height it used."""
        if result is not None and result.ok:
            height = result.image.height_for_width(width)
            self.canvas.image(result.image, x, y, width, height)
            return height
        height = width * 9 / 16
        self.template.draw_placeholder(x, y, width, height, label_size=9)
        return height
