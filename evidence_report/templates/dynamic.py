"""
Dynamic layout driven by a user-authored custom template.

Authored pages are rendered in order, each starting on a fresh physical
page. Blocks flow down the page under the control of a ``Paginator``;
every physical page, including pages added purely by overflow, gets the
background pattern and (unless disabled in the template settings) the
decorations.
"""

import logging
from typing import Optional, Sequence

from evidence_report.canvas import PDFCanvas
from evidence_report.geometry import BLOCK_GAP_MM, CONTENT_WIDTH_MM, LEFT_MARGIN_MM
from evidence_report.images import ImageLoader
from evidence_report.models import (
    BlockType,
    CustomTemplate,
    EvidenceItem,
    ReportConfig,
    TemplateBlock,
    TemplateId,
)
from evidence_report.styles import StyleResolver
from evidence_report.templates.background import draw_background
from evidence_report.templates.base import ReportTemplate
from evidence_report.templates.blocks import BlockRenderer
from evidence_report.templates.decorations import draw_decorations
from evidence_report.templates.pagination import Paginator
from evidence_report.utils.exceptions import TemplateValidationError

logger = logging.getLogger(__name__)

# Kinds that skip the overflow check before rendering
BREAK_EXEMPT = (BlockType.FOOTER, BlockType.PAGE_BREAK)

BORDER_INSET_MM = 5
BORDER_PADDING_MM = 2


class DynamicTemplate(ReportTemplate):
    """Interprets a ``CustomTemplate`` page/block/decoration model."""

    template_id = TemplateId.CUSTOM

    def __init__(
        self,
        canvas: PDFCanvas,
        config: ReportConfig,
        image_loader: Optional[ImageLoader] = None,
    ):
        super().__init__(canvas, config, image_loader)
        if config.custom_template is None:
            raise TemplateValidationError(
                TemplateId.CUSTOM.value, "No custom template attached to the configuration"
            )
        self.custom: CustomTemplate = config.custom_template
        self.styles = StyleResolver(self.custom.settings, self.theme)
        self.paginator = Paginator(canvas, on_new_page=self._decorate_new_page)

    def render_cover(self) -> None:
        # Authored blocks provide any cover content
        return None

    def render_content(self, evidence: Sequence[EvidenceItem]) -> None:
        renderer = BlockRenderer(self, evidence)
        self._draw_page_chrome(include_decorations=True)

        for page_index, page in enumerate(self.custom.pages):
            if page_index:
                self.paginator.force_break()
            logger.debug(
                "Rendering authored page %d (%s, %d blocks)",
                page_index + 1, page.kind.value, len(page.blocks),
            )
            for block in page.blocks:
                self._render_block(renderer, block)

    def _render_block(self, renderer: BlockRenderer, block: TemplateBlock) -> None:
        paginator = self.paginator
        if block.type not in BREAK_EXEMPT:
            paginator.break_if_needed()

        start = paginator.cursor
        paginator.cursor = renderer.render(block, start)

        if block.settings.show_border and block.type != BlockType.PAGE_BREAK:
            self._draw_block_border(block, start, paginator.cursor)

        if block.type != BlockType.PAGE_BREAK:
            paginator.cursor += BLOCK_GAP_MM

    def _draw_block_border(self, block: TemplateBlock, start: float, end: float) -> None:
        c = self.canvas
        c.set_stroke_color(self.styles.accent_color)
        c.set_line_width(self.styles.block_border_width_mm(block))
        c.rect(
            LEFT_MARGIN_MM - BORDER_INSET_MM,
            start - BORDER_PADDING_MM,
            CONTENT_WIDTH_MM + 2 * BORDER_INSET_MM,
            (end - start) + 2 * BORDER_PADDING_MM,
        )

    def _draw_page_chrome(self, include_decorations: bool) -> None:
        draw_background(self.canvas, self.custom.background)
        if include_decorations:
            draw_decorations(self.canvas, self.custom.decorations, self.styles)

    def _decorate_new_page(self) -> None:
        self._draw_page_chrome(self.custom.settings.replay_decorations)
