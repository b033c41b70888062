"""
Evidence Report - Template Strategy Base

Every report layout implements the same two-step contract: draw a cover,
then draw the content for an evidence list. Strategies write straight to
the ``PDFCanvas`` they were constructed with and return nothing.
"""

import logging
from abc import ABC, abstractmethod
from datetime import date
from typing import Optional, Sequence

from evidence_report.canvas import PDFCanvas
from evidence_report.images import ImageLoader, ImageSource, LoadedImage
from evidence_report.models import (
    EvidenceItem,
    EvidenceStatus,
    ReportConfig,
    StatusColors,
    TemplateId,
)
from evidence_report.geometry import fit_within
from evidence_report.themes import resolve_theme

logger = logging.getLogger(__name__)

PLACEHOLDER_LABEL = "[Image not available]"
PLACEHOLDER_FILL = (245, 245, 245)
PLACEHOLDER_STROKE = (200, 200, 200)
PLACEHOLDER_TEXT = (150, 150, 150)
WHITE = (255, 255, 255)


def format_report_date(value: date) -> str:
    """Long English date, e.g. ``5 March 2026``."""
    return f"{value.day} {value.strftime('%B %Y')}"


class ReportTemplate(ABC):
    """Abstract base class for report layout strategies."""

    template_id: TemplateId = None

    def __init__(
        self,
        canvas: PDFCanvas,
        config: ReportConfig,
        image_loader: Optional[ImageLoader] = None,
    ):
        self.canvas = canvas
        self.config = config
        self.theme = resolve_theme(config.theme)
        self.image_loader = image_loader or ImageLoader()
        self.current_date = format_report_date(config.effective_date())

    @abstractmethod
    def render_cover(self) -> None:
        """Render the cover of the report."""

    @abstractmethod
    def render_content(self, evidence: Sequence[EvidenceItem]) -> None:
        """Render the evidence content, starting new pages as needed."""

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------

    def status_colors(self, status: EvidenceStatus) -> StatusColors:
        """Badge colours for an evidence status."""
        if status == EvidenceStatus.SUCCESS:
            return self.theme.status_success
        if status == EvidenceStatus.FAILURE:
            return self.theme.status_fail
        return StatusColors(bg=self.theme.bg_light, text=self.theme.text_light)

    def load_image(self, source: ImageSource) -> Optional[LoadedImage]:
        return self.image_loader.load(source).image

    def draw_placeholder(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        label_size: float = 12,
        radius: float = 0,
    ) -> None:
        """Dashed grey box standing in for an image that could not be drawn."""
        c = self.canvas
        c.set_fill_color(PLACEHOLDER_FILL)
        c.set_stroke_color(PLACEHOLDER_STROKE)
        c.set_line_width(0.3)
        if radius:
            c.rounded_rect(x, y, width, height, radius, fill=True, stroke=True, dashed=True)
        else:
            c.rect(x, y, width, height, fill=True, stroke=True, dashed=True)
        c.set_text_color(PLACEHOLDER_TEXT)
        c.set_font(label_size)
        c.text(PLACEHOLDER_LABEL, x + width / 2, y + height / 2, align="center")

    def draw_image_or_placeholder(
        self,
        source: ImageSource,
        x: float,
        y: float,
        width: float,
        height: float,
        fit: bool = False,
        label_size: float = 12,
        radius: float = 0,
    ) -> bool:
        """
        Draw an image into a box, or a placeholder when it cannot be loaded.

        Args:
            fit: Scale into the box keeping the aspect ratio and centre it
                instead of stretching to the box

        Returns:
            True if the image was drawn
        """
        image = self.load_image(source)
        if image is None:
            self.draw_placeholder(x, y, width, height, label_size=label_size, radius=radius)
            return False

        if fit:
            fit_w, fit_h = fit_within(image.width, image.height, width, height)
            self.canvas.image(
                image, x + (width - fit_w) / 2, y + (height - fit_h) / 2, fit_w, fit_h
            )
        else:
            self.canvas.image(image, x, y, width, height)
        return True

    def draw_logo(self, source: ImageSource, x: float, y: float, width: float, height: float) -> bool:
        """Draw a cover logo; a logo that fails to load is simply skipped."""
        image = self.load_image(source)
        if image is None:
            logger.info("Skipping cover logo at (%.0f, %.0f)", x, y)
            return False
        self.canvas.image(image, x, y, width, height)
        return True

    def metadata_line(self, item: EvidenceItem) -> Optional[str]:
        """``OS: ... | Res: ...`` summary of the capture metadata, if any."""
        if item.metadata is None:
            return None
        return f"OS: {item.metadata.os or '-'} | Res: {item.metadata.resolution or '-'}"
