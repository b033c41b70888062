"""
Modern Sidebar layout (legacy layout B).

Full-height branded sidebar on the cover, oversized stacked title words,
and a thin sidebar strip on every content page.
"""

from typing import Sequence

from evidence_report.models import EvidenceItem, TemplateId
from evidence_report.templates.base import WHITE, ReportTemplate

MARGIN = 20
CONTENT_TOP = 30
BREAK_RESERVE = 100
IMAGE_WIDTH = 170
IMAGE_HEIGHT = 90

COVER_BLURB = "Technical quality assurance and unit testing evidence report."


class ModernTemplate(ReportTemplate):
    """Contemporary design with sidebar branding and large typography."""

    template_id = TemplateId.MODERN

    def render_cover(self) -> None:
        c = self.canvas
        config = self.config
        theme = self.theme

        c.set_fill_color(theme.primary)
        c.rect(0, 0, 70, 297, fill=True, stroke=False)

        if config.show_logo_symbol and config.custom_logo_symbol:
            self.draw_logo(config.custom_logo_symbol, 10, 12, 20, 20)

        c.set_fill_color(WHITE)
        c.rect(10, 35, 12, 1, fill=True, stroke=False)

        c.set_font(14)
        c.set_text_color(config.subtitle_color or "#ffffff")
        c.text(config.subtitle, 10, 50)

        if config.project_name:
            c.set_font(10)
            c.set_text_color(WHITE)
            c.text(f"PROJECT: {config.project_name.upper()}", 10, 60)

        # Author block at the bottom of the sidebar
        c.set_text_color(WHITE)
        c.set_font(9)
        c.text("AUTHOR", 10, 250)
        c.set_font(10)
        c.text(config.author, 10, 257)
        c.set_font(9)
        c.text("DATE", 10, 267)
        c.set_font(10)
        c.text(self.current_date, 10, 274)

        # One title word per line
        c.set_font(42, bold=True)
        c.set_text_color(config.title_color or theme.text_main)
        y = 100
        for word in config.title.split():
            c.text(word, 90, y)
            y += 15

        c.set_stroke_color(theme.secondary)
        c.set_line_width(2)
        c.line(90, y + 5, 90, y + 30)

        c.set_font(11)
        c.set_text_color(theme.text_light)
        c.text(c.split_text(COVER_BLURB, 110), 95, y + 15)

    def _start_page(self) -> float:
        """Begin a content page with its sidebar strip; returns the top cursor."""
        c = self.canvas
        c.new_page()
        c.set_fill_color(self.theme.primary)
        c.rect(0, 0, 8, c.page_height, fill=True, stroke=False)
        return CONTENT_TOP

    def render_content(self, evidence: Sequence[EvidenceItem]) -> None:
        c = self.canvas
        theme = self.theme
        y = self._start_page()

        for index, item in enumerate(evidence):
            if y > c.page_height - BREAK_RESERVE:
                y = self._start_page()

            # Step pill
            c.set_fill_color(theme.secondary)
            c.rounded_rect(MARGIN, y - 5, 30, 8, 2, fill=True)
            c.set_font(9, bold=True)
            c.set_text_color(theme.primary)
            c.text(f"STEP {index + 1}", MARGIN + 2, y)

            badge = self.status_colors(item.status)
            c.set_fill_color(badge.bg)
            c.rounded_rect(MARGIN + 34, y - 5, 22, 8, 2, fill=True)
            c.set_font(8, bold=True)
            c.set_text_color(badge.text)
            c.text(item.status.value.upper(), MARGIN + 36, y)

            c.set_font(16, bold=True)
            c.set_text_color(theme.text_main)
            c.text(item.title or "Untitled", MARGIN, y + 12)

            y += 20

            if item.description:
                c.set_font(10)
                c.set_text_color(theme.text_light)
                lines = c.split_text(item.description, 170)
                c.text(lines, MARGIN, y)
                y += len(lines) * 5 + 5

            metadata = self.metadata_line(item)
            if metadata:
                c.set_font(8)
                c.set_text_color(theme.text_light)
                c.text(metadata, MARGIN, y)
                y += 8

            if y + IMAGE_HEIGHT > c.page_height - 20:
                y = self._start_page()

            self.draw_image_or_placeholder(item.image, MARGIN, y, IMAGE_WIDTH, IMAGE_HEIGHT)
            y += IMAGE_HEIGHT + 20
