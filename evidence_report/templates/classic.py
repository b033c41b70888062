"""
Classic Corporate layout (legacy layout A).

Centered title with accent bars and an information table on the cover;
content is a single-column list of numbered evidence steps.
"""

from typing import Sequence

from evidence_report.models import EvidenceItem, TemplateId
from evidence_report.templates.base import WHITE, ReportTemplate

MARGIN = 20
CONTENT_TOP = 35
BREAK_RESERVE = 80
IMAGE_WIDTH = 150
IMAGE_HEIGHT = 80


class ClassicTemplate(ReportTemplate):
    """Clean professional layout with centered title and info table."""

    template_id = TemplateId.CLASSIC

    def render_cover(self) -> None:
        c = self.canvas
        config = self.config
        theme = self.theme

        # Top accent bar
        c.set_fill_color(theme.secondary)
        c.rect(0, 0, 210, 3, fill=True, stroke=False)

        logo_x = MARGIN
        if config.show_logo_symbol and config.custom_logo_symbol:
            if self.draw_logo(config.custom_logo_symbol, logo_x, 12, 15, 15):
                logo_x += 18
        if config.show_logo_text and config.custom_logo_text:
            self.draw_logo(config.custom_logo_text, logo_x, 12, 40, 15)

        c.set_font(36, bold=True)
        c.set_text_color(config.title_color or theme.primary)
        c.text(config.title, 105, 100, align="center")

        c.set_fill_color(theme.secondary)
        c.rect(93, 110, 24, 2, fill=True, stroke=False)

        c.set_font(18)
        c.set_text_color(config.subtitle_color or theme.text_light)
        c.text(config.subtitle, 105, 125, align="center")

        # Info table
        table_y = 150
        c.set_fill_color(theme.primary)
        c.rect(60, table_y, 90, 8, fill=True, stroke=False)
        c.set_font(10, bold=True)
        c.set_text_color(WHITE)
        c.text("DOCUMENT INFORMATION", 105, table_y + 5, align="center")

        c.set_fill_color(theme.bg_light)
        c.rect(60, table_y + 8, 90, 30, fill=True, stroke=False)

        c.set_font(10)
        c.set_text_color(theme.text_light)
        c.text(["Author:", "Date:", "Project:"], 65, table_y + 15, line_height=8)

        c.set_font(10, bold=True)
        c.set_text_color(theme.text_main)
        c.text(
            [config.author, self.current_date, config.project_name or ""],
            145,
            table_y + 15,
            align="right",
            line_height=8,
        )

        c.set_font(8)
        c.set_text_color(theme.text_light)
        c.text(f"Generated by: {config.author}", 105, 280, align="center")

    def _content_header(self) -> None:
        c = self.canvas
        c.set_stroke_color(self.theme.primary)
        c.set_line_width(1)
        c.line(20, 20, 190, 20)

        c.set_font(10)
        c.set_text_color(self.theme.text_light)
        c.text(self.config.subtitle, 20, 17)
        c.text(self.current_date, 190, 17, align="right")

    def render_content(self, evidence: Sequence[EvidenceItem]) -> None:
        c = self.canvas
        theme = self.theme
        c.new_page()
        self._content_header()

        y = CONTENT_TOP
        for index, item in enumerate(evidence):
            if y > c.page_height - BREAK_RESERVE:
                c.new_page()
                y = CONTENT_TOP

            # Step number
            c.set_fill_color(theme.primary)
            c.circle(MARGIN + 4, y, 4, fill=True)
            c.set_font(10, bold=True)
            c.set_text_color(WHITE)
            c.text(str(index + 1), MARGIN + 4, y + 1, align="center")

            c.set_font(14, bold=True)
            c.set_text_color(theme.text_main)
            c.text(item.title or "Untitled", MARGIN + 12, y)

            badge = self.status_colors(item.status)
            c.set_fill_color(badge.bg)
            c.rounded_rect(MARGIN + 12, y + 3, 20, 5, 1, fill=True)
            c.set_font(8, bold=True)
            c.set_text_color(badge.text)
            c.text(item.status.value.upper(), MARGIN + 14, y + 6.5)

            y += 12

            if item.description:
                c.set_font(10)
                c.set_text_color(theme.text_light)
                lines = c.split_text(item.description, 150)
                c.text(lines, MARGIN + 12, y)
                y += len(lines) * 5 + 5

            metadata = self.metadata_line(item)
            if metadata:
                c.set_font(8)
                c.set_text_color(theme.text_light)
                c.text(metadata, MARGIN + 12, y)
                y += 8

            if y + IMAGE_HEIGHT > c.page_height - 20:
                c.new_page()
                y = CONTENT_TOP

            self.draw_image_or_placeholder(
                item.image, MARGIN + 12, y, IMAGE_WIDTH, IMAGE_HEIGHT, fit=True
            )
            y += IMAGE_HEIGHT + 15
