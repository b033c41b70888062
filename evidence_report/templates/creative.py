"""
Creative Bold layout.

Full-bleed coloured cover and one page per evidence item with a large
hero image. Pagination is unconditional: every item starts a page.
"""

from typing import Sequence

from evidence_report.models import EvidenceItem, TemplateId
from evidence_report.templates.base import WHITE, ReportTemplate

HERO_X = 20
HERO_Y = 60
HERO_WIDTH = 170
HERO_HEIGHT = 120


class CreativeTemplate(ReportTemplate):
    """Eye-catching layout with large hero images and accent colors."""

    template_id = TemplateId.CREATIVE

    def render_cover(self) -> None:
        c = self.canvas
        config = self.config
        theme = self.theme

        c.set_fill_color(theme.primary)
        c.rect(0, 0, 210, 297, fill=True, stroke=False)

        # Diagonal accent stripe
        c.set_fill_color(theme.secondary)
        c.polygon([(0, 180), (210, 120), (210, 180)], fill=True, stroke=False)

        c.set_font(48, bold=True)
        c.set_text_color(config.title_color or "#ffffff")
        c.text(config.title, 105, 100, align="center")

        # Subtitle pill sized to the text
        c.set_font(14, bold=True)
        pill_width = c.text_width(config.subtitle) + 20
        c.set_fill_color(theme.secondary)
        c.rounded_rect(105 - pill_width / 2, 115, pill_width, 12, 3, fill=True)
        c.set_text_color(config.subtitle_color or theme.primary)
        c.text(config.subtitle, 105, 124, align="center")

        # Info card
        c.set_fill_color(WHITE)
        c.rounded_rect(30, 220, 150, 50, 5, fill=True)

        c.set_font(12, bold=True)
        c.set_text_color(theme.text_main)
        c.text(config.author, 105, 238, align="center")

        c.set_font(10)
        c.set_text_color(theme.text_light)
        c.text(self.current_date, 105, 250, align="center")
        if config.project_name:
            c.text(f"Project: {config.project_name}", 105, 262, align="center")

    def render_content(self, evidence: Sequence[EvidenceItem]) -> None:
        c = self.canvas
        theme = self.theme

        for index, item in enumerate(evidence):
            c.new_page()

            c.set_fill_color(theme.secondary)
            c.rect(0, 0, c.page_width, 5, fill=True, stroke=False)

            # Large step number
            c.set_fill_color(theme.primary)
            c.circle(30, 30, 15, fill=True)
            c.set_font(20, bold=True)
            c.set_text_color(WHITE)
            c.text(str(index + 1), 30, 35, align="center")

            c.set_font(24, bold=True)
            c.set_text_color(theme.text_main)
            c.text(item.title or "Untitled", 55, 35)

            badge = self.status_colors(item.status)
            c.set_fill_color(badge.bg)
            c.rounded_rect(55, 40, 25, 8, 2, fill=True)
            c.set_font(8, bold=True)
            c.set_text_color(badge.text)
            c.text(item.status.value.upper(), 57, 46)

            self.draw_image_or_placeholder(
                item.image, HERO_X, HERO_Y, HERO_WIDTH, HERO_HEIGHT, label_size=14, radius=5
            )

            if item.description:
                c.set_font(12)
                c.set_text_color(theme.text_light)
                c.text(c.split_text(item.description, 170), 20, HERO_Y + HERO_HEIGHT + 15)

            metadata = self.metadata_line(item)
            if metadata:
                c.set_font(8)
                c.set_text_color(theme.text_light)
                c.text(metadata, 20, c.page_height - 20)
