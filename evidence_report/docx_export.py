"""
Evidence Report - Flow Document Export

Builds the reflowable Word (.docx) encoding with python-docx. This path
walks the evidence list directly: it never uses a layout strategy, and a
custom template attached to the configuration is ignored. Only the theme
and the title, subtitle, author and project metadata are shared with the
PDF path.
"""

import io
import logging
from typing import Optional, Sequence

from docx import Document
from docx.enum.table import WD_TABLE_ALIGNMENT
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.image.exceptions import UnrecognizedImageError
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Inches, Pt, RGBColor

from evidence_report.geometry import hex_to_rgb
from evidence_report.images import ImageLoader
from evidence_report.models import EvidenceItem, EvidenceStatus, ReportConfig
from evidence_report.templates.base import format_report_date
from evidence_report.themes import resolve_theme

logger = logging.getLogger(__name__)

IMAGE_WIDTH = Inches(5.2)
SEPARATOR_COLOR = "CCCCCC"
IMAGE_ERROR_COLOR = RGBColor(0xFF, 0x00, 0x00)


def _rgb(hex_color: str) -> RGBColor:
    return RGBColor(*hex_to_rgb(hex_color))


def add_bottom_border(paragraph, color: str = SEPARATOR_COLOR, size: int = 6) -> None:
    """Give a paragraph a single bottom rule (``size`` in eighths of a point)."""
    p_pr = paragraph._p.get_or_add_pPr()
    p_bdr = OxmlElement("w:pBdr")
    bottom = OxmlElement("w:bottom")
    bottom.set(qn("w:val"), "single")
    bottom.set(qn("w:sz"), str(size))
    bottom.set(qn("w:space"), "1")
    bottom.set(qn("w:color"), color.lstrip("#"))
    p_bdr.append(bottom)
    p_pr.append(p_bdr)


class DocxReportBuilder:
    """Builds the Word encoding of an evidence report."""

    def __init__(self, config: ReportConfig, image_loader: Optional[ImageLoader] = None):
        self.config = config
        self.theme = resolve_theme(config.theme)
        self.image_loader = image_loader or ImageLoader()
        self.current_date = format_report_date(config.effective_date())

    def build(self, evidence: Sequence[EvidenceItem]) -> Document:
        """Assemble the document in memory."""
        document = Document()
        core = document.core_properties
        core.title = self.config.title
        core.author = self.config.author
        core.subject = self.config.subtitle

        self._add_cover(document)
        for index, item in enumerate(evidence):
            self._add_evidence(document, index, item)
        return document

    def to_bytes(self, evidence: Sequence[EvidenceItem]) -> bytes:
        buffer = io.BytesIO()
        self.build(evidence).save(buffer)
        return buffer.getvalue()

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _add_cover(self, document: Document) -> None:
        config = self.config

        title = document.add_heading(level=0)
        title.alignment = WD_ALIGN_PARAGRAPH.CENTER
        title.paragraph_format.space_before = Pt(150)
        run = title.add_run(config.title)
        run.font.color.rgb = _rgb(config.title_color or self.theme.primary)

        subtitle = document.add_paragraph()
        subtitle.alignment = WD_ALIGN_PARAGRAPH.CENTER
        subtitle.paragraph_format.space_after = Pt(100)
        run = subtitle.add_run(config.subtitle)
        run.font.size = Pt(16)
        run.font.color.rgb = _rgb(config.subtitle_color or self.theme.text_light)

        rows = [("Author:", config.author), ("Date:", self.current_date)]
        if config.project_name:
            rows.append(("Project:", config.project_name))

        table = document.add_table(rows=len(rows), cols=2)
        table.style = "Table Grid"
        table.alignment = WD_TABLE_ALIGNMENT.CENTER
        for row, (label, value) in zip(table.rows, rows):
            label_cell, value_cell = row.cells
            label_cell.paragraphs[0].add_run(label).bold = True
            value_cell.paragraphs[0].add_run(value)

    def _add_evidence(self, document: Document, index: int, item: EvidenceItem) -> None:
        heading = document.add_heading(f"{index + 1}. {item.title or 'Untitled Capture'}", level=1)
        heading.paragraph_format.space_before = Pt(20)

        if item.status != EvidenceStatus.PENDING:
            colors = (
                self.theme.status_success
                if item.status == EvidenceStatus.SUCCESS
                else self.theme.status_fail
            )
            status = document.add_paragraph()
            run = status.add_run(f"[{item.status.value.upper()}]")
            run.bold = True
            run.font.color.rgb = _rgb(colors.text)

        if item.description:
            description = document.add_paragraph()
            description.add_run("Description: ").bold = True
            description.add_run(item.description)

        self._add_image(document, item)

        separator = document.add_paragraph()
        separator.paragraph_format.space_after = Pt(20)
        add_bottom_border(separator)

    def _add_image(self, document: Document, item: EvidenceItem) -> None:
        result = self.image_loader.load(item.image)
        if result.ok:
            try:
                document.add_picture(io.BytesIO(result.image.png_bytes()), width=IMAGE_WIDTH)
                return
            except (UnrecognizedImageError, OSError, ValueError) as exc:
                logger.warning("Could not embed image for evidence %s: %s", item.id, exc)
        else:
            logger.warning("Evidence %s image unavailable: %s", item.id, result.error)

        paragraph = document.add_paragraph()
        run = paragraph.add_run("[Image Error]")
        run.font.color.rgb = IMAGE_ERROR_COLOR
