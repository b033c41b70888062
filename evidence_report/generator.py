"""
Evidence Report - Report Generator

Facade over the composition engine. Selects a layout strategy, drives
cover and content rendering on a fresh canvas per call, and serialises to
one of the two output encodings:

- PDF: fixed-geometry pages drawn by the selected strategy
- DOCX: a reflowable Word document built directly from the evidence list

Nothing is shared between calls; a ``ReportGenerator`` can be reused.
"""

import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence, Union

from evidence_report.canvas import PDFCanvas
from evidence_report.config import build_report_config
from evidence_report.docx_export import DocxReportBuilder
from evidence_report.images import ImageLoader, MediaReader
from evidence_report.models import (
    CustomTemplate,
    EvidenceItem,
    OutputFormat,
    ReportConfig,
    ReportLayout,
    TemplateId,
)
from evidence_report.templates import TEMPLATE_STRATEGIES, ReportTemplate
from evidence_report.utils.audit import ExportAuditLogger
from evidence_report.utils.exceptions import (
    EmptyEvidenceError,
    TemplateValidationError,
    UnsupportedFormatError,
)

logger = logging.getLogger(__name__)

LEGACY_LAYOUTS = {
    ReportLayout.A: TemplateId.CLASSIC,
    ReportLayout.B: TemplateId.MODERN,
}

PartialConfig = Optional[Union[ReportConfig, Mapping[str, Any]]]


def select_template_id(config: ReportConfig) -> TemplateId:
    """Template id, else the legacy layout mapping, else Classic."""
    if config.template_id is not None:
        return config.template_id
    return LEGACY_LAYOUTS.get(config.layout, TemplateId.CLASSIC)


def parse_output_format(output_format: Union[str, OutputFormat]) -> OutputFormat:
    try:
        return OutputFormat(str(getattr(output_format, "value", output_format)).lower())
    except ValueError:
        raise UnsupportedFormatError(str(output_format)) from None


def write_output(data: bytes, output_path: Union[str, Path]) -> Path:
    """Persist produced bytes, creating parent directories."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(data)
    logger.info("Wrote %d bytes to %s", len(data), output_path)
    return output_path


class ReportGenerator:
    """Generates evidence reports in PDF or DOCX form."""

    def __init__(
        self,
        image_reader: Optional[MediaReader] = None,
        audit_logger: Optional[ExportAuditLogger] = None,
    ):
        """
        Args:
            image_reader: Reader for image references that are not inline
                data (the host application's media store)
            audit_logger: Optional export audit log
        """
        self.image_loader = ImageLoader(image_reader)
        self.audit_logger = audit_logger

    def generate(
        self,
        evidence: Sequence[EvidenceItem],
        author_name: Optional[str] = None,
        output_format: Union[str, OutputFormat] = OutputFormat.PDF,
        config: PartialConfig = None,
        output_path: Optional[Union[str, Path]] = None,
    ) -> bytes:
        """
        Build a full configuration from ``config`` and produce a report.

        Raises:
            EmptyEvidenceError: If ``evidence`` is empty
            UnsupportedFormatError: For formats other than pdf/docx
            ConfigError: If the merged configuration is invalid
            TemplateValidationError: For ``custom`` without a template
        """
        fmt = parse_output_format(output_format)
        if not evidence:
            raise EmptyEvidenceError(fmt.value)

        full_config = build_report_config(config, author_name)
        if fmt == OutputFormat.PDF:
            return self.generate_pdf(evidence, full_config, output_path)
        return self.generate_docx(evidence, full_config, output_path)

    def create_template(self, canvas: PDFCanvas, config: ReportConfig) -> ReportTemplate:
        template_id = select_template_id(config)
        if template_id == TemplateId.CUSTOM and config.custom_template is None:
            raise TemplateValidationError(
                template_id.value, "No custom template attached to the configuration"
            )
        strategy = TEMPLATE_STRATEGIES[template_id]
        return strategy(canvas, config, self.image_loader)

    def render_pdf(self, evidence: Sequence[EvidenceItem], config: ReportConfig) -> PDFCanvas:
        """Render onto a fresh canvas and return it (not yet serialised)."""
        canvas = PDFCanvas(title=config.title, author=config.author)
        template = self.create_template(canvas, config)
        logger.info(
            "Rendering %d evidence items with %s", len(evidence), type(template).__name__
        )
        template.render_cover()
        template.render_content(evidence)
        logger.debug("Rendered %d physical pages", canvas.page_count)
        return canvas

    def generate_pdf(
        self,
        evidence: Sequence[EvidenceItem],
        config: ReportConfig,
        output_path: Optional[Union[str, Path]] = None,
    ) -> bytes:
        """Vector/paginated encoding; also serves live previews."""
        data = self.render_pdf(evidence, config).to_bytes()
        self._deliver(data, OutputFormat.PDF, evidence, config, output_path)
        return data

    def generate_docx(
        self,
        evidence: Sequence[EvidenceItem],
        config: ReportConfig,
        output_path: Optional[Union[str, Path]] = None,
    ) -> bytes:
        """Flow-document encoding; ignores any custom template."""
        if config.custom_template is not None:
            logger.info("Custom template is not used by the DOCX encoding")
        data = DocxReportBuilder(config, self.image_loader).to_bytes(evidence)
        self._deliver(data, OutputFormat.DOCX, evidence, config, output_path)
        return data

    def render_preview(
        self,
        template: CustomTemplate,
        evidence: Sequence[EvidenceItem] = (),
        config: PartialConfig = None,
    ) -> bytes:
        """Render a custom template to PDF bytes without persisting it."""
        base = build_report_config(config)
        preview_config = base.model_copy(
            update={"template_id": TemplateId.CUSTOM, "custom_template": template}
        )
        return self.render_pdf(evidence, preview_config).to_bytes()

    def _deliver(
        self,
        data: bytes,
        fmt: OutputFormat,
        evidence: Sequence[EvidenceItem],
        config: ReportConfig,
        output_path: Optional[Union[str, Path]],
    ) -> None:
        if output_path is not None:
            output_path = write_output(data, output_path)
        if self.audit_logger is not None:
            self.audit_logger.log_export(
                data,
                output_format=fmt.value,
                template_id=select_template_id(config).value,
                evidence_ids=[item.id for item in evidence],
                author=config.author,
                output_path=output_path,
            )


def generate_report(
    evidence: Sequence[EvidenceItem],
    output_path: Optional[Union[str, Path]] = None,
    output_format: Union[str, OutputFormat] = OutputFormat.PDF,
    config: PartialConfig = None,
    author_name: Optional[str] = None,
    image_reader: Optional[MediaReader] = None,
) -> bytes:
    """
    Convenience function to generate a report in one call.

    Args:
        evidence: Evidence items in report order
        output_path: Optional path the bytes are also written to
        output_format: "pdf" or "docx"
        config: Partial configuration merged over the defaults
        author_name: Author used when the configuration has none
        image_reader: Reader for non-inline image references

    Returns:
        The encoded document
    """
    generator = ReportGenerator(image_reader=image_reader)
    return generator.generate(
        evidence,
        author_name=author_name,
        output_format=output_format,
        config=config,
        output_path=output_path,
    )
