"""Tests for the report generator facade."""

import io
import zipfile

import pytest

from conftest import REPORT_DATE
from evidence_report.canvas import PDFCanvas
from evidence_report.config import build_report_config
from evidence_report.generator import (
    ReportGenerator,
    generate_report,
    parse_output_format,
    select_template_id,
    write_output,
)
from evidence_report.models import CustomTemplate, OutputFormat, TemplateId
from evidence_report.templates import ClassicTemplate, DynamicTemplate, ModernTemplate
from evidence_report.utils.audit import ExportAuditLogger
from evidence_report.utils.exceptions import (
    EmptyEvidenceError,
    TemplateValidationError,
    UnsupportedFormatError,
)


class TestTemplateSelection:
    """Tests for choosing a layout strategy."""

    def test_default_is_classic(self):
        """Test that an empty configuration selects Classic."""
        assert select_template_id(build_report_config()) == TemplateId.CLASSIC

    def test_legacy_layouts(self):
        """Test legacy layout A/B mapping."""
        assert select_template_id(build_report_config({"layout": "A"})) == TemplateId.CLASSIC
        assert select_template_id(build_report_config({"layout": "B"})) == TemplateId.MODERN

    def test_template_id_wins_over_layout(self):
        """Test that an explicit template id overrides the legacy layout."""
        config = build_report_config({"layout": "B", "template_id": "creative"})
        assert select_template_id(config) == TemplateId.CREATIVE

    def test_unknown_template_id_falls_back(self):
        """Test that an unknown template id is ignored."""
        config = build_report_config({"template_id": "fancy", "layout": "B"})
        assert select_template_id(config) == TemplateId.MODERN

    def test_create_template(self):
        """Test that the selected strategy class is instantiated."""
        generator = ReportGenerator()
        canvas = PDFCanvas()
        assert isinstance(generator.create_template(canvas, build_report_config()), ClassicTemplate)
        assert isinstance(
            generator.create_template(canvas, build_report_config({"layout": "B"})), ModernTemplate
        )
        custom = build_report_config({"template_id": "custom", "custom_template": {"blocks": []}})
        assert isinstance(generator.create_template(canvas, custom), DynamicTemplate)

    def test_custom_without_template(self, evidence_items):
        """Test that custom without a template model is rejected."""
        with pytest.raises(TemplateValidationError):
            ReportGenerator().generate(evidence_items, config={"template_id": "custom"})


class TestOutputFormat:
    """Tests for output format parsing."""

    def test_parse(self):
        """Test accepted spellings."""
        assert parse_output_format("PDF") == OutputFormat.PDF
        assert parse_output_format(OutputFormat.DOCX) == OutputFormat.DOCX

    def test_unsupported(self):
        """Test that other formats are rejected."""
        with pytest.raises(UnsupportedFormatError) as exc_info:
            parse_output_format("xlsx")
        assert exc_info.value.output_format == "xlsx"


class TestGenerate:
    """Tests for ReportGenerator.generate."""

    def test_pdf(self, evidence_items, report_config):
        """Test PDF generation."""
        data = ReportGenerator().generate(evidence_items, config=report_config)
        assert data.startswith(b"%PDF")

    def test_docx(self, evidence_items, report_config):
        """Test DOCX generation produces a Word package."""
        data = ReportGenerator().generate(
            evidence_items, output_format="docx", config=report_config
        )
        with zipfile.ZipFile(io.BytesIO(data)) as package:
            assert "word/document.xml" in package.namelist()

    def test_empty_evidence(self, report_config):
        """Test that an empty evidence list is rejected."""
        with pytest.raises(EmptyEvidenceError):
            ReportGenerator().generate([], config=report_config)

    def test_format_checked_first(self):
        """Test that an unsupported format is reported even without evidence."""
        with pytest.raises(UnsupportedFormatError):
            ReportGenerator().generate([], output_format="html")

    @pytest.mark.parametrize("template_id", ["classic", "modern", "creative"])
    def test_fixed_templates(self, template_id, evidence_items, report_config):
        """Test that every fixed layout renders."""
        data = ReportGenerator().generate(
            evidence_items, config={**report_config, "template_id": template_id}
        )
        assert data.startswith(b"%PDF")

    def test_custom_template(self, evidence_items, report_config):
        """Test rendering through a custom template."""
        template = {
            "background": {"pattern": "hexagons", "opacity": 0.2},
            "decorations": [{"type": "triangle", "x": 170, "y": 0, "width": 40, "height": 40}],
            "pages": [
                {"type": "cover", "order": 0, "blocks": [
                    {"type": "header", "content": {"title": "Audit"}, "settings": {"variant": "modern"}},
                    {"type": "toc"},
                ]},
                {"type": "content", "order": 1, "blocks": [
                    {"type": "summary", "content": {"text": "Summary text"}},
                    {"type": "evidence-loop", "content": {"layout": "split-left"}},
                    {"type": "footer", "content": {"text": "End", "showPageNumber": True}},
                ]},
            ],
        }
        config = {**report_config, "template_id": "custom", "custom_template": template}
        data = ReportGenerator().generate(evidence_items, config=config)
        assert data.startswith(b"%PDF")

    def test_deterministic_with_pinned_date(self, evidence_items, report_config):
        """Test that the same inputs produce the same bytes."""
        generator = ReportGenerator()
        assert generator.generate(evidence_items, config=report_config) == generator.generate(
            evidence_items, config=report_config
        )

    def test_writes_output_path(self, evidence_items, report_config, temp_dir):
        """Test that the report is written, creating parent directories."""
        path = temp_dir / "nested" / "report.pdf"
        data = ReportGenerator().generate(evidence_items, config=report_config, output_path=path)
        assert path.read_bytes() == data

    def test_author_name_fallback(self, evidence_items):
        """Test that author_name fills in a missing author."""
        canvas = ReportGenerator().render_pdf(
            evidence_items, build_report_config({"report_date": REPORT_DATE}, author_name="Sam")
        )
        assert any(op["text"] == "Generated by: Sam" for op in canvas.ops_of("text"))


class TestAudit:
    """Tests for export auditing."""

    def test_export_is_audited(self, evidence_items, report_config, temp_dir):
        """Test that each export writes an audit entry."""
        audit = ExportAuditLogger(temp_dir / "audit")
        try:
            generator = ReportGenerator(audit_logger=audit)
            data = generator.generate(
                evidence_items, output_format="docx", config=report_config,
                output_path=temp_dir / "out.docx",
            )
            entries = audit.read_entries()
        finally:
            audit.close()

        assert len(entries) == 1
        entry = entries[0]
        assert entry["format"] == "docx"
        assert entry["template"] == "classic"
        assert entry["evidence_ids"] == ["ev-1", "ev-2", "ev-3"]
        assert entry["size_bytes"] == len(data)
        assert entry["output_path"].endswith("out.docx")


class TestPreview:
    """Tests for custom template previews."""

    def test_preview_without_evidence(self):
        """Test that a template previews without evidence."""
        template = CustomTemplate.model_validate(
            {"blocks": [{"type": "header", "content": {"title": "Draft"}}, {"type": "evidence-loop"}]}
        )
        data = ReportGenerator().render_preview(template)
        assert data.startswith(b"%PDF")

    def test_preview_overrides_template_selection(self, evidence_items):
        """Test that previews always use the given template."""
        template = CustomTemplate.model_validate({"blocks": [{"type": "toc"}]})
        data = ReportGenerator().render_preview(
            template, evidence_items, {"template_id": "classic", "theme": "teal"}
        )
        assert data.startswith(b"%PDF")


class TestHelpers:
    """Tests for module-level helpers."""

    def test_write_output(self, temp_dir):
        """Test writing bytes to a nested path."""
        path = write_output(b"data", temp_dir / "a" / "b.bin")
        assert path.read_bytes() == b"data"

    def test_generate_report(self, evidence_items, report_config, temp_dir):
        """Test the one-call convenience function."""
        path = temp_dir / "report.docx"
        data = generate_report(
            evidence_items, output_path=path, output_format="docx", config=report_config
        )
        assert path.read_bytes() == data
