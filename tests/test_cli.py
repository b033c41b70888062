"""Tests for CLI commands."""

import json

import pytest
import yaml
from click.testing import CliRunner

from conftest import make_png
from evidence_report.cli import main


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def manifest(temp_dir):
    """Evidence manifest with one on-disk screenshot and one missing image."""
    (temp_dir / "shots").mkdir()
    (temp_dir / "shots" / "login.png").write_bytes(make_png(120, 80))
    path = temp_dir / "evidence.yaml"
    path.write_text(yaml.safe_dump({
        "config": {"title": "Nightly Run", "reportDate": "2026-01-15"},
        "evidence": [
            {"id": "ev-1", "title": "Login", "status": "success", "image": "shots/login.png"},
            {"id": "ev-2", "title": "Logout", "status": "failure", "image": "shots/missing.png"},
        ],
    }))
    return path


@pytest.fixture
def template_file(temp_dir):
    path = temp_dir / "template.json"
    path.write_text(json.dumps({
        "name": "Audit Layout",
        "background": {"pattern": "circles", "opacity": 0.3},
        "pages": [
            {"order": 0, "blocks": [{"type": "header", "content": {"title": "Audit"}}]},
            {"order": 1, "blocks": [{"type": "evidence-loop"}]},
        ],
    }))
    return path


class TestMainCommand:
    """Tests for the main CLI group."""

    def test_version(self, runner):
        """Test --version flag."""
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "evidence-report" in result.output
        assert "1.0.0" in result.output

    def test_help(self, runner):
        """Test --help flag."""
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "generate" in result.output
        assert "preview" in result.output


class TestGenerateCommand:
    """Tests for the generate command."""

    def test_generate_pdf(self, runner, manifest, temp_dir):
        """Test generating a PDF report."""
        output = temp_dir / "out" / "report.pdf"
        result = runner.invoke(main, ["generate", str(manifest), "-o", str(output)])
        assert result.exit_code == 0, result.output
        assert "[OK]" in result.output
        assert output.read_bytes().startswith(b"%PDF")

    def test_generate_docx(self, runner, manifest, temp_dir):
        """Test generating a Word report."""
        output = temp_dir / "report.docx"
        result = runner.invoke(
            main, ["generate", str(manifest), "-o", str(output), "--format", "docx"]
        )
        assert result.exit_code == 0, result.output
        assert output.read_bytes()[:2] == b"PK"

    def test_options(self, runner, manifest, temp_dir):
        """Test theme, template and author options."""
        output = temp_dir / "report.pdf"
        result = runner.invoke(main, [
            "generate", str(manifest), "-o", str(output),
            "--theme", "teal", "--template", "creative", "--author", "Dana",
        ])
        assert result.exit_code == 0, result.output
        assert "creative" in result.output
        assert "teal" in result.output

    def test_config_file(self, runner, manifest, temp_dir):
        """Test settings from a --config file."""
        config = temp_dir / "settings.json"
        config.write_text(json.dumps({"templateId": "modern"}))
        output = temp_dir / "report.pdf"
        result = runner.invoke(
            main, ["generate", str(manifest), "-o", str(output), "--config", str(config)]
        )
        assert result.exit_code == 0, result.output
        assert "modern" in result.output

    def test_custom_without_template_fails(self, runner, manifest, temp_dir):
        """Test that selecting custom without a template exits with an error."""
        result = runner.invoke(main, [
            "generate", str(manifest), "-o", str(temp_dir / "r.pdf"), "--template", "custom",
        ])
        assert result.exit_code == 1
        assert "[ERROR]" in result.output

    def test_empty_manifest_fails(self, runner, temp_dir):
        """Test that an empty evidence list exits with an error."""
        path = temp_dir / "empty.json"
        path.write_text("[]")
        result = runner.invoke(main, ["generate", str(path), "-o", str(temp_dir / "r.pdf")])
        assert result.exit_code == 1
        assert "No evidence items" in result.output

    def test_audit_log(self, runner, manifest, temp_dir):
        """Test that --audit-dir records the export."""
        audit_dir = temp_dir / "audit"
        result = runner.invoke(main, [
            "generate", str(manifest), "-o", str(temp_dir / "r.pdf"), "--audit-dir", str(audit_dir),
        ])
        assert result.exit_code == 0, result.output
        lines = (audit_dir / "evidence_report_exports.jsonl").read_text().splitlines()
        entry = json.loads(lines[-1])
        assert entry["action"] == "REPORT_EXPORT"
        assert entry["evidence_ids"] == ["ev-1", "ev-2"]

    def test_audit_log_failure(self, runner, temp_dir):
        """Test that failed exports are audited too."""
        path = temp_dir / "empty.json"
        path.write_text("[]")
        audit_dir = temp_dir / "audit"
        result = runner.invoke(main, [
            "generate", str(path), "-o", str(temp_dir / "r.pdf"), "--audit-dir", str(audit_dir),
        ])
        assert result.exit_code == 1
        entry = json.loads((audit_dir / "evidence_report_exports.jsonl").read_text().splitlines()[-1])
        assert entry["success"] is False
        assert entry["error_type"] == "EmptyEvidenceError"

    def test_missing_manifest(self, runner, temp_dir):
        """Test that a nonexistent manifest is a usage error."""
        result = runner.invoke(main, ["generate", str(temp_dir / "nope.yaml"), "-o", "x.pdf"])
        assert result.exit_code != 0


class TestPreviewCommand:
    """Tests for the preview command."""

    def test_preview(self, runner, template_file, temp_dir):
        """Test previewing a template without evidence."""
        output = temp_dir / "preview.pdf"
        result = runner.invoke(main, ["preview", str(template_file), "-o", str(output)])
        assert result.exit_code == 0, result.output
        assert "Audit Layout" in result.output
        assert output.read_bytes().startswith(b"%PDF")

    def test_preview_with_manifest(self, runner, template_file, manifest, temp_dir):
        """Test previewing a template filled with evidence."""
        output = temp_dir / "preview.pdf"
        result = runner.invoke(main, [
            "preview", str(template_file), "-o", str(output),
            "--manifest", str(manifest), "--theme", "crimson",
        ])
        assert result.exit_code == 0, result.output

    def test_preview_invalid_template(self, runner, temp_dir):
        """Test that an invalid template exits with an error."""
        path = temp_dir / "bad.json"
        path.write_text(json.dumps({"decorations": [{"type": "star"}]}))
        result = runner.invoke(main, ["preview", str(path), "-o", str(temp_dir / "p.pdf")])
        assert result.exit_code == 1
        assert "[ERROR]" in result.output


class TestListingCommands:
    """Tests for the themes and templates commands."""

    def test_themes_table(self, runner):
        """Test the themes table."""
        result = runner.invoke(main, ["themes"])
        assert result.exit_code == 0
        assert "amethyst" in result.output

    def test_themes_json(self, runner):
        """Test the themes JSON output."""
        result = runner.invoke(main, ["themes", "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["default"]["primary"] == "#081754"

    def test_templates_json(self, runner):
        """Test the templates JSON output."""
        result = runner.invoke(main, ["templates", "--format", "json"])
        assert result.exit_code == 0
        assert [entry["id"] for entry in json.loads(result.output)] == [
            "classic", "modern", "creative",
        ]

    def test_templates_table(self, runner):
        """Test the templates table."""
        result = runner.invoke(main, ["templates"])
        assert result.exit_code == 0
        assert "classic" in result.output
        assert "creative" in result.output
