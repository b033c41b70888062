"""Command-line interface for Evidence Report."""

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from evidence_report import __version__
from evidence_report.config import (
    build_report_config,
    load_config_file,
    load_custom_template,
    load_evidence_manifest,
)
from evidence_report.generator import ReportGenerator, select_template_id, write_output
from evidence_report.images import FileImageReader
from evidence_report.models import OutputFormat, TemplateId
from evidence_report.themes import REPORT_THEMES, TEMPLATE_CATALOG
from evidence_report.utils.audit import ExportAuditLogger
from evidence_report.utils.exceptions import EvidenceReportError

console = Console()


def print_status(status: str, message: str) -> None:
    """Print a status message with consistent formatting.

    Args:
        status: Status indicator ([OK], [FAIL], [WARN], [INFO], [ERROR])
        message: Message to display
    """
    color_map = {
        "[OK]": "green",
        "[FAIL]": "red",
        "[WARN]": "yellow",
        "[INFO]": "blue",
        "[ERROR]": "red bold",
    }
    color = color_map.get(status, "white")
    console.print(f"[{color}]{status}[/{color}] {message}")


def _configure_logging(verbose: int) -> None:
    """Route package logs to the console at INFO (-v) or DEBUG (-vv)."""
    if not verbose:
        return
    package_logger = logging.getLogger("evidence_report")
    package_logger.setLevel(logging.INFO if verbose == 1 else logging.DEBUG)
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(RichHandler(console=console, show_path=False))


@click.group()
@click.version_option(version=__version__, prog_name="evidence-report")
def main():
    """Evidence Report - compose evidence reports as PDF or Word documents.

    Renders a captured evidence list through one of the built-in layouts
    (classic, modern, creative) or a user-authored custom template.
    """


@main.command()
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", required=True, type=click.Path(dir_okay=False), help="Output file path")
@click.option(
    "-f", "--format", "output_format",
    type=click.Choice([f.value for f in OutputFormat]), default=OutputFormat.PDF.value,
)
@click.option("--config", "config_file", type=click.Path(exists=True, dir_okay=False),
              help="YAML/JSON file with report settings")
@click.option("--theme", type=click.Choice(list(REPORT_THEMES)), default=None, help="Color theme")
@click.option("--template", "template_id", type=click.Choice([t.value for t in TemplateId]),
              default=None, help="Layout template")
@click.option("--author", default=None, help="Report author")
@click.option("--audit-dir", type=click.Path(file_okay=False), default=None,
              help="Directory for the export audit log")
@click.option("-v", "--verbose", count=True, help="Verbosity level")
def generate(manifest: str, output: str, output_format: str, config_file: str, theme: str,
             template_id: str, author: str, audit_dir: str, verbose: int):
    """Generate a report from an evidence manifest.

    MANIFEST is a YAML or JSON file listing the evidence items.
    """
    _configure_logging(verbose)
    audit_logger = None
    try:
        loaded = load_evidence_manifest(manifest)

        # Precedence: command-line options, then --config, then the manifest
        partial = dict(loaded.config)
        if config_file:
            partial.update(load_config_file(config_file))
        overrides = {"theme": theme, "template_id": template_id, "author": author}
        partial.update({key: value for key, value in overrides.items() if value})

        config = build_report_config(partial)
        if audit_dir:
            audit_logger = ExportAuditLogger(Path(audit_dir))

        console.print(Panel(
            f"[bold]Evidence Report[/bold]\n"
            f"Items: {len(loaded.evidence)}  Template: {select_template_id(config).value}  "
            f"Theme: {config.theme}  Format: {output_format.upper()}",
            style="blue",
        ))

        generator = ReportGenerator(
            image_reader=FileImageReader(loaded.base_dir), audit_logger=audit_logger
        )
        data = generator.generate(
            loaded.evidence,
            output_format=output_format,
            config=config,
            output_path=output,
        )
        print_status("[OK]", f"Report saved to: {output} ({len(data):,} bytes)")

    except EvidenceReportError as e:
        if audit_logger is not None:
            audit_logger.log_failure("REPORT_EXPORT", e)
        print_status("[ERROR]", str(e))
        sys.exit(1)
    finally:
        if audit_logger is not None:
            audit_logger.close()


@main.command()
@click.argument("template_file", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", required=True, type=click.Path(dir_okay=False), help="Output PDF path")
@click.option("--manifest", type=click.Path(exists=True, dir_okay=False), default=None,
              help="Evidence manifest used to fill evidence loops")
@click.option("--theme", type=click.Choice(list(REPORT_THEMES)), default=None, help="Color theme")
@click.option("-v", "--verbose", count=True, help="Verbosity level")
def preview(template_file: str, output: str, manifest: str, theme: str, verbose: int):
    """Render a custom template to a preview PDF.

    TEMPLATE_FILE is a YAML or JSON custom template.
    """
    _configure_logging(verbose)
    try:
        template = load_custom_template(template_file)
        evidence, reader = [], FileImageReader(Path(template_file).parent)
        if manifest:
            loaded = load_evidence_manifest(manifest)
            evidence, reader = loaded.evidence, FileImageReader(loaded.base_dir)

        generator = ReportGenerator(image_reader=reader)
        data = generator.render_preview(template, evidence, {"theme": theme})
        write_output(data, output)
        print_status(
            "[OK]",
            f"Preview of '{template.name}' ({len(template.pages)} page(s)) saved to: {output}",
        )
    except EvidenceReportError as e:
        print_status("[ERROR]", str(e))
        sys.exit(1)


@main.command()
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table")
def themes(output_format: str):
    """List the available color themes."""
    if output_format == "json":
        click.echo(json.dumps(
            {key: palette.model_dump() for key, palette in REPORT_THEMES.items()}, indent=2
        ))
        return

    table = Table(title="Color Themes", show_header=True, header_style="bold")
    table.add_column("Theme", style="cyan")
    table.add_column("Primary")
    table.add_column("Secondary")
    table.add_column("Text")
    for key, palette in REPORT_THEMES.items():
        table.add_row(
            key,
            f"[on {palette.primary}]    [/] {palette.primary}",
            f"[on {palette.secondary}]    [/] {palette.secondary}",
            palette.text_main,
        )
    console.print(table)


@main.command()
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table")
def templates(output_format: str):
    """List the built-in layout templates."""
    if output_format == "json":
        click.echo(json.dumps(TEMPLATE_CATALOG, indent=2))
        return

    table = Table(title="Layout Templates", show_header=True, header_style="bold")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Description")
    for entry in TEMPLATE_CATALOG:
        table.add_row(entry["id"], entry["name"], entry["description"])
    console.print(table)
    console.print()
    console.print("[dim]Use --template custom with a customTemplate in the manifest or config.[/dim]")


if __name__ == "__main__":
    main()
