"""Pytest configuration and shared fixtures for Evidence Report tests."""

import base64
import io
import tempfile
from datetime import date
from pathlib import Path

import pytest
from PIL import Image

from evidence_report.generator import ReportGenerator
from evidence_report.models import EvidenceItem, EvidenceStatus, ReportConfig

REPORT_DATE = date(2026, 1, 15)


def make_png(width: int = 64, height: int = 48, color=(40, 90, 200)) -> bytes:
    """Encode a solid-colour RGB PNG of the given pixel size."""
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


def make_jpeg(width: int = 64, height: int = 48) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), (200, 30, 30)).save(buffer, format="JPEG")
    return buffer.getvalue()


def data_uri(payload: bytes, mime: str = "image/png") -> str:
    return f"data:{mime};base64,{base64.b64encode(payload).decode('ascii')}"


def render_custom(template, evidence=(), theme="default", image_reader=None):
    """Render a custom template and return the (unserialised) canvas."""
    config = ReportConfig(
        template_id="custom",
        custom_template=template,
        theme=theme,
        report_date=REPORT_DATE,
    )
    return ReportGenerator(image_reader=image_reader).render_pdf(list(evidence), config)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def png_bytes():
    """A small valid PNG image."""
    return make_png()


@pytest.fixture
def evidence_items(png_bytes):
    """Three evidence items with mixed statuses and image sources."""
    return [
        EvidenceItem(
            id="ev-1",
            title="Login page",
            description="User opens the login page.",
            status=EvidenceStatus.SUCCESS,
            image=png_bytes,
        ),
        EvidenceItem(
            id="ev-2",
            title="Invalid password",
            description="An error banner is shown.",
            status=EvidenceStatus.FAILURE,
            image=data_uri(png_bytes),
        ),
        EvidenceItem(
            id="ev-3",
            title="Pending check",
            status=EvidenceStatus.PENDING,
        ),
    ]


@pytest.fixture
def report_config():
    """Configuration with a pinned report date for reproducible output."""
    return {"report_date": REPORT_DATE, "project_name": "Checkout"}
