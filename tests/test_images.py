"""Tests for image loading and decoding."""

import pytest

from conftest import data_uri, make_jpeg, make_png
from evidence_report.images import (
    FileImageReader,
    ImageLoader,
    decode_data_uri,
    describe_source,
)
from evidence_report.utils.exceptions import ImageDecodeError


class TestImageLoader:
    """Tests for ImageLoader.load."""

    def test_load_raw_bytes(self):
        """Test loading raw PNG bytes."""
        result = ImageLoader().load(make_png(260, 200))
        assert result.ok
        assert (result.image.width, result.image.height) == (260, 200)
        assert result.image.format == "PNG"
        assert result.error is None

    def test_load_data_uri(self):
        """Test loading a base64 data URI."""
        result = ImageLoader().load(data_uri(make_png(10, 20)))
        assert result.ok
        assert result.image.height_for_width(5) == pytest.approx(10)

    def test_no_source(self):
        """Test that a missing source is reported, not raised."""
        result = ImageLoader().load(None)
        assert not result.ok
        assert isinstance(result.error, ImageDecodeError)
        assert result.error.reason == "No image source"

    def test_malformed_data_uri(self):
        """Test that a data URI without payload fails softly."""
        result = ImageLoader().load("data:image/png;base64")
        assert not result.ok
        assert result.error.reason == "Malformed image payload"

    def test_corrupt_bytes(self):
        """Test that undecodable bytes fail softly."""
        result = ImageLoader().load(b"definitely not an image")
        assert not result.ok
        assert result.error.reason == "Unsupported or corrupt image data"

    def test_reader_is_used_for_references(self):
        """Test that media references go through the injected reader."""
        calls = []

        def reader(reference):
            calls.append(reference)
            return make_png()

        result = ImageLoader(reader).load("media://capture-1")
        assert result.ok
        assert calls == ["media://capture-1"]

    def test_reader_failure_is_absorbed(self):
        """Test that a failing reader yields a failure result."""
        def reader(reference):
            raise RuntimeError("media store offline")

        result = ImageLoader(reader).load("capture-1")
        assert not result.ok
        assert result.error.reason == "Image could not be read"
        assert isinstance(result.error.cause, RuntimeError)

    def test_missing_file_without_reader(self, temp_dir):
        """Test that a missing file path fails softly."""
        result = ImageLoader().load(str(temp_dir / "missing.png"))
        assert not result.ok


class TestFileImageReader:
    """Tests for FileImageReader."""

    def test_relative_path(self, temp_dir):
        """Test that relative references resolve against the base directory."""
        (temp_dir / "shot.png").write_bytes(make_png())
        reader = FileImageReader(temp_dir)
        assert reader("shot.png") == make_png()

    def test_media_prefix(self, temp_dir):
        """Test that media:// and file:// prefixes are stripped."""
        (temp_dir / "shot.png").write_bytes(b"abc")
        reader = FileImageReader(temp_dir)
        assert reader("media://shot.png") == b"abc"
        assert reader(f"file://{temp_dir / 'shot.png'}") == b"abc"


class TestLoadedImage:
    """Tests for LoadedImage conversions."""

    def test_png_bytes_converts_jpeg(self):
        """Test that non-PNG images are re-encoded as PNG."""
        result = ImageLoader().load(make_jpeg())
        assert result.image.format == "JPEG"
        assert result.image.png_bytes().startswith(b"\x89PNG")

    def test_png_bytes_passthrough(self):
        """Test that PNG data is returned unchanged."""
        data = make_png()
        assert ImageLoader().load(data).image.png_bytes() == data

    def test_aspect_ratio(self):
        """Test aspect ratio calculation."""
        assert ImageLoader().load(make_png(200, 100)).image.aspect_ratio == 2.0


class TestHelpers:
    """Tests for data URI and source description helpers."""

    def test_decode_percent_encoded(self):
        """Test a non-base64 data URI."""
        assert decode_data_uri("data:text/plain,a%20b") == b"a b"

    def test_decode_without_payload(self):
        """Test that a URI without a comma is rejected."""
        with pytest.raises(ValueError):
            decode_data_uri("data:image/png;base64")

    def test_describe_source(self):
        """Test log-safe source descriptions."""
        assert describe_source(None) == "<none>"
        assert describe_source(b"1234") == "<4 bytes>"
        assert describe_source(data_uri(make_png())).endswith(",...")
        assert len(describe_source("x" * 200)) == 80
