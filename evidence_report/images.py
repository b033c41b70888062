"""
Image loading for report rendering.

``ImageLoader.load`` never raises: it returns an ``ImageLoadResult`` that is
either a decoded image with its pixel dimensions or the reason it is not
available. What to draw on failure (a placeholder, nothing) is decided by
the caller.

Image sources:
- raw ``bytes``
- ``data:`` URIs (base64 or percent-encoded)
- opaque media references, resolved through an injected reader callable
  (for example the desktop shell's media store). Without a reader,
  references are read as filesystem paths.
"""

import base64
import binascii
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union
from urllib.parse import unquote_to_bytes

from PIL import Image, UnidentifiedImageError
from reportlab.lib.utils import ImageReader

from evidence_report.utils.exceptions import ImageDecodeError

logger = logging.getLogger(__name__)

ImageSource = Union[str, bytes, None]
MediaReader = Callable[[str], bytes]


@dataclass(frozen=True)
class LoadedImage:
    """A decoded image ready to be placed in either output encoding."""
    data: bytes
    width: int
    height: int
    format: str

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height if self.height else 1.0

    def height_for_width(self, width: float) -> float:
        """Height that keeps the aspect ratio at the given width."""
        return (width / self.width) * self.height if self.width else 0.0

    def _open(self) -> Image.Image:
        image = Image.open(io.BytesIO(self.data))
        image.load()
        return image

    def reportlab_reader(self) -> ImageReader:
        return ImageReader(self._open())

    def png_bytes(self) -> bytes:
        """Re-encode as PNG (formats python-docx cannot embed, e.g. WebP)."""
        if self.format == "PNG":
            return self.data
        image = self._open()
        if image.mode not in ("RGB", "RGBA", "L", "LA"):
            image = image.convert("RGBA")
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()


@dataclass(frozen=True)
class ImageLoadResult:
    """Outcome of an image load: exactly one of ``image``/``error`` is set."""
    image: Optional[LoadedImage] = None
    error: Optional[ImageDecodeError] = None

    @property
    def ok(self) -> bool:
        return self.image is not None

    @classmethod
    def success(cls, image: LoadedImage) -> "ImageLoadResult":
        return cls(image=image)

    @classmethod
    def failure(cls, source: str, reason: str, cause: Exception = None) -> "ImageLoadResult":
        return cls(error=ImageDecodeError(source, reason, cause))


def describe_source(source: ImageSource) -> str:
    """Short, log-safe description of an image source."""
    if source is None:
        return "<none>"
    if isinstance(source, bytes):
        return f"<{len(source)} bytes>"
    if source.startswith("data:"):
        return source.split(",", 1)[0][:40] + ",..."
    return source if len(source) <= 80 else source[:77] + "..."


def decode_data_uri(uri: str) -> bytes:
    """Decode the payload of a ``data:`` URI."""
    header, sep, payload = uri.partition(",")
    if not sep:
        raise ValueError("data URI has no payload")
    if header.endswith(";base64"):
        return base64.b64decode(payload, validate=False)
    return unquote_to_bytes(payload)


class FileImageReader:
    """Media reader resolving references relative to a base directory."""

    def __init__(self, base_dir: Union[str, Path]):
        self.base_dir = Path(base_dir)

    def __call__(self, reference: str) -> bytes:
        if reference.startswith("file://"):
            reference = reference[len("file://"):]
        elif reference.startswith("media://"):
            reference = reference[len("media://"):]
        path = Path(reference)
        if not path.is_absolute():
            path = self.base_dir / path
        return path.read_bytes()


class ImageLoader:
    """Loads and decodes images one at a time."""

    def __init__(self, reader: Optional[MediaReader] = None):
        """
        Args:
            reader: External image-bytes reader keyed by media reference
        """
        self.reader = reader

    def _read_bytes(self, source: ImageSource) -> bytes:
        if isinstance(source, bytes):
            return source
        if source.startswith("data:"):
            return decode_data_uri(source)
        if self.reader is not None:
            return self.reader(source)
        return Path(source).read_bytes()

    def load(self, source: ImageSource) -> ImageLoadResult:
        """Read and decode ``source``; failures are returned, not raised."""
        label = describe_source(source)
        if not source:
            return ImageLoadResult.failure(label, "No image source")

        try:
            raw = self._read_bytes(source)
        except (binascii.Error, ValueError) as exc:
            logger.warning("Malformed image payload %s: %s", label, exc)
            return ImageLoadResult.failure(label, "Malformed image payload", exc)
        except Exception as exc:  # external reader: any failure degrades to a placeholder
            logger.warning("Could not read image %s: %s", label, exc)
            return ImageLoadResult.failure(label, "Image could not be read", exc)

        try:
            with Image.open(io.BytesIO(raw)) as image:
                image.load()
                width, height = image.size
                image_format = image.format or "PNG"
        except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as exc:
            logger.warning("Could not decode image %s: %s", label, exc)
            return ImageLoadResult.failure(label, "Unsupported or corrupt image data", exc)

        if width <= 0 or height <= 0:
            return ImageLoadResult.failure(label, "Image has no pixels")

        return ImageLoadResult.success(
            LoadedImage(data=raw, width=width, height=height, format=image_format)
        )
