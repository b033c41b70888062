"""
Page geometry and colour helpers.

The engine lays out in physical millimetres with a top-left origin on a
fixed ISO A4 sheet. The template editor works in screen pixels; the
conversions between the two coordinate systems live here.
"""

import re
from typing import Tuple

from reportlab.lib.units import mm

# ISO A4, the only supported physical page size
PAGE_WIDTH_MM = 210.0
PAGE_HEIGHT_MM = 297.0

# Dynamic layout flow
TOP_MARGIN_MM = 20.0
BOTTOM_MARGIN_MM = 30.0
BLOCK_GAP_MM = 5.0
LEFT_MARGIN_MM = 20.0
CONTENT_WIDTH_MM = 170.0
LINE_HEIGHT_MM = 5.0

# Editor pixel -> PDF millimetre (96 dpi screen: 25.4 / 96)
PX_TO_MM = 0.264

# The logo block width slider spans 0-500px, mapped onto the content width
LOGO_BUILDER_MAX_PX = 500.0

_HEX_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert ``#RRGGBB`` to an (r, g, b) tuple; malformed input yields black."""
    match = _HEX_RE.match((hex_color or "").strip())
    if not match:
        return (0, 0, 0)
    return tuple(int(part, 16) for part in match.groups())


def px_to_mm(pixels: float) -> float:
    """Convert an editor pixel length (e.g. a border width) to millimetres."""
    return pixels * PX_TO_MM


def builder_px_to_mm(pixels: float) -> float:
    """Map a logo width from the 0-500px builder range onto 0-170mm."""
    pixels = max(0.0, min(pixels, LOGO_BUILDER_MAX_PX))
    return pixels * CONTENT_WIDTH_MM / LOGO_BUILDER_MAX_PX


def mm_to_points(value_mm: float) -> float:
    return value_mm * mm


def fit_within(
    image_width: float,
    image_height: float,
    box_width: float,
    box_height: float,
) -> Tuple[float, float]:
    """Scale an image into a box preserving aspect ratio (contain)."""
    if image_width <= 0 or image_height <= 0:
        return box_width, box_height
    aspect = image_width / image_height
    if aspect > box_width / box_height:
        return box_width, box_width / aspect
    return box_height * aspect, box_height
