"""
Background pattern generator.

Tiles the full page with one of the supported patterns. The pattern
opacity is pushed before drawing and reset to fully opaque afterwards,
whatever the pattern.
"""

import math
from typing import Callable, Dict, Iterator, Optional

from evidence_report.canvas import LAYER_BACKGROUND, PDFCanvas
from evidence_report.models import Background, BackgroundPattern

CIRCLE_SPACING = 20
CIRCLE_RADIUS = 1.0
DOT_SPACING = 10
DOT_RADIUS = 0.5
WAVE_SPACING = 10
WAVE_STEP = 10
WAVE_AMPLITUDE = 2
WAVE_LINE_WIDTH = 0.5
HEX_SIZE = 5


def _steps(limit: float, spacing: float) -> Iterator[float]:
    value = 0.0
    while value < limit:
        yield value
        value += spacing


def _dots(canvas: PDFCanvas, spacing: float, radius: float) -> None:
    for x in _steps(canvas.page_width, spacing):
        for y in _steps(canvas.page_height, spacing):
            canvas.circle(x, y, radius, fill=True)


def _circles(canvas: PDFCanvas) -> None:
    _dots(canvas, CIRCLE_SPACING, CIRCLE_RADIUS)


def _grid_dots(canvas: PDFCanvas) -> None:
    _dots(canvas, DOT_SPACING, DOT_RADIUS)


def _waves(canvas: PDFCanvas) -> None:
    """Zig-zag rows approximating a sine wave."""
    canvas.set_line_width(WAVE_LINE_WIDTH)
    half = WAVE_STEP / 2
    for y in _steps(canvas.page_height, WAVE_SPACING):
        for x in _steps(canvas.page_width, WAVE_STEP):
            canvas.line(x, y, x + half, y + WAVE_AMPLITUDE)
            canvas.line(x + half, y + WAVE_AMPLITUDE, x + WAVE_STEP, y)


def hexagon_points(cx: float, cy: float, size: float):
    angle = math.pi / 3
    return [
        (cx + size * math.cos(i * angle), cy + size * math.sin(i * angle))
        for i in range(6)
    ]


def _hexagons(canvas: PDFCanvas) -> None:
    """Hexagon outlines on an offset brick grid."""
    dx = HEX_SIZE * math.sqrt(3)
    dy = HEX_SIZE * 1.5
    for row, y in enumerate(_steps(canvas.page_height + dy, dy)):
        offset = (row % 2) * (dx / 2)
        for x in _steps(canvas.page_width + dx, dx):
            canvas.polygon(hexagon_points(x + offset, y, HEX_SIZE), fill=False, stroke=True)


PATTERN_PAINTERS: Dict[BackgroundPattern, Callable[[PDFCanvas], None]] = {
    BackgroundPattern.CIRCLES: _circles,
    BackgroundPattern.GRID_DOTS: _grid_dots,
    BackgroundPattern.WAVES: _waves,
    BackgroundPattern.HEXAGONS: _hexagons,
}


def draw_background(canvas: PDFCanvas, background: Optional[Background]) -> bool:
    """
    Paint the background pattern on the current page.

    Returns:
        True if anything was drawn
    """
    if background is None or background.pattern == BackgroundPattern.NONE:
        return False

    painter = PATTERN_PAINTERS[background.pattern]
    with canvas.layer(LAYER_BACKGROUND):
        if background.opacity < 1:
            canvas.set_opacity(background.opacity)
        try:
            canvas.set_fill_color(background.color)
            canvas.set_stroke_color(background.color)
            painter(canvas)
        finally:
            canvas.set_opacity(1.0)
    return True
