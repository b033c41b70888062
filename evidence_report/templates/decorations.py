"""
Decoration overlay.

Draws every decoration of a custom template at its absolute page
position, in ascending ``z_index`` order. Opacity, colour and border width
come from the ``StyleResolver`` chain.
"""

import logging
from typing import Sequence

from evidence_report.canvas import LAYER_DECORATION, PDFCanvas
from evidence_report.models import Decoration, DecorationShape
from evidence_report.styles import DECORATION_STROKE_RGB, StyleResolver

logger = logging.getLogger(__name__)


def _draw_shape(canvas: PDFCanvas, deco: Decoration, stroke: bool, border_mm: float) -> None:
    if deco.shape == DecorationShape.CIRCLE:
        # Only the smaller side is honoured
        r = min(deco.width, deco.height) / 2
        canvas.circle(deco.x + r, deco.y + r, r, fill=True, stroke=stroke)
    elif deco.shape == DecorationShape.SQUARE:
        canvas.rect(deco.x, deco.y, deco.width, deco.height, fill=True, stroke=stroke)
    elif deco.shape == DecorationShape.TRIANGLE:
        canvas.polygon(
            [
                (deco.x + deco.width / 2, deco.y),
                (deco.x + deco.width, deco.y + deco.height),
                (deco.x, deco.y + deco.height),
            ],
            fill=True,
            stroke=stroke,
        )
    elif deco.shape == DecorationShape.WAVE:
        mid = deco.y + deco.height / 2
        canvas.set_line_width(max(1.0, border_mm))
        canvas.line(deco.x, mid, deco.x + deco.width, mid)


def draw_decorations(
    canvas: PDFCanvas,
    decorations: Sequence[Decoration],
    styles: StyleResolver,
) -> int:
    """
    Draw all decorations on the current page.

    Returns:
        Number of decorations drawn
    """
    count = 0
    with canvas.layer(LAYER_DECORATION):
        for deco in sorted(decorations, key=lambda d: d.z_index):
            color = styles.decoration_color(deco)
            border_mm = styles.decoration_border_width_mm(deco)

            canvas.set_opacity(styles.decoration_opacity(deco))
            try:
                canvas.set_fill_color(color)
                if deco.shape == DecorationShape.WAVE:
                    canvas.set_stroke_color(color)
                    stroke = False
                elif border_mm > 0:
                    canvas.set_stroke_color(DECORATION_STROKE_RGB)
                    canvas.set_line_width(border_mm)
                    stroke = True
                else:
                    canvas.set_stroke_color(color)
                    stroke = False
                _draw_shape(canvas, deco, stroke, border_mm)
            finally:
                canvas.set_opacity(1.0)
            count += 1
    logger.debug("Drew %d decorations on page %d", count, canvas.page_number)
    return count
