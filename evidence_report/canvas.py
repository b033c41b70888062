"""
Vector drawing backend for paginated PDF output.

``PDFCanvas`` wraps a ReportLab canvas on a fixed A4 sheet and exposes
drawing primitives in millimetres with a top-left origin, which is the
coordinate space every layout strategy works in. Each primitive is also
recorded as a ``DrawOp`` so the produced layout can be inspected (page
count, what was drawn where, on which page) without parsing the PDF.

One canvas serves exactly one render call and is never shared.
"""

import io
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen.canvas import Canvas

from evidence_report import __version__
from evidence_report.geometry import (
    LINE_HEIGHT_MM,
    PAGE_HEIGHT_MM,
    PAGE_WIDTH_MM,
    hex_to_rgb,
)
from evidence_report.images import LoadedImage
from evidence_report.text_utils import normalize_text, wrap_text

logger = logging.getLogger(__name__)

Color = Union[str, Tuple[int, int, int]]

FONT_REGULAR = "Helvetica"
FONT_BOLD = "Helvetica-Bold"

LAYER_CONTENT = "content"
LAYER_BACKGROUND = "background"
LAYER_DECORATION = "decoration"


@dataclass(frozen=True)
class DrawOp:
    """One recorded drawing command."""
    kind: str
    page: int
    layer: str
    params: Dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        return self.params[key]


def _to_rgb(color: Color) -> Tuple[int, int, int]:
    if isinstance(color, str):
        return hex_to_rgb(color)
    return tuple(color)


class PDFCanvas:
    """Millimetre-based drawing surface producing a multi-page PDF."""

    def __init__(
        self,
        title: Optional[str] = None,
        author: Optional[str] = None,
        page_width: float = PAGE_WIDTH_MM,
        page_height: float = PAGE_HEIGHT_MM,
    ):
        self.page_width = page_width
        self.page_height = page_height
        self._buffer = io.BytesIO()
        self._canvas = Canvas(
            self._buffer,
            pagesize=(page_width * mm, page_height * mm),
            invariant=1,
        )
        self._canvas.setCreator(f"evidence-report {__version__}")
        if title:
            self._canvas.setTitle(normalize_text(title))
        if author:
            self._canvas.setAuthor(normalize_text(author))

        self.ops: List[DrawOp] = []
        self.page_number = 1
        self._layer = LAYER_CONTENT
        self._result: Optional[bytes] = None

        # Graphics state; re-applied after every page break
        self._fill_rgb = (0, 0, 0)
        self._stroke_rgb = (0, 0, 0)
        self._text_rgb = (0, 0, 0)
        self._line_width = 0.2
        self._font = FONT_REGULAR
        self._font_size = 11.0
        self._opacity = 1.0
        self._apply_state()

    # ------------------------------------------------------------------
    # Bookkeeping
    # ------------------------------------------------------------------

    @property
    def page_count(self) -> int:
        return self.page_number

    def _record(self, kind: str, **params: Any) -> None:
        self.ops.append(DrawOp(kind, self.page_number, self._layer, params))

    def ops_of(
        self,
        kind: Optional[str] = None,
        page: Optional[int] = None,
        layer: Optional[str] = None,
    ) -> List[DrawOp]:
        """Recorded ops filtered by kind, page and/or layer."""
        return [
            op for op in self.ops
            if (kind is None or op.kind == kind)
            and (page is None or op.page == page)
            and (layer is None or op.layer == layer)
        ]

    @contextmanager
    def layer(self, name: str) -> Iterator[None]:
        """Tag every op drawn inside the block with ``name``."""
        previous = self._layer
        self._layer = name
        try:
            yield
        finally:
            self._layer = previous

    def _y(self, y_mm: float) -> float:
        """Top-left millimetres to ReportLab bottom-left points."""
        return (self.page_height - y_mm) * mm

    def _apply_state(self) -> None:
        c = self._canvas
        c.setFillColorRGB(*(v / 255.0 for v in self._fill_rgb))
        c.setStrokeColorRGB(*(v / 255.0 for v in self._stroke_rgb))
        c.setLineWidth(self._line_width * mm)
        c.setFont(self._font, self._font_size)
        if self._opacity < 1.0:
            self._apply_opacity(self._opacity)

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    def new_page(self) -> int:
        """Finish the current physical page and start the next one."""
        self._canvas.showPage()
        self.page_number += 1
        self._apply_state()
        self._record("page", number=self.page_number)
        logger.debug("Started physical page %d", self.page_number)
        return self.page_number

    # ------------------------------------------------------------------
    # Graphics state
    # ------------------------------------------------------------------

    def set_fill_color(self, color: Color) -> None:
        self._fill_rgb = _to_rgb(color)
        self._canvas.setFillColorRGB(*(v / 255.0 for v in self._fill_rgb))

    def set_stroke_color(self, color: Color) -> None:
        self._stroke_rgb = _to_rgb(color)
        self._canvas.setStrokeColorRGB(*(v / 255.0 for v in self._stroke_rgb))

    def set_text_color(self, color: Color) -> None:
        self._text_rgb = _to_rgb(color)

    def set_line_width(self, width_mm: float) -> None:
        self._line_width = width_mm
        self._canvas.setLineWidth(width_mm * mm)

    def set_font(self, size: float, bold: bool = False) -> None:
        self._font = FONT_BOLD if bold else FONT_REGULAR
        self._font_size = size
        self._canvas.setFont(self._font, size)

    @property
    def opacity(self) -> float:
        return self._opacity

    def _apply_opacity(self, value: float) -> bool:
        try:
            self._canvas.setFillAlpha(value)
            self._canvas.setStrokeAlpha(value)
        except (AttributeError, ValueError) as exc:
            logger.debug("Opacity %.2f not supported by backend: %s", value, exc)
            return False
        return True

    def set_opacity(self, value: float) -> None:
        """Set fill and stroke opacity; unsupported backends stay opaque."""
        value = max(0.0, min(1.0, value))
        if self._apply_opacity(value):
            self._opacity = value
        else:
            self._opacity = 1.0
        self._record("opacity", value=self._opacity)

    # ------------------------------------------------------------------
    # Shapes
    # ------------------------------------------------------------------

    def _style(self, fill: bool, stroke: bool) -> Dict[str, Any]:
        return {
            "fill": fill,
            "stroke": stroke,
            "fill_color": self._fill_rgb,
            "stroke_color": self._stroke_rgb,
            "line_width": self._line_width,
            "opacity": self._opacity,
        }

    def rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        fill: bool = False,
        stroke: bool = True,
        dashed: bool = False,
    ) -> None:
        c = self._canvas
        if dashed:
            c.setDash([1.5 * mm, 1 * mm])
        c.rect(x * mm, self._y(y + height), width * mm, height * mm,
               stroke=int(stroke), fill=int(fill))
        if dashed:
            c.setDash([])
        self._record("rect", x=x, y=y, width=width, height=height, dashed=dashed,
                     **self._style(fill, stroke))

    def rounded_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        radius: float,
        fill: bool = True,
        stroke: bool = False,
        dashed: bool = False,
    ) -> None:
        c = self._canvas
        if dashed:
            c.setDash([1.5 * mm, 1 * mm])
        c.roundRect(x * mm, self._y(y + height), width * mm, height * mm, radius * mm,
                    stroke=int(stroke), fill=int(fill))
        if dashed:
            c.setDash([])
        self._record("rounded_rect", x=x, y=y, width=width, height=height, radius=radius,
                     dashed=dashed, **self._style(fill, stroke))

    def circle(self, cx: float, cy: float, r: float, fill: bool = True, stroke: bool = False) -> None:
        self._canvas.circle(cx * mm, self._y(cy), r * mm, stroke=int(stroke), fill=int(fill))
        self._record("circle", cx=cx, cy=cy, r=r, **self._style(fill, stroke))

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self._canvas.line(x1 * mm, self._y(y1), x2 * mm, self._y(y2))
        self._record("line", x1=x1, y1=y1, x2=x2, y2=y2,
                     color=self._stroke_rgb, line_width=self._line_width)

    def polygon(
        self,
        points: Sequence[Tuple[float, float]],
        fill: bool = False,
        stroke: bool = True,
    ) -> None:
        if len(points) < 2:
            return
        path = self._canvas.beginPath()
        first_x, first_y = points[0]
        path.moveTo(first_x * mm, self._y(first_y))
        for px, py in points[1:]:
            path.lineTo(px * mm, self._y(py))
        path.close()
        self._canvas.drawPath(path, stroke=int(stroke), fill=int(fill))
        self._record("polygon", points=tuple(points), **self._style(fill, stroke))

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def text_width(self, text: str, size: Optional[float] = None, bold: Optional[bool] = None) -> float:
        """Width of ``text`` in millimetres (current font unless overridden)."""
        font = self._font if bold is None else (FONT_BOLD if bold else FONT_REGULAR)
        return stringWidth(normalize_text(text), font, size or self._font_size) / mm

    def split_text(self, text: str, width_mm: float) -> List[str]:
        """Word-wrap ``text`` to ``width_mm`` in the current font."""
        return wrap_text(text, self._font, self._font_size, width_mm)

    def text(
        self,
        text: Union[str, Sequence[str]],
        x: float,
        y: float,
        align: str = "left",
        line_height: float = LINE_HEIGHT_MM,
    ) -> None:
        """Draw one line, or several lines stepping down by ``line_height``.

        ``y`` is the baseline of the first line.
        """
        lines = [text] if isinstance(text, str) else list(text)
        c = self._canvas
        c.setFillColorRGB(*(v / 255.0 for v in self._text_rgb))
        for index, line in enumerate(lines):
            line = normalize_text(line)
            baseline = y + index * line_height
            if align == "center":
                c.drawCentredString(x * mm, self._y(baseline), line)
            elif align == "right":
                c.drawRightString(x * mm, self._y(baseline), line)
            else:
                c.drawString(x * mm, self._y(baseline), line)
            self._record("text", x=x, y=baseline, text=line, align=align,
                         size=self._font_size, bold=self._font == FONT_BOLD,
                         color=self._text_rgb)
        c.setFillColorRGB(*(v / 255.0 for v in self._fill_rgb))

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------

    def image(self, image: LoadedImage, x: float, y: float, width: float, height: float) -> None:
        self._canvas.drawImage(
            image.reportlab_reader(),
            x * mm,
            self._y(y + height),
            width=width * mm,
            height=height * mm,
            mask="auto",
        )
        self._record("image", x=x, y=y, width=width, height=height)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def to_bytes(self) -> bytes:
        """Finalize the document (once) and return the PDF bytes.

        Every started page is emitted, including a blank trailing page.
        """
        if self._result is None:
            self._canvas.showPage()
            self._canvas.save()
            self._result = self._buffer.getvalue()
        return self._result
