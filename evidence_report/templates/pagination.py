"""
Pagination controller for flowing layouts.

The ``Paginator`` owns the vertical cursor (millimetres from the top edge)
and decides when content has overflowed the printable area. Starting a page
always goes through ``force_break``, which runs the new-page hook (used to
replay background and decorations) and resets the cursor to the top margin.
"""

import logging
from typing import Callable, Optional

from evidence_report.canvas import PDFCanvas
from evidence_report.geometry import BOTTOM_MARGIN_MM, TOP_MARGIN_MM

logger = logging.getLogger(__name__)


class Paginator:
    """Vertical cursor plus page-break policy for one canvas."""

    def __init__(
        self,
        canvas: PDFCanvas,
        on_new_page: Optional[Callable[[], None]] = None,
        top_margin: float = TOP_MARGIN_MM,
        bottom_margin: float = BOTTOM_MARGIN_MM,
    ):
        self.canvas = canvas
        self.on_new_page = on_new_page
        self.top_margin = top_margin
        self.bottom_margin = bottom_margin
        self.cursor = top_margin

    def threshold(self, bottom_margin: Optional[float] = None) -> float:
        """Lowest cursor position that still allows drawing on this page."""
        reserve = self.bottom_margin if bottom_margin is None else bottom_margin
        return self.canvas.page_height - reserve

    def needs_break(self, bottom_margin: Optional[float] = None) -> bool:
        """True once the cursor is strictly past the threshold.

        A cursor sitting exactly on the threshold does not break.
        """
        return self.cursor > self.threshold(bottom_margin)

    def break_if_needed(self, bottom_margin: Optional[float] = None) -> bool:
        if self.needs_break(bottom_margin):
            self.force_break()
            return True
        return False

    def force_break(self) -> None:
        """Start a new physical page regardless of the remaining space."""
        self.canvas.new_page()
        if self.on_new_page is not None:
            self.on_new_page()
        logger.debug(
            "Page break at cursor %.1fmm -> page %d", self.cursor, self.canvas.page_number
        )
        self.cursor = self.top_margin
