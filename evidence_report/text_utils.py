"""
Evidence Report - Text Utilities

Text clean-up and wrapping for the standard PDF Type 1 fonts.
"""

import re
from typing import List

from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth

_REPLACEMENTS = {
    # Dashes to regular hyphen
    chr(0x2014): "-",  # Em-dash
    chr(0x2013): "-",  # En-dash
    chr(0x2212): "-",  # Minus sign
    chr(0x2010): "-",  # Hyphen
    chr(0x2011): "-",  # Non-breaking hyphen
    # Smart quotes to regular quotes
    chr(0x2018): "'",
    chr(0x2019): "'",
    chr(0x201C): '"',
    chr(0x201D): '"',
    # Other problematic characters
    chr(0x2026): "...",  # Ellipsis
    chr(0x00A0): " ",    # Non-breaking space
    chr(0x2022): "*",    # Bullet point
    chr(0x200B): "",     # Zero-width space
}

_TRANSLATION = str.maketrans(_REPLACEMENTS)


def normalize_text(text: str) -> str:
    """
    Make user text safe for the standard Helvetica encoding.

    Typographic punctuation that editors insert automatically is folded to
    its ASCII form and line endings are unified to ``\\n``.

    Args:
        text: Raw user-entered text

    Returns:
        Normalized text (empty string for None)
    """
    if not text:
        return ""
    text = text.translate(_TRANSLATION)
    return text.replace("\r\n", "\n").replace("\r", "\n")


def wrap_text(text: str, font_name: str, font_size: float, max_width_mm: float) -> List[str]:
    """
    Word-wrap text to a column width measured with the font's metrics.

    Explicit newlines start a new line; blank lines are kept. A single word
    wider than the column is left on its own line rather than split.

    Args:
        text: Text to wrap
        font_name: ReportLab font name used for measuring
        font_size: Font size in points
        max_width_mm: Column width in millimetres

    Returns:
        List of lines (empty for empty text)
    """
    text = normalize_text(text)
    if not text:
        return []

    max_width = max_width_mm * mm
    lines: List[str] = []
    for paragraph in text.split("\n"):
        words = paragraph.split()
        if not words:
            lines.append("")
            continue
        current: List[str] = []
        for word in words:
            candidate = " ".join(current + [word])
            if current and stringWidth(candidate, font_name, font_size) > max_width:
                lines.append(" ".join(current))
                current = [word]
            else:
                current.append(word)
        lines.append(" ".join(current))
    return lines


def collapse_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", normalize_text(text)).strip()
