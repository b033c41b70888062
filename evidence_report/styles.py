"""
Style resolution for custom templates.

Every style value resolves through the same priority chain:
per-block or per-decoration value, then the template (group) setting,
then the theme default. ``resolve_style`` is that chain; ``StyleResolver``
binds it to one template's settings and palette.
"""

from typing import Optional, TypeVar

from evidence_report.geometry import px_to_mm
from evidence_report.models import (
    ColorPalette,
    Decoration,
    TemplateBlock,
    TemplateSettings,
)

T = TypeVar("T")

# Theme-level defaults for values the palette does not carry
DEFAULT_BLOCK_BORDER_PX = 1.0
DEFAULT_DECORATION_BORDER_PX = 0.0
DEFAULT_OPACITY = 1.0

# Decoration outlines are drawn in a fixed dark grey
DECORATION_STROKE_RGB = (50, 50, 50)


def resolve_style(specific: Optional[T], group: Optional[T], default: T) -> T:
    """Return ``specific ?? group ?? default``.

    ``None`` means "not set"; falsy values such as ``0`` are honoured.
    """
    if specific is not None:
        return specific
    if group is not None:
        return group
    return default


def first_set(*values: Optional[T]) -> Optional[T]:
    """First value that is not ``None`` (used for legacy fallback fields)."""
    for value in values:
        if value is not None:
            return value
    return None


class StyleResolver:
    """Resolves effective styles for one custom template."""

    def __init__(self, settings: Optional[TemplateSettings], palette: ColorPalette):
        self.settings = settings or TemplateSettings()
        self.palette = palette

    @property
    def accent_color(self) -> str:
        return resolve_style(None, self.settings.accent_color, self.palette.primary)

    def block_border_width_px(self, block: TemplateBlock) -> float:
        group = first_set(self.settings.block_border_width, self.settings.global_border_width)
        return resolve_style(block.settings.border_width, group, DEFAULT_BLOCK_BORDER_PX)

    def block_border_width_mm(self, block: TemplateBlock) -> float:
        return px_to_mm(self.block_border_width_px(block))

    def decoration_border_width_px(self, decoration: Decoration) -> float:
        group = first_set(self.settings.decoration_border_width, self.settings.global_border_width)
        return resolve_style(decoration.border_width, group, DEFAULT_DECORATION_BORDER_PX)

    def decoration_border_width_mm(self, decoration: Decoration) -> float:
        return px_to_mm(self.decoration_border_width_px(decoration))

    def decoration_opacity(self, decoration: Decoration) -> float:
        return resolve_style(
            decoration.opacity, self.settings.global_decoration_opacity, DEFAULT_OPACITY
        )

    def decoration_color(self, decoration: Decoration) -> str:
        return resolve_style(decoration.color, self.settings.accent_color, self.palette.primary)
