"""
Colour themes and layout catalogue for evidence reports.

Themes are pure data: a closed table of palettes keyed by name. Keys are
validated when a ReportConfig is built, so lookups here assume a known key.
"""

from typing import Dict

from evidence_report.models import ColorPalette, StatusColors, TemplateId


def _palette(
    primary: str,
    secondary: str,
    text_main: str,
    text_light: str,
    bg_light: str,
    success: tuple,
    fail: tuple,
) -> ColorPalette:
    return ColorPalette(
        primary=primary,
        secondary=secondary,
        text_main=text_main,
        text_light=text_light,
        bg_light=bg_light,
        status_success=StatusColors(bg=success[0], text=success[1]),
        status_fail=StatusColors(bg=fail[0], text=fail[1]),
    )


REPORT_THEMES: Dict[str, ColorPalette] = {
    "default": _palette(
        "#081754", "#F0D224", "#1e293b", "#64748b", "#f8fafc",
        ("#dcfce7", "#15803d"), ("#fee2e2", "#b91c1c"),
    ),
    "crimson": _palette(
        "#7f1d1d", "#fbbf24", "#27272a", "#71717a", "#fafafa",
        ("#ecfccb", "#3f6212"), ("#ffe4e6", "#881337"),
    ),
    "teal": _palette(
        "#0f766e", "#22d3ee", "#134e4a", "#5eead4", "#f0fdfa",
        ("#ccfbf1", "#0f766e"), ("#ffe4e6", "#be123c"),
    ),
    "emerald": _palette(
        "#064e3b", "#a3e635", "#022c22", "#6b7280", "#ecfdf5",
        ("#d1fae5", "#065f46"), ("#fee2e2", "#991b1b"),
    ),
    "amethyst": _palette(
        "#581c87", "#f472b6", "#3b0764", "#6b7280", "#faf5ff",
        ("#d8b4fe", "#581c87"), ("#fce7f3", "#9d174d"),
    ),
}


def resolve_theme(theme_key: str) -> ColorPalette:
    """Return the palette registered under ``theme_key``."""
    return REPORT_THEMES[theme_key]


# Display metadata for the fixed layouts (the custom layout is user-authored)
TEMPLATE_CATALOG = [
    {
        "id": TemplateId.CLASSIC.value,
        "name": "Classic Corporate",
        "description": "Clean professional layout with centered title and info table",
    },
    {
        "id": TemplateId.MODERN.value,
        "name": "Modern Sidebar",
        "description": "Contemporary design with sidebar branding and large typography",
    },
    {
        "id": TemplateId.CREATIVE.value,
        "name": "Creative Bold",
        "description": "Eye-catching layout with large hero images and accent colors",
    },
]
