"""Tests for style resolution, geometry helpers and themes."""

import pytest

from evidence_report.geometry import (
    builder_px_to_mm,
    fit_within,
    hex_to_rgb,
    px_to_mm,
)
from evidence_report.models import Decoration, TemplateBlock, TemplateSettings
from evidence_report.styles import StyleResolver, first_set, resolve_style
from evidence_report.themes import REPORT_THEMES, TEMPLATE_CATALOG, resolve_theme


class TestResolveStyle:
    """Tests for the specific -> group -> default chain."""

    def test_specific_wins(self):
        """Test that a specific value overrides everything."""
        assert resolve_style(4, 2, 1) == 4

    def test_group_fallback(self):
        """Test that the group value applies when specific is unset."""
        assert resolve_style(None, 2, 1) == 2

    def test_default_fallback(self):
        """Test that the default applies when nothing is set."""
        assert resolve_style(None, None, 1) == 1

    def test_zero_is_honoured(self):
        """Test that a falsy but set value is not skipped."""
        assert resolve_style(0, 5, 3) == 0
        assert resolve_style(None, 0, 3) == 0

    def test_first_set(self):
        """Test the legacy fallback helper."""
        assert first_set(None, 0, 2) == 0
        assert first_set(None, None) is None


class TestStyleResolver:
    """Tests for template-bound style resolution."""

    @pytest.fixture
    def palette(self):
        return resolve_theme("default")

    def test_accent_falls_back_to_primary(self, palette):
        """Test that the accent colour defaults to the theme primary."""
        assert StyleResolver(TemplateSettings(), palette).accent_color == palette.primary

    def test_accent_setting(self, palette):
        """Test that the template accent colour is used when set."""
        styles = StyleResolver(TemplateSettings(accent_color="#ff0000"), palette)
        assert styles.accent_color == "#ff0000"

    def test_block_border_chain(self, palette):
        """Test block border width precedence."""
        block = TemplateBlock.model_validate({"type": "text"})
        wide = TemplateBlock.model_validate({"type": "text", "settings": {"borderWidth": 3}})

        assert StyleResolver(None, palette).block_border_width_px(block) == 1
        legacy = StyleResolver(TemplateSettings(global_border_width=4), palette)
        assert legacy.block_border_width_px(block) == 4
        both = StyleResolver(
            TemplateSettings(block_border_width=2, global_border_width=4), palette
        )
        assert both.block_border_width_px(block) == 2
        assert both.block_border_width_px(wide) == 3
        assert both.block_border_width_mm(wide) == pytest.approx(3 * 0.264)

    def test_decoration_border_defaults_to_none(self, palette):
        """Test that decorations have no border unless configured."""
        deco = Decoration.model_validate({"type": "square"})
        assert StyleResolver(None, palette).decoration_border_width_px(deco) == 0
        styles = StyleResolver(TemplateSettings(decoration_border_width=2), palette)
        assert styles.decoration_border_width_mm(deco) == pytest.approx(0.528)

    def test_decoration_color_chain(self, palette):
        """Test decoration colour precedence."""
        plain = Decoration.model_validate({"type": "circle"})
        green = Decoration.model_validate({"type": "circle", "color": "#00ff00"})

        assert StyleResolver(None, palette).decoration_color(plain) == palette.primary
        accented = StyleResolver(TemplateSettings(accent_color="#ff0000"), palette)
        assert accented.decoration_color(plain) == "#ff0000"
        assert accented.decoration_color(green) == "#00ff00"

    def test_decoration_opacity_chain(self, palette):
        """Test decoration opacity precedence."""
        plain = Decoration.model_validate({"type": "circle"})
        faded = Decoration.model_validate({"type": "circle", "opacity": 0.2})

        assert StyleResolver(None, palette).decoration_opacity(plain) == 1
        styles = StyleResolver(TemplateSettings(global_decoration_opacity=0.5), palette)
        assert styles.decoration_opacity(plain) == 0.5
        assert styles.decoration_opacity(faded) == 0.2


class TestGeometry:
    """Tests for unit conversion helpers."""

    def test_hex_to_rgb(self):
        """Test hex colour parsing."""
        assert hex_to_rgb("#ff8000") == (255, 128, 0)
        assert hex_to_rgb("081754") == (8, 23, 84)

    def test_hex_to_rgb_malformed(self):
        """Test that malformed colours yield black."""
        assert hex_to_rgb("red") == (0, 0, 0)
        assert hex_to_rgb("") == (0, 0, 0)

    def test_px_to_mm(self):
        """Test pixel to millimetre conversion."""
        assert px_to_mm(10) == pytest.approx(2.64)

    def test_builder_px_to_mm(self):
        """Test the logo width mapping onto the content width."""
        assert builder_px_to_mm(500) == pytest.approx(170)
        assert builder_px_to_mm(150) == pytest.approx(51)
        assert builder_px_to_mm(900) == pytest.approx(170)

    def test_fit_within(self):
        """Test contain-fitting in both orientations."""
        assert fit_within(300, 100, 150, 80) == pytest.approx((150, 50))
        assert fit_within(100, 200, 150, 80) == pytest.approx((40, 80))


class TestThemes:
    """Tests for the theme and template catalogue."""

    def test_theme_keys(self):
        """Test the closed set of theme keys."""
        assert set(REPORT_THEMES) == {"default", "crimson", "teal", "emerald", "amethyst"}

    def test_default_palette(self):
        """Test the default palette colours."""
        palette = resolve_theme("default")
        assert palette.primary == "#081754"
        assert palette.status_success.text == "#15803d"

    def test_catalog(self):
        """Test that every fixed layout is listed."""
        assert [entry["id"] for entry in TEMPLATE_CATALOG] == [
            "classic", "modern", "creative",
        ]
