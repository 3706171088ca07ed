"""Unit tests for theme module.

Tests for theme loading, validation, and Rich theme generation.
"""

# pyright: reportPrivateUsage=false

from pathlib import Path
from unittest.mock import patch

import brewctl.core.theme as theme_module
import pytest
from brewctl.core.theme import (
    ThemeColors,
    _load_toml_colors,
    get_rich_theme,
    get_theme,
    load_theme,
)
from rich.theme import Theme


class TestThemeColors:
    """Tests for ThemeColors Pydantic model."""

    def test_default_values(self) -> None:
        """ThemeColors has sensible defaults."""
        colors = ThemeColors()
        assert colors.text == "#ffffff"
        assert colors.header == "#69B9A1"
        assert colors.success == "#03b971"
        assert colors.service_error == "#f53263"

    def test_valid_hex_colors(self) -> None:
        """ThemeColors accepts #RGB and #RRGGBB."""
        colors = ThemeColors(text="#AABBCC", pinned="#abc")
        assert colors.text == "#AABBCC"
        assert colors.pinned == "#abc"

    def test_strips_whitespace(self) -> None:
        """Surrounding whitespace is ignored."""
        assert ThemeColors(cask=" #123456 ").cask == "#123456"

    def test_invalid_hex_no_hash(self) -> None:
        """ThemeColors rejects colors without # prefix."""
        with pytest.raises(ValueError, match="must start with '#'"):
            ThemeColors(text="ffffff")

    def test_invalid_hex_wrong_length(self) -> None:
        """ThemeColors rejects colors with wrong length."""
        with pytest.raises(ValueError, match="must be #RGB or #RRGGBB"):
            ThemeColors(text="#ff")

    def test_invalid_hex_chars(self) -> None:
        """ThemeColors rejects invalid hex characters."""
        with pytest.raises(ValueError, match="invalid hex color"):
            ThemeColors(service_started="#gggggg")

    def test_extra_fields_forbidden(self) -> None:
        """ThemeColors rejects unknown fields."""
        with pytest.raises(ValueError):
            ThemeColors(package_manual="#ffffff")  # type: ignore[call-arg]


class TestLoadTomlColors:
    """Tests for _load_toml_colors internal function."""

    def test_loads_valid_toml(self, tmp_path: Path) -> None:
        """Loads colors from a valid TOML file."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('[colors]\ntext = "#000000"\npinned = "#aabbcc"\n')

        assert _load_toml_colors(theme_file) == {"text": "#000000", "pinned": "#aabbcc"}

    def test_returns_none_for_missing_file(self, tmp_path: Path) -> None:
        """Returns None when the file doesn't exist."""
        assert _load_toml_colors(tmp_path / "nonexistent.toml") is None

    def test_returns_none_for_invalid_toml(self, tmp_path: Path) -> None:
        """Returns None for malformed TOML."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text("not valid [ toml syntax")

        assert _load_toml_colors(theme_file) is None

    def test_returns_none_for_non_table_colors(self, tmp_path: Path) -> None:
        """Returns None when colors is not a table."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('colors = "red"\n')

        assert _load_toml_colors(theme_file) is None

    def test_returns_empty_dict_for_missing_colors_section(self, tmp_path: Path) -> None:
        """Returns an empty dict when the colors section is missing."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('[other]\nkey = "value"\n')

        assert _load_toml_colors(theme_file) == {}


class TestLoadTheme:
    """Tests for load_theme function."""

    def test_defaults_without_user_file(self, tmp_path: Path) -> None:
        """Without a theme file, the defaults are used."""
        with patch("brewctl.core.theme.get_theme_path", return_value=tmp_path / "theme.toml"):
            colors = load_theme()

        assert colors == ThemeColors()

    def test_user_theme_overrides_defaults(self, tmp_path: Path) -> None:
        """User colors override defaults; the rest keep their default."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\nheader = "#ff0000"\n')

        with patch("brewctl.core.theme.get_theme_path", return_value=user_theme):
            colors = load_theme()

        assert colors.header == "#ff0000"
        assert colors.text == "#ffffff"

    def test_explicit_path(self, tmp_path: Path) -> None:
        """An explicit path is read instead of the config dir."""
        user_theme = tmp_path / "custom.toml"
        user_theme.write_text('[colors]\nsuccess = "#00ff00"\n')

        assert load_theme(user_theme).success == "#00ff00"

    def test_invalid_color_falls_back(self, tmp_path: Path) -> None:
        """An invalid color makes the whole override fall back to defaults."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\nheader = "red"\nsuccess = "#00ff00"\n')

        colors = load_theme(user_theme)

        assert colors == ThemeColors()


class TestGetRichTheme:
    """Tests for get_rich_theme function."""

    def test_returns_rich_theme(self) -> None:
        """Returns a Rich Theme instance."""
        assert isinstance(get_rich_theme(ThemeColors()), Theme)

    def test_includes_brew_styles(self) -> None:
        """Theme includes service and package styles."""
        theme = get_rich_theme(ThemeColors())

        for style in (
            "service.started",
            "service.error",
            "service.idle",
            "package.pinned",
            "package.cask",
            "bold_header",
        ):
            assert style in theme.styles

    def test_uses_provided_colors(self) -> None:
        """Uses the provided ThemeColors instance."""
        theme = get_rich_theme(ThemeColors(pinned="#123456"))

        color = theme.styles["package.pinned"].color
        assert color is not None
        assert color.name == "#123456"


class TestGetTheme:
    """Tests for get_theme caching function."""

    def test_caches_theme(self) -> None:
        """get_theme returns the cached instance on subsequent calls."""
        theme_module._cached_theme = None

        assert get_theme() is get_theme()
