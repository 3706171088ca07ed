"""Theme management for brewctl CLI.

Provides color theming with optional user overrides from
~/.config/brewctl/theme.toml (a ``[colors]`` table).
"""

import logging
import tomllib
from pathlib import Path
from typing import cast

from pydantic import BaseModel, ConfigDict, ValidationError, ValidationInfo, field_validator
from rich.theme import Theme

from brewctl.core.paths import get_theme_path

logger = logging.getLogger(__name__)


def _normalize_hex(field: str, value: object) -> str:
    """Return ``value`` stripped if it is a #RGB or #RRGGBB color.

    Raises:
        ValueError: Naming ``field`` and what is wrong with the value.
    """
    if not isinstance(value, str):
        msg = f"{field}: color must be a string"
        raise ValueError(msg)
    color = value.strip()
    if not color.startswith("#"):
        msg = f"{field}: color must start with '#'"
        raise ValueError(msg)
    digits = color[1:]
    if len(digits) not in (3, 6):
        msg = f"{field}: color must be #RGB or #RRGGBB format"
        raise ValueError(msg)
    if any(c not in "0123456789abcdefABCDEF" for c in digits):
        msg = f"{field}: invalid hex color '{color}'"
        raise ValueError(msg)
    return color


class ThemeColors(BaseModel):
    """Color configuration for brewctl CLI.

    All colors must be valid hex codes (#RRGGBB or #RGB).
    """

    model_config = ConfigDict(extra="forbid")

    # Base colors
    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    # Semantic colors
    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # Service status
    service_started: str = "#03b971"
    service_error: str = "#f53263"
    service_idle: str = "#b2bec3"

    # Packages
    pinned: str = "#faf870"
    cask: str = "#d44ebc"

    @field_validator("*", mode="before")
    @classmethod
    def validate_hex_color(cls, v: object, info: ValidationInfo) -> str:
        """Validate that all color values are valid hex codes."""
        return _normalize_hex(info.field_name or "color", v)


def _load_toml_colors(path: Path) -> dict[str, str] | None:
    """Load the colors table from a TOML file.

    Args:
        path: Path to the TOML file.

    Returns:
        Dictionary of color name to hex value, or None if loading failed.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return None
    except tomllib.TOMLDecodeError as e:
        logger.warning("Failed to parse TOML file %s: %s", path, e)
        return None
    except OSError as e:
        logger.warning("Failed to read theme file %s: %s", path, e)
        return None

    colors_raw: object = data.get("colors", {})
    if not isinstance(colors_raw, dict):
        logger.warning("Invalid 'colors' section in %s", path)
        return None
    return {k: v for k, v in cast(dict[str, object], colors_raw).items() if isinstance(v, str)}


def load_theme(path: Path | None = None) -> ThemeColors:
    """Load theme colors, applying user overrides over the defaults.

    Args:
        path: Theme file to read. If None, uses ~/.config/brewctl/theme.toml.

    Returns:
        ThemeColors instance; defaults if the override is missing or invalid.
    """
    theme_path = path or get_theme_path()
    user_colors = _load_toml_colors(theme_path)
    if not user_colors:
        return ThemeColors()

    logger.debug("Loaded user theme overrides from %s", theme_path)
    try:
        return ThemeColors(**user_colors)
    except ValidationError as e:
        logger.warning("Theme validation failed, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Convert ThemeColors to a Rich Theme.

    Args:
        colors: ThemeColors instance to convert. If None, loads theme automatically.

    Returns:
        Rich Theme instance configured with the color scheme.
    """
    if colors is None:
        colors = load_theme()

    styles: dict[str, str] = {
        "text": colors.text,
        "muted": colors.muted,
        "header": colors.header,
        "border": colors.border,
        "success": colors.success,
        "warning": colors.warning,
        "error": f"bold {colors.error}",
        "info": colors.info,
        "service.started": colors.service_started,
        "service.error": f"bold {colors.service_error}",
        "service.idle": colors.service_idle,
        "package.pinned": colors.pinned,
        "package.cask": colors.cask,
        "bold_header": f"bold {colors.header}",
        "dim": colors.muted,
    }

    return Theme(styles)


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Get the Rich theme, loading and caching it if necessary.

    Returns:
        Cached Rich Theme instance.
    """
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme
