"""Listing colors for trashctl.

Colors come from the bundled ``data/theme.toml``; any key can be
overridden in the user's ``theme.toml``. A broken user file never stops
a listing, it only falls back to the bundled colors.
"""

import logging
import tomllib
from functools import cache
from importlib import resources
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from rich.theme import Theme

from trashctl.core.paths import get_theme_path

logger = logging.getLogger(__name__)

# Styles rendered bold on top of their color
_BOLD_STYLES = {"error": "error", "bold_header": "header"}


class ThemeColors(BaseModel):
    """Hex colors (#RGB or #RRGGBB) keyed by Rich style name."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    date: str = "#69B9A1"
    path: str = "#ffffff"
    size: str = "#0ec1c8"
    trash_path: str = "#b2bec3"
    orphan: str = "#d44ebc"

    @field_validator("*", mode="before")
    @classmethod
    def check_hex(cls, v: object, info: ValidationInfo) -> str:
        if not isinstance(v, str):
            raise ValueError(f"{info.field_name}: color must be a string")
        color = v.strip()
        if not color.startswith("#"):
            raise ValueError(f"{info.field_name}: color must start with '#'")
        digits = color[1:]
        if len(digits) not in (3, 6):
            raise ValueError(f"{info.field_name}: color must be #RGB or #RRGGBB format")
        try:
            int(digits, 16)
        except ValueError:
            raise ValueError(f"{info.field_name}: invalid hex color '{color}'") from None
        return color


def _load_toml_colors(path: Path) -> dict[str, str] | None:
    """Read the [colors] table of a theme file, None if absent or unreadable."""
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return None
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return None

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: [colors] is not a table", path)
        return None
    return {key: value for key, value in colors.items() if isinstance(value, str)}


def load_theme() -> ThemeColors:
    """Bundled colors with the user's theme.toml layered on top."""
    bundled = resources.files("trashctl.data").joinpath("theme.toml")
    colors = _load_toml_colors(Path(str(bundled))) or {}

    user_path = get_theme_path()
    overrides = _load_toml_colors(user_path)
    if overrides:
        logger.debug("Theme overrides from %s", user_path)
        colors.update(overrides)

    try:
        return ThemeColors(**colors)
    except ValueError as e:
        logger.warning("Invalid theme, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme used by the console helpers."""
    if colors is None:
        colors = load_theme()

    styles = colors.model_dump()
    for style, base in _BOLD_STYLES.items():
        styles[style] = f"bold {styles[base]}"
    styles["dim"] = colors.muted
    return Theme(styles)


@cache
def get_theme() -> Theme:
    """The process-wide Rich theme, loaded on first use."""
    return get_rich_theme()
