"""Color theme for officecleanup output.

The bundled ``data/theme.toml`` provides every color; a user file at
``~/.config/officecleanup/theme.toml`` may override any subset of them.
"""

import logging
import tomllib
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from officecleanup.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)


class ThemeColors(BaseModel):
    """Hex colors used by the console output (#RRGGBB or #RGB)."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#0e8ac8"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # Item markers
    found: str = "#c1ff62"
    missing: str = "#faf870"
    removed: str = "#03b971"
    protected: str = "#d44ebc"

    @field_validator("*", mode="before")
    @classmethod
    def validate_hex_color(cls, v: object, info: Any) -> str:
        """Reject anything that is not a hex color."""
        if not isinstance(v, str):
            msg = f"{info.field_name}: color must be a string"
            raise ValueError(msg)
        color = v.strip()
        if not color.startswith("#"):
            msg = f"{info.field_name}: color must start with '#'"
            raise ValueError(msg)
        digits = color[1:]
        if len(digits) not in (3, 6):
            msg = f"{info.field_name}: color must be #RGB or #RRGGBB format"
            raise ValueError(msg)
        try:
            int(digits, 16)
        except ValueError:
            msg = f"{info.field_name}: invalid hex color '{color}'"
            raise ValueError(msg) from None
        return color


def get_bundled_theme_path() -> Path:
    """Return the path of the bundled ``data/theme.toml``."""
    return Path(str(resources.files("officecleanup.data").joinpath("theme.toml")))


def _read_colors(path: Path) -> dict[str, str] | None:
    """Read the ``[colors]`` table of a TOML file.

    Returns:
        Color mapping (non-string values dropped), or None if the file is
        missing or unreadable.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return None
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return None

    table = data.get("colors", {})
    if not isinstance(table, dict):
        logger.warning("Ignoring theme file %s: [colors] is not a table", path)
        return None
    return {key: value for key, value in table.items() if isinstance(value, str)}


def load_theme() -> ThemeColors:
    """Merge the user override over the bundled theme.

    An invalid merged theme falls back to the built-in defaults.
    """
    colors = _read_colors(get_bundled_theme_path())
    if colors is None:
        logger.error("Bundled theme is missing, installation may be corrupted")
        colors = {}

    user_path = get_user_theme_path()
    overrides = _read_colors(user_path)
    if overrides:
        logger.debug("Applying theme overrides from %s", user_path)
        colors = {**colors, **overrides}

    try:
        return ThemeColors(**colors)
    except ValidationError as e:
        logger.warning("Invalid theme configuration, using defaults: %s", e)
        return ThemeColors()


# Rich style name -> (color field, modifier)
_STYLES: dict[str, tuple[str, str]] = {
    "text": ("text", ""),
    "muted": ("muted", ""),
    "header": ("header", ""),
    "border": ("border", ""),
    "success": ("success", ""),
    "warning": ("warning", ""),
    "error": ("error", "bold"),
    "info": ("info", ""),
    "found": ("found", ""),
    "missing": ("missing", ""),
    "removed": ("removed", ""),
    "protected": ("protected", "bold"),
    "bold_header": ("header", "bold"),
    "item.path": ("muted", ""),
    "item.label": ("text", "bold"),
}


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build a Rich Theme from ``colors`` (loaded if not given)."""
    if colors is None:
        colors = load_theme()
    styles = {
        name: f"{modifier} {getattr(colors, field)}".strip() for name, (field, modifier) in _STYLES.items()
    }
    return Theme(styles)


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Return the process-wide Rich theme, loading it on first use."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme


def reload_theme() -> Theme:
    """Drop the cached theme and load it again."""
    global _cached_theme
    _cached_theme = None
    return get_theme()
