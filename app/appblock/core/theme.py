"""Console color theme.

The palette is read from the bundled data/theme.toml. Keys set in the
user's theme.toml replace the bundled ones; an invalid merged palette
falls back to the built-in defaults.
"""

import logging
import tomllib
from importlib import resources
from pathlib import Path
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, StringConstraints, ValidationError
from rich.theme import Theme

from appblock.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)


def _expand_hex(color: str) -> str:
    """Expand #RGB to #RRGGBB, the only hex form Rich parses."""
    if len(color) == 4:
        return "#" + "".join(ch * 2 for ch in color[1:])
    return color


HexColor = Annotated[
    str,
    StringConstraints(strip_whitespace=True, pattern=r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$"),
    AfterValidator(_expand_hex),
]


class ThemeColors(BaseModel):
    """Palette used by appblock's tables and messages.

    Field names map to Rich style names, with underscores turned into
    dots (``direction_in`` becomes ``direction.in``).
    """

    model_config = ConfigDict(extra="forbid")

    text: HexColor = "#ffffff"
    muted: HexColor = "#b2bec3"
    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"

    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"

    # Rule outcomes
    blocked: HexColor = "#f53263"
    existing: HexColor = "#0e8ac8"
    skipped: HexColor = "#b2bec3"

    direction_in: HexColor = "#c1ff62"
    direction_out: HexColor = "#faf870"


def _parse_colors(text: str, source: str) -> dict[str, str] | None:
    """Extract the string values of the [colors] table, or None if unusable."""
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        logger.warning("Ignoring theme %s: %s", source, e)
        return None

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme %s: [colors] is not a table", source)
        return None
    return {key: value for key, value in colors.items() if isinstance(value, str)}


def _load_toml_colors(path: Path) -> dict[str, str] | None:
    """Read the colors of a theme file; None if missing or unreadable."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except OSError as e:
        logger.warning("Cannot read theme %s: %s", path, e)
        return None
    return _parse_colors(text, str(path))


def load_theme() -> ThemeColors:
    """Merge bundled and user colors into a validated palette."""
    bundled = resources.files("appblock.data").joinpath("theme.toml")
    colors = _parse_colors(bundled.read_text(encoding="utf-8"), "bundled theme.toml") or {}

    user_path = get_user_theme_path()
    overrides = _load_toml_colors(user_path)
    if overrides:
        logger.debug("Applying %d theme overrides from %s", len(overrides), user_path)
        colors.update(overrides)

    try:
        return ThemeColors(**colors)
    except ValidationError as e:
        logger.warning("Invalid theme colors, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme for a palette (the loaded one if None)."""
    palette = colors if colors is not None else load_theme()

    styles = {name.replace("_", "."): value for name, value in palette.model_dump().items()}
    styles.update(
        {
            "error": f"bold {palette.error}",
            "blocked": f"bold {palette.blocked}",
            "bold_header": f"bold {palette.header}",
            "dim": palette.muted,
            "rule.name": f"bold {palette.text}",
            "rule.program": palette.muted,
        }
    )
    return Theme(styles)


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Get the Rich theme, loading it on first use."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme


def reset_theme_cache() -> None:
    """Forget the cached theme so the next get_theme() reloads it."""
    global _cached_theme
    _cached_theme = None
