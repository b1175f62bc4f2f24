"""Editor settings loaded from a TOML file.

Settings live in ``settings.toml`` in the user's config directory. Missing
keys fall back to defaults; a broken file never stops the editor from
starting.
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "settings.toml"


@dataclass
class EditorSettings:
    theme: str = "pink"
    tab_width: int = EditorConstants.DEFAULT_TAB_WIDTH


def default_settings_path() -> Path:
    return Path(platformdirs.user_config_dir("emed")) / SETTINGS_FILENAME


def _parse_tab_width(value: Any) -> Optional[int]:
    # Accept both 8 and "8"
    if isinstance(value, bool):
        return None
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if isinstance(value, int) and value >= 1:
        return value
    return None


def load_settings(toml_content: str) -> EditorSettings:
    """Merge TOML content over the default settings.

    Args:
        toml_content: Contents of a settings file (may be empty)

    Returns:
        The resulting settings; invalid entries are logged and ignored.
    """
    settings = EditorSettings()
    try:
        data = tomllib.loads(toml_content)
    except tomllib.TOMLDecodeError as e:
        logger.warning(f"Settings file is not valid TOML, using defaults: {e}")
        return settings

    theme = data.get("theme")
    if theme is not None:
        if isinstance(theme, str) and theme:
            settings.theme = theme
        else:
            logger.warning(f"Invalid theme setting {theme!r}, using {settings.theme!r}")

    if "tab_width" in data:
        tab_width = _parse_tab_width(data["tab_width"])
        if tab_width is None:
            logger.warning(f"Invalid tab_width setting {data['tab_width']!r}, "
                           f"using {settings.tab_width}")
        else:
            settings.tab_width = tab_width

    return settings


def load_settings_file(path: Optional[Path] = None) -> EditorSettings:
    """Load settings from ``path`` (default: the platform config location)."""
    path = path or default_settings_path()
    if not path.exists():
        return EditorSettings()
    try:
        content = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not load settings from {path}: {e}")
        return EditorSettings()
    return load_settings(content)
