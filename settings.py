"""
settings.py

Persistent settings management for AutoList.

Handles cross-platform settings storage using TOML format with platformdirs
for proper user config directory detection.

Settings file location:
    - Windows: %APPDATA%/autolist/settings.toml
    - macOS: ~/Library/Application Support/autolist/settings.toml
    - Linux: ~/.config/autolist/settings.toml

Default values are documented in comments throughout this file.
If settings.toml is corrupted, these defaults will be used.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import platformdirs

# TOML reading - use tomllib for Python 3.11+, tomli for earlier versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w

from models import MarkerFamily

APP_NAME = "autolist"

# Global settings manager instance (singleton)
_settings_manager: Optional["SettingsManager"] = None


def get_settings() -> "SettingsManager":
    """Get the global settings manager instance.

    Returns:
        The singleton SettingsManager instance.
    """
    global _settings_manager
    if _settings_manager is None:
        _settings_manager = SettingsManager()
    return _settings_manager


# =============================================================================
# Continuation Settings
# =============================================================================

@dataclass
class ContinuationSettings:
    """List continuation behavior.

    Defaults:
        enabled: True
        continue_bare_arabic: False
        renumber_on_delete: True
        terminate_on_double_enter: True
        families: all five marker families
    """
    enabled: bool = True                      # Default: True
    continue_bare_arabic: bool = False        # Default: False ("3." alone is not continued)
    renumber_on_delete: bool = True           # Default: True
    terminate_on_double_enter: bool = True    # Default: True
    families: List[str] = field(default_factory=lambda: list(MarkerFamily.ALL))  # Default: all


# =============================================================================
# Editor Settings
# =============================================================================

@dataclass
class EditorFontSettings:
    """Editor font settings.

    Defaults:
        family: "Consolas"
        size: 11
        tab_width: 4
    """
    family: str = "Consolas"  # Default: "Consolas"
    size: int = 11            # Default: 11 points
    tab_width: int = 4        # Default: 4 characters


@dataclass
class EditorSettings:
    """All editor-related settings."""
    font: EditorFontSettings = field(default_factory=EditorFontSettings)


# =============================================================================
# Main App Settings
# =============================================================================

@dataclass
class AppSettings:
    """Application settings with default values.

    Attributes:
        continuation: List continuation behavior.
        editor: Editor-related settings.
    """
    continuation: ContinuationSettings = field(default_factory=ContinuationSettings)
    editor: EditorSettings = field(default_factory=EditorSettings)


# =============================================================================
# Settings Manager
# =============================================================================

class SettingsManager:
    """Manages loading, saving, and accessing application settings.

    Settings are stored in a TOML file at the platform-appropriate location.
    If the settings file doesn't exist, defaults are used and the file is
    created on first save.

    Args:
        app_name: Application name used for the config directory.
        settings_dir: Explicit directory, overriding the platform location.
    """

    def __init__(self, app_name: str = APP_NAME, settings_dir: Optional[Path] = None):
        if settings_dir is None:
            settings_dir = Path(platformdirs.user_config_dir(app_name))
        self.settings_dir = Path(settings_dir)
        self.settings_file = self.settings_dir / "settings.toml"
        self.settings = self.load()
        self._needs_save = not self.settings_file.exists()  # Save if file didn't exist

    def ensure_file_complete(self) -> None:
        """Ensure settings file exists with all sections. Call once at startup."""
        if self._needs_save or not self.settings_file.exists():
            self.save()
            self._needs_save = False

    def load(self) -> AppSettings:
        """Load settings from the TOML file.

        Returns:
            AppSettings instance with values from file or defaults if file
            doesn't exist or is invalid.
        """
        if not self.settings_file.exists():
            return AppSettings()

        try:
            with open(self.settings_file, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError):
            # If file is corrupted or unreadable, return defaults
            return AppSettings()

        return self._parse_toml(data)

    def _parse_toml(self, data: Dict[str, Any]) -> AppSettings:
        """Parse TOML data into AppSettings.

        Args:
            data: Parsed TOML dictionary.

        Returns:
            AppSettings instance populated from TOML data.
        """
        settings = AppSettings()

        # Continuation section
        cont = data.get("continuation", {})
        c = settings.continuation
        c.enabled = bool(cont.get("enabled", c.enabled))
        c.continue_bare_arabic = bool(cont.get("continue_bare_arabic", c.continue_bare_arabic))
        c.renumber_on_delete = bool(cont.get("renumber_on_delete", c.renumber_on_delete))
        c.terminate_on_double_enter = bool(cont.get("terminate_on_double_enter", c.terminate_on_double_enter))
        families = cont.get("families", c.families)
        if isinstance(families, list):
            # Unknown names are dropped; recognition order is fixed
            c.families = [f for f in MarkerFamily.ALL if f in families]

        # Editor section
        editor = data.get("editor", {})
        if "font" in editor:
            font = editor["font"]
            settings.editor.font.family = font.get("family", settings.editor.font.family)
            settings.editor.font.size = font.get("size", settings.editor.font.size)
            settings.editor.font.tab_width = font.get("tab_width", settings.editor.font.tab_width)

        return settings

    def save(self) -> None:
        """Save current settings to the TOML file.

        Creates the settings directory if it doesn't exist.
        """
        # Ensure directory exists
        self.settings_dir.mkdir(parents=True, exist_ok=True)

        # Convert settings to TOML structure
        data = self._to_toml_dict()

        with open(self.settings_file, "wb") as f:
            tomli_w.dump(data, f)

    def _to_toml_dict(self) -> Dict[str, Any]:
        """Convert settings to a TOML-compatible dictionary structure.

        Returns:
            Dictionary organized by TOML sections.
        """
        s = self.settings
        return {
            "continuation": {
                "enabled": s.continuation.enabled,
                "continue_bare_arabic": s.continuation.continue_bare_arabic,
                "renumber_on_delete": s.continuation.renumber_on_delete,
                "terminate_on_double_enter": s.continuation.terminate_on_double_enter,
                "families": list(s.continuation.families),
            },
            "editor": {
                "font": {
                    "family": s.editor.font.family,
                    "size": s.editor.font.size,
                    "tab_width": s.editor.font.tab_width,
                },
            },
        }

    def get_settings_path(self) -> Path:
        """Get the path to the settings file.

        Returns:
            Path object pointing to the settings file location.
        """
        return self.settings_file
