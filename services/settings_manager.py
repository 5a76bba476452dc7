"""
Settings Manager.

Handles application settings with JSON file storage.
"""

import json
import logging
import os
import platform
from dataclasses import dataclass, field, asdict
from typing import Optional
from pathlib import Path


logger = logging.getLogger(__name__)


@dataclass
class EditorSettings:
    """Drawing and navigation parameters of the canvas."""
    bond_length: float = 30.0
    min_scale: float = 0.1
    max_scale: float = 5.0
    scroll_sensitivity: float = 30.0   # Scroll delta giving a 2x zoom step
    default_atom_label: str = "C"


@dataclass
class UISettings:
    """User interface settings."""
    theme: str = "dark"
    antialiasing: bool = True
    show_hover_outline: bool = True
    window_width: int = 1200
    window_height: int = 800


@dataclass
class AppSettings:
    """Complete application settings."""
    editor: EditorSettings = field(default_factory=EditorSettings)
    ui: UISettings = field(default_factory=UISettings)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "editor": asdict(self.editor),
            "ui": asdict(self.ui),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AppSettings":
        """Create from dictionary."""
        settings = cls()

        if "editor" in data:
            settings.editor = EditorSettings(**data["editor"])
        if "ui" in data:
            settings.ui = UISettings(**data["ui"])

        return settings


class SettingsManager:
    """
    Manages application settings with JSON file storage.

    Settings file location:
    - Windows: %APPDATA%/MolCanvas/settings.json
    - Linux: ~/.config/MolCanvas/settings.json
    - macOS: ~/Library/Application Support/MolCanvas/settings.json
    """

    APP_NAME = "MolCanvas"
    SETTINGS_FILE = "settings.json"

    def __init__(self, config_override: Optional[str] = None):
        """
        Initialize settings manager.

        Args:
            config_override: Optional path to override config file location.
                            Useful for testing.
        """
        self._settings = AppSettings()
        self._config_override = config_override
        self._settings_path = self._get_settings_path()
        self._ensure_settings_dir()
        self.load()

    @property
    def settings(self) -> AppSettings:
        """Get current settings."""
        return self._settings

    @property
    def settings_path(self) -> str:
        """Get the settings file path."""
        return str(self._settings_path)

    @property
    def editor(self) -> EditorSettings:
        return self._settings.editor

    @property
    def ui(self) -> UISettings:
        return self._settings.ui

    def _get_settings_path(self) -> Path:
        """Get platform-specific settings directory."""
        if self._config_override:
            return Path(self._config_override)

        system = platform.system()

        if system == "Windows":
            base = os.environ.get("APPDATA", os.path.expanduser("~"))
            config_dir = Path(base) / self.APP_NAME
        elif system == "Darwin":  # macOS
            config_dir = Path.home() / "Library" / "Application Support" / self.APP_NAME
        else:  # Linux and others
            xdg_config = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
            config_dir = Path(xdg_config) / self.APP_NAME

        return config_dir / self.SETTINGS_FILE

    def _ensure_settings_dir(self):
        """Create settings directory if it doesn't exist."""
        self._settings_path.parent.mkdir(parents=True, exist_ok=True)

    def load(self) -> bool:
        """Load settings from file."""
        if not self._settings_path.exists():
            return False

        try:
            with open(self._settings_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            self._settings = AppSettings.from_dict(data)
            return True
        except (OSError, ValueError, TypeError) as e:
            logger.warning(f"Error loading settings from {self._settings_path}: {e}")
            return False

    def save(self) -> bool:
        """Save settings to file."""
        try:
            self._ensure_settings_dir()
            with open(self._settings_path, "w", encoding="utf-8") as f:
                json.dump(self._settings.to_dict(), f, indent=2)
            return True
        except OSError as e:
            logger.warning(f"Error saving settings to {self._settings_path}: {e}")
            return False

    def reset(self):
        """Reset settings to defaults."""
        self._settings = AppSettings()
        self.save()

    def save_window_size(self, width: int, height: int):
        self._settings.ui.window_width = width
        self._settings.ui.window_height = height
        self.save()
