"""
client/settings.py
------------------
User display settings: theme, font size and language.

Settings are an explicit object. ``SettingsStore`` loads and saves them at
the boundary, and ``apply()`` pushes them into whatever renders the views.
"""

import json
import os
from dataclasses import asdict, dataclass, replace
from typing import Protocol

from config import SETTINGS_PATH
from utils.logger import get_logger

logger = get_logger(__name__)

FONT_SIZES = ("small", "medium", "large")
LANGUAGES = ("en", "el")


@dataclass(frozen=True)
class DashboardSettings:
    dark_mode: bool = False
    font_size: str = "medium"
    language: str = "en"

    def __post_init__(self):
        if self.font_size not in FONT_SIZES:
            raise ValueError(f"font_size must be one of {FONT_SIZES}")
        if self.language not in LANGUAGES:
            raise ValueError(f"language must be one of {LANGUAGES}")

    def to_dict(self) -> dict:
        return {"darkMode": self.dark_mode, "fontSize": self.font_size, "language": self.language}

    @classmethod
    def from_dict(cls, data: dict) -> "DashboardSettings":
        defaults = cls()
        return cls(
            dark_mode=bool(data.get("darkMode", defaults.dark_mode)),
            font_size=data.get("fontSize", defaults.font_size),
            language=data.get("language", defaults.language),
        )

    def with_changes(self, **changes) -> "DashboardSettings":
        return replace(self, **changes)


DEFAULTS = DashboardSettings()


class SettingsTarget(Protocol):
    def set_theme(self, dark: bool) -> None: ...
    def set_font_size(self, size: str) -> None: ...
    def set_language(self, language: str) -> None: ...


def apply(settings: DashboardSettings, target: SettingsTarget) -> None:
    """Push every setting into the rendering layer."""
    target.set_theme(settings.dark_mode)
    target.set_font_size(settings.font_size)
    target.set_language(settings.language)


class SettingsStore:
    """JSON-file persistence for DashboardSettings."""

    def __init__(self, path: str = SETTINGS_PATH):
        self.path = path

    def load(self) -> DashboardSettings:
        """
        Read the stored settings.

        A missing file silently means defaults; an unreadable or invalid one
        is logged and also falls back to the defaults.
        """
        if not os.path.exists(self.path):
            return DEFAULTS
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("settings file does not hold an object")
            return DashboardSettings.from_dict(data)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not load settings from {self.path}, using defaults: {e}")
            return DEFAULTS

    def save(self, settings: DashboardSettings) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(settings.to_dict(), f, indent=2)
        logger.info(f"Saved settings to {self.path}: {asdict(settings)}")
