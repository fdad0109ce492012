"""Small JSON file holding layout state and the last-used folders."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields
from typing import List, Optional

from .constants import OUTPUT_MODE_ORIGINAL, OUTPUT_MODES

logger = logging.getLogger(__name__)

SETTINGS_ENV = "ASSET_RENAMER_SETTINGS"
SETTINGS_FILE = ".asset_renamer.json"


@dataclass
class Settings:
    column_widths: List[int] = field(default_factory=lambda: [150, 130])
    last_folder: str = ""
    output_mode: str = OUTPUT_MODE_ORIGINAL
    output_path: str = ""
    log_level: str = "INFO"


def default_settings_path() -> str:
    return os.environ.get(SETTINGS_ENV) or os.path.join(os.path.expanduser("~"), SETTINGS_FILE)


def load_settings(path: Optional[str] = None) -> Settings:
    """Read settings from ``path``; a missing or broken file gives the defaults."""
    path = path or default_settings_path()
    if not os.path.exists(path):
        return Settings()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return Settings()
    if not isinstance(data, dict):
        logger.warning("Ignoring settings file %s: expected a JSON object", path)
        return Settings()

    known = {f.name for f in fields(Settings)}
    settings = Settings(**{k: v for k, v in data.items() if k in known})
    try:
        settings.column_widths = [int(w) for w in settings.column_widths]
    except (TypeError, ValueError):
        settings.column_widths = Settings().column_widths
    if settings.output_mode not in OUTPUT_MODES:
        settings.output_mode = OUTPUT_MODE_ORIGINAL
    return settings


def save_settings(settings: Settings, path: Optional[str] = None) -> None:
    path = path or default_settings_path()
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(asdict(settings), f, indent=2)
    except OSError as exc:
        logger.warning("Could not save settings to %s: %s", path, exc)
