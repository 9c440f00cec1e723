"""
Settings - User configuration stored as settings.json.

Missing keys fall back to DEFAULT_SETTINGS; an unreadable file is logged
and ignored.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from .utils import get_settings_path

logger = logging.getLogger(__name__)


DEFAULT_SETTINGS = {
    "log_level": "INFO",
    "log_retention_days": 0,        # 0 = console only, no log files
    "show_unknown_network": True,   # List the unknown network in `signer networks`
}


def load_settings(path: Optional[Path] = None) -> dict:
    """Load settings from disk, merged over the defaults."""
    path = path or get_settings_path()
    settings = dict(DEFAULT_SETTINGS)
    if path.exists():
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if isinstance(data, dict):
                settings.update(data)
            else:
                logger.warning(f"Ignoring settings file {path}: not an object")
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Failed to load settings: {e}")
    return settings


def save_settings(settings: dict, path: Optional[Path] = None) -> None:
    """Save settings to disk."""
    path = path or get_settings_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(settings, f, indent=2)
    except OSError as e:
        logger.error(f"Failed to save settings: {e}")
