"""
Shared utility functions for Signer.

Contains path helpers for the data directory.
"""

import os
from pathlib import Path
from typing import Optional


# Environment override for the data directory
APP_DIR_ENV = "SIGNER_HOME"


def get_app_dir() -> Path:
    """Get the application data directory."""
    override = os.environ.get(APP_DIR_ENV)
    app_dir = Path(override) if override else Path.home() / ".signer"
    app_dir.mkdir(parents=True, exist_ok=True)
    return app_dir


def get_identities_path(app_dir: Optional[Path] = None) -> Path:
    """Get path to the identity store file."""
    return (app_dir or get_app_dir()) / "identities.json"


def get_settings_path(app_dir: Optional[Path] = None) -> Path:
    """Get path to settings file."""
    return (app_dir or get_app_dir()) / "settings.json"


def get_logs_dir(app_dir: Optional[Path] = None) -> Path:
    """Get the logs directory."""
    logs_dir = (app_dir or get_app_dir()) / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    return logs_dir
