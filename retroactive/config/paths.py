"""Path constants and discovery for Retroactive.

Defines application data directories and bundled resource locations.
"""

import os
import sys
from pathlib import Path


# Application name for config directories
APP_NAME = "Retroactive"

# Bundled support manifest shipped inside the package
BUNDLED_MANIFEST_NAME = "SupportPath.plist"


def get_app_data_dir() -> Path:
    """
    Get the application data directory.

    Returns:
        Path to app data directory (created if not exists)

    Platform-specific locations:
        - macOS: ~/Library/Application Support/Retroactive
        - Linux: ~/.config/Retroactive
        - Windows: %APPDATA%/Retroactive
    """
    if sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    elif sys.platform == "win32":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))

    app_dir = base / APP_NAME
    app_dir.mkdir(parents=True, exist_ok=True)
    return app_dir


def get_settings_path() -> Path:
    """
    Get the path to the settings JSON file.

    Returns:
        Path to settings.json
    """
    return get_app_data_dir() / "settings.json"


def get_log_dir() -> Path:
    """
    Get the directory for log files.

    Returns:
        Path to logs directory (created if not exists)
    """
    log_dir = get_app_data_dir() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def get_log_file_path() -> Path:
    """
    Get the path to the main log file.

    Returns:
        Path to application log file
    """
    return get_log_dir() / "app.log"


def get_resources_dir() -> Path:
    """Directory holding files bundled with the package."""
    return Path(__file__).resolve().parent.parent / "resources"


def get_bundled_manifest_path() -> Path:
    """
    Get the path to the bundled support manifest.

    Returns:
        Path to SupportPath.plist inside the package
    """
    return get_resources_dir() / BUNDLED_MANIFEST_NAME
