"""Filesystem locations used by StudioRack.

User-level settings, downloaded tools and globally installed plugins live in
the platform's standard directories (via platformdirs). The configuration
directory can be overridden with the ``STUDIORACK_CONFIG_DIR`` environment
variable, which is mostly useful in tests and CI.
"""

import os
import sys
from pathlib import Path
from typing import Literal

import platformdirs

APP_NAME = "studiorack"

Platform = Literal["linux", "mac", "win"]


def get_platform() -> Platform:
    """Return the platform key used by registry file listings."""
    if sys.platform == "darwin":
        return "mac"
    if sys.platform.startswith("win"):
        return "win"
    return "linux"


def get_config_dir() -> Path:
    """Get the StudioRack configuration directory."""
    override = os.environ.get("STUDIORACK_CONFIG_DIR")
    if override:
        return Path(override).expanduser()
    return Path(platformdirs.user_config_dir(APP_NAME))


def get_data_dir() -> Path:
    """Get the StudioRack data directory (downloaded tools, global plugins)."""
    return Path(platformdirs.user_data_dir(APP_NAME))


def get_default_global_plugin_dir() -> Path:
    """Default root for plugins installed with ``--global``."""
    return get_data_dir() / "plugins"


def get_default_validator_path() -> Path:
    """Default location of the validator binary."""
    name = "validator.exe" if get_platform() == "win" else "validator"
    return get_data_dir() / "validator" / name
