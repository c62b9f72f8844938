"""User-level settings for StudioRack."""

from studiorack.config.manager import ConfigManager
from studiorack.config.schema import Settings

__all__ = ["ConfigManager", "Settings"]
