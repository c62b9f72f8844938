"""Utility functions and helpers for StudioRack."""

from studiorack.utils.errors import (
    ConfigError,
    DownloadError,
    InvalidConfigError,
    InvalidProjectError,
    NetworkConnectionError,
    NetworkError,
    NetworkTimeoutError,
    ProjectError,
    RegistryError,
    StudioRackError,
    TemplateError,
    ValidatorError,
)
from studiorack.utils.paths import (
    get_config_dir,
    get_data_dir,
    get_default_global_plugin_dir,
    get_default_validator_path,
    get_platform,
)

__all__ = [
    # Errors
    "StudioRackError",
    "ConfigError",
    "InvalidConfigError",
    "ProjectError",
    "InvalidProjectError",
    "RegistryError",
    "NetworkError",
    "NetworkConnectionError",
    "NetworkTimeoutError",
    "DownloadError",
    "ValidatorError",
    "TemplateError",
    # Paths
    "get_config_dir",
    "get_data_dir",
    "get_default_global_plugin_dir",
    "get_default_validator_path",
    "get_platform",
]
