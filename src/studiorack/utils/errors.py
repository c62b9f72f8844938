"""Custom exceptions for StudioRack."""


class StudioRackError(Exception):
    """Base exception for all StudioRack errors."""

    pass


class ConfigError(StudioRackError):
    """Configuration-related errors."""

    pass


class InvalidConfigError(ConfigError):
    """Invalid configuration data."""

    pass


class ProjectError(StudioRackError):
    """Project manifest errors."""

    pass


class InvalidProjectError(ProjectError):
    """Project manifest exists but cannot be parsed."""

    pass


class RegistryError(StudioRackError):
    """Plugin registry errors (bad index, unexpected payload)."""

    pass


class NetworkError(StudioRackError):
    """Network-related errors."""

    pass


class NetworkConnectionError(NetworkError):
    """Connection failures."""

    pass


class NetworkTimeoutError(NetworkError):
    """Request timeout."""

    pass


class DownloadError(NetworkError):
    """A file could not be downloaded or unpacked."""

    pass


class ValidatorError(StudioRackError):
    """The plugin validator is missing or failed to run."""

    pass


class TemplateError(StudioRackError):
    """Plugin template scaffolding errors."""

    pass
