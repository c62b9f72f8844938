"""Data models for registry entries and installed plugins."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class PluginFile(BaseModel):
    """A downloadable release file for one platform."""

    name: str
    size: int | None = None


class PluginVersion(BaseModel):
    """Registry metadata for a single plugin version."""

    model_config = ConfigDict(extra="allow")

    name: str = ""
    description: str = ""
    date: str = ""
    version: str = ""
    tags: list[str] = Field(default_factory=list)
    author: str | None = None
    homepage: str | None = None
    repo: str | None = None  # GitHub "owner/name" hosting the release
    release: str | None = None  # Release tag, e.g. "v1.0.0"
    files: dict[str, PluginFile] = Field(default_factory=dict)  # platform -> file


class RegistryPlugin(BaseModel):
    """A registry entry: a plugin id with all of its published versions."""

    model_config = ConfigDict(extra="allow")

    id: str
    version: str  # Key of the current version in ``versions``
    versions: dict[str, PluginVersion] = Field(default_factory=dict)

    @property
    def current(self) -> PluginVersion | None:
        """Metadata for the current version, if the registry lists it."""
        return self.versions.get(self.version)


class InstalledPlugin(BaseModel):
    """Descriptor returned when a plugin was installed or uninstalled."""

    id: str
    version: str
    path: Path
