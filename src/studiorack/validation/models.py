"""Validation result models."""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class ValidateOptions:
    """Flags of the ``validate`` command, shared by every path in a batch."""

    files: bool = False  # Record sibling audio/image/video files and the platform zip
    json: bool = False  # Write <plugin>.json next to the plugin
    summary: bool = False  # Write plugins.json for the whole batch
    txt: bool = False  # Write the raw validator report to <plugin>.txt
    zip: bool = False  # Archive the plugin as <plugin>-<platform>.zip


class ValidationResult(BaseModel):
    """One path's outcome from the validator.

    Only ``version`` is interpreted: a truthy version means the validator
    recognised the path as a plugin. Everything else is descriptive data
    passed through to the summary.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    path: str
    version: str | None = None
    id: str | None = None
    name: str | None = None
    author: str | None = None
    homepage: str | None = None
    description: str | None = None
    category: str | None = None
    sdk_version: str | None = Field(default=None, alias="sdkVersion")
    date: str | None = None
    tags: list[str] = Field(default_factory=list)
    files: dict[str, dict[str, Any]] = Field(default_factory=dict)

    @property
    def is_plugin(self) -> bool:
        return bool(self.version)

    def to_json_dict(self) -> dict[str, Any]:
        """Serializable form used in plugin and summary JSON files."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class PluginRack(BaseModel):
    """Accepted validation results of one batch, in validation order."""

    plugins: list[ValidationResult] = Field(default_factory=list)

    def to_json_dict(self) -> dict[str, Any]:
        return {"plugins": [plugin.to_json_dict() for plugin in self.plugins]}
