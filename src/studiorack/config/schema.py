"""Configuration schema models using Pydantic."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from studiorack.utils.paths import get_default_global_plugin_dir, get_default_validator_path

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

DEFAULT_REGISTRY_URL = "https://studiorack.github.io/studiorack-registry/v2/plugins.json"
DEFAULT_VALIDATOR_URL = (
    "https://github.com/studiorack/studiorack-plugin-steinberg/releases/latest/download/"
    "validator-{platform}.zip"
)
DEFAULT_TEMPLATE_URL = (
    "https://github.com/studiorack/studiorack-template-{template}/archive/refs/heads/main.zip"
)


class Settings(BaseModel):
    """Global StudioRack settings (config.yaml)."""

    version: str = "1"
    log_level: LogLevel = "WARNING"

    # Registry
    registry_url: str = DEFAULT_REGISTRY_URL

    # Plugin locations
    global_plugin_dir: Path = Field(default_factory=get_default_global_plugin_dir)
    local_plugin_dir: Path = Path("plugins")  # Relative to the project folder
    project_file: str = "project.json"

    # Validator
    validator_path: Path = Field(default_factory=get_default_validator_path)
    validator_url: str = DEFAULT_VALIDATOR_URL  # {platform} is linux, mac or win

    # Scaffolding
    template_url: str = DEFAULT_TEMPLATE_URL  # {template} is the template type
