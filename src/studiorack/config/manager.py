"""Configuration manager for loading and saving StudioRack settings."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from studiorack.config.schema import Settings
from studiorack.utils.errors import InvalidConfigError
from studiorack.utils.paths import get_config_dir


class ConfigManager:
    """Manages the StudioRack config.yaml file."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize the config manager.

        Args:
            config_dir: Optional custom config directory. Defaults to the
                platform config dir (or STUDIORACK_CONFIG_DIR).
        """
        self.config_dir = config_dir if config_dir is not None else get_config_dir()
        self.config_file = self.config_dir / "config.yaml"

    def load_config(self) -> Settings:
        """Load and validate settings, creating the file on first use.

        Returns:
            Validated Settings instance

        Raises:
            InvalidConfigError: If config is invalid
        """
        if not self.config_file.exists():
            settings = Settings()
            self.save_config(settings)
            return settings

        try:
            with open(self.config_file) as f:
                data = yaml.safe_load(f) or {}
            return Settings(**data)
        except (yaml.YAMLError, ValidationError, TypeError) as e:
            raise InvalidConfigError(
                f"Invalid configuration in {self.config_file}: {e}"
            ) from e

    def save_config(self, settings: Settings) -> None:
        """Save settings.

        Args:
            settings: Settings instance to save
        """
        data = settings.model_dump(mode="json")

        self.config_dir.mkdir(parents=True, exist_ok=True)

        with open(self.config_file, "w") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
