"""Tests for ConfigManager."""

from pathlib import Path

import pytest
import yaml

from studiorack.config.manager import ConfigManager
from studiorack.config.schema import Settings
from studiorack.utils.errors import InvalidConfigError


class TestConfigManager:
    """Tests for ConfigManager class."""

    def test_init_with_custom_dir(self, tmp_path: Path) -> None:
        """Test ConfigManager initialization with custom directory."""
        manager = ConfigManager(config_dir=tmp_path)
        assert manager.config_dir == tmp_path
        assert manager.config_file == tmp_path / "config.yaml"

    def test_default_dir_honours_env(self, isolated_config_dir: Path) -> None:
        """STUDIORACK_CONFIG_DIR overrides the platform directory."""
        manager = ConfigManager()
        assert manager.config_dir == isolated_config_dir

    def test_load_config_creates_default_if_missing(self, tmp_path: Path) -> None:
        """Test that load_config creates default config if file doesn't exist."""
        manager = ConfigManager(config_dir=tmp_path)
        settings = manager.load_config()

        assert isinstance(settings, Settings)
        assert settings.log_level == "WARNING"
        assert settings.local_plugin_dir == Path("plugins")
        assert manager.config_file.exists()

    def test_load_config_from_existing_file(self, tmp_path: Path) -> None:
        """Test loading config from existing file."""
        with open(tmp_path / "config.yaml", "w") as f:
            yaml.safe_dump(
                {"log_level": "DEBUG", "registry_url": "https://example.com/r.json"}, f
            )

        settings = ConfigManager(config_dir=tmp_path).load_config()

        assert settings.log_level == "DEBUG"
        assert settings.registry_url == "https://example.com/r.json"
        assert settings.project_file == "project.json"

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "config.yaml").write_text("")

        settings = ConfigManager(config_dir=tmp_path).load_config()

        assert settings == Settings()

    def test_save_config_round_trips(self, tmp_path: Path) -> None:
        """Saved settings load back unchanged."""
        manager = ConfigManager(config_dir=tmp_path)
        settings = Settings(log_level="INFO", global_plugin_dir=tmp_path / "global")

        manager.save_config(settings)

        with open(manager.config_file) as f:
            data = yaml.safe_load(f)
        assert data["log_level"] == "INFO"
        assert data["global_plugin_dir"] == str(tmp_path / "global")
        assert manager.load_config() == settings

    def test_invalid_yaml_raises(self, tmp_path: Path) -> None:
        (tmp_path / "config.yaml").write_text("log_level: [unclosed\n")

        with pytest.raises(InvalidConfigError, match="Invalid configuration"):
            ConfigManager(config_dir=tmp_path).load_config()

    def test_invalid_value_raises(self, tmp_path: Path) -> None:
        (tmp_path / "config.yaml").write_text("log_level: LOUD\n")

        with pytest.raises(InvalidConfigError):
            ConfigManager(config_dir=tmp_path).load_config()

    def test_non_mapping_raises(self, tmp_path: Path) -> None:
        (tmp_path / "config.yaml").write_text("- just\n- a list\n")

        with pytest.raises(InvalidConfigError):
            ConfigManager(config_dir=tmp_path).load_config()
