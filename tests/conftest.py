"""Shared fixtures for StudioRack tests."""

import os
from pathlib import Path
from typing import Any

import pytest

from studiorack.project.models import ProjectConfig
from studiorack.utils.retry import TEST_RETRY_CONFIG

# Disable Rich formatting in tests for consistent output across environments
os.environ["NO_COLOR"] = "1"
os.environ["TERM"] = "dumb"


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep every test away from the real user config directory."""
    config_dir = tmp_path / "config"
    monkeypatch.setenv("STUDIORACK_CONFIG_DIR", str(config_dir))
    return config_dir


@pytest.fixture(autouse=True)
def fast_retry_config(monkeypatch: pytest.MonkeyPatch) -> None:
    """Use fast retry configuration for all tests to avoid long delays."""
    monkeypatch.setattr("studiorack.utils.retry.DEFAULT_RETRY_CONFIG", TEST_RETRY_CONFIG)


class MemoryStore:
    """Project store that keeps saved manifests in memory."""

    def __init__(self, project: ProjectConfig | None = None) -> None:
        self.project = project or ProjectConfig(name="song")
        self.saved: list[dict[str, Any]] = []

    def load(self) -> ProjectConfig:
        return self.project

    def save(self, project: ProjectConfig) -> None:
        self.saved.append(project.model_dump())


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def registry_payload() -> dict[str, Any]:
    """A small registry index with one multi-version plugin."""
    return {
        "name": "StudioRack Registry",
        "objects": {
            "studiorack/mda/adelay": {
                "id": "studiorack/mda/adelay",
                "version": "1.0.0",
                "versions": {
                    "1.0.0": {
                        "name": "ADelay",
                        "description": "Simple stereo delay",
                        "date": "2021-02-03T10:20:30.000Z",
                        "version": "1.0.0",
                        "tags": ["Fx", "Delay"],
                        "repo": "studiorack/mda",
                        "release": "v1.0.0",
                        "files": {
                            "linux": {"name": "mda-linux.zip", "size": 1000},
                            "mac": {"name": "mda-mac.zip", "size": 1000},
                            "win": {"name": "mda-win.zip", "size": 1000},
                        },
                    },
                    "2.0.0-beta": {
                        "name": "ADelay Beta",
                        "description": "Experimental delay",
                        "date": "2023-05-06T00:00:00.000Z",
                        "version": "2.0.0-beta",
                        "tags": ["Experimental"],
                        "repo": "studiorack/mda",
                        "files": {},
                    },
                },
            },
            "studiorack/surge/surge": {
                "id": "studiorack/surge/surge",
                "version": "1.9.0",
                "versions": {
                    "1.9.0": {
                        "name": "Surge",
                        "description": "Hybrid synthesizer",
                        "date": "2020-07-01T12:00:00.000Z",
                        "version": "1.9.0",
                        "tags": ["Instrument", "Synth"],
                        "repo": "surge-synthesizer/releases",
                        "files": {"linux": {"name": "surge-linux.zip"}},
                    }
                },
            },
        },
    }
