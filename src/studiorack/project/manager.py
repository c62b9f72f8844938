"""Load and save the project manifest (project.json)."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from studiorack.output.writer import to_json, write_text_atomic
from studiorack.project.models import ProjectConfig
from studiorack.utils.errors import InvalidProjectError

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_FILE = "project.json"


class ProjectManager:
    """Reads and writes a project's manifest file.

    The manifest is read wholesale once per invocation and written back
    wholesale; there is no locking, so the last writer wins.
    """

    def __init__(self, project_dir: Path | None = None, filename: str = DEFAULT_PROJECT_FILE):
        """Initialize the project manager.

        Args:
            project_dir: Project folder (defaults to the current directory)
            filename: Manifest file name inside the project folder
        """
        self.project_dir = project_dir if project_dir is not None else Path.cwd()
        self.project_file = self.project_dir / filename

    def exists(self) -> bool:
        return self.project_file.exists()

    def default_project(self) -> ProjectConfig:
        """Manifest used when the project has none yet."""
        name = self.project_dir.resolve().name
        return ProjectConfig(id=name, name=name)

    def load(self) -> ProjectConfig:
        """Load the manifest, or a default one when the file is missing.

        Raises:
            InvalidProjectError: If the file exists but is not a valid manifest
        """
        if not self.project_file.exists():
            logger.debug("No manifest at %s, using defaults", self.project_file)
            return self.default_project()

        try:
            data = json.loads(self.project_file.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise InvalidProjectError(f"{self.project_file} must contain a JSON object")
            return ProjectConfig(**data)
        except (json.JSONDecodeError, ValidationError) as e:
            raise InvalidProjectError(f"Invalid project manifest {self.project_file}: {e}") from e

    def save(self, project: ProjectConfig) -> Path:
        """Write the manifest atomically.

        Returns:
            Path of the manifest file
        """
        data = project.model_dump(mode="json", exclude_none=True)
        write_text_atomic(self.project_file, to_json(data))
        logger.debug("Saved manifest with %d plugins to %s", len(project.plugins), self.project_file)
        return self.project_file
