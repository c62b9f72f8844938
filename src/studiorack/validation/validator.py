"""Run the Steinberg VST3 validator and turn its report into a result.

The validator prints a report with ``key = value`` lines, e.g.::

    Factory Info:
        vendor = Steinberg Media Technologies
        url = http://www.steinberg.net
    Class Info 0:
        name = AGain VST3
        category = Audio Module Class
        subCategories = Fx|Delay
        version = 3.7.1
        sdkVersion = VST 3.7.1

The first occurrence of each key wins, so the first class describes the plugin.
"""

import asyncio
import logging
import os
import re
import stat
import tempfile
import zipfile
from datetime import datetime, timezone
from pathlib import Path

from studiorack.output.writer import to_json, write_text_atomic
from studiorack.utils.errors import ValidatorError
from studiorack.utils.http import download_file, extract_zip
from studiorack.utils.paths import Platform, get_platform
from studiorack.validation.models import ValidateOptions, ValidationResult

logger = logging.getLogger(__name__)

REPORT_LINE = re.compile(r"^\s*([A-Za-z][\w ]*?)\s*=\s*(.*?)\s*$")

# Validator report key -> ValidationResult field
REPORT_FIELDS = {
    "name": "name",
    "vendor": "author",
    "url": "homepage",
    "category": "category",
    "version": "version",
    "sdkVersion": "sdk_version",
    "subCategories": "tags",
}

SIBLING_FILES = {
    "audio": (".flac", ".wav"),
    "image": (".png", ".jpg"),
    "video": (".mp4",),
}


def parse_report(report: str) -> dict[str, object]:
    """Extract plugin metadata from validator output.

    Args:
        report: Raw validator stdout

    Returns:
        ValidationResult field values found in the report
    """
    fields: dict[str, object] = {}
    for line in report.splitlines():
        match = REPORT_LINE.match(line)
        if not match:
            continue
        key, value = match.group(1), match.group(2)
        target = REPORT_FIELDS.get(key)
        if target is None or target in fields or not value:
            continue
        if target == "tags":
            fields[target] = [tag.strip() for tag in value.split("|") if tag.strip()]
        else:
            fields[target] = value
    return fields


class ValidatorTool:
    """Wraps the validator binary: installation and per-path validation.

    Example:
        >>> tool = ValidatorTool(Path("~/.local/share/studiorack/validator/validator"), url)
        >>> await tool.ensure_ready()
        >>> result = await tool.validate("plugins/adelay.vst3", ValidateOptions())
    """

    def __init__(
        self,
        validator_path: Path,
        download_url: str,
        platform: Platform | None = None,
    ) -> None:
        """Initialize the validator wrapper.

        Args:
            validator_path: Location of the validator executable
            download_url: Archive URL with a ``{platform}`` placeholder
            platform: Platform key (detected when None)
        """
        self.validator_path = validator_path
        self.download_url = download_url
        self.platform = platform or get_platform()

    async def ensure_ready(self) -> Path:
        """Install the validator binary if it is not present yet.

        Returns:
            Path to the executable

        Raises:
            ValidatorError: If the downloaded archive has no validator in it
        """
        if self.validator_path.is_file():
            return self.validator_path

        url = self.download_url.format(platform=self.platform)
        logger.info("Validator not found at %s, installing from %s", self.validator_path, url)

        with tempfile.TemporaryDirectory(prefix="studiorack-validator-") as tmp:
            archive = await download_file(url, Path(tmp) / "validator.zip")
            extracted = await asyncio.to_thread(
                extract_zip, archive, self.validator_path.parent, True
            )

        if not self.validator_path.is_file():
            match = next((p for p in extracted if p.name == self.validator_path.name), None)
            if match is None:
                raise ValidatorError(f"No {self.validator_path.name} found in {url}")
            match.replace(self.validator_path)

        mode = self.validator_path.stat().st_mode
        self.validator_path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return self.validator_path

    async def run(self, plugin_path: Path) -> tuple[int, str]:
        """Run the validator on one path.

        Returns:
            Exit code and combined stdout/stderr text

        Raises:
            ValidatorError: If the validator cannot be started
        """
        try:
            process = await asyncio.create_subprocess_exec(
                str(self.validator_path),
                str(plugin_path),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except OSError as e:
            raise ValidatorError(f"Could not run validator {self.validator_path}: {e}") from e

        output, _ = await process.communicate()
        return process.returncode or 0, output.decode("utf-8", errors="replace")

    async def validate(self, path: str, options: ValidateOptions) -> ValidationResult:
        """Validate one plugin path and write any per-plugin artifacts.

        Args:
            path: Plugin file or bundle
            options: Batch-wide validate flags

        Returns:
            Result; ``version`` is None when the path is not a plugin

        Raises:
            ValidatorError: Path missing or validator not runnable
        """
        plugin_path = Path(path)
        if not plugin_path.exists():
            raise ValidatorError(f"Plugin path does not exist: {path}")

        returncode, report = await self.run(plugin_path)
        if returncode != 0:
            logger.warning("Validator reported failures for %s (exit %d)", path, returncode)

        fields = parse_report(report)
        result = ValidationResult(
            path=str(plugin_path),
            id=plugin_path.stem,
            date=_modified_iso(plugin_path),
            **fields,
        )
        logger.debug("Validated %s: version=%s", path, result.version)

        if not result.is_plugin:
            return result

        if options.txt:
            await asyncio.to_thread(write_text_atomic, plugin_path.with_suffix(".txt"), report)
        if options.zip:
            await asyncio.to_thread(self._zip_plugin, plugin_path)
        if options.files:
            result.files = self._sibling_files(plugin_path)
        if options.json:
            await asyncio.to_thread(
                write_text_atomic, plugin_path.with_suffix(".json"), to_json(result.to_json_dict())
            )

        return result

    def archive_path(self, plugin_path: Path) -> Path:
        return plugin_path.with_name(f"{plugin_path.stem}-{self.platform}.zip")

    def _zip_plugin(self, plugin_path: Path) -> Path:
        # Bundles (.vst3 folders on macOS) are zipped recursively
        archive = self.archive_path(plugin_path)
        with zipfile.ZipFile(archive, "w", zipfile.ZIP_DEFLATED) as zf:
            if plugin_path.is_dir():
                for root, _dirs, files in os.walk(plugin_path):
                    for name in sorted(files):
                        file_path = Path(root) / name
                        zf.write(file_path, file_path.relative_to(plugin_path.parent))
            else:
                zf.write(plugin_path, plugin_path.name)
        return archive

    def _sibling_files(self, plugin_path: Path) -> dict[str, dict[str, object]]:
        found: dict[str, dict[str, object]] = {}
        for kind, extensions in SIBLING_FILES.items():
            for ext in extensions:
                candidate = plugin_path.with_suffix(ext)
                if candidate.is_file():
                    found[kind] = {"name": candidate.name, "size": candidate.stat().st_size}
                    break

        archive = self.archive_path(plugin_path)
        entry: dict[str, object] = {"name": archive.name}
        if archive.is_file():
            entry["size"] = archive.stat().st_size
        found[self.platform] = entry
        return found


def _modified_iso(path: Path) -> str:
    mtime = path.stat().st_mtime
    return datetime.fromtimestamp(mtime, tz=timezone.utc).isoformat()
