"""Install and uninstall plugins on disk.

Plugins are stored as ``<root>/<plugin id>/<version>/`` where root is the
project's local plugin folder or the global plugin folder. Both operations
return an ``InstalledPlugin`` when they changed something and ``None`` when
there was nothing to do; callers treat ``None`` as a normal outcome.
"""

import asyncio
import logging
import shutil
import tempfile
from pathlib import Path

from studiorack.plugins.models import InstalledPlugin, PluginVersion
from studiorack.plugins.registry import RegistryClient
from studiorack.utils.errors import DownloadError, RegistryError
from studiorack.utils.http import download_file, extract_zip
from studiorack.utils.paths import Platform, get_platform

logger = logging.getLogger(__name__)

GITHUB_RELEASE_URL = "https://github.com/{repo}/releases/download/{release}/{file}"


class PluginManager:
    """Default installer/uninstaller backed by the registry and GitHub releases.

    Example:
        >>> manager = PluginManager(registry, Path("plugins"), Path("~/.studiorack"))
        >>> installed = await manager.install("studiorack/mda/adelay", None, False)
        >>> installed.version
        '1.0.0'
    """

    def __init__(
        self,
        registry: RegistryClient,
        local_dir: Path,
        global_dir: Path,
        platform: Platform | None = None,
    ) -> None:
        """Initialize the plugin manager.

        Args:
            registry: Registry used to resolve ids and versions
            local_dir: Root for project-local installs
            global_dir: Root for ``--global`` installs
            platform: Platform key for release files (detected when None)
        """
        self.registry = registry
        self.local_dir = local_dir
        self.global_dir = global_dir
        self.platform = platform or get_platform()

    def plugin_dir(self, plugin_id: str, version: str, is_global: bool) -> Path:
        """Directory a given plugin version is installed into."""
        parts = plugin_id.split("/")
        if any(part in ("", ".", "..") for part in parts) or version in ("", ".", ".."):
            raise RegistryError(f"Invalid plugin reference: {plugin_id}@{version}")
        root = self.global_dir if is_global else self.local_dir
        return root.joinpath(*parts, version)

    def is_installed(self, plugin_id: str, version: str, is_global: bool) -> bool:
        return self.plugin_dir(plugin_id, version, is_global).is_dir()

    async def install(
        self, plugin_id: str, version: str | None, is_global: bool
    ) -> InstalledPlugin | None:
        """Download and unpack a plugin version.

        Args:
            plugin_id: Registry id
            version: Version to install, or None for the registry's current one
            is_global: Install into the global folder instead of the project

        Returns:
            The installed plugin, or None if the plugin or version is unknown,
            has no release for this platform, or is already installed
        """
        entry = await self.registry.get(plugin_id)
        if entry is None:
            logger.warning("Plugin %s not found in registry", plugin_id)
            return None

        resolved = version or entry.version
        details = entry.versions.get(resolved)
        if details is None:
            logger.warning("Plugin %s has no version %s", plugin_id, resolved)
            return None

        target = self.plugin_dir(plugin_id, resolved, is_global)
        if target.is_dir():
            logger.info("Plugin %s@%s already installed at %s", plugin_id, resolved, target)
            return None

        url = self.release_url(details)
        if url is None:
            logger.warning(
                "Plugin %s@%s has no release for platform %s", plugin_id, resolved, self.platform
            )
            return None

        with tempfile.TemporaryDirectory(prefix="studiorack-") as tmp:
            archive = await download_file(url, Path(tmp) / url.rsplit("/", 1)[-1])
            try:
                await asyncio.to_thread(extract_zip, archive, target)
            except DownloadError:
                shutil.rmtree(target, ignore_errors=True)
                raise

        logger.info("Installed %s@%s to %s", plugin_id, resolved, target)
        return InstalledPlugin(id=plugin_id, version=resolved, path=target)

    async def uninstall(
        self, plugin_id: str, version: str | None, is_global: bool
    ) -> InstalledPlugin | None:
        """Remove an installed plugin version.

        Returns:
            The removed plugin, or None if no version was given or that
            version is not installed
        """
        if not version:
            logger.warning("No version given or recorded for %s; nothing to uninstall", plugin_id)
            return None

        target = self.plugin_dir(plugin_id, version, is_global)
        if not target.is_dir():
            logger.info("Plugin %s@%s is not installed", plugin_id, version)
            return None

        await asyncio.to_thread(shutil.rmtree, target)
        self._prune_empty_parents(target.parent, self.global_dir if is_global else self.local_dir)

        logger.info("Uninstalled %s@%s from %s", plugin_id, version, target)
        return InstalledPlugin(id=plugin_id, version=version, path=target)

    def release_url(self, details: PluginVersion) -> str | None:
        """Download URL of the release file for this platform, if any."""
        file = details.files.get(self.platform)
        if file is None or not details.repo:
            return None
        release = details.release or f"v{details.version}"
        return GITHUB_RELEASE_URL.format(repo=details.repo, release=release, file=file.name)

    @staticmethod
    def _prune_empty_parents(directory: Path, root: Path) -> None:
        # Remove now-empty id folders, never the root itself
        root = root.resolve()
        current = directory.resolve()
        while current != root and current.is_relative_to(root):
            try:
                current.rmdir()
            except OSError:
                break
            current = current.parent
