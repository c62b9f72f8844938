"""Keep the project manifest in step with install and uninstall actions.

Two modes per action:

- Named plugin: install/uninstall one reference and update the manifest
  entry only when the plugin manager reports that it did something.
- No plugin named: replay every manifest entry against the plugin manager
  using the recorded versions. The manifest is treated as authoritative and
  is not modified in this mode, even when individual calls succeed.

In both modes the manifest is saved exactly once, after every call has
completed, whether or not anything changed.
"""

import logging
from collections.abc import Awaitable
from dataclasses import dataclass, field
from typing import Literal, Protocol

from studiorack.plugins.identifier import id_of, version_of
from studiorack.plugins.models import InstalledPlugin
from studiorack.project.models import ProjectConfig
from studiorack.utils.aio import resolve

logger = logging.getLogger(__name__)

Action = Literal["install", "uninstall"]


class ProjectStore(Protocol):
    """Persistence for the project manifest."""

    def load(self) -> ProjectConfig: ...

    def save(self, project: ProjectConfig) -> object: ...


class PluginInstaller(Protocol):
    """Performs the actual install/uninstall; may be sync or async.

    A falsy return value means nothing happened (already satisfied, not
    found, cancelled) and is not an error.
    """

    def install(
        self, plugin_id: str, version: str | None, is_global: bool
    ) -> InstalledPlugin | None | Awaitable[InstalledPlugin | None]: ...

    def uninstall(
        self, plugin_id: str, version: str | None, is_global: bool
    ) -> InstalledPlugin | None | Awaitable[InstalledPlugin | None]: ...


@dataclass
class ReconcileReport:
    """Outcome of one install/uninstall invocation."""

    action: Action
    project: ProjectConfig
    succeeded: list[str] = field(default_factory=list)  # Truthy collaborator result
    skipped: list[str] = field(default_factory=list)  # Falsy result, nothing to do
    failed: dict[str, str] = field(default_factory=dict)  # Mass mode only: id -> error

    @property
    def processed(self) -> int:
        return len(self.succeeded) + len(self.skipped) + len(self.failed)


async def reconcile_install(
    project: ProjectConfig,
    token: str | None,
    is_global: bool,
    installer: PluginInstaller,
    store: ProjectStore,
) -> ReconcileReport:
    """Install one plugin reference, or every plugin in the manifest.

    Args:
        project: Manifest loaded for this invocation (mutated in place)
        token: ``<id>[@<version>]`` reference, or None to sync the manifest
        is_global: Passed through to the installer
        installer: Plugin installer collaborator
        store: Manifest persistence

    Returns:
        Report with the (possibly updated) manifest

    Raises:
        Exception: Any installer failure in named mode propagates and the
            manifest is not saved
    """
    report = ReconcileReport(action="install", project=project)

    if token:
        plugin_id = id_of(token)
        version = version_of(token)
        installed = await resolve(installer.install(plugin_id, version, is_global))
        if installed:
            project.plugins[plugin_id] = installed.version
            report.succeeded.append(plugin_id)
        else:
            report.skipped.append(plugin_id)
    else:
        await _replay_manifest(report, installer.install, is_global)

    await resolve(store.save(project))
    return report


async def reconcile_uninstall(
    project: ProjectConfig,
    token: str | None,
    is_global: bool,
    installer: PluginInstaller,
    store: ProjectStore,
) -> ReconcileReport:
    """Uninstall one plugin reference, or every plugin in the manifest.

    For a named plugin without a version in the reference, the version
    recorded in the manifest is used. If neither exists the uninstaller
    receives None.

    Args:
        project: Manifest loaded for this invocation (mutated in place)
        token: ``<id>[@<version>]`` reference, or None for every manifest entry
        is_global: Passed through to the uninstaller
        installer: Plugin installer collaborator
        store: Manifest persistence

    Returns:
        Report with the (possibly updated) manifest
    """
    report = ReconcileReport(action="uninstall", project=project)

    if token:
        plugin_id = id_of(token)
        version = version_of(token) or project.plugins.get(plugin_id)
        removed = await resolve(installer.uninstall(plugin_id, version, is_global))
        if removed:
            project.plugins.pop(plugin_id, None)
            report.succeeded.append(plugin_id)
        else:
            report.skipped.append(plugin_id)
    else:
        await _replay_manifest(report, installer.uninstall, is_global)

    await resolve(store.save(project))
    return report


async def _replay_manifest(report: ReconcileReport, operation, is_global: bool) -> None:
    """Apply ``operation`` to each manifest entry in order, one at a time.

    Entries are independent: a failure is logged and recorded against its id
    and the loop moves on. The manifest itself is left as it was.
    """
    for plugin_id, version in list(report.project.plugins.items()):
        try:
            result = await resolve(operation(plugin_id, version, is_global))
        except Exception as e:
            logger.error(
                "%s of %s@%s failed: %s", report.action.capitalize(), plugin_id, version, e,
                exc_info=True,
            )
            report.failed[plugin_id] = str(e)
            continue

        if result:
            report.succeeded.append(plugin_id)
        else:
            report.skipped.append(plugin_id)
