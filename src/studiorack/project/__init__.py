"""Project manifest handling and install/uninstall reconciliation."""

from .manager import DEFAULT_PROJECT_FILE, ProjectManager
from .models import ProjectConfig
from .reconciler import (
    PluginInstaller,
    ProjectStore,
    ReconcileReport,
    reconcile_install,
    reconcile_uninstall,
)

__all__ = [
    "DEFAULT_PROJECT_FILE",
    "ProjectManager",
    "ProjectConfig",
    "PluginInstaller",
    "ProjectStore",
    "ReconcileReport",
    "reconcile_install",
    "reconcile_uninstall",
]
