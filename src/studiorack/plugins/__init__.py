"""Plugin references, registry access and on-disk installation."""

from .identifier import id_of, version_of
from .manager import PluginManager
from .models import InstalledPlugin, PluginFile, PluginVersion, RegistryPlugin
from .registry import RegistryClient, parse_index
from .templates import DEFAULT_TEMPLATE, TEMPLATE_TYPES, create_plugin

__all__ = [
    "id_of",
    "version_of",
    "PluginManager",
    "InstalledPlugin",
    "PluginFile",
    "PluginVersion",
    "RegistryPlugin",
    "RegistryClient",
    "parse_index",
    "DEFAULT_TEMPLATE",
    "TEMPLATE_TYPES",
    "create_plugin",
]
