"""Client for the StudioRack plugin registry.

The registry is a static JSON index:

    {
      "name": "StudioRack Registry",
      "objects": {
        "<plugin id>": {"id": ..., "version": "<current>", "versions": {...}}
      }
    }
"""

import logging
from typing import Any

from pydantic import ValidationError

from studiorack.plugins.models import RegistryPlugin
from studiorack.utils.errors import RegistryError
from studiorack.utils.http import fetch_json

logger = logging.getLogger(__name__)


class RegistryClient:
    """Search and look up plugins in the registry index.

    The index is fetched lazily and kept for the lifetime of the client,
    which is one CLI invocation.

    Example:
        >>> client = RegistryClient("https://.../plugins.json")
        >>> results = await client.search("delay")
    """

    def __init__(self, registry_url: str) -> None:
        self.registry_url = registry_url
        self._index: dict[str, RegistryPlugin] | None = None

    async def load(self) -> dict[str, RegistryPlugin]:
        """Fetch and parse the registry index (cached after the first call)."""
        if self._index is None:
            payload = await fetch_json(self.registry_url)
            self._index = parse_index(payload)
            logger.debug("Loaded %d plugins from %s", len(self._index), self.registry_url)
        return self._index

    async def get(self, plugin_id: str) -> RegistryPlugin | None:
        """Look up one plugin by id."""
        index = await self.load()
        return index.get(plugin_id)

    async def search(self, query: str) -> list[RegistryPlugin]:
        """Find plugins whose id or current-version metadata matches ``query``.

        Matching is a case-insensitive substring test over the id, name,
        description and tags. An empty query matches everything.
        """
        index = await self.load()
        needle = query.strip().lower()
        return [plugin for plugin in index.values() if _matches(plugin, needle)]


def parse_index(payload: Any) -> dict[str, RegistryPlugin]:
    """Validate a raw registry payload into plugin models keyed by id.

    Raises:
        RegistryError: If the payload does not look like a registry index
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("objects"), dict):
        raise RegistryError("Registry index is missing an 'objects' mapping")

    index: dict[str, RegistryPlugin] = {}
    for plugin_id, data in payload["objects"].items():
        if not isinstance(data, dict):
            raise RegistryError(f"Registry entry '{plugin_id}' is not an object")
        try:
            index[plugin_id] = RegistryPlugin(**{"id": plugin_id, **data})
        except ValidationError as e:
            raise RegistryError(f"Invalid registry entry '{plugin_id}': {e}") from e
    return index


def _matches(plugin: RegistryPlugin, needle: str) -> bool:
    if not needle:
        return True
    haystack = [plugin.id]
    current = plugin.current
    if current:
        haystack.extend([current.name, current.description, *current.tags])
    return any(needle in field.lower() for field in haystack)
