"""Tests for the registry client."""

from typing import Any
from unittest.mock import AsyncMock, patch

import pytest

from studiorack.plugins.registry import RegistryClient, parse_index
from studiorack.utils.errors import RegistryError

REGISTRY_URL = "https://registry.example.com/plugins.json"


class TestParseIndex:
    """Tests for parse_index."""

    def test_parses_objects(self, registry_payload: dict[str, Any]) -> None:
        index = parse_index(registry_payload)

        assert list(index) == ["studiorack/mda/adelay", "studiorack/surge/surge"]
        adelay = index["studiorack/mda/adelay"]
        assert adelay.current is not None
        assert adelay.current.name == "ADelay"
        assert adelay.current.files["linux"].name == "mda-linux.zip"

    def test_fills_missing_id_from_key(self) -> None:
        index = parse_index({"objects": {"a/b/c": {"version": "1", "versions": {}}}})

        assert index["a/b/c"].id == "a/b/c"

    @pytest.mark.parametrize("payload", [[], {"plugins": []}, {"objects": []}, None])
    def test_rejects_wrong_shape(self, payload: Any) -> None:
        with pytest.raises(RegistryError):
            parse_index(payload)

    def test_rejects_invalid_entry(self) -> None:
        with pytest.raises(RegistryError, match="a/b/c"):
            parse_index({"objects": {"a/b/c": {"versions": {}}}})


class TestRegistryClient:
    """Tests for RegistryClient search and lookup."""

    @pytest.mark.asyncio
    async def test_index_fetched_once(self, registry_payload: dict[str, Any]) -> None:
        client = RegistryClient(REGISTRY_URL)

        with patch(
            "studiorack.plugins.registry.fetch_json", AsyncMock(return_value=registry_payload)
        ) as fetch:
            await client.search("delay")
            await client.get("studiorack/mda/adelay")

        fetch.assert_awaited_once_with(REGISTRY_URL)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "query,expected",
        [
            ("delay", ["studiorack/mda/adelay"]),
            ("SYNTH", ["studiorack/surge/surge"]),
            ("surge", ["studiorack/surge/surge"]),
            ("", ["studiorack/mda/adelay", "studiorack/surge/surge"]),
            ("reverb", []),
        ],
    )
    async def test_search(
        self, registry_payload: dict[str, Any], query: str, expected: list[str]
    ) -> None:
        client = RegistryClient(REGISTRY_URL)

        with patch(
            "studiorack.plugins.registry.fetch_json", AsyncMock(return_value=registry_payload)
        ):
            results = await client.search(query)

        assert [r.id for r in results] == expected

    @pytest.mark.asyncio
    async def test_search_ignores_non_current_versions(
        self, registry_payload: dict[str, Any]
    ) -> None:
        """Only the current version's metadata is searched."""
        client = RegistryClient(REGISTRY_URL)

        with patch(
            "studiorack.plugins.registry.fetch_json", AsyncMock(return_value=registry_payload)
        ):
            results = await client.search("experimental")

        assert results == []

    @pytest.mark.asyncio
    async def test_get_unknown_returns_none(self, registry_payload: dict[str, Any]) -> None:
        client = RegistryClient(REGISTRY_URL)

        with patch(
            "studiorack.plugins.registry.fetch_json", AsyncMock(return_value=registry_payload)
        ):
            assert await client.get("nobody/none/none") is None
