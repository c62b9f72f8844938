"""Tests for JSON and atomic file writers."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from studiorack.output.writer import to_json, write_json_artifact, write_text_atomic


def test_to_json_is_indented_with_newline() -> None:
    assert to_json({"a": [1]}) == '{\n  "a": [\n    1\n  ]\n}\n'


def test_to_json_keeps_unicode() -> None:
    assert '"Tōkyō"' in to_json({"name": "Tōkyō"})


class TestWriteTextAtomic:
    """Tests for write_text_atomic."""

    def test_writes_and_creates_parents(self, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "project.json"

        write_text_atomic(target, "{}\n")

        assert target.read_text() == "{}\n"
        assert [p.name for p in target.parent.iterdir()] == ["project.json"]

    def test_overwrites_existing(self, tmp_path: Path) -> None:
        target = tmp_path / "project.json"
        target.write_text("old")

        write_text_atomic(target, "new")

        assert target.read_text() == "new"

    def test_failed_write_keeps_previous_content(self, tmp_path: Path) -> None:
        target = tmp_path / "project.json"
        target.write_text("old")

        with patch("studiorack.output.writer.os.fsync", side_effect=OSError("disk full")):
            with pytest.raises(OSError, match="disk full"):
                write_text_atomic(target, "new")

        assert target.read_text() == "old"
        assert [p.name for p in tmp_path.iterdir()] == ["project.json"]


class TestWriteJsonArtifact:
    """Tests for write_json_artifact."""

    @pytest.mark.asyncio
    async def test_writes_json(self, tmp_path: Path) -> None:
        target = tmp_path / "out" / "plugins.json"

        written = await write_json_artifact(str(target), {"plugins": []})

        assert written == target
        assert json.loads(target.read_text()) == {"plugins": []}
        assert not (target.parent / ".tmp_plugins.json").exists()

    @pytest.mark.asyncio
    async def test_unserializable_content_leaves_nothing(self, tmp_path: Path) -> None:
        target = tmp_path / "plugins.json"

        with pytest.raises(TypeError):
            await write_json_artifact(target, {"bad": object()})

        assert list(tmp_path.iterdir()) == []
