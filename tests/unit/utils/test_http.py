"""Tests for archive extraction."""

import zipfile
from pathlib import Path

import pytest

from studiorack.utils.errors import DownloadError
from studiorack.utils.http import extract_zip


def make_zip(path: Path, members: dict[str, str]) -> Path:
    with zipfile.ZipFile(path, "w") as zf:
        for name, content in members.items():
            zf.writestr(name, content)
    return path


class TestExtractZip:
    """Tests for extract_zip."""

    def test_extracts_files(self, tmp_path: Path) -> None:
        archive = make_zip(tmp_path / "a.zip", {"adelay.vst3": "x", "docs/readme.txt": "y"})

        files = extract_zip(archive, tmp_path / "out")

        assert sorted(files) == [
            (tmp_path / "out" / "adelay.vst3").resolve(),
            (tmp_path / "out" / "docs" / "readme.txt").resolve(),
        ]
        assert (tmp_path / "out" / "docs" / "readme.txt").read_text() == "y"

    def test_strip_root(self, tmp_path: Path) -> None:
        archive = make_zip(
            tmp_path / "t.zip",
            {"template-main/src/plugin.cpp": "c", "template-main/README.md": "r"},
        )

        extract_zip(archive, tmp_path / "out", strip_root=True)

        assert (tmp_path / "out" / "src" / "plugin.cpp").is_file()
        assert (tmp_path / "out" / "README.md").is_file()
        assert not (tmp_path / "out" / "template-main").exists()

    def test_strip_root_keeps_multiple_tops(self, tmp_path: Path) -> None:
        """Nothing is stripped when there is no single top-level folder."""
        archive = make_zip(tmp_path / "t.zip", {"a/one.txt": "1", "b/two.txt": "2"})

        extract_zip(archive, tmp_path / "out", strip_root=True)

        assert (tmp_path / "out" / "a" / "one.txt").is_file()
        assert (tmp_path / "out" / "b" / "two.txt").is_file()

    def test_rejects_escaping_members(self, tmp_path: Path) -> None:
        archive = make_zip(tmp_path / "evil.zip", {"../evil.txt": "boom"})

        with pytest.raises(DownloadError, match="escapes"):
            extract_zip(archive, tmp_path / "out")

        assert not (tmp_path / "evil.txt").exists()

    def test_corrupt_archive(self, tmp_path: Path) -> None:
        archive = tmp_path / "bad.zip"
        archive.write_bytes(b"not a zip")

        with pytest.raises(DownloadError, match="Corrupt archive"):
            extract_zip(archive, tmp_path / "out")
