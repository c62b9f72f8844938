"""Tests for plugin scaffolding from templates."""

import threading
import zipfile
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from studiorack.plugins.templates import DEFAULT_TEMPLATE, TEMPLATE_TYPES, create_plugin
from studiorack.utils.errors import TemplateError

TEMPLATE_URL = "https://example.com/template-{template}.zip"


async def fake_template(url: str, destination: Path) -> Path:
    with zipfile.ZipFile(destination, "w") as zf:
        zf.writestr("template-main/CMakeLists.txt", "project(plugin)")
        zf.writestr("template-main/src/plugin.cpp", "// plugin")
    return destination


def test_default_template_is_known() -> None:
    assert DEFAULT_TEMPLATE in TEMPLATE_TYPES


@pytest.mark.asyncio
async def test_create_plugin(tmp_path: Path) -> None:
    folder = tmp_path / "my-plugin"

    with patch(
        "studiorack.plugins.templates.download_file", side_effect=fake_template
    ) as download:
        files = await create_plugin(folder, "juce", TEMPLATE_URL)

    assert download.call_args.args[0] == "https://example.com/template-juce.zip"
    assert (folder / "CMakeLists.txt").read_text() == "project(plugin)"
    assert (folder / "src" / "plugin.cpp").is_file()
    assert len(files) == 2


@pytest.mark.asyncio
async def test_empty_existing_folder_is_allowed(tmp_path: Path) -> None:
    folder = tmp_path / "my-plugin"
    folder.mkdir()

    with patch("studiorack.plugins.templates.download_file", side_effect=fake_template):
        await create_plugin(folder, "steinberg", TEMPLATE_URL)

    assert (folder / "CMakeLists.txt").exists()


@pytest.mark.asyncio
async def test_unknown_template(tmp_path: Path) -> None:
    with patch("studiorack.plugins.templates.download_file", AsyncMock()) as download:
        with pytest.raises(TemplateError, match="Unknown template 'vcv'"):
            await create_plugin(tmp_path / "x", "vcv", TEMPLATE_URL)

    download.assert_not_awaited()


@pytest.mark.asyncio
async def test_non_empty_folder(tmp_path: Path) -> None:
    folder = tmp_path / "my-plugin"
    folder.mkdir()
    (folder / "keep.txt").write_text("mine")

    with pytest.raises(TemplateError, match="not empty"):
        await create_plugin(folder, "juce", TEMPLATE_URL)

    assert (folder / "keep.txt").read_text() == "mine"


@pytest.mark.asyncio
async def test_extraction_runs_off_the_event_loop(tmp_path: Path) -> None:
    threads: list[threading.Thread] = []

    def record_thread(archive: Path, target: Path, strip_root: bool) -> list[Path]:
        threads.append(threading.current_thread())
        return []

    with (
        patch("studiorack.plugins.templates.download_file", side_effect=fake_template),
        patch("studiorack.plugins.templates.extract_zip", side_effect=record_thread) as extract,
    ):
        await create_plugin(tmp_path / "my-plugin", "iplug", TEMPLATE_URL)

    assert extract.call_args.args[1:] == (tmp_path / "my-plugin", True)
    assert threads and threads[0] is not threading.main_thread()
