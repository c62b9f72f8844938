"""Scaffold a new plugin folder from a starter template."""

import asyncio
import logging
import tempfile
from pathlib import Path
from typing import Literal, get_args

from studiorack.utils.errors import TemplateError
from studiorack.utils.http import download_file, extract_zip

logger = logging.getLogger(__name__)

TemplateType = Literal["dplug", "iplug", "juce", "steinberg"]
TEMPLATE_TYPES: tuple[str, ...] = get_args(TemplateType)
DEFAULT_TEMPLATE: TemplateType = "steinberg"


async def create_plugin(folder: Path, template: str, template_url: str) -> list[Path]:
    """Create ``folder`` from the given starter template.

    Args:
        folder: Destination folder (must not exist or be empty)
        template: One of TEMPLATE_TYPES
        template_url: URL pattern with a ``{template}`` placeholder

    Returns:
        Files written into the folder

    Raises:
        TemplateError: Unknown template or non-empty destination
    """
    if template not in TEMPLATE_TYPES:
        raise TemplateError(
            f"Unknown template '{template}'. Choose one of: {', '.join(TEMPLATE_TYPES)}"
        )

    if folder.exists() and any(folder.iterdir()):
        raise TemplateError(f"Folder {folder} already exists and is not empty")

    url = template_url.format(template=template)
    with tempfile.TemporaryDirectory(prefix="studiorack-template-") as tmp:
        archive = await download_file(url, Path(tmp) / f"{template}.zip")
        files = await asyncio.to_thread(extract_zip, archive, folder, True)

    logger.info("Created %s from %s template (%d files)", folder, template, len(files))
    return files
