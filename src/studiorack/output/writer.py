"""Atomic file writers for manifests and generated artifacts."""

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

import aiofiles

logger = logging.getLogger(__name__)


def to_json(content: Any) -> str:
    """Serialize content as indented JSON with a trailing newline."""
    return json.dumps(content, indent=2, ensure_ascii=False) + "\n"


def write_text_atomic(file_path: Path, content: str) -> None:
    """Write a file atomically with guaranteed durability.

    Writes to a temporary file in the same directory, fsyncs it, then renames
    it over the target so readers never observe a half-written file.

    Args:
        file_path: Target file path
        content: File content

    Raises:
        OSError: If write or sync fails
    """
    file_path.parent.mkdir(parents=True, exist_ok=True)
    temp_fd, temp_path = tempfile.mkstemp(
        dir=file_path.parent, prefix=".tmp_", suffix=file_path.suffix
    )

    try:
        with open(temp_fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())

        Path(temp_path).replace(file_path)

        # Persist the rename; not every filesystem supports directory fsync
        try:
            dir_fd = os.open(file_path.parent, os.O_RDONLY)
            try:
                os.fsync(dir_fd)
            finally:
                os.close(dir_fd)
        except (OSError, AttributeError) as e:
            logger.debug(f"Directory fsync not supported: {e}")

    except Exception:
        Path(temp_path).unlink(missing_ok=True)
        raise


async def write_json_artifact(path: str | Path, content: Any) -> Path:
    """Write ``content`` as JSON to ``path`` (async, atomic replace).

    Args:
        path: Destination file
        content: JSON-serializable content

    Returns:
        The written path
    """
    target = Path(path)
    await asyncio.to_thread(target.parent.mkdir, parents=True, exist_ok=True)
    temp_file = target.with_name(f".tmp_{target.name}")

    try:
        async with aiofiles.open(temp_file, "w", encoding="utf-8") as f:
            await f.write(to_json(content))
        await asyncio.to_thread(temp_file.replace, target)
    except Exception:
        temp_file.unlink(missing_ok=True)
        raise

    logger.debug("Wrote %s", target)
    return target
