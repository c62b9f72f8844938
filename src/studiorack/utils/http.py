"""HTTP helpers for registry lookups and archive downloads."""

import asyncio
import logging
import zipfile
from pathlib import Path
from typing import Any

import aiofiles
import aiohttp

from studiorack.utils.errors import (
    DownloadError,
    NetworkConnectionError,
    NetworkTimeoutError,
)
from studiorack.utils.retry import classify_http_error, with_network_retry

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 60
CHUNK_SIZE = 64 * 1024


def _timeout(seconds: float) -> aiohttp.ClientTimeout:
    return aiohttp.ClientTimeout(total=seconds)


@with_network_retry()
async def fetch_json(url: str, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> Any:
    """Fetch and decode a JSON document.

    Args:
        url: Document URL
        timeout: Total request timeout in seconds

    Returns:
        Decoded JSON payload

    Raises:
        NetworkConnectionError: Connection failed (retried)
        NetworkTimeoutError: Request timed out (retried)
        DownloadError: Non-retryable HTTP status or undecodable body
    """
    logger.debug("GET %s", url)
    try:
        async with aiohttp.ClientSession(timeout=_timeout(timeout)) as session:
            async with session.get(url) as response:
                if response.status >= 400:
                    raise classify_http_error(response.status, url)
                return await response.json(content_type=None)
    except asyncio.TimeoutError as e:
        raise NetworkTimeoutError(f"Timed out fetching {url}") from e
    except aiohttp.ClientConnectionError as e:
        raise NetworkConnectionError(f"Could not connect to {url}: {e}") from e
    except (aiohttp.ContentTypeError, ValueError) as e:
        raise DownloadError(f"Invalid JSON returned by {url}: {e}") from e


@with_network_retry()
async def download_file(
    url: str, destination: Path, timeout: float = DEFAULT_TIMEOUT_SECONDS * 10
) -> Path:
    """Stream a remote file to disk.

    The body is written to ``<destination>.part`` and renamed once complete,
    so an interrupted download never leaves a truncated file behind.

    Args:
        url: File URL
        destination: Target file path (parent directories are created)
        timeout: Total request timeout in seconds

    Returns:
        The destination path
    """
    destination.parent.mkdir(parents=True, exist_ok=True)
    partial = destination.with_name(destination.name + ".part")
    logger.info("Downloading %s", url)

    try:
        async with aiohttp.ClientSession(timeout=_timeout(timeout)) as session:
            async with session.get(url) as response:
                if response.status >= 400:
                    raise classify_http_error(response.status, url)
                async with aiofiles.open(partial, "wb") as f:
                    async for chunk in response.content.iter_chunked(CHUNK_SIZE):
                        await f.write(chunk)
        await asyncio.to_thread(partial.replace, destination)
    except asyncio.TimeoutError as e:
        partial.unlink(missing_ok=True)
        raise NetworkTimeoutError(f"Timed out downloading {url}") from e
    except aiohttp.ClientConnectionError as e:
        partial.unlink(missing_ok=True)
        raise NetworkConnectionError(f"Could not connect to {url}: {e}") from e
    except Exception:
        partial.unlink(missing_ok=True)
        raise

    return destination


def extract_zip(archive: Path, target_dir: Path, strip_root: bool = False) -> list[Path]:
    """Extract a zip archive.

    Args:
        archive: Zip file to extract
        target_dir: Directory to extract into (created if missing)
        strip_root: Drop the archive's single top-level directory, if it has one

    Returns:
        Paths of the extracted files

    Raises:
        DownloadError: If the archive is corrupt or escapes ``target_dir``
    """
    target_dir.mkdir(parents=True, exist_ok=True)
    root = target_dir.resolve()
    extracted = []

    try:
        with zipfile.ZipFile(archive) as zf:
            members = [m for m in zf.infolist() if m.filename]
            prefix = ""
            if strip_root:
                tops = {m.filename.split("/", 1)[0] for m in members}
                if len(tops) == 1 and all("/" in m.filename for m in members):
                    prefix = tops.pop() + "/"

            for member in members:
                name = member.filename[len(prefix):] if prefix else member.filename
                if not name:
                    continue
                dest = (target_dir / name).resolve()
                if not dest.is_relative_to(root):
                    raise DownloadError(f"Archive member escapes target: {member.filename}")
                if member.is_dir():
                    dest.mkdir(parents=True, exist_ok=True)
                    continue
                dest.parent.mkdir(parents=True, exist_ok=True)
                with zf.open(member) as src, open(dest, "wb") as out:
                    out.write(src.read())
                extracted.append(dest)
    except zipfile.BadZipFile as e:
        raise DownloadError(f"Corrupt archive {archive}: {e}") from e

    return extracted
