"""Version document extraction from zipped legacy releases."""

import asyncio
import os
import tempfile
import zipfile
import zlib
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

import httpx

from config import Config
from errors import ArchiveFormatError, ArchiveIOError, DocumentNotFoundError, MalformedBodyError
from http_client import client_scope, ensure_valid, get, parse_document
from logging_setup import get_logger
from models import MinecraftVersion


logger = get_logger()

FALLBACK_FILENAME = "tmp.zip"
TEMP_PREFIX = "mcmeta_mojang_zip"
DOCUMENT_SUFFIX = ".json"

UNSAFE_NAME_CHARS = tuple(sep for sep in ("\x00", os.sep, os.altsep) if sep)

# RuntimeError is what zipfile raises for encrypted entries
ARCHIVE_FORMAT_ERRORS = (
    zipfile.BadZipFile,
    zipfile.LargeZipFile,
    zlib.error,
    EOFError,
    NotImplementedError,
    RuntimeError,
)

T = TypeVar("T")


def archive_filename(url: httpx.URL) -> str:
    """Local filename for a downloaded archive: the last path segment of `url`.

    Used only to name the temporary file, never trusted as metadata.
    """
    name = url.path.rsplit("/", 1)[-1]
    if name in ("", ".", "..") or any(sep in name for sep in UNSAFE_NAME_CHARS):
        return FALLBACK_FILENAME
    return name


def write_archive(dest_path: Path, content: bytes, url: str) -> None:
    """Write the archive body and close the file before it is read back."""
    try:
        with open(dest_path, "wb") as f:
            f.write(content)
            f.flush()
    except (OSError, ValueError) as exc:
        raise ArchiveIOError(url, f"Unable to write archive to {dest_path}: {exc}") from exc


def read_version_entry(archive_path: Path, url: str) -> tuple[str, bytes]:
    """Return name and bytes of the first `.json` entry, in archive order.

    Any further `.json` entries are skipped and logged.
    """
    try:
        with zipfile.ZipFile(archive_path) as archive:
            candidates = [
                info
                for info in archive.infolist()
                if not info.is_dir() and info.filename.endswith(DOCUMENT_SUFFIX)
            ]
            if not candidates:
                raise DocumentNotFoundError(url)

            selected = candidates[0]
            if len(candidates) > 1:
                logger.warning(
                    "Archive %s has %d version documents, using %s and skipping %s",
                    url,
                    len(candidates),
                    selected.filename,
                    ", ".join(info.filename for info in candidates[1:]),
                )
            logger.debug("Found %s as version json", selected.filename)
            return selected.filename, archive.read(selected)
    except ARCHIVE_FORMAT_ERRORS as exc:
        raise ArchiveFormatError(url, f"Unable to read archive: {exc}") from exc
    except OSError as exc:
        raise ArchiveIOError(url, f"Unable to read archive from {archive_path}: {exc}") from exc


async def _in_thread(func: Callable[..., T], *args) -> T:
    """Run blocking file work in a thread.

    On cancellation the thread is allowed to finish before the caller
    unwinds, so the temporary directory is never removed under it.
    """
    task = asyncio.ensure_future(asyncio.to_thread(func, *args))
    try:
        return await asyncio.shield(task)
    except asyncio.CancelledError:
        while not task.done():
            try:
                await asyncio.wait([task])
            except asyncio.CancelledError:
                continue
        raise


def decode_entry(name: str, content: bytes, url: str) -> str:
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedBodyError(
            url, content.decode("utf-8", errors="replace"), f"{name} is not UTF-8: {exc}"
        ) from exc


async def load_zipped_version(
    version_url: str,
    client: httpx.AsyncClient | None = None,
    config: Config | None = None,
) -> MinecraftVersion:
    """Download a zipped release and return the version document inside it."""
    logger.debug("Fetching zipped version from %s", version_url)
    async with client_scope(client, config) as http:
        response = await get(http, version_url)

    filename = archive_filename(response.url)

    try:
        tmp_dir = tempfile.TemporaryDirectory(prefix=TEMP_PREFIX)
    except OSError as exc:
        raise ArchiveIOError(version_url, f"Unable to create temporary directory: {exc}") from exc

    with tmp_dir as tmp_path:
        dest_path = Path(tmp_path) / filename
        logger.debug("Storing archive at %s", dest_path)
        await _in_thread(write_archive, dest_path, response.content, version_url)
        entry_name, content = await _in_thread(read_version_entry, dest_path, version_url)

    body = decode_entry(entry_name, content, version_url)
    version = parse_document(MinecraftVersion, body, version_url)
    return ensure_valid(version, version_url)
