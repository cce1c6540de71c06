"""Manifest and version document fetching for mcmeta-mojang."""

import httpx

from config import Config
from http_client import client_scope, ensure_valid, get, parse_document
from logging_setup import get_logger
from models import MinecraftVersion, VersionManifest


logger = get_logger()


async def load_manifest(
    config: Config | None = None,
    client: httpx.AsyncClient | None = None,
) -> VersionManifest:
    """Fetch and validate the version manifest from `config.manifest_url`."""
    config = config or Config.load()

    logger.debug("Fetching version manifest from %s", config.manifest_url)
    async with client_scope(client, config) as http:
        response = await get(http, config.manifest_url)

    manifest = parse_document(VersionManifest, response.text, config.manifest_url)
    return ensure_valid(manifest, config.manifest_url)


async def load_version_manifest(
    version_url: str,
    client: httpx.AsyncClient | None = None,
    config: Config | None = None,
) -> MinecraftVersion:
    """Fetch and validate a single version document.

    `version_url` is normally the `url` of a manifest release summary.
    """
    logger.debug("Fetching version document from %s", version_url)
    async with client_scope(client, config) as http:
        response = await get(http, version_url)

    version = parse_document(MinecraftVersion, response.text, version_url)
    return ensure_valid(version, version_url)
