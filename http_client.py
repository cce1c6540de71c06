"""Shared fetch, parse and validate steps for mcmeta-mojang."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TypeVar

import httpx
import pydantic

from config import Config, is_absolute_url
from errors import HTTPStatusError, MalformedBodyError, TransportError, ValidationError


USER_AGENT = "mcmeta-mojang/0.1"

DocumentT = TypeVar("DocumentT", bound=pydantic.BaseModel)


def build_async_client(config: Config | None = None) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with the configured timeout."""
    config = config or Config.load()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(config.http_timeout),
        follow_redirects=True,
        headers={"User-Agent": USER_AGENT},
    )


@asynccontextmanager
async def client_scope(
    client: httpx.AsyncClient | None,
    config: Config | None = None,
) -> AsyncIterator[httpx.AsyncClient]:
    """Yield the caller's client, or a private one closed on exit."""
    if client is not None:
        yield client
        return
    async with build_async_client(config) as owned:
        yield owned


async def get(client: httpx.AsyncClient, url: str) -> httpx.Response:
    """Issue a single GET and return the fully read response.

    Raises TransportError when no usable response arrives: connection and
    timeout failures, redirect loops, undecodable content encodings, and
    URLs that are not absolute http(s) (rejected before any request is made).
    Raises HTTPStatusError for anything outside 2xx. No retries.
    """
    if not is_absolute_url(url):
        raise TransportError(url, "not an absolute http(s) URL")
    try:
        response = await client.get(url)
    except httpx.RequestError as exc:
        raise TransportError(url, f"{type(exc).__name__}: {exc}") from exc

    if not response.is_success:
        raise HTTPStatusError(url, response.status_code)
    return response


def _describe(exc: pydantic.ValidationError) -> str:
    details = [
        f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}"
        for error in exc.errors()[:3]
    ]
    if exc.error_count() > 3:
        details.append(f"and {exc.error_count() - 3} more")
    return "; ".join(details)


def parse_document(model: type[DocumentT], body: str, url: str) -> DocumentT:
    """Parse `body` as JSON into `model`, keeping the raw body on failure."""
    try:
        return model.model_validate_json(body)
    except pydantic.ValidationError as exc:
        raise MalformedBodyError(url, body, _describe(exc)) from exc


def ensure_valid(document: DocumentT, url: str) -> DocumentT:
    """Raise ValidationError unless the document reports no problems."""
    problems = document.problems()
    if problems:
        raise ValidationError(url, problems)
    return document
