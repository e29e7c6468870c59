"""Thin adapters that hand a `Request` to an `httpx.AsyncClient`.

These make a request usable directly as an `ObservableProcessor` processor:

    async def employee(name: str) -> dict:
        return await fetch_json(to_request(BASE, path=name), client=client)
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

import httpx

from ..config import FondueSettings, get_settings
from .debug import dump_json
from .request import Request


logger = logging.getLogger(__name__)

Decoder = Callable[[bytes], Any]


def build_client(
    settings: FondueSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with the configured timeout and User-Agent."""
    settings = settings or get_settings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


async def fetch_json(
    request: Request,
    *,
    client: httpx.AsyncClient | None = None,
    decoder: Decoder = json.loads,
) -> Any:
    """
    Send `request` and decode the response body.

    Error statuses raise `httpx.HTTPStatusError`; transport and decoding
    failures propagate as well, after being logged. Without a client, a
    short-lived one is created by `build_client()`.
    """
    if client is None:
        async with build_client() as owned:
            return await fetch_json(request, client=owned, decoder=decoder)

    label = f"{request.method.value} {request.url}"
    try:
        response = await client.send(request.to_httpx(client))
        dump_json(response.content, title=label)
        response.raise_for_status()
        return decoder(response.content)
    except (httpx.HTTPError, ValueError) as e:
        logger.warning(f"{label} failed: {e!r}")
        raise


async def fetch_status(request: Request, *, client: httpx.AsyncClient | None = None) -> int:
    """Send `request` and return only its HTTP status code."""
    if client is None:
        async with build_client() as owned:
            return await fetch_status(request, client=owned)

    try:
        response = await client.send(request.to_httpx(client))
    except httpx.HTTPError as e:
        logger.warning(f"{request.method.value} {request.url} failed: {e!r}")
        raise
    return response.status_code
