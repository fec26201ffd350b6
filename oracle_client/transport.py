"""Shared HTTP execution path for API clients."""
from __future__ import annotations

import asyncio
import json
import logging
import ssl
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeVar

import aiohttp
import certifi

from .errors import DecodeError, HttpStatusError, TransportError

if TYPE_CHECKING:
    from .interfaces.api_client import ApiClient

logger = logging.getLogger(__name__)

T = TypeVar("T")

QueryPairs = Sequence[tuple[str, str]]


@dataclass(frozen=True)
class Request:
    """Outgoing request, as seen by the customize hook."""

    method: str
    url: str
    params: tuple[tuple[str, str], ...] = ()
    headers: Mapping[str, str] = field(default_factory=dict)
    timeout: float | None = None


def create_session(
    timeout: float | None = None, headers: Mapping[str, str] | None = None
) -> aiohttp.ClientSession:
    """Create a pooled session verifying TLS against the certifi bundle.

    Must be called from within a running event loop.
    """
    ssl_context = ssl.create_default_context(cafile=certifi.where())
    connector = aiohttp.TCPConnector(ssl=ssl_context)
    return aiohttp.ClientSession(
        connector=connector,
        headers=dict(headers or {}),
        timeout=aiohttp.ClientTimeout(total=timeout),
    )


def build_request(
    client: ApiClient, route: str, params: QueryPairs = (), method: str = "GET"
) -> Request:
    """Resolve ``route`` against the client's base URL and apply ``customize``."""
    request = Request(
        method=method, url=f"{client.base_url}/{route}", params=tuple(params)
    )
    customized = client.customize(request)
    if customized.url != request.url or customized.method != request.method:
        raise ValueError("customize() must not change the request URL or method")
    return customized


async def execute(
    client: ApiClient,
    route: str,
    decoder: Callable[[Any], T],
    *,
    params: QueryPairs = (),
    method: str = "GET",
) -> T:
    """Send one request and decode its JSON body with ``decoder``.

    Raises:
        TransportError: the server could not be reached or the exchange was
            interrupted.
        HttpStatusError: the server answered with a non-2xx status.
        DecodeError: the body is not JSON or ``decoder`` rejected it.
    """
    request = build_request(client, route, params, method)
    kwargs: dict[str, Any] = {}
    if request.timeout is not None:
        kwargs["timeout"] = aiohttp.ClientTimeout(total=request.timeout)

    logger.debug("%s %s params=%s", request.method, request.url, request.params)
    try:
        async with client.session.request(
            request.method,
            request.url,
            params=list(request.params),
            headers=dict(request.headers),
            **kwargs,
        ) as response:
            status = response.status
            body = await response.text(errors="replace")
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        logger.warning("%s %s failed: %r", request.method, request.url, e)
        raise TransportError(f"{request.method} {request.url} failed: {e!r}") from e

    if not 200 <= status < 300:
        logger.warning("%s %s returned HTTP %s", request.method, request.url, status)
        raise HttpStatusError(
            status, f"{request.method} {request.url} failed with {status}", body[:1000]
        )

    try:
        payload = json.loads(body)
    except ValueError as e:
        logger.warning("Invalid JSON from %s: %s", request.url, e)
        raise DecodeError(f"Response from {request.url} is not valid JSON") from e

    try:
        return decoder(payload)
    except DecodeError:
        logger.warning("Unexpected response shape from %s", request.url)
        raise
    except (KeyError, TypeError, ValueError) as e:
        logger.warning("Unexpected response shape from %s: %r", request.url, e)
        raise DecodeError(f"Unexpected response from {request.url}: {e!r}") from e
