"""Pyth Network price oracle client (Hermes API)."""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field

import aiohttp

from ..config import PythConfig
from ..models import PriceUpdate
from ..transport import Request, create_session, execute

logger = logging.getLogger(__name__)

PRICE_ROUTE = "updates/price/"
LATEST_PRICE_ROUTE = "updates/price/latest"

_U64_MAX = 2**64 - 1


@dataclass(frozen=True)
class PriceParams:
    """Historical lookup: prices of ``ids`` as of ``timestamp`` (Unix seconds)."""

    ids: tuple[int, ...]
    timestamp: int


@dataclass(frozen=True)
class LatestParams:
    ids: tuple[int, ...] = field(default_factory=tuple)


def encode_feed_id(feed_id: int) -> str:
    """Encode a u64 feed id as minimal lowercase hex (no ``0x``)."""
    if not 0 <= feed_id <= _U64_MAX:
        raise ValueError(f"Feed id out of u64 range: {feed_id}")
    return format(feed_id, "x")


def build_query(
    ids: Iterable[int], timestamp: int | None = None
) -> list[tuple[str, str]]:
    """One ``ids[]`` pair per id in input order, then ``timestamp`` if given."""
    pairs = [("ids[]", encode_feed_id(fid)) for fid in ids]
    if timestamp is not None:
        if not 0 <= timestamp <= _U64_MAX:
            raise ValueError(f"Timestamp out of u64 range: {timestamp}")
        pairs.append(("timestamp", str(timestamp)))
    return pairs


class PythClient:
    """Fetch price updates from a Pyth Hermes endpoint."""

    def __init__(
        self,
        base_url: str = PythConfig.base_url,
        *,
        session: aiohttp.ClientSession | None = None,
        customize: Callable[[Request], Request] | None = None,
        timeout: float | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self._base_url = base_url
        self._session = session
        self._owns_session = session is None
        self._customize = customize
        self._timeout = timeout
        self._headers = dict(headers or {})

    @classmethod
    def from_config(
        cls,
        config: PythConfig,
        customize: Callable[[Request], Request] | None = None,
    ) -> PythClient:
        return cls(
            config.base_url,
            customize=customize,
            timeout=config.timeout,
            headers=config.headers,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def session(self) -> aiohttp.ClientSession:
        # Created once, on first use inside the event loop.
        if self._session is None:
            logger.debug("Opening HTTP session for %s", self._base_url)
            self._session = create_session(self._timeout, self._headers)
        return self._session

    def customize(self, request: Request) -> Request:
        if self._customize is None:
            return request
        return self._customize(request)

    async def close(self) -> None:
        """Close the session if this client created it."""
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> PythClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def get_price(self, params: PriceParams) -> PriceUpdate:
        """Fetch price updates for ``params.ids`` as of ``params.timestamp``."""
        query = build_query(params.ids, params.timestamp)
        return await execute(self, PRICE_ROUTE, PriceUpdate.from_dict, params=query)

    async def get_latest_price(self, ids: Iterable[int] | LatestParams) -> PriceUpdate:
        """Fetch the most recent price updates for ``ids``."""
        if isinstance(ids, LatestParams):
            ids = ids.ids
        query = build_query(ids)
        return await execute(
            self, LATEST_PRICE_ROUTE, PriceUpdate.from_dict, params=query
        )
