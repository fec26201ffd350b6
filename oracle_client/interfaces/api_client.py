"""API client protocol — base URL, transport and request customization."""
from typing import Protocol

import aiohttp

from ..transport import Request


class ApiClient(Protocol):
    """Minimal capability set shared by every typed API client."""

    @property
    def base_url(self) -> str: ...

    @property
    def session(self) -> aiohttp.ClientSession: ...

    def customize(self, request: Request) -> Request: ...
