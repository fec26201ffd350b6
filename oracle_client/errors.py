"""Client error taxonomy."""
from __future__ import annotations


class OracleClientError(Exception):
    """Base client error."""


class TransportError(OracleClientError):
    """Connection could not be established or was interrupted."""


class HttpStatusError(OracleClientError):
    """Server answered with a non-success status."""

    def __init__(self, status: int, message: str, body: str | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class DecodeError(OracleClientError):
    """Response body does not match the expected result type."""
