"""Typed async client for the Pyth price oracle."""
from .errors import DecodeError, HttpStatusError, OracleClientError, TransportError
from .models import BinaryUpdate, ParsedPriceUpdate, Price, PriceUpdate
from .oracles import LatestParams, PriceParams, PythClient
from .transport import Request, execute

__all__ = [
    "BinaryUpdate",
    "DecodeError",
    "HttpStatusError",
    "LatestParams",
    "OracleClientError",
    "ParsedPriceUpdate",
    "Price",
    "PriceParams",
    "PriceUpdate",
    "PythClient",
    "Request",
    "TransportError",
    "execute",
]
