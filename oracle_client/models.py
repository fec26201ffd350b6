"""Data models — all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .errors import DecodeError


@dataclass(frozen=True)
class Price:
    """Fixed-point price with confidence interval."""

    price: int
    conf: int
    expo: int
    publish_time: int

    @property
    def value(self) -> float:
        return self.price * (10**self.expo)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Price:
        return cls(
            price=int(raw["price"]),
            conf=int(raw["conf"]),
            expo=int(raw["expo"]),
            publish_time=int(raw["publish_time"]),
        )


@dataclass(frozen=True)
class ParsedPriceUpdate:
    """Decoded price of a single feed."""

    id: str
    price: Price
    ema_price: Price
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> ParsedPriceUpdate:
        return cls(
            id=str(raw["id"]),
            price=Price.from_dict(raw["price"]),
            ema_price=Price.from_dict(raw["ema_price"]),
            metadata=dict(raw.get("metadata") or {}),
        )


@dataclass(frozen=True)
class BinaryUpdate:
    """Signed update payload, ready to be submitted on-chain."""

    encoding: str
    data: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> BinaryUpdate:
        data = raw["data"]
        if not isinstance(data, list):
            raise TypeError(f"binary.data must be a list, got {type(data).__name__}")
        return cls(encoding=str(raw["encoding"]), data=tuple(str(d) for d in data))


@dataclass(frozen=True)
class PriceUpdate:
    """Response of the price update endpoints."""

    binary: BinaryUpdate
    parsed: tuple[ParsedPriceUpdate, ...] = ()

    @classmethod
    def from_dict(cls, raw: Any) -> PriceUpdate:
        """Build a ``PriceUpdate`` from decoded JSON.

        Raises:
            DecodeError: if ``raw`` does not have the expected shape.
        """
        try:
            parsed = raw.get("parsed") or []
            return cls(
                binary=BinaryUpdate.from_dict(raw["binary"]),
                parsed=tuple(ParsedPriceUpdate.from_dict(item) for item in parsed),
            )
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise DecodeError(f"Unexpected price update payload: {e!r}") from e

    def prices(self) -> dict[str, float]:
        """Map feed id to its price value."""
        return {item.id: item.price.value for item in self.parsed}
