"""Price oracle clients."""
from .pyth import LatestParams, PriceParams, PythClient

__all__ = ["LatestParams", "PriceParams", "PythClient"]
