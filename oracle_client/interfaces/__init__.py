"""Protocol interfaces for the oracle client."""
from .api_client import ApiClient

__all__ = ["ApiClient"]
