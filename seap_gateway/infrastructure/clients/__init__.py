"""External API client implementations."""

from .bureau_client import HttpCreditBureauClient
from .bureau_simulator import simulate_bureau_response

__all__ = [
    "HttpCreditBureauClient",
    "simulate_bureau_response",
]
