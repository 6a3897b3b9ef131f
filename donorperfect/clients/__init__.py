"""
DonorPerfect API clients
"""

from .donorperfect_client import DonorPerfectClient, DonorPerfectClientFactory
from .paginator import Paginator
from .transport import HttpxTransport, Transport

__all__ = [
    "DonorPerfectClient",
    "DonorPerfectClientFactory",
    "HttpxTransport",
    "Paginator",
    "Transport",
]
