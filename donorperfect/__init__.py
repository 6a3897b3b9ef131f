"""
DonorPerfect XML API client.

Usage:
    from donorperfect import ApiKeyAuth, DonorPerfectClient

    with DonorPerfectClient(ApiKeyAuth("KEY"), app_name="my-app") as client:
        gifts = client.dp_gifts({"donor_id": 147})
"""

from .clients import DonorPerfectClient, DonorPerfectClientFactory, HttpxTransport, Paginator, Transport
from .protocol import (
    ApiKeyAuth,
    DecodeError,
    DecodedRecord,
    DecodedResult,
    DonorPerfectError,
    EmptyResult,
    RecordResult,
    RemoteError,
    RequestTooLargeError,
    RowsResult,
    ScalarResult,
    TransportError,
    UserPassAuth,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "ApiKeyAuth",
    "DecodeError",
    "DecodedRecord",
    "DecodedResult",
    "DonorPerfectClient",
    "DonorPerfectClientFactory",
    "DonorPerfectError",
    "EmptyResult",
    "HttpxTransport",
    "Paginator",
    "RecordResult",
    "RemoteError",
    "RequestTooLargeError",
    "RowsResult",
    "ScalarResult",
    "Transport",
    "TransportError",
    "UserPassAuth",
    "ValidationError",
]
