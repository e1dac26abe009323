"""HTTP utilities package.

Exposes the transport protocols, the default httpx transport and the pooled
httpx clients it uses.
"""

from .client import get_httpx_client, close_client, close_all_clients
from .transport import HttpxRawResponse, HttpxTransport, RawResponse, Transport

__all__ = [
    "get_httpx_client",
    "close_client",
    "close_all_clients",
    "HttpxRawResponse",
    "HttpxTransport",
    "RawResponse",
    "Transport",
]
