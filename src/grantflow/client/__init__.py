"""HTTP client capability and the loops that drive endpoints through it."""

from grantflow.client.base import HttpClient
from grantflow.client.httpx_client import HttpxClient
from grantflow.client.runner import respond_endpoint, respond_endpoint_until_done

__all__ = [
    "HttpClient",
    "HttpxClient",
    "respond_endpoint",
    "respond_endpoint_until_done",
]
