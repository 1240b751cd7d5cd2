"""Stock :class:`~grantflow.client.base.HttpClient` backed by :class:`httpx.AsyncClient`.

Example::

    async with HttpxClient(timeout=10.0) as client:
        flow = ClientCredentialsFlow(client)
        body = await flow.execute(provider)
"""

from __future__ import annotations

import logging

import httpx

from grantflow.exceptions import TransportError

logger = logging.getLogger(__name__)


class HttpxClient:
    """Send endpoint requests through an :class:`httpx.AsyncClient`.

    Args:
        timeout: Per-request timeout in seconds.
        verify: Whether to verify TLS certificates.
        client: An existing :class:`httpx.AsyncClient` to use instead of
            creating one.  The caller keeps ownership of it.
        transport: Custom transport for the owned client (for example
            :class:`httpx.MockTransport` in tests).

    The owned client is created lazily on first use and closed by
    :meth:`aclose` or on leaving the ``async with`` block.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        verify: bool = True,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._verify = verify
        self._transport = transport
        self._client = client
        self._owns_client = client is None

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> HttpxClient:
        self._ensure_client()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------ #
    # HttpClient
    # ------------------------------------------------------------------ #

    async def respond(self, request: httpx.Request) -> httpx.Response:
        """Send *request* and return the fully read response.

        Raises:
            TransportError: On network errors, timeouts and invalid URLs.
        """
        client = self._ensure_client()
        logger.debug("%s %s%s", request.method, request.url.host, request.url.path)
        try:
            response = await client.send(request)
        except httpx.HTTPError as exc:
            raise TransportError(f"Request to {request.url.host} failed: {exc}") from exc
        logger.debug("%s %s -> %d", request.method, request.url.path, response.status_code)
        return response

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                verify=self._verify,
                transport=self._transport,
            )
        return self._client
