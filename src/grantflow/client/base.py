"""The HTTP capability the engine is given.

The engine never opens sockets: every flow receives an object satisfying
:class:`HttpClient` and hands it fully rendered requests.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import httpx


@runtime_checkable
class HttpClient(Protocol):
    """Anything that can send an :class:`httpx.Request`.

    Implementations must be safe to share between concurrent flows and
    must raise :class:`~grantflow.exceptions.TransportError` when no
    response could be obtained.  Non-2xx responses are *not* errors at
    this level; they are returned for the endpoint to parse.
    """

    async def respond(self, request: httpx.Request) -> httpx.Response: ...
