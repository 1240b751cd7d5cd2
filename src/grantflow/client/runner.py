"""Drive endpoints against an :class:`~grantflow.client.base.HttpClient`.

:func:`respond_endpoint` performs a single render, respond, parse cycle.
:func:`respond_endpoint_until_done` is the polling loop for a
:class:`~grantflow.endpoint.RetryableEndpoint`; the loop owns all retry
progress and the endpoint stays stateless.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

import httpx

from grantflow.client.base import HttpClient
from grantflow.endpoint import Endpoint, RetryableEndpoint, RetryContext, RetryReason
from grantflow.exceptions import MaxRetriesReached

logger = logging.getLogger(__name__)

O = TypeVar("O")

Sleep = Callable[[float], Awaitable[None]]


async def respond_endpoint(
    client: HttpClient, endpoint: Endpoint[O]
) -> tuple[O, httpx.Response]:
    """Render *endpoint*, send it and parse the answer.

    Returns:
        The parsed output and the raw response it came from.

    Raises:
        RenderRequestError: If the request cannot be built.
        TransportError: If the client could not get a response.
        ParseResponseError: If the response has an unexpected shape.
    """
    request = endpoint.render_request()
    response = await client.respond(request)
    return endpoint.parse_response(response), response


async def respond_endpoint_until_done(
    client: HttpClient,
    endpoint: RetryableEndpoint[O],
    sleep: Sleep = asyncio.sleep,
) -> tuple[O, httpx.Response]:
    """Poll *endpoint* until it returns something other than a retry reason.

    At most ``endpoint.max_retry_count`` requests are issued.  Before every
    request after the first, the loop awaits
    ``sleep(endpoint.next_retry_in(retry))``.

    Args:
        client: The HTTP client.
        endpoint: The retryable endpoint.
        sleep: Awaitable delay function, replaceable in tests.

    Returns:
        The first non-retry output and the response it came from.

    Raises:
        MaxRetriesReached: If every allowed attempt asked for a retry.
        RenderRequestError: If a request cannot be built.
        TransportError: If the client could not get a response.
        ParseResponseError: If a response has an unexpected shape.
    """
    retry: RetryContext | None = None
    for attempt in range(endpoint.max_retry_count):
        if retry is not None:
            delay = endpoint.next_retry_in(retry)
            logger.debug(
                "Retry %d/%d in %.1fs (%s)",
                attempt + 1,
                endpoint.max_retry_count,
                delay,
                retry.reason.value,
            )
            await sleep(delay)

        request = endpoint.render_request(retry)
        response = await client.respond(request)
        output = endpoint.parse_response(response, retry)
        if isinstance(output, RetryReason):
            retry = RetryContext(attempt + 1, output)
            continue
        return output, response

    logger.warning("Giving up after %d attempts", endpoint.max_retry_count)
    raise MaxRetriesReached(endpoint.max_retry_count)
