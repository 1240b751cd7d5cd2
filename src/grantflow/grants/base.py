"""Shared plumbing for the grant flows.

Flows talk to endpoints only through :func:`run_endpoint` and
:func:`run_retryable_endpoint`, which translate endpoint, transport and
retry failures into :class:`~grantflow.exceptions.FlowError` subclasses
tagged with the flow phase.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TypeVar

import httpx

from grantflow.client.base import HttpClient
from grantflow.client.runner import Sleep, respond_endpoint, respond_endpoint_until_done
from grantflow.endpoint import Endpoint, RetryableEndpoint
from grantflow.exceptions import (
    AccessTokenFailed,
    EndpointError,
    EndpointFailed,
    EndpointRespondFailed,
    MaxRetriesReached,
    RetriesExhausted,
    TransportError,
)
from grantflow.models import AccessTokenResponseErrorBody, AccessTokenResponseSuccessfulBody

logger = logging.getLogger(__name__)

O = TypeVar("O")


class Flow:
    """Base class for grant flows.

    A flow holds only the HTTP client handle; providers and request
    parameters are passed per call, so one flow may serve many
    concurrent invocations.

    Args:
        client: The HTTP client used for every endpoint call.
    """

    def __init__(self, client: HttpClient) -> None:
        self.client = client


async def run_endpoint(
    client: HttpClient, endpoint: Endpoint[O], phase: str
) -> tuple[O, httpx.Response]:
    try:
        return await respond_endpoint(client, endpoint)
    except TransportError as exc:
        raise EndpointRespondFailed(f"{phase}: {exc.message}", phase) from exc
    except EndpointError as exc:
        raise EndpointFailed(f"{phase}: {exc.message}", phase) from exc


async def run_retryable_endpoint(
    client: HttpClient,
    endpoint: RetryableEndpoint[O],
    phase: str,
    sleep: Sleep = asyncio.sleep,
) -> tuple[O, httpx.Response]:
    try:
        return await respond_endpoint_until_done(client, endpoint, sleep=sleep)
    except MaxRetriesReached as exc:
        raise RetriesExhausted(exc.attempts, phase) from exc
    except TransportError as exc:
        raise EndpointRespondFailed(f"{phase}: {exc.message}", phase) from exc
    except EndpointError as exc:
        raise EndpointFailed(f"{phase}: {exc.message}", phase) from exc


def access_token_or_raise(
    body: AccessTokenResponseSuccessfulBody | AccessTokenResponseErrorBody,
    response: httpx.Response,
    phase: str = "access_token",
) -> AccessTokenResponseSuccessfulBody:
    """Return *body* if it is a success body, else raise :class:`AccessTokenFailed`."""
    if isinstance(body, AccessTokenResponseErrorBody):
        logger.debug("%s returned error '%s'", phase, body.error.value)
        raise AccessTokenFailed(body, phase=phase, status_code=response.status_code)
    return body
