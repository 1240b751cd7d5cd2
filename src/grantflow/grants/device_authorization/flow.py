"""Device authorization grant flow (RFC 8628).

States::

    START -> device authorization -> user_interaction -> POLLING -> DONE

Polling ends with the token on success, :class:`AccessTokenFailed` on any
error body other than ``authorization_pending`` / ``slow_down``, or
:class:`RetriesExhausted` once the endpoint's ``max_retry_count`` is used
up.  The only delay is the server-announced ``interval`` between polls;
cancelling the enclosing task cancels the wait.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Iterable

from grantflow.client.base import HttpClient
from grantflow.client.runner import Sleep
from grantflow.exceptions import DeviceAuthorizationFailed
from grantflow.grants.base import (
    Flow,
    access_token_or_raise,
    run_endpoint,
    run_retryable_endpoint,
)
from grantflow.grants.device_authorization.device_access_token_endpoint import (
    DeviceAccessTokenEndpoint,
)
from grantflow.grants.device_authorization.device_authorization_endpoint import (
    DeviceAuthorizationEndpoint,
)
from grantflow.grants.device_authorization.provider_ext import ProviderExtDeviceAuthorizationGrant
from grantflow.models import (
    AccessTokenResponseSuccessfulBody,
    DeviceAuthorizationResponseErrorBody,
)

logger = logging.getLogger(__name__)

UserInteraction = Callable[[str, str, str | None], Awaitable[None] | None]


class DeviceAuthorizationFlow(Flow):
    """Drive the device authorization grant.

    Args:
        client: The HTTP client.
        sleep: Awaitable delay used between polls.  Tests pass a fake to
            avoid waiting on the wall clock.
    """

    def __init__(self, client: HttpClient, sleep: Sleep = asyncio.sleep) -> None:
        super().__init__(client)
        self._sleep = sleep

    async def execute(
        self,
        provider: ProviderExtDeviceAuthorizationGrant,
        scopes: Iterable[Any] | None = None,
        user_interaction: UserInteraction | None = None,
    ) -> AccessTokenResponseSuccessfulBody:
        """Run the device grant end to end.

        Args:
            provider: The provider.
            scopes: Requested scopes, defaulting to ``provider.scopes_default()``.
            user_interaction: Called exactly once with ``(user_code,
                verification_uri, verification_uri_complete)`` before
                polling starts.  May be a coroutine function.

        Returns:
            The successful token body.

        Raises:
            DeviceAuthorizationFailed: If the device authorization
                endpoint returned an error body.
            AccessTokenFailed: If polling ended with an error body.
            RetriesExhausted: If the poll budget ran out.
            EndpointFailed: If a request could not be rendered or a
                response parsed.
            EndpointRespondFailed: If the HTTP client failed.
        """
        endpoint = DeviceAuthorizationEndpoint(provider, scopes)
        authorization, response = await run_endpoint(
            self.client, endpoint, "device_authorization"
        )
        if isinstance(authorization, DeviceAuthorizationResponseErrorBody):
            raise DeviceAuthorizationFailed(authorization, status_code=response.status_code)

        logger.info(
            "Device authorization issued, polling every %ss", authorization.interval_seconds
        )
        if user_interaction is not None:
            result = user_interaction(
                authorization.user_code,
                authorization.verification_uri,
                authorization.verification_uri_complete,
            )
            if inspect.isawaitable(result):
                await result

        poll = DeviceAccessTokenEndpoint(
            provider, authorization.device_code, authorization.interval_seconds
        )
        body, response = await run_retryable_endpoint(
            self.client, poll, "device_access_token", sleep=self._sleep
        )
        token = access_token_or_raise(body, response, "device_access_token")
        logger.info("Obtained access token (device_code) for %r", provider)
        return token
