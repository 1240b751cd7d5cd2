"""Client credentials grant flow."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from grantflow.grants.base import Flow, access_token_or_raise, run_endpoint
from grantflow.grants.client_credentials.access_token_endpoint import AccessTokenEndpoint
from grantflow.grants.client_credentials.provider_ext import ProviderExtClientCredentialsGrant
from grantflow.models import AccessTokenResponseSuccessfulBody

logger = logging.getLogger(__name__)


class ClientCredentialsFlow(Flow):
    """Obtain a token for the client itself, with a single request."""

    async def execute(
        self,
        provider: ProviderExtClientCredentialsGrant,
        scopes: Iterable[Any] | None = None,
    ) -> AccessTokenResponseSuccessfulBody:
        """Request a token.

        Raises:
            EndpointFailed: If client id or secret is missing, or the
                response cannot be parsed.
            EndpointRespondFailed: If the HTTP client failed.
            AccessTokenFailed: If the token endpoint returned an error body.
        """
        endpoint = AccessTokenEndpoint(provider, scopes)
        body, response = await run_endpoint(self.client, endpoint, "access_token")
        token = access_token_or_raise(body, response)
        logger.info("Obtained access token (client_credentials) for %r", provider)
        return token
