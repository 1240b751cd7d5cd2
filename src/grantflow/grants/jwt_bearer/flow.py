"""JWT bearer grant flow."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from grantflow.grants.base import Flow, access_token_or_raise, run_endpoint
from grantflow.grants.jwt_bearer.access_token_endpoint import AccessTokenEndpoint
from grantflow.grants.jwt_bearer.provider_ext import ProviderExtJwtBearerGrant
from grantflow.models import AccessTokenResponseSuccessfulBody

logger = logging.getLogger(__name__)


class JwtBearerFlow(Flow):
    """Obtain a token by presenting a signed JWT (e.g. a service account)."""

    async def execute(
        self,
        provider: ProviderExtJwtBearerGrant,
        scopes: Iterable[Any] | None = None,
    ) -> AccessTokenResponseSuccessfulBody:
        """Request a token.

        Raises:
            EndpointFailed: If the assertion is missing or the response
                cannot be parsed.
            EndpointRespondFailed: If the HTTP client failed.
            AccessTokenFailed: If the token endpoint returned an error body.
        """
        endpoint = AccessTokenEndpoint(provider, scopes)
        body, response = await run_endpoint(self.client, endpoint, "access_token")
        token = access_token_or_raise(body, response)
        logger.info("Obtained access token (jwt-bearer) for %r", provider)
        return token
