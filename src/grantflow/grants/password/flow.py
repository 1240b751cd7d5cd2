"""Resource owner password credentials grant flow."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from grantflow.grants.base import Flow, access_token_or_raise, run_endpoint
from grantflow.grants.password.access_token_endpoint import AccessTokenEndpoint
from grantflow.grants.password.provider_ext import ProviderExtPasswordGrant
from grantflow.models import AccessTokenResponseSuccessfulBody

logger = logging.getLogger(__name__)


class PasswordFlow(Flow):
    """Obtain a token from the resource owner's credentials."""

    async def execute(
        self,
        provider: ProviderExtPasswordGrant,
        username: str,
        password: str,
        scopes: Iterable[Any] | None = None,
    ) -> AccessTokenResponseSuccessfulBody:
        """Request a token.

        Raises:
            EndpointFailed: If client credentials are missing or the
                response cannot be parsed.
            EndpointRespondFailed: If the HTTP client failed.
            AccessTokenFailed: If the token endpoint returned an error body.
        """
        endpoint = AccessTokenEndpoint(provider, username, password, scopes)
        body, response = await run_endpoint(self.client, endpoint, "access_token")
        token = access_token_or_raise(body, response)
        logger.info("Obtained access token (password) for %r", provider)
        return token
