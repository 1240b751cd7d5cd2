"""Access token request of the client credentials grant (RFC 6749 section 4.4.2)."""

from __future__ import annotations

from typing import Any, Iterable

import httpx

from grantflow.endpoint import (
    AccessTokenResponse,
    Endpoint,
    call_hook,
    client_authentication,
    merge_extra,
    modify_via_hook,
    parse_access_token_response,
    scopes_or_default,
)
from grantflow.grants.client_credentials.provider_ext import ProviderExtClientCredentialsGrant
from grantflow.scope import ScopeParameter

GRANT_TYPE = "client_credentials"


class AccessTokenEndpoint(Endpoint[AccessTokenResponse]):
    """Obtain a token with the client's own credentials.

    Args:
        provider: The provider.
        scopes: Requested scopes; ``None`` falls back to
            ``provider.scopes_default()``.
    """

    def __init__(
        self,
        provider: ProviderExtClientCredentialsGrant,
        scopes: Iterable[Any] | None = None,
    ) -> None:
        self.provider = provider
        self.scopes = list(scopes) if scopes is not None else None

    def render_request(self) -> httpx.Request:
        in_body = self.provider.client_password_in_request_body()
        auth_fields, headers = client_authentication(self.provider, in_body)

        scopes = scopes_or_default(self.scopes, self.provider)
        body: dict[str, Any] = {
            "grant_type": GRANT_TYPE,
            "scope": ScopeParameter(scopes).to_wire() if scopes else None,
        }
        body.update(auth_fields)
        merge_extra(body, call_hook(self.provider.access_token_request_body_extra, body))

        return modify_via_hook(
            self.provider.access_token_request_url_modifying,
            self.provider.access_token_request_modifying,
            self.provider.token_endpoint_url,
            body,
            headers,
        )

    def parse_response(self, response: httpx.Response) -> AccessTokenResponse:
        return parse_access_token_response(response, self.provider.scope_type)
