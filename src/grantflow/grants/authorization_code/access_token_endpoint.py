"""Access token request of the authorization-code grant (RFC 6749 section 4.1.3)."""

from __future__ import annotations

from typing import Any

import httpx

from grantflow.endpoint import (
    AccessTokenResponse,
    Endpoint,
    call_hook,
    form_request,
    merge_extra,
    parse_token_response_via_hook,
    render_via_hook,
)
from grantflow.grants.authorization_code.provider_ext import ProviderExtAuthorizationCodeGrant

GRANT_TYPE = "authorization_code"


class AccessTokenEndpoint(Endpoint[AccessTokenResponse]):
    """Exchange an authorization code for a token.

    Args:
        provider: The provider.
        code: The ``code`` from the redirect query.
        code_verifier: PKCE verifier matching the challenge that was sent.
    """

    def __init__(
        self,
        provider: ProviderExtAuthorizationCodeGrant,
        code: str,
        code_verifier: str | None = None,
    ) -> None:
        self.provider = provider
        self.code = code
        self.code_verifier = code_verifier

    def body(self) -> dict[str, Any]:
        return {
            "grant_type": GRANT_TYPE,
            "code": self.code,
            "redirect_uri": self.provider.redirect_uri,
            "client_id": self.provider.client_id,
            "client_secret": self.provider.client_secret,
            "code_verifier": self.code_verifier,
        }

    def render_request(self) -> httpx.Request:
        body = self.body()
        merge_extra(body, call_hook(self.provider.access_token_request_body_extra, body))

        request = render_via_hook(self.provider.access_token_request_rendering, body)
        if request is not None:
            return request
        return form_request(self.provider.token_endpoint_url, body)

    def parse_response(self, response: httpx.Response) -> AccessTokenResponse:
        return parse_token_response_via_hook(
            response,
            self.provider.scope_type,
            self.provider.access_token_response_parsing,
        )
