"""Access token request of the JWT bearer grant (RFC 7523 section 2.1)."""

from __future__ import annotations

from typing import Any, Iterable

import httpx

from grantflow.endpoint import (
    AccessTokenResponse,
    Endpoint,
    call_hook,
    merge_extra,
    modify_via_hook,
    parse_access_token_response,
    scopes_or_default,
)
from grantflow.exceptions import GrantflowError, RenderRequestError
from grantflow.grants.jwt_bearer.provider_ext import ProviderExtJwtBearerGrant
from grantflow.scope import ScopeParameter

GRANT_TYPE = "urn:ietf:params:oauth:grant-type:jwt-bearer"


class AccessTokenEndpoint(Endpoint[AccessTokenResponse]):
    """Exchange the provider's JWT assertion for a token.

    Args:
        provider: The provider.
        scopes: Requested scopes; ``None`` falls back to
            ``provider.scopes_default()``.
    """

    def __init__(
        self,
        provider: ProviderExtJwtBearerGrant,
        scopes: Iterable[Any] | None = None,
    ) -> None:
        self.provider = provider
        self.scopes = list(scopes) if scopes is not None else None

    def render_request(self) -> httpx.Request:
        try:
            assertion = self.provider.assertion
        except GrantflowError as exc:
            raise RenderRequestError(f"Cannot obtain JWT assertion: {exc}") from exc
        if not assertion:
            raise RenderRequestError("JWT bearer grant requires an assertion")

        scopes = scopes_or_default(self.scopes, self.provider)
        body: dict[str, Any] = {
            "grant_type": GRANT_TYPE,
            "assertion": assertion,
            "scope": ScopeParameter(scopes).to_wire() if scopes else None,
            "client_id": self.provider.client_id,
        }
        merge_extra(body, call_hook(self.provider.access_token_request_body_extra, body))

        return modify_via_hook(
            self.provider.access_token_request_url_modifying,
            self.provider.access_token_request_modifying,
            self.provider.token_endpoint_url,
            body,
        )

    def parse_response(self, response: httpx.Response) -> AccessTokenResponse:
        return parse_access_token_response(response, self.provider.scope_type)
