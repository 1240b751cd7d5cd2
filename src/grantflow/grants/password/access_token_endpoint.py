"""Access token request of the password grant (RFC 6749 section 4.3.2)."""

from __future__ import annotations

from typing import Any, Iterable

import httpx

from grantflow.endpoint import (
    AccessTokenResponse,
    Endpoint,
    call_hook,
    client_authentication,
    form_request,
    merge_extra,
    parse_access_token_response,
    scopes_or_default,
)
from grantflow.grants.password.provider_ext import ProviderExtPasswordGrant
from grantflow.scope import ScopeParameter

GRANT_TYPE = "password"


class AccessTokenEndpoint(Endpoint[AccessTokenResponse]):
    """Exchange the resource owner's username and password for a token.

    Args:
        provider: The provider.
        username: Resource owner username.
        password: Resource owner password.
        scopes: Requested scopes; ``None`` falls back to
            ``provider.scopes_default()``.
    """

    def __init__(
        self,
        provider: ProviderExtPasswordGrant,
        username: str,
        password: str,
        scopes: Iterable[Any] | None = None,
    ) -> None:
        self.provider = provider
        self.username = username
        self.password = password
        self.scopes = list(scopes) if scopes is not None else None

    def __repr__(self) -> str:
        return f"AccessTokenEndpoint(username={self.username!r}, password='***')"

    def render_request(self) -> httpx.Request:
        in_body = self.provider.client_password_in_request_body()
        auth_fields, headers = client_authentication(self.provider, in_body)

        scopes = scopes_or_default(self.scopes, self.provider)
        body: dict[str, Any] = {
            "grant_type": GRANT_TYPE,
            "username": self.username,
            "password": self.password,
            "scope": ScopeParameter(scopes).to_wire() if scopes else None,
        }
        body.update(auth_fields)
        merge_extra(body, call_hook(self.provider.access_token_request_body_extra, body))
        return form_request(self.provider.token_endpoint_url, body, headers)

    def parse_response(self, response: httpx.Response) -> AccessTokenResponse:
        return parse_access_token_response(response, self.provider.scope_type)
