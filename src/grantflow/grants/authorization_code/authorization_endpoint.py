"""Authorization request (RFC 6749 section 4.1.1) and redirect parsing (4.1.2)."""

from __future__ import annotations

import logging
from typing import Any, Iterable
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import httpx

from grantflow.endpoint import (
    Endpoint,
    call_hook,
    scopes_or_default,
    validate_model,
    wire_value,
)
from grantflow.exceptions import ParseResponseError, RenderRequestError
from grantflow.grants.authorization_code.provider_ext import ProviderExtAuthorizationCodeGrant
from grantflow.models import (
    AuthorizationResponseErrorQuery,
    AuthorizationResponseSuccessfulQuery,
    CodeChallengeMethod,
)
from grantflow.scope import ScopeParameter

logger = logging.getLogger(__name__)

RedirectQuery = AuthorizationResponseSuccessfulQuery | AuthorizationResponseErrorQuery


class AuthorizationEndpoint(Endpoint[RedirectQuery]):
    """The URL the user agent is sent to.

    The request is never sent by the engine; :meth:`render_url` is what
    callers use.  :meth:`parse_response` reads the ``Location`` of a
    redirect answer, for callers that drive the user agent themselves.

    Args:
        provider: The provider.
        scopes: Requested scopes; ``None`` falls back to
            ``provider.scopes_default()``.
        state: Opaque anti-CSRF value to round-trip.
        code_challenge: PKCE challenge.
        code_challenge_method: PKCE method, sent only with a challenge.
        nonce: OIDC nonce.
    """

    def __init__(
        self,
        provider: ProviderExtAuthorizationCodeGrant,
        scopes: Iterable[Any] | None = None,
        state: str | None = None,
        code_challenge: str | None = None,
        code_challenge_method: CodeChallengeMethod = CodeChallengeMethod.S256,
        nonce: str | None = None,
    ) -> None:
        self.provider = provider
        self.scopes = list(scopes) if scopes is not None else None
        self.state = state
        self.code_challenge = code_challenge
        self.code_challenge_method = code_challenge_method
        self.nonce = nonce

    def query(self) -> dict[str, Any]:
        """Return the standard query fields in wire order, extras last.

        Raises:
            RenderRequestError: If the provider has no client id.
        """
        client_id = self.provider.client_id
        if client_id is None:
            raise RenderRequestError("Authorization request requires a client_id")

        query: dict[str, Any] = {"response_type": "code", "client_id": client_id}
        if self.provider.redirect_uri is not None:
            query["redirect_uri"] = self.provider.redirect_uri
        scopes = scopes_or_default(self.scopes, self.provider)
        if scopes:
            query["scope"] = ScopeParameter(scopes).to_wire()
        if self.state is not None:
            query["state"] = self.state
        if self.code_challenge is not None:
            query["code_challenge"] = self.code_challenge
            query["code_challenge_method"] = CodeChallengeMethod(
                self.code_challenge_method
            ).value
        if self.nonce is not None:
            query["nonce"] = self.nonce

        extra = call_hook(self.provider.authorization_request_query_extra)
        for key, value in (extra or {}).items():
            query.setdefault(key, wire_value(value))
        return query

    def render_url(self) -> str:
        """Return the full authorization URL.

        The rendered query replaces any query already present on the
        provider's authorization endpoint URL.

        Raises:
            RenderRequestError: On a missing client id or a failed hook.
        """
        query = self.query()
        query_str = call_hook(self.provider.authorization_request_query_serializing, query)
        if query_str is None:
            query_str = urlencode(query, doseq=True)

        parts = urlsplit(self.provider.authorization_endpoint_url)
        if not parts.scheme or not parts.netloc:
            raise RenderRequestError(
                f"Invalid authorization endpoint URL: {self.provider.authorization_endpoint_url!r}"
            )
        url = urlunsplit((parts.scheme, parts.netloc, parts.path, query_str, parts.fragment))

        modified = call_hook(self.provider.authorization_request_url_modifying, url)
        if modified is not None:
            url = modified
        logger.debug("Authorization URL rendered for %s", parts.netloc)
        return url

    def render_request(self) -> httpx.Request:
        return httpx.Request("GET", self.render_url())

    def parse_response(self, response: httpx.Response) -> RedirectQuery:
        location = response.headers.get("Location")
        if not response.is_redirect or not location:
            raise ParseResponseError(
                "Authorization endpoint did not redirect",
                status_code=response.status_code,
            )
        return parse_redirect_uri_query(urlsplit(location).query)


def parse_redirect_uri_query(query: str) -> RedirectQuery:
    """Parse the query of the redirect back to the client.

    A query with an ``error`` key is an error query; anything else must
    carry ``code``.

    Raises:
        ParseResponseError: If the query is neither shape.
    """
    if query.startswith("?"):
        query = query[1:]
    data = dict(parse_qsl(query, keep_blank_values=True))
    if "error" in data:
        return validate_model(AuthorizationResponseErrorQuery, data)
    return validate_model(AuthorizationResponseSuccessfulQuery, data)
