"""Authorization-code grant flow.

The flow has two halves separated by a user-agent round trip:

1. :meth:`AuthorizationCodeFlow.build_authorization_url` (or
   :meth:`~AuthorizationCodeFlow.prepare_authorization`, which also
   generates state, nonce and PKCE verifier) produces the URL to send
   the user to.  No I/O.
2. :meth:`AuthorizationCodeFlow.handle_callback` parses the redirect
   query, checks ``state`` and exchanges the code at the token endpoint.

State, nonce and code verifier are caller-managed: the flow returns them
and expects them back, but never stores them.
"""

from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass
from typing import Any, Iterable

from grantflow.exceptions import (
    AuthorizationFailed,
    EndpointFailed,
    EndpointError,
    StateMismatch,
    StateMissing,
)
from grantflow.grants.authorization_code.access_token_endpoint import AccessTokenEndpoint
from grantflow.grants.authorization_code.authorization_endpoint import (
    AuthorizationEndpoint,
    parse_redirect_uri_query,
)
from grantflow.grants.authorization_code.provider_ext import ProviderExtAuthorizationCodeGrant
from grantflow.grants.base import Flow, access_token_or_raise, run_endpoint
from grantflow.models import (
    AccessTokenResponseSuccessfulBody,
    AuthorizationResponseErrorQuery,
    CodeChallengeMethod,
)
from grantflow.utils import code_challenge, gen_code_verifier, gen_nonce, gen_state

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthorizationSession:
    """What the caller must keep between the redirect and the callback.

    Attributes:
        url: Where to send the user agent.
        state: Value to pass as ``expected_state`` to ``handle_callback``.
        nonce: OIDC nonce, to check against the returned ID token.
        code_verifier: PKCE verifier, to pass back to ``handle_callback``.
    """

    url: str
    state: str
    nonce: str | None = None
    code_verifier: str | None = None


class AuthorizationCodeFlow(Flow):
    """Drive the authorization-code grant against an HTTP client."""

    def build_authorization_url(
        self,
        provider: ProviderExtAuthorizationCodeGrant,
        scopes: Iterable[Any] | None = None,
        state: str | None = None,
        nonce: str | None = None,
        code_challenge: str | None = None,
        code_challenge_method: CodeChallengeMethod = CodeChallengeMethod.S256,
    ) -> str:
        """Return the authorization URL to send the user agent to.

        Args:
            provider: The provider.
            scopes: Requested scopes, defaulting to ``provider.scopes_default()``.
            state: Anti-CSRF value; optional for native apps.
            nonce: OIDC nonce.
            code_challenge: PKCE challenge.
            code_challenge_method: PKCE method for *code_challenge*.

        Raises:
            EndpointFailed: If the URL cannot be rendered (phase
                ``"authorization"``).
        """
        endpoint = AuthorizationEndpoint(
            provider,
            scopes,
            state=state,
            code_challenge=code_challenge,
            code_challenge_method=code_challenge_method,
            nonce=nonce,
        )
        try:
            return endpoint.render_url()
        except EndpointError as exc:
            raise EndpointFailed(f"authorization: {exc.message}", "authorization") from exc

    def prepare_authorization(
        self,
        provider: ProviderExtAuthorizationCodeGrant,
        scopes: Iterable[Any] | None = None,
    ) -> AuthorizationSession:
        """Generate state (plus nonce and PKCE verifier when the provider supports them) and build the URL."""
        state = gen_state()
        nonce = gen_nonce() if provider.is_oidc_enabled() else None
        verifier = gen_code_verifier() if provider.is_pkce_enabled() else None
        url = self.build_authorization_url(
            provider,
            scopes,
            state=state,
            nonce=nonce,
            code_challenge=code_challenge(verifier) if verifier is not None else None,
        )
        return AuthorizationSession(url=url, state=state, nonce=nonce, code_verifier=verifier)

    async def handle_callback(
        self,
        provider: ProviderExtAuthorizationCodeGrant,
        query: str,
        expected_state: str | None = None,
        code_verifier: str | None = None,
    ) -> AccessTokenResponseSuccessfulBody:
        """Handle the redirect back to the client and obtain the token.

        Args:
            provider: The provider.
            query: Raw query string of the redirect URI.
            expected_state: The ``state`` that was issued, if any.
            code_verifier: PKCE verifier, if a challenge was sent.

        Returns:
            The successful token body.

        Raises:
            EndpointFailed: If the query cannot be parsed.
            AuthorizationFailed: If the redirect carries ``error``.
            StateMissing: If a state was issued but none came back.
            StateMismatch: If the returned state differs.
            EndpointRespondFailed: If the token request could not be sent.
            AccessTokenFailed: If the token endpoint returned an error body.
        """
        try:
            redirect = parse_redirect_uri_query(query)
        except EndpointError as exc:
            raise EndpointFailed(
                f"authorization_callback: {exc.message}", "authorization_callback"
            ) from exc

        if isinstance(redirect, AuthorizationResponseErrorQuery):
            raise AuthorizationFailed(redirect)

        if expected_state is not None:
            if redirect.state is None:
                raise StateMissing()
            if not hmac.compare_digest(
                redirect.state.encode("utf-8"), expected_state.encode("utf-8")
            ):
                logger.warning("State mismatch on callback for %r", provider)
                raise StateMismatch()

        return await self.exchange_code(provider, redirect.code, code_verifier=code_verifier)

    async def exchange_code(
        self,
        provider: ProviderExtAuthorizationCodeGrant,
        code: str,
        code_verifier: str | None = None,
    ) -> AccessTokenResponseSuccessfulBody:
        """Exchange *code* at the token endpoint.

        Raises:
            EndpointFailed: If the request cannot be rendered or the
                response parsed.
            EndpointRespondFailed: If the request could not be sent.
            AccessTokenFailed: If the token endpoint returned an error body.
        """
        endpoint = AccessTokenEndpoint(provider, code, code_verifier=code_verifier)
        body, response = await run_endpoint(self.client, endpoint, "access_token")
        token = access_token_or_raise(body, response, "access_token")
        logger.info("Obtained access token (authorization_code) for %r", provider)
        return token
