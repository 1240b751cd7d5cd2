"""Provider extension for the client credentials grant (RFC 6749 section 4.4)."""

from __future__ import annotations

from typing import Any

import httpx

from grantflow.provider import Provider


class ProviderExtClientCredentialsGrant(Provider):
    """Client-credentials hooks of a provider.

    Client id and secret are both required; by default they are sent as
    an HTTP Basic ``Authorization`` header.
    """

    def client_password_in_request_body(self) -> bool:
        """Send ``client_id``/``client_secret`` as form fields instead of Basic auth."""
        return False

    def scopes_default(self) -> list[Any] | None:
        return None

    def access_token_request_body_extra(
        self, body: dict[str, Any]
    ) -> dict[str, Any] | None:
        return None

    def access_token_request_url_modifying(self, url: str) -> str | None:
        """Return a rewritten token endpoint URL for this request."""
        return None

    def access_token_request_modifying(
        self, request: httpx.Request
    ) -> httpx.Request | None:
        """Return a replacement for the fully rendered request."""
        return None
