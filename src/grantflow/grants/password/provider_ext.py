"""Provider extension for the resource owner password credentials grant (RFC 6749 section 4.3)."""

from __future__ import annotations

from typing import Any

from grantflow.provider import Provider


class ProviderExtPasswordGrant(Provider):
    def client_password_in_request_body(self) -> bool:
        return False

    def scopes_default(self) -> list[Any] | None:
        return None

    def access_token_request_body_extra(
        self, body: dict[str, Any]
    ) -> dict[str, Any] | None:
        return None
