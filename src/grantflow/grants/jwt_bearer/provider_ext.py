"""Provider extension for the JWT bearer grant (RFC 7523 section 2.1)."""

from __future__ import annotations

from abc import abstractmethod
from typing import Any

import httpx

from grantflow.provider import Provider


class ProviderExtJwtBearerGrant(Provider):
    """JWT-bearer facts and hooks of a provider.

    Required: :attr:`assertion`, the signed JWT to present.  Signing is
    the provider's business; the engine sends the assertion verbatim.
    """

    @property
    @abstractmethod
    def assertion(self) -> str:
        """Return the signed JWT assertion."""

    def scopes_default(self) -> list[Any] | None:
        return None

    def access_token_request_body_extra(
        self, body: dict[str, Any]
    ) -> dict[str, Any] | None:
        return None

    def access_token_request_url_modifying(self, url: str) -> str | None:
        return None

    def access_token_request_modifying(
        self, request: httpx.Request
    ) -> httpx.Request | None:
        return None
