"""Provider extension for the authorization-code grant (RFC 6749 section 4.1)."""

from __future__ import annotations

import enum
from abc import abstractmethod
from typing import Any

import httpx

from grantflow.endpoint import AccessTokenResponse
from grantflow.provider import Provider


class OidcSupportType(str, enum.Enum):
    """Whether the provider speaks OpenID Connect on this grant.

    ``FORCE`` means the provider always behaves as OIDC, so a nonce should
    be sent on every authorization request.
    """

    NO = "no"
    YES = "yes"
    FORCE = "force"


class PkceSupportType(str, enum.Enum):
    NO = "no"
    YES = "yes"


class ProviderExtAuthorizationCodeGrant(Provider):
    """Authorization-code facts and hooks of a provider.

    Required: :attr:`redirect_uri` and :attr:`authorization_endpoint_url`.
    Every other method is an optional hook returning ``None`` to keep the
    standard behaviour.
    """

    @property
    @abstractmethod
    def redirect_uri(self) -> str | None:
        """Return the registered redirect URI, or ``None`` to omit it."""

    @property
    @abstractmethod
    def authorization_endpoint_url(self) -> str:
        """Return the absolute authorization endpoint URL."""

    def oidc_support_type(self) -> OidcSupportType | None:
        return None

    def pkce_support_type(self) -> PkceSupportType | None:
        return None

    def scopes_default(self) -> list[Any] | None:
        """Scopes used when the caller requests none."""
        return None

    def authorization_request_query_extra(self) -> dict[str, Any] | None:
        """Extra query fields appended after the standard ones."""
        return None

    def authorization_request_query_serializing(
        self, query: dict[str, Any]
    ) -> str | None:
        """Serialize *query* yourself; return the encoded query string."""
        return None

    def authorization_request_url_modifying(self, url: str) -> str | None:
        """Return a rewritten authorization URL."""
        return None

    def access_token_request_body_extra(
        self, body: dict[str, Any]
    ) -> dict[str, Any] | None:
        """Extra form fields for the token request, given the standard *body*."""
        return None

    def access_token_request_rendering(
        self, body: dict[str, Any]
    ) -> httpx.Request | None:
        """Build the whole token request from the standard *body*."""
        return None

    def access_token_response_parsing(
        self, response: httpx.Response
    ) -> AccessTokenResponse | None:
        """Parse the token response yourself.

        Return an :class:`~grantflow.models.AccessTokenResponseSuccessfulBody`
        or an :class:`~grantflow.models.AccessTokenResponseErrorBody`.
        """
        return None

    def is_oidc_enabled(self) -> bool:
        return self.oidc_support_type() in (OidcSupportType.YES, OidcSupportType.FORCE)

    def is_pkce_enabled(self) -> bool:
        return self.pkce_support_type() == PkceSupportType.YES
