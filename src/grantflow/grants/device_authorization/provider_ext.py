"""Provider extension for the device authorization grant (RFC 8628)."""

from __future__ import annotations

from abc import abstractmethod
from typing import Any

import httpx

from grantflow.models import (
    DeviceAuthorizationResponseErrorBody,
    DeviceAuthorizationResponseSuccessfulBody,
)
from grantflow.provider import Provider


class ProviderExtDeviceAuthorizationGrant(Provider):
    """Device-grant facts and hooks of a provider.

    Required: :attr:`device_authorization_endpoint_url`.  The token
    endpoint polled afterwards is :attr:`Provider.token_endpoint_url`.
    """

    @property
    @abstractmethod
    def device_authorization_endpoint_url(self) -> str:
        """Return the absolute device authorization endpoint URL."""

    def scopes_default(self) -> list[Any] | None:
        return None

    def device_authorization_request_body_extra(self) -> dict[str, Any] | None:
        """Extra form fields for the device authorization request."""
        return None

    def device_authorization_request_rendering(
        self, body: dict[str, Any]
    ) -> httpx.Request | None:
        return None

    def device_authorization_response_parsing(
        self, response: httpx.Response
    ) -> DeviceAuthorizationResponseSuccessfulBody | DeviceAuthorizationResponseErrorBody | None:
        return None

    def device_access_token_request_body_extra(self) -> dict[str, Any] | None:
        """Extra form fields for every poll, e.g. ``client_secret`` for providers that want it."""
        return None
