"""Device authorization request (RFC 8628 sections 3.1 and 3.2)."""

from __future__ import annotations

from typing import Any, Iterable

import httpx

from grantflow.endpoint import (
    Endpoint,
    call_hook,
    form_request,
    load_json_object,
    merge_extra,
    render_via_hook,
    scopes_or_default,
    validate_model,
)
from grantflow.exceptions import ParseResponseError
from grantflow.grants.device_authorization.provider_ext import ProviderExtDeviceAuthorizationGrant
from grantflow.models import (
    DeviceAuthorizationResponseErrorBody,
    DeviceAuthorizationResponseSuccessfulBody,
)
from grantflow.scope import ScopeParameter

DeviceAuthorizationResponse = (
    DeviceAuthorizationResponseSuccessfulBody | DeviceAuthorizationResponseErrorBody
)


class DeviceAuthorizationEndpoint(Endpoint[DeviceAuthorizationResponse]):
    """Ask for a device code and user code.

    Args:
        provider: The provider.
        scopes: Requested scopes; ``None`` falls back to
            ``provider.scopes_default()``.
    """

    def __init__(
        self,
        provider: ProviderExtDeviceAuthorizationGrant,
        scopes: Iterable[Any] | None = None,
    ) -> None:
        self.provider = provider
        self.scopes = list(scopes) if scopes is not None else None

    def body(self) -> dict[str, Any]:
        scopes = scopes_or_default(self.scopes, self.provider)
        return {
            "client_id": self.provider.client_id,
            "scope": ScopeParameter(scopes).to_wire() if scopes else None,
        }

    def render_request(self) -> httpx.Request:
        body = self.body()
        merge_extra(body, call_hook(self.provider.device_authorization_request_body_extra))

        request = render_via_hook(self.provider.device_authorization_request_rendering, body)
        if request is not None:
            return request
        return form_request(self.provider.device_authorization_endpoint_url, body)

    def parse_response(self, response: httpx.Response) -> DeviceAuthorizationResponse:
        body = call_hook(
            self.provider.device_authorization_response_parsing,
            response,
            error_cls=ParseResponseError,
        )
        if body is not None:
            if not isinstance(
                body, (DeviceAuthorizationResponseSuccessfulBody, DeviceAuthorizationResponseErrorBody)
            ):
                raise ParseResponseError(
                    f"Provider hook returned {type(body).__name__}, "
                    "expected a device authorization body",
                    status_code=response.status_code,
                )
            return body

        data = load_json_object(response)
        if response.is_success and "error" not in data:
            return validate_model(DeviceAuthorizationResponseSuccessfulBody, data, response)
        return validate_model(DeviceAuthorizationResponseErrorBody, data, response)
