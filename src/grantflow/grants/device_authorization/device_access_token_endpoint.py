"""Device access token polling (RFC 8628 sections 3.4 and 3.5)."""

from __future__ import annotations


import httpx

from grantflow.endpoint import (
    AccessTokenResponse,
    RetryableEndpoint,
    RetryContext,
    RetryReason,
    call_hook,
    form_request,
    merge_extra,
    parse_access_token_response,
)
from grantflow.grants.device_authorization.provider_ext import ProviderExtDeviceAuthorizationGrant
from grantflow.models import (
    DEFAULT_DEVICE_POLL_INTERVAL,
    AccessTokenResponseErrorBody,
    ErrorKind,
)


GRANT_TYPE = "urn:ietf:params:oauth:grant-type:device_code"

# 360 polls at the 5 second floor cover the RFC's suggested 30 minute code lifetime.
MAX_RETRY_COUNT = 360


class DeviceAccessTokenRetryReason(RetryReason):
    AUTHORIZATION_PENDING = "authorization_pending"
    SLOW_DOWN = "slow_down"


class DeviceAccessTokenEndpoint(RetryableEndpoint[AccessTokenResponse]):
    """Poll the token endpoint with a device code.

    ``authorization_pending`` and ``slow_down`` answers are retry reasons;
    both wait the same ``interval``.  The interval is fixed when the
    endpoint is built and never below 5 seconds.

    Args:
        provider: The provider.
        device_code: ``device_code`` from the device authorization response.
        interval: Seconds between polls, as announced by the server.
    """

    max_retry_count = MAX_RETRY_COUNT

    def __init__(
        self,
        provider: ProviderExtDeviceAuthorizationGrant,
        device_code: str,
        interval: float = DEFAULT_DEVICE_POLL_INTERVAL,
    ) -> None:
        self.provider = provider
        self.device_code = device_code
        self.interval = max(float(interval), float(DEFAULT_DEVICE_POLL_INTERVAL))

    def render_request(self, retry: RetryContext | None = None) -> httpx.Request:
        body = {
            "grant_type": GRANT_TYPE,
            "device_code": self.device_code,
            "client_id": self.provider.client_id,
        }
        merge_extra(body, call_hook(self.provider.device_access_token_request_body_extra))
        return form_request(self.provider.token_endpoint_url, body)

    def parse_response(
        self, response: httpx.Response, retry: RetryContext | None = None
    ) -> AccessTokenResponse | DeviceAccessTokenRetryReason:
        body = parse_access_token_response(response, self.provider.scope_type)
        if isinstance(body, AccessTokenResponseErrorBody):
            if body.error == ErrorKind.AUTHORIZATION_PENDING:
                return DeviceAccessTokenRetryReason.AUTHORIZATION_PENDING
            if body.error == ErrorKind.SLOW_DOWN:
                return DeviceAccessTokenRetryReason.SLOW_DOWN
        return body

    def next_retry_in(self, retry: RetryContext) -> float:
        return self.interval
