"""OAuth2 Device Authorization Grant (:rfc:`8628`).

For browserless or input-constrained clients: the user is shown a code
and a URL to visit on another device while the client polls the token
endpoint.
"""

from grantflow.grants.device_authorization.device_access_token_endpoint import (
    MAX_RETRY_COUNT,
    DeviceAccessTokenEndpoint,
    DeviceAccessTokenRetryReason,
)
from grantflow.grants.device_authorization.device_authorization_endpoint import (
    DeviceAuthorizationEndpoint,
)
from grantflow.grants.device_authorization.flow import DeviceAuthorizationFlow
from grantflow.grants.device_authorization.provider_ext import ProviderExtDeviceAuthorizationGrant

__all__ = [
    "MAX_RETRY_COUNT",
    "DeviceAccessTokenEndpoint",
    "DeviceAccessTokenRetryReason",
    "DeviceAuthorizationEndpoint",
    "DeviceAuthorizationFlow",
    "ProviderExtDeviceAuthorizationGrant",
]
