"""Which grant produced an access token, and with what provider and scopes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from grantflow.grants.authorization_code.provider_ext import ProviderExtAuthorizationCodeGrant
from grantflow.grants.device_authorization.provider_ext import ProviderExtDeviceAuthorizationGrant


@dataclass(frozen=True)
class AuthorizationCodeGrantInfo:
    provider: ProviderExtAuthorizationCodeGrant
    authorization_request_scopes: list[Any] | None = field(default=None)


@dataclass(frozen=True)
class DeviceAuthorizationGrantInfo:
    provider: ProviderExtDeviceAuthorizationGrant
    authorization_request_scopes: list[Any] | None = field(default=None)


GrantInfo = AuthorizationCodeGrantInfo | DeviceAuthorizationGrantInfo
