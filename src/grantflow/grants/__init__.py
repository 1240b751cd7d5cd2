"""Per-grant endpoints, provider extensions and flows.

Each subpackage follows the same layout:

- ``provider_ext`` -- the ``ProviderExt*`` class a provider implements.
- ``*_endpoint`` -- the :class:`~grantflow.endpoint.Endpoint` implementations.
- ``flow`` -- the orchestrator driving the endpoints through an HTTP client.
"""

from grantflow.grants.authorization_code import AuthorizationCodeFlow
from grantflow.grants.client_credentials import ClientCredentialsFlow
from grantflow.grants.device_authorization import DeviceAuthorizationFlow
from grantflow.grants.jwt_bearer import JwtBearerFlow
from grantflow.grants.password import PasswordFlow

__all__ = [
    "AuthorizationCodeFlow",
    "ClientCredentialsFlow",
    "DeviceAuthorizationFlow",
    "JwtBearerFlow",
    "PasswordFlow",
]
