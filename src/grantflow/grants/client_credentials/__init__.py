"""OAuth2 Client Credentials grant (:rfc:`6749` section 4.4)."""

from grantflow.grants.client_credentials.access_token_endpoint import AccessTokenEndpoint
from grantflow.grants.client_credentials.flow import ClientCredentialsFlow
from grantflow.grants.client_credentials.provider_ext import ProviderExtClientCredentialsGrant

__all__ = [
    "AccessTokenEndpoint",
    "ClientCredentialsFlow",
    "ProviderExtClientCredentialsGrant",
]
