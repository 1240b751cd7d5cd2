"""JWT Profile for OAuth 2.0 Authorization Grants (:rfc:`7523`)."""

from grantflow.grants.jwt_bearer.access_token_endpoint import AccessTokenEndpoint
from grantflow.grants.jwt_bearer.flow import JwtBearerFlow
from grantflow.grants.jwt_bearer.provider_ext import ProviderExtJwtBearerGrant

__all__ = ["AccessTokenEndpoint", "JwtBearerFlow", "ProviderExtJwtBearerGrant"]
