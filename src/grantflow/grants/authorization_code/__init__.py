"""Authorization-code grant (:rfc:`6749` section 4.1), with PKCE (:rfc:`7636`) and OIDC nonce support."""

from grantflow.grants.authorization_code.access_token_endpoint import AccessTokenEndpoint
from grantflow.grants.authorization_code.authorization_endpoint import (
    AuthorizationEndpoint,
    parse_redirect_uri_query,
)
from grantflow.grants.authorization_code.flow import AuthorizationCodeFlow, AuthorizationSession
from grantflow.grants.authorization_code.provider_ext import (
    OidcSupportType,
    PkceSupportType,
    ProviderExtAuthorizationCodeGrant,
)

__all__ = [
    "AccessTokenEndpoint",
    "AuthorizationCodeFlow",
    "AuthorizationEndpoint",
    "AuthorizationSession",
    "OidcSupportType",
    "PkceSupportType",
    "ProviderExtAuthorizationCodeGrant",
    "parse_redirect_uri_query",
]
