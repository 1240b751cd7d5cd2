"""OAuth2 Resource Owner Password Credentials grant (:rfc:`6749` section 4.3)."""

from grantflow.grants.password.access_token_endpoint import AccessTokenEndpoint
from grantflow.grants.password.flow import PasswordFlow
from grantflow.grants.password.provider_ext import ProviderExtPasswordGrant

__all__ = ["AccessTokenEndpoint", "PasswordFlow", "ProviderExtPasswordGrant"]
