"""Declare providers as data.

Most providers need no code: their endpoint URLs, client credentials and
a couple of switches describe them completely.  :class:`ProviderConfig`
captures that description and :meth:`ProviderConfig.build` turns it into
a :class:`ConfiguredProvider` usable with every grant flow.

* **Credential resolution** -- :func:`resolve_credential` reads secrets
  from environment variables, files, or inline literals, so configs can
  be committed without the secrets themselves.
* **Grant coverage** -- a configured provider implements every
  ``ProviderExt*`` class.  Using it with a grant whose URL is not
  configured fails with
  :class:`~grantflow.exceptions.RenderRequestError` when the request is
  rendered.

Reading config files is left to the caller; build configs in code or
from a dict with :meth:`ProviderConfig.model_validate`.

Example::

    github = ProviderConfig(
        name="github",
        client_id_source="env:GITHUB_CLIENT_ID",
        client_secret_source="env:GITHUB_CLIENT_SECRET",
        token_url="https://github.com/login/oauth/access_token",
        authorization_url="https://github.com/login/oauth/authorize",
        device_authorization_url="https://github.com/login/device/code",
        redirect_uri="https://client.example.com/auth/github/callback",
        scopes=["read:user"],
    ).build()
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from grantflow.exceptions import ConfigError, RenderRequestError
from grantflow.grants.authorization_code.provider_ext import (
    OidcSupportType,
    PkceSupportType,
    ProviderExtAuthorizationCodeGrant,
)
from grantflow.grants.client_credentials.provider_ext import ProviderExtClientCredentialsGrant
from grantflow.grants.device_authorization.provider_ext import ProviderExtDeviceAuthorizationGrant
from grantflow.grants.jwt_bearer.provider_ext import ProviderExtJwtBearerGrant
from grantflow.grants.password.provider_ext import ProviderExtPasswordGrant

logger = logging.getLogger(__name__)


# --- Credential resolution ---


def resolve_credential(source: str) -> str:
    """Resolve a credential from its source descriptor.

    Supported formats:
        - ``"env:VAR_NAME"`` -- reads ``os.environ["VAR_NAME"]``
        - ``"file:/path/to/file"`` -- reads file content, stripped of whitespace
        - ``"literal:value"`` -- the value itself (for public client ids)

    Args:
        source: The source descriptor string.

    Returns:
        The resolved credential string.

    Raises:
        ConfigError: If the source can't be resolved.
    """
    if source.startswith("env:"):
        var_name = source[4:]
        value = os.environ.get(var_name)
        if value is None:
            raise ConfigError(
                f"Environment variable '{var_name}' is not set (source: {source})"
            )
        return value

    if source.startswith("file:"):
        path = Path(source[5:]).expanduser()
        if not path.is_file():
            raise ConfigError(f"Credential file not found: {path} (source: {source})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc

    if source.startswith("literal:"):
        return source[8:]

    raise ConfigError(
        f"Unknown credential source '{source}'. "
        "Expected 'env:VAR', 'file:/path' or 'literal:value'"
    )


# --- Provider config ---


class ProviderConfig(BaseModel):
    """Data description of one provider.

    Unknown keys are kept in ``model_extra`` and ignored by the engine.
    """

    model_config = ConfigDict(extra="allow")

    name: str = Field(description="Registry key, e.g. 'github'")
    client_id_source: str | None = Field(
        default=None, description="Credential source for the client id"
    )
    client_secret_source: str | None = Field(
        default=None, description="Credential source for the client secret"
    )
    token_url: str = Field(description="Token endpoint URL")
    authorization_url: str | None = Field(
        default=None, description="Authorization endpoint URL (authorization-code grant)"
    )
    device_authorization_url: str | None = Field(
        default=None, description="Device authorization endpoint URL (device grant)"
    )
    redirect_uri: str | None = None
    scopes: list[str] = Field(default_factory=list, description="Default scopes")
    client_password_in_request_body: bool = Field(
        default=False,
        description="Send client credentials as form fields instead of HTTP Basic",
    )
    pkce: bool = False
    oidc: bool = False
    assertion_source: str | None = Field(
        default=None, description="Credential source for the JWT bearer assertion"
    )
    authorization_query_extra: dict[str, str] = Field(default_factory=dict)
    extra: dict[str, Any] = Field(
        default_factory=dict, description="Opaque data available as provider.extra()"
    )

    def build(self) -> ConfiguredProvider:
        """Resolve credentials and return the provider.

        Raises:
            ConfigError: If a credential source cannot be resolved.
        """
        client_id = resolve_credential(self.client_id_source) if self.client_id_source else None
        client_secret = (
            resolve_credential(self.client_secret_source) if self.client_secret_source else None
        )
        logger.debug("Built provider '%s' (client_id set: %s)", self.name, client_id is not None)
        return ConfiguredProvider(self, client_id, client_secret)


class ConfiguredProvider(
    ProviderExtAuthorizationCodeGrant,
    ProviderExtDeviceAuthorizationGrant,
    ProviderExtClientCredentialsGrant,
    ProviderExtPasswordGrant,
    ProviderExtJwtBearerGrant,
):
    """Provider built from a :class:`ProviderConfig`.

    Args:
        config: The source configuration.
        client_id: Resolved client id.
        client_secret: Resolved client secret.
    """

    def __init__(
        self,
        config: ProviderConfig,
        client_id: str | None = None,
        client_secret: str | None = None,
    ) -> None:
        self._config = config
        self._client_id = client_id
        self._client_secret = client_secret

    @property
    def name(self) -> str:
        return self._config.name

    @property
    def client_id(self) -> str | None:
        return self._client_id

    @property
    def client_secret(self) -> str | None:
        return self._client_secret

    @property
    def token_endpoint_url(self) -> str:
        return self._config.token_url

    def extra(self) -> dict[str, Any] | None:
        return dict(self._config.extra) or None

    @property
    def redirect_uri(self) -> str | None:
        return self._config.redirect_uri

    @property
    def authorization_endpoint_url(self) -> str:
        return self._require("authorization_url", self._config.authorization_url)

    @property
    def device_authorization_endpoint_url(self) -> str:
        return self._require("device_authorization_url", self._config.device_authorization_url)

    @property
    def assertion(self) -> str:
        if self._config.assertion_source is None:
            raise RenderRequestError(f"Provider '{self.name}' has no assertion_source configured")
        # Resolved per request: assertions are short-lived.
        return resolve_credential(self._config.assertion_source)

    def scopes_default(self) -> list[Any] | None:
        return list(self._config.scopes) or None

    def client_password_in_request_body(self) -> bool:
        return self._config.client_password_in_request_body

    def oidc_support_type(self) -> OidcSupportType | None:
        return OidcSupportType.YES if self._config.oidc else None

    def pkce_support_type(self) -> PkceSupportType | None:
        return PkceSupportType.YES if self._config.pkce else None

    def authorization_request_query_extra(self) -> dict[str, Any] | None:
        return dict(self._config.authorization_query_extra) or None

    def _require(self, field: str, value: str | None) -> str:
        if value is None:
            raise RenderRequestError(f"Provider '{self.name}' has no {field} configured")
        return value

    def __repr__(self) -> str:
        return f"ConfiguredProvider(name={self.name!r})"
