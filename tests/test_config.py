"""Tests for credential resolution and config-built providers."""

from __future__ import annotations

import pytest

from grantflow.config import ConfiguredProvider, ProviderConfig, resolve_credential
from grantflow.exceptions import ConfigError, RenderRequestError
from grantflow.grants.authorization_code.provider_ext import OidcSupportType, PkceSupportType


def _make_config(**overrides) -> ProviderConfig:
    data = {
        "name": "example",
        "client_id_source": "literal:CID",
        "client_secret_source": "literal:SECRET",
        "token_url": "https://auth.example.com/token",
    }
    data.update(overrides)
    return ProviderConfig.model_validate(data)


# ---------------------------------------------------------------------------
# resolve_credential
# ---------------------------------------------------------------------------


class TestResolveCredential:
    def test_env(self, monkeypatch):
        monkeypatch.setenv("GRANTFLOW_TEST_SECRET", "s3cret")
        assert resolve_credential("env:GRANTFLOW_TEST_SECRET") == "s3cret"

    def test_env_missing(self, monkeypatch):
        monkeypatch.delenv("GRANTFLOW_TEST_SECRET", raising=False)
        with pytest.raises(ConfigError, match="GRANTFLOW_TEST_SECRET"):
            resolve_credential("env:GRANTFLOW_TEST_SECRET")

    def test_file(self, tmp_path):
        secret_file = tmp_path / "secret.txt"
        secret_file.write_text("from-file\n")
        assert resolve_credential(f"file:{secret_file}") == "from-file"

    def test_file_missing(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            resolve_credential(f"file:{tmp_path / 'nope.txt'}")

    def test_literal(self):
        assert resolve_credential("literal:abc:def") == "abc:def"

    def test_unknown_source(self):
        with pytest.raises(ConfigError, match="Unknown credential source"):
            resolve_credential("keyring:foo")


# ---------------------------------------------------------------------------
# ProviderConfig
# ---------------------------------------------------------------------------


class TestProviderConfig:
    def test_build(self):
        provider = _make_config(scopes=["read:user"]).build()
        assert isinstance(provider, ConfiguredProvider)
        assert provider.name == "example"
        assert provider.client_id == "CID"
        assert provider.client_secret == "SECRET"
        assert provider.token_endpoint_url == "https://auth.example.com/token"
        assert provider.scopes_default() == ["read:user"]

    def test_public_client(self):
        provider = _make_config(client_secret_source=None).build()
        assert provider.client_secret is None
        assert provider.client_password() is None

    def test_build_unresolvable_source(self, monkeypatch):
        monkeypatch.delenv("GRANTFLOW_MISSING", raising=False)
        with pytest.raises(ConfigError):
            _make_config(client_id_source="env:GRANTFLOW_MISSING").build()

    def test_unknown_keys_kept(self):
        config = _make_config(docs_url="https://docs.example.com")
        assert config.model_extra == {"docs_url": "https://docs.example.com"}

    def test_unconfigured_urls_fail_at_use(self):
        provider = _make_config().build()
        with pytest.raises(RenderRequestError, match="authorization_url"):
            provider.authorization_endpoint_url
        with pytest.raises(RenderRequestError, match="device_authorization_url"):
            provider.device_authorization_endpoint_url
        with pytest.raises(RenderRequestError, match="assertion_source"):
            provider.assertion

    def test_switches(self):
        provider = _make_config(
            pkce=True, oidc=True, client_password_in_request_body=True
        ).build()
        assert provider.pkce_support_type() is PkceSupportType.YES
        assert provider.oidc_support_type() is OidcSupportType.YES
        assert provider.is_pkce_enabled()
        assert provider.is_oidc_enabled()
        assert provider.client_password_in_request_body()

    def test_defaults(self):
        provider = _make_config().build()
        assert provider.pkce_support_type() is None
        assert not provider.is_oidc_enabled()
        assert provider.scopes_default() is None
        assert provider.extra() is None
        assert provider.authorization_request_query_extra() is None

    def test_assertion_resolved_per_access(self, monkeypatch):
        provider = _make_config(assertion_source="env:GRANTFLOW_ASSERTION").build()
        monkeypatch.setenv("GRANTFLOW_ASSERTION", "jwt-1")
        assert provider.assertion == "jwt-1"
        monkeypatch.setenv("GRANTFLOW_ASSERTION", "jwt-2")
        assert provider.assertion == "jwt-2"

    def test_query_extra_and_extra(self):
        provider = _make_config(
            authorization_query_extra={"access_type": "offline"},
            extra={"tenant": "t1"},
        ).build()
        assert provider.authorization_request_query_extra() == {"access_type": "offline"}
        assert provider.extra() == {"tenant": "t1"}

    def test_repr_hides_credentials(self):
        assert "SECRET" not in repr(_make_config().build())
