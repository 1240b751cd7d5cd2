"""Shared test fixtures for grantflow.

Provides in-memory providers for every grant, a recording fake of the
HTTP client capability, and helpers for building JSON responses.  These
fixtures are automatically discovered by pytest and available to all
test modules without explicit imports.
"""

from __future__ import annotations

import enum
from typing import Any, Callable

import httpx
import pytest

from grantflow.grants.authorization_code.provider_ext import ProviderExtAuthorizationCodeGrant
from grantflow.grants.client_credentials.provider_ext import ProviderExtClientCredentialsGrant
from grantflow.grants.device_authorization.provider_ext import ProviderExtDeviceAuthorizationGrant
from grantflow.grants.jwt_bearer.provider_ext import ProviderExtJwtBearerGrant
from grantflow.grants.password.provider_ext import ProviderExtPasswordGrant

TOKEN_URL = "https://auth.example.com/token"
AUTHORIZATION_URL = "https://auth.example.com/authorize"
DEVICE_AUTHORIZATION_URL = "https://auth.example.com/device/code"
REDIRECT_URI = "https://client.example.com/cb"


class ExampleScope(str, enum.Enum):
    READ = "read"
    WRITE = "write"
    PROFILE = "profile"


# ---------------------------------------------------------------------------
# Providers
# ---------------------------------------------------------------------------


class _BaseTestProvider:
    def __init__(
        self,
        client_id: str | None = "CID",
        client_secret: str | None = "SECRET",
        scopes_default: list[Any] | None = None,
    ) -> None:
        self._client_id = client_id
        self._client_secret = client_secret
        self._scopes_default = scopes_default

    @property
    def client_id(self) -> str | None:
        return self._client_id

    @property
    def client_secret(self) -> str | None:
        return self._client_secret

    @property
    def token_endpoint_url(self) -> str:
        return TOKEN_URL

    def scopes_default(self) -> list[Any] | None:
        return self._scopes_default


class AuthCodeProvider(_BaseTestProvider, ProviderExtAuthorizationCodeGrant):
    @property
    def redirect_uri(self) -> str | None:
        return REDIRECT_URI

    @property
    def authorization_endpoint_url(self) -> str:
        return AUTHORIZATION_URL


class DeviceProvider(_BaseTestProvider, ProviderExtDeviceAuthorizationGrant):
    @property
    def device_authorization_endpoint_url(self) -> str:
        return DEVICE_AUTHORIZATION_URL


class ClientCredentialsProvider(_BaseTestProvider, ProviderExtClientCredentialsGrant):
    pass


class PasswordProvider(_BaseTestProvider, ProviderExtPasswordGrant):
    pass


class JwtProvider(_BaseTestProvider, ProviderExtJwtBearerGrant):
    @property
    def assertion(self) -> str:
        return "header.payload.signature"


@pytest.fixture()
def auth_code_provider() -> AuthCodeProvider:
    return AuthCodeProvider()


@pytest.fixture()
def device_provider() -> DeviceProvider:
    return DeviceProvider()


@pytest.fixture()
def client_credentials_provider() -> ClientCredentialsProvider:
    return ClientCredentialsProvider()


@pytest.fixture()
def password_provider() -> PasswordProvider:
    return PasswordProvider()


@pytest.fixture()
def jwt_provider() -> JwtProvider:
    return JwtProvider(client_secret=None)


@pytest.fixture()
def provider_classes() -> dict[str, type]:
    """Provider classes, for tests that need non-default construction."""
    return {
        "auth_code": AuthCodeProvider,
        "device": DeviceProvider,
        "client_credentials": ClientCredentialsProvider,
        "password": PasswordProvider,
        "jwt": JwtProvider,
        "scope": ExampleScope,
    }


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------


def json_response(data: Any, status_code: int = 200) -> httpx.Response:
    """Build an httpx.Response with a JSON body."""
    return httpx.Response(
        status_code=status_code,
        headers={"content-type": "application/json"},
        json=data,
    )


class RecordingClient:
    """Fake HttpClient that replays queued responses and records requests.

    Queued items that are exceptions are raised instead of returned.
    """

    def __init__(self, *responses: Any) -> None:
        self._responses = list(responses)
        self.requests: list[httpx.Request] = []

    async def respond(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture()
def make_client() -> Callable[..., RecordingClient]:
    return RecordingClient


@pytest.fixture()
def make_json_response() -> Callable[..., httpx.Response]:
    return json_response


@pytest.fixture()
def fake_sleep() -> Callable[[float], Any]:
    """Awaitable sleep replacement that records requested delays in ``.calls``."""

    calls: list[float] = []

    async def _sleep(delay: float) -> None:
        calls.append(delay)

    _sleep.calls = calls  # type: ignore[attr-defined]
    return _sleep


def form_of(request: httpx.Request) -> dict[str, str]:
    """Decode a form-encoded request body (first value per key)."""
    from urllib.parse import parse_qsl

    return dict(parse_qsl(request.content.decode("utf-8"), keep_blank_values=True))


@pytest.fixture()
def read_form() -> Callable[[httpx.Request], dict[str, str]]:
    return form_of
