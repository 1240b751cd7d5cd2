"""Tests for the endpoint request and response helpers."""

from __future__ import annotations

import httpx
import pytest

from grantflow.endpoint import (
    call_hook,
    client_authentication,
    form_request,
    load_json_object,
    merge_extra,
    modify_via_hook,
    parse_access_token_response,
    parse_token_response_via_hook,
    render_via_hook,
    scopes_or_default,
)
from grantflow.exceptions import ParseResponseError, RenderRequestError
from grantflow.models import (
    AccessTokenResponseErrorBody,
    AccessTokenResponseSuccessfulBody,
    ClientPassword,
    ErrorKind,
)


def _json_response(data, status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code=status_code,
        headers={"content-type": "application/json"},
        json=data,
    )


class TestFormRequest:
    def test_post_form(self, read_form):
        request = form_request(
            "https://auth.example.com/token", {"grant_type": "x", "scope": None, "n": 3}
        )
        assert request.method == "POST"
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert request.headers["Accept"] == "application/json"
        assert read_form(request) == {"grant_type": "x", "n": "3"}

    def test_booleans_lowercase(self, read_form):
        request = form_request("https://auth.example.com/token", {"a": True, "b": False})
        assert read_form(request) == {"a": "true", "b": "false"}

    def test_extra_headers(self):
        request = form_request(
            "https://auth.example.com/token", {}, {"Authorization": "Basic abc"}
        )
        assert request.headers["Authorization"] == "Basic abc"

    def test_invalid_url(self):
        with pytest.raises(RenderRequestError):
            form_request("https://auth.example.com/tok\nen", {"a": "b"})


class TestClientAuthentication:
    def test_basic_header(self, client_credentials_provider):
        fields, headers = client_authentication(client_credentials_provider, in_body=False)
        assert fields == {}
        assert headers["Authorization"].startswith("Basic ")

    def test_in_body(self, client_credentials_provider):
        fields, headers = client_authentication(client_credentials_provider, in_body=True)
        assert fields == {"client_id": "CID", "client_secret": "SECRET"}
        assert headers == {}

    def test_missing_secret(self, provider_classes):
        provider = provider_classes["client_credentials"](client_secret=None)
        with pytest.raises(RenderRequestError, match="client_secret"):
            client_authentication(provider, in_body=False)

    def test_missing_id(self, provider_classes):
        provider = provider_classes["client_credentials"](client_id=None)
        with pytest.raises(RenderRequestError, match="client_id"):
            client_authentication(provider, in_body=True)

    def test_uses_provider_client_password(self, provider_classes):
        class Provider(provider_classes["client_credentials"]):
            def client_password(self):
                return ClientPassword("other-id", "other-secret")

        fields, _ = client_authentication(Provider(), in_body=True)
        assert fields == {"client_id": "other-id", "client_secret": "other-secret"}


class TestMergeExtra:
    def test_appends(self):
        assert merge_extra({"a": 1}, {"b": 2}) == {"a": 1, "b": 2}

    def test_standard_fields_not_overridden(self):
        body = merge_extra({"grant_type": "password"}, {"grant_type": "other", "x": 1})
        assert body == {"grant_type": "password", "x": 1}

    def test_fills_unset_field(self):
        assert merge_extra({"scope": None}, {"scope": "a"}) == {"scope": "a"}

    def test_none_extra(self):
        assert merge_extra({"a": 1}, None) == {"a": 1}


class TestHooks:
    def test_call_hook_passes_result(self):
        assert call_hook(lambda x: x * 2, 21) == 42

    def test_call_hook_wraps_failure(self):
        def broken():
            raise KeyError("boom")

        with pytest.raises(RenderRequestError, match="broken") as exc_info:
            call_hook(broken)
        assert isinstance(exc_info.value.__cause__, KeyError)

    def test_call_hook_custom_error(self):
        def broken(response):
            raise ValueError("bad")

        with pytest.raises(ParseResponseError):
            call_hook(broken, None, error_cls=ParseResponseError)

    def test_render_via_hook_declines(self):
        assert render_via_hook(None, {}) is None
        assert render_via_hook(lambda body: None, {}) is None

    def test_render_via_hook_wrong_type(self):
        with pytest.raises(RenderRequestError, match="expected httpx.Request"):
            render_via_hook(lambda body: "GET /", {})

    def test_modify_via_hook(self):
        def rewrite_url(url):
            return url + "?tenant=1"

        def add_header(request):
            request.headers["X-Tenant"] = "1"
            return request

        request = modify_via_hook(
            rewrite_url, add_header, "https://auth.example.com/token", {"a": "b"}
        )
        assert request.url.params["tenant"] == "1"
        assert request.headers["X-Tenant"] == "1"

    def test_modify_via_hook_declines(self):
        request = modify_via_hook(
            lambda url: None, lambda req: None, "https://auth.example.com/token", {}
        )
        assert str(request.url) == "https://auth.example.com/token"

    def test_scopes_or_default(self, provider_classes):
        provider = provider_classes["client_credentials"](scopes_default=["a"])
        assert scopes_or_default(None, provider) == ["a"]
        assert scopes_or_default(["b"], provider) == ["b"]
        assert scopes_or_default([], provider) == []


class TestLoadJsonObject:
    def test_malformed_json(self):
        response = httpx.Response(200, content=b"<html>")
        with pytest.raises(ParseResponseError) as exc_info:
            load_json_object(response)
        assert exc_info.value.status_code == 200
        assert exc_info.value.body == b"<html>"

    def test_not_an_object(self):
        with pytest.raises(ParseResponseError, match="list"):
            load_json_object(_json_response([1, 2]))


class TestParseAccessTokenResponse:
    def test_success(self):
        body = parse_access_token_response(
            _json_response({"access_token": "T", "token_type": "bearer", "scope": "a b"})
        )
        assert isinstance(body, AccessTokenResponseSuccessfulBody)
        assert body.access_token == "T"

    def test_error_status(self):
        body = parse_access_token_response(
            _json_response({"error": "invalid_client"}, status_code=401)
        )
        assert isinstance(body, AccessTokenResponseErrorBody)
        assert body.error is ErrorKind.INVALID_CLIENT

    def test_error_key_wins_on_200(self):
        body = parse_access_token_response(
            _json_response({"error": "bad_verification_code", "access_token": "T"})
        )
        assert isinstance(body, AccessTokenResponseErrorBody)
        assert body.error.value == "bad_verification_code"

    def test_scope_cast_to_provider_type(self, provider_classes):
        scope_cls = provider_classes["scope"]
        body = parse_access_token_response(
            _json_response({"access_token": "T", "scope": "read,write"}), scope_cls
        )
        assert list(body.scope) == [scope_cls.READ, scope_cls.WRITE]

    def test_unknown_scope_for_type(self, provider_classes):
        with pytest.raises(ParseResponseError, match="admin"):
            parse_access_token_response(
                _json_response({"access_token": "T", "scope": "admin"}),
                provider_classes["scope"],
            )

    def test_success_body_missing_access_token(self):
        with pytest.raises(ParseResponseError):
            parse_access_token_response(_json_response({"token_type": "bearer"}))

    def test_hook_result_used(self):
        def parse(response):
            return AccessTokenResponseSuccessfulBody(access_token="from-hook")

        body = parse_token_response_via_hook(_json_response({}), str, parse)
        assert body.access_token == "from-hook"

    def test_hook_declines(self):
        body = parse_token_response_via_hook(
            _json_response({"access_token": "T"}), str, lambda response: None
        )
        assert body.access_token == "T"

    def test_hook_wrong_type(self):
        with pytest.raises(ParseResponseError, match="expected a token body"):
            parse_token_response_via_hook(
                _json_response({}), str, lambda response: {"access_token": "T"}
            )
