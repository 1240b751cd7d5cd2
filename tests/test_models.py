"""Tests for the wire models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from grantflow.models import (
    AccessTokenResponseErrorBody,
    AccessTokenResponseSuccessfulBody,
    AccessTokenType,
    AuthorizationResponseErrorQuery,
    ClientPassword,
    DeviceAuthorizationResponseSuccessfulBody,
    ErrorKind,
    UserInfo,
)


class TestOpenEnums:
    def test_known_error_kind(self):
        assert ErrorKind("invalid_grant") is ErrorKind.INVALID_GRANT
        assert not ErrorKind.INVALID_GRANT.is_other

    def test_unknown_error_kind_is_other(self):
        kind = ErrorKind("bad_verification_code")
        assert kind.is_other
        assert kind.value == "bad_verification_code"
        assert kind == "bad_verification_code"

    def test_token_type_case_insensitive(self):
        assert AccessTokenType("Bearer") is AccessTokenType.BEARER
        assert AccessTokenType("MAC") is AccessTokenType.MAC

    def test_unknown_token_type(self):
        token_type = AccessTokenType("pop")
        assert token_type.is_other
        assert token_type.value == "pop"


class TestAccessTokenResponseSuccessfulBody:
    def test_minimal(self):
        body = AccessTokenResponseSuccessfulBody.model_validate({"access_token": "T"})
        assert body.access_token == "T"
        assert body.token_type is AccessTokenType.BEARER
        assert body.scope is None
        assert body.extra == {}

    def test_full(self):
        body = AccessTokenResponseSuccessfulBody.model_validate(
            {
                "access_token": "T",
                "token_type": "Bearer",
                "expires_in": 3600,
                "refresh_token": "R",
                "scope": "repo,gist",
                "id_token": "a.b.c",
            }
        )
        assert body.expires_in == 3600
        assert body.refresh_token == "R"
        assert list(body.scope) == ["repo", "gist"]
        assert body.id_token == "a.b.c"

    def test_scopes_alias(self):
        body = AccessTokenResponseSuccessfulBody.model_validate(
            {"access_token": "T", "scopes": ["a", "b"]}
        )
        assert body.scope.to_wire() == "a b"

    def test_extra_fields_preserved(self):
        body = AccessTokenResponseSuccessfulBody.model_validate(
            {"access_token": "T", "user_id": 42, "team": {"id": "X"}}
        )
        assert body.extra == {"user_id": 42, "team": {"id": "X"}}

    def test_unknown_token_type_accepted(self):
        body = AccessTokenResponseSuccessfulBody.model_validate(
            {"access_token": "T", "token_type": "DPoP"}
        )
        assert body.token_type.is_other
        assert body.model_dump()["token_type"] == "DPoP"

    def test_missing_access_token(self):
        with pytest.raises(ValidationError):
            AccessTokenResponseSuccessfulBody.model_validate({"token_type": "bearer"})


class TestErrorBodies:
    def test_error_body(self):
        body = AccessTokenResponseErrorBody.model_validate(
            {"error": "invalid_grant", "error_description": "expired", "hint": "x"}
        )
        assert body.error is ErrorKind.INVALID_GRANT
        assert body.error_description == "expired"
        assert body.extra == {"hint": "x"}

    def test_error_body_without_error_key(self):
        body = AccessTokenResponseErrorBody.model_validate({"message": "Bad Request"})
        assert body.error.is_other
        assert body.error.value == ""

    def test_authorization_error_query_keeps_state(self):
        query = AuthorizationResponseErrorQuery.model_validate(
            {"error": "access_denied", "state": "S"}
        )
        assert query.error is ErrorKind.ACCESS_DENIED
        assert query.state == "S"


class TestDeviceAuthorizationResponse:
    def test_verification_url_alias(self):
        body = DeviceAuthorizationResponseSuccessfulBody.model_validate(
            {
                "device_code": "D",
                "user_code": "U",
                "verification_url": "https://example.com/device",
                "expires_in": 900,
            }
        )
        assert body.verification_uri == "https://example.com/device"
        assert body.verification_uri_complete is None

    def test_interval_default(self):
        body = DeviceAuthorizationResponseSuccessfulBody.model_validate(
            {
                "device_code": "D",
                "user_code": "U",
                "verification_uri": "https://example.com/device",
                "expires_in": 900,
            }
        )
        assert body.interval is None
        assert body.interval_seconds == 5

    def test_interval_from_server(self):
        body = DeviceAuthorizationResponseSuccessfulBody.model_validate(
            {
                "device_code": "D",
                "user_code": "U",
                "verification_uri": "https://example.com/device",
                "expires_in": 900,
                "interval": 10,
            }
        )
        assert body.interval_seconds == 10


class TestUserInfo:
    def test_int_uid_becomes_str(self):
        assert UserInfo(uid=12345).uid == "12345"

    def test_defaults(self):
        info = UserInfo(uid="u")
        assert info.name is None
        assert info.email is None
        assert info.raw == {}


class TestClientPassword:
    def test_rfc6749_example(self):
        password = ClientPassword("s6BhdRkqt3", "7Fjfp0ZBr1KtDRbnfVdmIw")
        assert (
            password.header_authorization()
            == "Basic czZCaGRSa3F0Mzo3RmpmcDBaQnIxS3REUmJuZlZkbUl3"
        )

    def test_from_header_authorization(self):
        password = ClientPassword.from_header_authorization(
            "Basic czZCaGRSa3F0Mzo3RmpmcDBaQnIxS3REUmJuZlZkbUl3"
        )
        assert password == ClientPassword("s6BhdRkqt3", "7Fjfp0ZBr1KtDRbnfVdmIw")

    @pytest.mark.parametrize(
        "value",
        ["Bearer abc", "Basic", "Basic !!!notbase64", "Basic bm9jb2xvbg=="],
    )
    def test_from_header_authorization_rejects(self, value):
        with pytest.raises(ValueError):
            ClientPassword.from_header_authorization(value)
