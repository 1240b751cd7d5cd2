"""Wire models shared by every grant.

Everything the engine reads from an authorization server is parsed into
one of these Pydantic v2 models:

**Token endpoint** (RFC 6749 section 5):
    :class:`AccessTokenResponseSuccessfulBody` and
    :class:`AccessTokenResponseErrorBody`, with :class:`AccessTokenType`
    and the open :class:`ErrorKind` vocabulary.

**Authorization redirect** (RFC 6749 section 4.1.2):
    :class:`AuthorizationResponseSuccessfulQuery` and
    :class:`AuthorizationResponseErrorQuery`.

**Device authorization** (RFC 8628 section 3.2):
    :class:`DeviceAuthorizationResponseSuccessfulBody`.

**User info**: :class:`UserInfo`.

Bodies that providers routinely extend use ``extra="allow"``; unknown keys
are preserved and exposed through the ``extra`` property.
"""

from __future__ import annotations

import base64
import binascii
import enum
from dataclasses import dataclass
from typing import Annotated, Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    PlainValidator,
    field_validator,
)

from grantflow.scope import ScopeParameter

DEFAULT_DEVICE_POLL_INTERVAL = 5


# --- Open enums ---


class _OpenStrEnum(str, enum.Enum):
    """String enum that accepts unknown values as an ``OTHER`` pseudo-member."""

    @classmethod
    def _missing_(cls, value: object) -> Any:
        if not isinstance(value, str):
            return None
        member = str.__new__(cls, value)
        member._name_ = "OTHER"
        member._value_ = value
        return member

    @property
    def is_other(self) -> bool:
        return self._name_ == "OTHER"


class AccessTokenType(_OpenStrEnum):
    """``token_type`` of a token response (RFC 6749 section 7.1)."""

    BEARER = "bearer"
    MAC = "mac"

    @classmethod
    def _missing_(cls, value: object) -> Any:
        if isinstance(value, str) and value.lower() in ("bearer", "mac"):
            return cls(value.lower())
        return super()._missing_(value)


class ErrorKind(_OpenStrEnum):
    """``error`` code of an error response.

    Covers RFC 6749 sections 4.1.2.1 and 5.2 and RFC 8628 section 3.5.
    Any other code parses to an ``OTHER`` member carrying the code as its
    value, so provider-specific codes never fail to parse.
    """

    INVALID_REQUEST = "invalid_request"
    INVALID_CLIENT = "invalid_client"
    INVALID_GRANT = "invalid_grant"
    UNAUTHORIZED_CLIENT = "unauthorized_client"
    UNSUPPORTED_GRANT_TYPE = "unsupported_grant_type"
    INVALID_SCOPE = "invalid_scope"
    UNSUPPORTED_RESPONSE_TYPE = "unsupported_response_type"
    ACCESS_DENIED = "access_denied"
    SERVER_ERROR = "server_error"
    TEMPORARILY_UNAVAILABLE = "temporarily_unavailable"
    AUTHORIZATION_PENDING = "authorization_pending"
    SLOW_DOWN = "slow_down"
    EXPIRED_TOKEN = "expired_token"


def _open_enum_field(enum_cls: type[_OpenStrEnum]) -> Any:
    def validate(value: Any) -> _OpenStrEnum:
        if isinstance(value, enum_cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"{enum_cls.__name__} must be a string, got {value!r}")
        return enum_cls(value)

    return Annotated[
        enum_cls,
        PlainValidator(validate),
        PlainSerializer(lambda member: member.value, return_type=str),
    ]


AccessTokenTypeField = _open_enum_field(AccessTokenType)
ErrorKindField = _open_enum_field(ErrorKind)


class CodeChallengeMethod(str, enum.Enum):
    """PKCE ``code_challenge_method`` (RFC 7636 section 4.2)."""

    S256 = "S256"
    PLAIN = "plain"


# --- Token endpoint ---


class AccessTokenResponseSuccessfulBody(BaseModel):
    """Successful token response (RFC 6749 section 5.1).

    ``scope`` is also accepted under the key ``scopes``.  The parsed scope
    holds string tokens; :func:`grantflow.endpoint.parse_access_token_response`
    casts it to the provider's scope type.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    access_token: str
    token_type: AccessTokenTypeField = AccessTokenType.BEARER
    expires_in: int | None = None
    refresh_token: str | None = None
    scope: ScopeParameter | None = Field(
        default=None, validation_alias=AliasChoices("scope", "scopes")
    )
    id_token: str | None = None

    @property
    def extra(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


class AccessTokenResponseErrorBody(BaseModel):
    """Error response (RFC 6749 section 5.2).

    A body without an ``error`` key parses with an empty ``OTHER`` code.
    """

    model_config = ConfigDict(extra="allow")

    error: ErrorKindField = Field(default_factory=lambda: ErrorKind(""))
    error_description: str | None = None
    error_uri: str | None = None

    @property
    def extra(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


DeviceAuthorizationResponseErrorBody = AccessTokenResponseErrorBody


# --- Authorization redirect ---


class AuthorizationResponseSuccessfulQuery(BaseModel):
    """Query carried by a successful authorization redirect."""

    model_config = ConfigDict(extra="allow")

    code: str
    state: str | None = None


class AuthorizationResponseErrorQuery(AccessTokenResponseErrorBody):
    """Query carried by a failed authorization redirect."""

    state: str | None = None


# --- Device authorization ---


class DeviceAuthorizationResponseSuccessfulBody(BaseModel):
    """Device authorization response (RFC 8628 section 3.2).

    ``verification_uri`` is also accepted as ``verification_url``, which
    some providers send instead.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    device_code: str
    user_code: str
    verification_uri: str = Field(
        validation_alias=AliasChoices("verification_uri", "verification_url")
    )
    verification_uri_complete: str | None = None
    expires_in: int
    interval: int | None = None

    @property
    def interval_seconds(self) -> int:
        """Polling interval, falling back to the RFC default of 5 seconds."""
        if self.interval is None:
            return DEFAULT_DEVICE_POLL_INTERVAL
        return self.interval

    @property
    def extra(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


# --- User info ---


class UserInfo(BaseModel):
    """Normalized user profile.

    Attributes:
        uid: Provider-scoped user identifier.
        name: Display name, when the provider exposes one.
        email: Email address, when the provider exposes one.
        raw: The untouched provider payload.
    """

    uid: str
    name: str | None = None
    email: str | None = None
    raw: dict[str, Any] = Field(default_factory=dict)

    @field_validator("uid", mode="before")
    @classmethod
    def _uid_to_str(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


# --- Client authentication ---


@dataclass(frozen=True)
class ClientPassword:
    """Client id and secret used for HTTP Basic client authentication.

    Example::

        ClientPassword("s6BhdRkqt3", "7Fjfp0ZBr1KtDRbnfVdmIw").header_authorization()
        # 'Basic czZCaGRSa3F0Mzo3RmpmcDBaQnIxS3REUmJuZlZkbUl3'
    """

    client_id: str
    client_secret: str

    def header_authorization(self) -> str:
        raw = f"{self.client_id}:{self.client_secret}".encode("utf-8")
        return "Basic " + base64.b64encode(raw).decode("ascii")

    @classmethod
    def from_header_authorization(cls, value: str) -> ClientPassword:
        """Decode an ``Authorization: Basic ...`` header value.

        Raises:
            ValueError: If *value* is not a well-formed Basic credential.
        """
        scheme, _, encoded = value.partition(" ")
        if scheme.lower() != "basic" or not encoded:
            raise ValueError("Not a Basic authorization header")
        try:
            decoded = base64.b64decode(encoded, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as exc:
            raise ValueError("Invalid Basic credential encoding") from exc
        client_id, sep, client_secret = decoded.partition(":")
        if not sep:
            raise ValueError("Basic credential is missing ':'")
        return cls(client_id, client_secret)
