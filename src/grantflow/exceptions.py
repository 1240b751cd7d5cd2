"""Exception hierarchy for grantflow.

All exceptions inherit from :class:`GrantflowError`.  Endpoint-level
problems (:class:`RenderRequestError`, :class:`ParseResponseError`) are
raised by :class:`~grantflow.endpoint.Endpoint` implementations; the grant
flows translate them, together with transport failures and protocol error
bodies, into a :class:`FlowError` tagged with the ``phase`` that failed.

A protocol error body returned by the authorization server (for example
``invalid_grant``) is *not* an exception at the endpoint level: it is a
successfully parsed value.  Only the flows turn it into
:class:`AccessTokenFailed` / :class:`DeviceAuthorizationFailed`.

Subclass hierarchy::

    GrantflowError
    +-- ConfigError
    +-- ScopeFromStrError
    +-- EndpointError
    |   +-- RenderRequestError
    |   +-- ParseResponseError
    +-- TransportError
    +-- MaxRetriesReached
    +-- UserInfoError
    +-- FlowError
        +-- EndpointRespondFailed
        +-- EndpointFailed
        +-- AuthorizationFailed
        +-- StateMissing
        +-- StateMismatch
        +-- AccessTokenFailed
        +-- DeviceAuthorizationFailed
        +-- RetriesExhausted
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from grantflow.models import (
        AccessTokenResponseErrorBody,
        AuthorizationResponseErrorQuery,
    )


class GrantflowError(Exception):
    """Base exception for all grantflow errors.

    Args:
        message: Human-readable error description.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigError(GrantflowError):
    """Raised for configuration problems (bad credential sources, unknown providers)."""


class ScopeFromStrError(GrantflowError):
    """Raised when a scope token is not part of a provider's scope vocabulary."""


# ---------------------------------------------------------------------------
# Endpoint level
# ---------------------------------------------------------------------------


class EndpointError(GrantflowError):
    """Base class for errors raised while rendering or parsing an endpoint."""


class RenderRequestError(EndpointError):
    """Raised when a request cannot be built (missing client id, bad URL, failed hook).

    Always fatal for the attempt; never retried.
    """


class ParseResponseError(EndpointError):
    """Raised when a response does not match the expected shape.

    Args:
        message: Human-readable error description.
        status_code: HTTP status of the offending response, when known.
        body: Raw response body, when available.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: bytes | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class TransportError(GrantflowError):
    """Raised by an HTTP client when the request could not be completed."""


class MaxRetriesReached(GrantflowError):
    """Raised when a retryable endpoint exhausts its retry budget.

    Args:
        attempts: Number of requests that were issued.
    """

    def __init__(self, attempts: int):
        super().__init__(f"Reached max retry count after {attempts} attempts")
        self.attempts = attempts


class UserInfoError(GrantflowError):
    """Raised when the user-info extension fails.

    Args:
        message: Human-readable error description.
        phase: One of ``"build"``, ``"render"``, ``"respond"`` or ``"parse"``.
    """

    def __init__(self, message: str, phase: str):
        super().__init__(message)
        self.phase = phase


# ---------------------------------------------------------------------------
# Flow level
# ---------------------------------------------------------------------------


class FlowError(GrantflowError):
    """Base class for every grant flow failure.

    Args:
        message: Human-readable error description.
        phase: The flow step that failed (``"authorization"``,
            ``"authorization_callback"``, ``"access_token"``,
            ``"device_authorization"`` or ``"device_access_token"``).
    """

    def __init__(self, message: str, phase: str):
        super().__init__(message)
        self.phase = phase


class EndpointRespondFailed(FlowError):
    """The HTTP client failed while the flow was talking to an endpoint."""


class EndpointFailed(FlowError):
    """An endpoint could not render its request or parse the response."""


class AuthorizationFailed(FlowError):
    """The authorization redirect carried an ``error`` instead of a code.

    Args:
        query: The parsed error query from the redirect URI.
    """

    def __init__(self, query: AuthorizationResponseErrorQuery):
        super().__init__(
            f"Authorization failed: {query.error.value}", "authorization_callback"
        )
        self.query = query


class StateMissing(FlowError):
    """The callback did not carry ``state`` although one was issued."""

    def __init__(self) -> None:
        super().__init__("Callback is missing the 'state' parameter", "authorization_callback")


class StateMismatch(FlowError):
    """The callback ``state`` differs from the one that was issued."""

    def __init__(self) -> None:
        super().__init__("Callback 'state' does not match", "authorization_callback")


class _ErrorBodyFailed(FlowError):
    def __init__(
        self,
        message: str,
        phase: str,
        body: AccessTokenResponseErrorBody,
        status_code: int | None = None,
    ):
        detail = body.error.value
        if body.error_description:
            detail = f"{detail}: {body.error_description}"
        super().__init__(f"{message} ({detail})", phase)
        self.body = body
        self.status_code = status_code


class AccessTokenFailed(_ErrorBodyFailed):
    """The token endpoint returned a protocol error body.

    Args:
        body: The parsed :class:`~grantflow.models.AccessTokenResponseErrorBody`.
        phase: The flow step (``"access_token"`` or ``"device_access_token"``).
        status_code: HTTP status of the response, when known.
    """

    def __init__(
        self,
        body: AccessTokenResponseErrorBody,
        phase: str = "access_token",
        status_code: int | None = None,
    ):
        super().__init__("Access token request failed", phase, body, status_code)


class DeviceAuthorizationFailed(_ErrorBodyFailed):
    """The device authorization endpoint returned a protocol error body."""

    def __init__(
        self,
        body: AccessTokenResponseErrorBody,
        status_code: int | None = None,
    ):
        super().__init__(
            "Device authorization request failed", "device_authorization", body, status_code
        )


class RetriesExhausted(FlowError):
    """Device polling used up ``max_retry_count`` without a terminal answer.

    Args:
        attempts: Number of poll requests issued.
    """

    def __init__(self, attempts: int, phase: str = "device_access_token"):
        super().__init__(f"Polling exhausted after {attempts} attempts", phase)
        self.attempts = attempts
