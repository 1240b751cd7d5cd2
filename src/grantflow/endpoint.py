"""The request/response contract shared by every grant.

An :class:`Endpoint` turns its explicit inputs into an
:class:`httpx.Request` (:meth:`~Endpoint.render_request`) and turns the
:class:`httpx.Response` into a typed output
(:meth:`~Endpoint.parse_response`).  Neither method performs I/O or keeps
mutable state, so flows can re-run them freely.

:class:`RetryableEndpoint` is the polling variant used by the device
grant: the retry progress lives in an immutable :class:`RetryContext`
passed into each call, and a recognized "keep polling" answer is returned
as a :class:`RetryReason` member rather than raised.

The module also hosts the helpers every token endpoint uses to build
form-encoded requests and to parse token responses with the RFC 6749
discriminator (a body with an ``error`` key is always an error body).

See Also:
    :mod:`grantflow.client.runner` for the loops that drive endpoints
    against an HTTP client.
"""

from __future__ import annotations

import enum
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Generic, Mapping, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from grantflow.exceptions import (
    ParseResponseError,
    RenderRequestError,
    ScopeFromStrError,
)
from grantflow.models import (
    AccessTokenResponseErrorBody,
    AccessTokenResponseSuccessfulBody,
)

logger = logging.getLogger(__name__)

O = TypeVar("O")
M = TypeVar("M", bound=BaseModel)

MIME_FORM = "application/x-www-form-urlencoded"
MIME_JSON = "application/json"

AccessTokenResponse = AccessTokenResponseSuccessfulBody | AccessTokenResponseErrorBody


# ---------------------------------------------------------------------------
# Contract
# ---------------------------------------------------------------------------


class Endpoint(ABC, Generic[O]):
    """One HTTP request/response pair of a grant."""

    @abstractmethod
    def render_request(self) -> httpx.Request:
        """Build the request.

        Raises:
            RenderRequestError: If a required input is missing or a
                provider hook fails.
        """

    @abstractmethod
    def parse_response(self, response: httpx.Response) -> O:
        """Parse *response* into the endpoint output.

        Raises:
            ParseResponseError: If the response does not have the
                expected shape.
        """


class RetryReason(enum.Enum):
    """Base class for the "keep polling" answers of a retryable endpoint."""


@dataclass(frozen=True)
class RetryContext:
    """Progress of a retry loop.

    Attributes:
        count: Number of attempts already made.
        reason: Why the last attempt asked for a retry.
    """

    count: int
    reason: RetryReason


class RetryableEndpoint(ABC, Generic[O]):
    """An endpoint the protocol polls until it yields a terminal answer.

    ``max_retry_count`` bounds the total number of requests issued.
    """

    max_retry_count: int = 3

    @abstractmethod
    def render_request(self, retry: RetryContext | None = None) -> httpx.Request:
        """Build the request for the next attempt."""

    @abstractmethod
    def parse_response(
        self, response: httpx.Response, retry: RetryContext | None = None
    ) -> O | RetryReason:
        """Parse *response* into an output, or a :class:`RetryReason` to poll again."""

    @abstractmethod
    def next_retry_in(self, retry: RetryContext) -> float:
        """Return how many seconds to wait before the next attempt."""


# ---------------------------------------------------------------------------
# Request helpers
# ---------------------------------------------------------------------------


def form_request(
    url: str,
    body: Mapping[str, Any],
    headers: Mapping[str, str] | None = None,
) -> httpx.Request:
    """Build a form-encoded POST that asks for a JSON answer.

    ``None`` values are left out; booleans are sent as ``true``/``false``
    and everything else as ``str``, in insertion order.

    Raises:
        RenderRequestError: If *url* is not a valid absolute URL.
    """
    data = {key: str(wire_value(value)) for key, value in body.items() if value is not None}
    merged_headers = {"Content-Type": MIME_FORM, "Accept": MIME_JSON}
    merged_headers.update(headers or {})
    try:
        return httpx.Request("POST", url, data=data, headers=merged_headers)
    except (httpx.InvalidURL, httpx.UnsupportedProtocol, TypeError) as exc:
        raise RenderRequestError(f"Cannot build request for {url!r}: {exc}") from exc


def wire_value(value: Any) -> Any:
    """Spell booleans the way OAuth servers expect them; leave anything else as is."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def client_authentication(
    provider: Any, in_body: bool
) -> tuple[dict[str, str], dict[str, str]]:
    """Authenticate the client with id and secret (RFC 6749 section 2.3.1).

    Args:
        provider: The provider holding the client credentials.
        in_body: Send ``client_id``/``client_secret`` as form fields
            instead of an HTTP Basic ``Authorization`` header.

    Returns:
        A tuple of ``(body fields, headers)``.

    Raises:
        RenderRequestError: If the client id or secret is missing.
    """
    password = provider.client_password()
    if password is None:
        if provider.client_id is None:
            raise RenderRequestError("Client authentication requires a client_id")
        raise RenderRequestError("Client authentication requires a client_secret")
    if in_body:
        return {"client_id": password.client_id, "client_secret": password.client_secret}, {}
    return {}, {"Authorization": password.header_authorization()}


def merge_extra(body: dict[str, Any], extra: Mapping[str, Any] | None) -> dict[str, Any]:
    """Append provider extra fields to *body* without replacing standard ones."""
    for key, value in (extra or {}).items():
        if key in body and body[key] is not None:
            logger.debug("Ignoring extra field '%s': already set", key)
            continue
        body[key] = value
    return body


def call_hook(
    hook: Callable[..., Any],
    *args: Any,
    error_cls: type[Exception] = RenderRequestError,
) -> Any:
    """Run a provider hook, wrapping any failure into *error_cls*."""
    try:
        return hook(*args)
    except Exception as exc:
        name = getattr(hook, "__name__", repr(hook))
        raise error_cls(f"Provider hook '{name}' failed: {exc}") from exc


# ---------------------------------------------------------------------------
# Response helpers
# ---------------------------------------------------------------------------


def load_json_object(response: httpx.Response) -> dict[str, Any]:
    """Decode *response* as a JSON object.

    Raises:
        ParseResponseError: If the body is not valid JSON or not an object.
    """
    try:
        data = json.loads(response.content)
    except ValueError as exc:
        raise ParseResponseError(
            f"Response body is not valid JSON: {exc}",
            status_code=response.status_code,
            body=response.content,
        ) from exc
    if not isinstance(data, dict):
        raise ParseResponseError(
            f"Expected a JSON object, got {type(data).__name__}",
            status_code=response.status_code,
            body=response.content,
        )
    return data


def validate_model(
    model: type[M], data: Any, response: httpx.Response | None = None
) -> M:
    """Validate *data* as *model*, wrapping validation errors."""
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ParseResponseError(
            f"Invalid {model.__name__}: {exc.error_count()} validation error(s)",
            status_code=response.status_code if response is not None else None,
            body=response.content if response is not None else None,
        ) from exc


def cast_response_scope(body: Any, scope_type: type) -> Any:
    """Return *body* with its ``scope`` converted to *scope_type*.

    Raises:
        ParseResponseError: If a returned scope is unknown to *scope_type*.
    """
    if not isinstance(body, AccessTokenResponseSuccessfulBody) or body.scope is None:
        return body
    try:
        scope = body.scope.cast(scope_type)
    except ScopeFromStrError as exc:
        raise ParseResponseError(str(exc)) from exc
    return body.model_copy(update={"scope": scope})


def parse_access_token_response(
    response: httpx.Response, scope_type: type = str
) -> AccessTokenResponse:
    """Parse a token endpoint response (RFC 6749 sections 5.1 and 5.2).

    A 2xx JSON object without an ``error`` key is a successful body; any
    other JSON object is an error body, even if it also carries
    ``access_token``.

    Args:
        response: The token endpoint response.
        scope_type: Scope type of the successful body's ``scope``.

    Returns:
        The successful body, or the error body as a value.

    Raises:
        ParseResponseError: On malformed JSON or a body of neither shape.
    """
    data = load_json_object(response)
    if response.is_success and "error" not in data:
        body = validate_model(AccessTokenResponseSuccessfulBody, data, response)
        return cast_response_scope(body, scope_type)
    return validate_model(AccessTokenResponseErrorBody, data, response)


# ---------------------------------------------------------------------------
# Hook dispatch
# ---------------------------------------------------------------------------


def render_via_hook(
    hook: Callable[..., Any] | None, body: dict[str, Any]
) -> httpx.Request | None:
    """Let a ``*_rendering`` hook build the request from *body*.

    Returns:
        The hook's request, or ``None`` when there is no hook or it declines.
    """
    if hook is None:
        return None
    request = call_hook(hook, body)
    if request is not None and not isinstance(request, httpx.Request):
        raise RenderRequestError(
            f"Provider hook returned {type(request).__name__}, expected httpx.Request"
        )
    return request


def parse_token_response_via_hook(
    response: httpx.Response,
    scope_type: type = str,
    hook: Callable[..., Any] | None = None,
) -> AccessTokenResponse:
    """Parse a token response, letting a ``*_response_parsing`` hook go first.

    A hook that returns ``None`` falls back to
    :func:`parse_access_token_response`.
    """
    if hook is not None:
        body = call_hook(hook, response, error_cls=ParseResponseError)
        if body is not None:
            if not isinstance(
                body, (AccessTokenResponseSuccessfulBody, AccessTokenResponseErrorBody)
            ):
                raise ParseResponseError(
                    f"Provider hook returned {type(body).__name__}, expected a token body",
                    status_code=response.status_code,
                )
            return cast_response_scope(body, scope_type)
    return parse_access_token_response(response, scope_type)


def scopes_or_default(scopes: Any | None, provider: Any) -> list[Any] | None:
    """Return *scopes*, or the provider's ``scopes_default()`` when *scopes* is ``None``."""
    if scopes is not None:
        return list(scopes)
    scopes_default = getattr(provider, "scopes_default", None)
    if scopes_default is None:
        return None
    return call_hook(scopes_default)


def modify_via_hook(
    url_hook: Callable[..., Any],
    request_hook: Callable[..., Any],
    url: str,
    body: dict[str, Any],
    headers: Mapping[str, str] | None = None,
) -> httpx.Request:
    """Render a form request, letting URL and request rewriting hooks adjust it."""
    modified_url = call_hook(url_hook, url)
    request = form_request(modified_url if modified_url is not None else url, body, headers)
    modified = call_hook(request_hook, request)
    if modified is None:
        return request
    if not isinstance(modified, httpx.Request):
        raise RenderRequestError(
            f"Provider hook returned {type(modified).__name__}, expected httpx.Request"
        )
    return modified
