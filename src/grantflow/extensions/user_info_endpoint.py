"""Endpoints that fetch a user profile with an access token."""

from __future__ import annotations

from abc import abstractmethod
from typing import Any

import httpx

from grantflow.endpoint import MIME_JSON, Endpoint, load_json_object
from grantflow.exceptions import ParseResponseError, RenderRequestError
from grantflow.models import UserInfo


class UserInfoEndpoint(Endpoint[UserInfo]):
    """An :class:`~grantflow.endpoint.Endpoint` whose output is a :class:`UserInfo`."""

    @abstractmethod
    def render_request(self) -> httpx.Request: ...

    @abstractmethod
    def parse_response(self, response: httpx.Response) -> UserInfo: ...


def _lookup(data: dict[str, Any], path: str | None) -> Any:
    """Resolve a dotted *path* (``"data.id"``) in nested JSON objects."""
    if path is None:
        return None
    value: Any = data
    for part in path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


class JsonUserInfoEndpoint(UserInfoEndpoint):
    """``GET`` a JSON profile and project it onto :class:`UserInfo`.

    Keys may be dotted to reach into nested objects, e.g. ``"data.id"``.

    Args:
        url: The profile endpoint URL.
        access_token: The bearer token.
        uid_key: Key of the user id (required in the response).
        name_key: Key of the display name, or ``None``.
        email_key: Key of the email address, or ``None``.
        token_prefix: Authorization scheme; some providers want ``"token"``.
        headers: Additional request headers.
    """

    def __init__(
        self,
        url: str,
        access_token: str,
        uid_key: str = "id",
        name_key: str | None = "name",
        email_key: str | None = "email",
        token_prefix: str = "Bearer",
        headers: dict[str, str] | None = None,
    ) -> None:
        self.url = url
        self.access_token = access_token
        self.uid_key = uid_key
        self.name_key = name_key
        self.email_key = email_key
        self.token_prefix = token_prefix
        self.headers = headers or {}

    def __repr__(self) -> str:
        return f"JsonUserInfoEndpoint(url={self.url!r})"

    def render_request(self) -> httpx.Request:
        headers = {
            "Authorization": f"{self.token_prefix} {self.access_token}",
            "Accept": MIME_JSON,
        }
        headers.update(self.headers)
        try:
            return httpx.Request("GET", self.url, headers=headers)
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
            raise RenderRequestError(f"Cannot build request for {self.url!r}: {exc}") from exc

    def parse_response(self, response: httpx.Response) -> UserInfo:
        if not response.is_success:
            raise ParseResponseError(
                f"User info request failed with status {response.status_code}",
                status_code=response.status_code,
                body=response.content,
            )
        data = load_json_object(response)

        uid = _lookup(data, self.uid_key)
        if uid is None or isinstance(uid, (dict, list)):
            raise ParseResponseError(
                f"User info is missing '{self.uid_key}'",
                status_code=response.status_code,
            )
        name = _lookup(data, self.name_key)
        email = _lookup(data, self.email_key)
        return UserInfo(
            uid=str(uid),
            name=name if isinstance(name, str) else None,
            email=email if isinstance(email, str) else None,
            raw=data,
        )
