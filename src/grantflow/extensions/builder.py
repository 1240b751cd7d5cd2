"""User-info builder: decide how to get a profile for a freshly obtained token.

A provider adapter supplies a :class:`UserInfoBuilder`.  Given the
:data:`~grantflow.extensions.grant_info.GrantInfo` and the token body, it
answers with one of three outcomes:

- :class:`NoUserInfo` -- the provider offers nothing.
- :class:`StaticUserInfo` -- the profile is already in the token response
  (for example an embedded ``user_id``); no request is needed.
- :class:`RespondUserInfo` -- run one more endpoint, typically ``GET /user``.

:func:`obtain_user_info` executes that answer against an HTTP client.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from grantflow.client.base import HttpClient
from grantflow.client.runner import respond_endpoint
from grantflow.exceptions import (
    ParseResponseError,
    RenderRequestError,
    TransportError,
    UserInfoError,
)
from grantflow.extensions.grant_info import GrantInfo
from grantflow.extensions.user_info_endpoint import UserInfoEndpoint
from grantflow.models import AccessTokenResponseSuccessfulBody, UserInfo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NoUserInfo:
    pass


@dataclass(frozen=True)
class StaticUserInfo:
    user_info: UserInfo


@dataclass(frozen=True)
class RespondUserInfo:
    endpoint: UserInfoEndpoint


UserInfoOutcome = NoUserInfo | StaticUserInfo | RespondUserInfo


class UserInfoBuilder(ABC):
    @abstractmethod
    def obtain_user_info(
        self,
        grant_info: GrantInfo,
        access_token: AccessTokenResponseSuccessfulBody,
    ) -> UserInfoOutcome:
        """Decide how to obtain the user profile for *access_token*.

        Raise any exception to signal failure; :func:`obtain_user_info`
        wraps it into :class:`~grantflow.exceptions.UserInfoError`.
        """


class DefaultUserInfoBuilder(UserInfoBuilder):
    """Builder for providers without user info."""

    def obtain_user_info(
        self,
        grant_info: GrantInfo,
        access_token: AccessTokenResponseSuccessfulBody,
    ) -> UserInfoOutcome:
        return NoUserInfo()


async def obtain_user_info(
    client: HttpClient,
    builder: UserInfoBuilder,
    grant_info: GrantInfo,
    access_token: AccessTokenResponseSuccessfulBody,
) -> UserInfo | None:
    """Run *builder* and, when it asks for it, the extra user-info request.

    Returns:
        The :class:`UserInfo`, or ``None`` when the provider offers none.

    Raises:
        UserInfoError: With ``phase`` set to ``"build"``, ``"render"``,
            ``"respond"`` or ``"parse"``.
    """
    try:
        outcome = builder.obtain_user_info(grant_info, access_token)
    except Exception as exc:
        raise UserInfoError(f"User info builder failed: {exc}", "build") from exc

    if isinstance(outcome, NoUserInfo):
        return None
    if isinstance(outcome, StaticUserInfo):
        return outcome.user_info
    if not isinstance(outcome, RespondUserInfo):
        raise UserInfoError(
            f"User info builder returned {type(outcome).__name__}", "build"
        )

    logger.debug("Fetching user info with %r", outcome.endpoint)
    try:
        user_info, _ = await respond_endpoint(client, outcome.endpoint)
    except RenderRequestError as exc:
        raise UserInfoError(exc.message, "render") from exc
    except TransportError as exc:
        raise UserInfoError(exc.message, "respond") from exc
    except ParseResponseError as exc:
        raise UserInfoError(exc.message, "parse") from exc
    return user_info
