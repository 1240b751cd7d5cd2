"""User-info extension: turn an access token into a normalized :class:`~grantflow.models.UserInfo`.

Typical usage::

    token = await AuthorizationCodeFlow(client).handle_callback(provider, query, state)
    info = await obtain_user_info(
        client, builder, AuthorizationCodeGrantInfo(provider, scopes), token
    )
"""

from grantflow.extensions.builder import (
    DefaultUserInfoBuilder,
    NoUserInfo,
    RespondUserInfo,
    StaticUserInfo,
    UserInfoBuilder,
    UserInfoOutcome,
    obtain_user_info,
)
from grantflow.extensions.grant_info import (
    AuthorizationCodeGrantInfo,
    DeviceAuthorizationGrantInfo,
    GrantInfo,
)
from grantflow.extensions.user_info_endpoint import JsonUserInfoEndpoint, UserInfoEndpoint

__all__ = [
    "AuthorizationCodeGrantInfo",
    "DefaultUserInfoBuilder",
    "DeviceAuthorizationGrantInfo",
    "GrantInfo",
    "JsonUserInfoEndpoint",
    "NoUserInfo",
    "RespondUserInfo",
    "StaticUserInfo",
    "UserInfoBuilder",
    "UserInfoEndpoint",
    "UserInfoOutcome",
    "obtain_user_info",
]
