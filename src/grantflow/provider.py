"""Provider base class and the string-scope wrapper.

A :class:`Provider` describes one authorization server: the client
credentials registered with it and its token endpoint.  Each grant layers a
``ProviderExt*`` class over it (see :mod:`grantflow.grants`) that adds the
grant's required endpoint facts plus optional customization hooks.

Hook convention: every hook has a default implementation returning
``None``, which means "no override".  Endpoints always call the hook first
and fall back to the standard RFC behaviour when it declines.  A hook that
cannot do its job raises; the endpoint wraps the exception into
:class:`~grantflow.exceptions.RenderRequestError` or
:class:`~grantflow.exceptions.ParseResponseError`.

Providers are logically immutable: nothing in the engine mutates them, so
one instance can back any number of concurrent flows.

See Also:
    :class:`grantflow.registry.ProviderRegistry` for holding many
    providers behind :class:`StringScopeWrapper`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from grantflow.models import ClientPassword
from grantflow.scope import scope_to_str


class Provider(ABC):
    """Identity and token endpoint of one authorization server.

    Subclasses must provide :attr:`client_id` and
    :attr:`token_endpoint_url`.  ``scope_type`` declares the scope
    vocabulary (``str`` or a string-valued ``enum.Enum``); parsed token
    responses carry scopes of this type.
    """

    scope_type: type = str

    @property
    @abstractmethod
    def client_id(self) -> str | None:
        """Return the registered client id, or ``None`` for public clients without one."""

    @property
    def client_secret(self) -> str | None:
        return None

    @property
    @abstractmethod
    def token_endpoint_url(self) -> str:
        """Return the absolute token endpoint URL."""

    def extra(self) -> dict[str, Any] | None:
        """Return opaque provider data (for example a per-tenant base URL)."""
        return None

    def client_password(self) -> ClientPassword | None:
        """Return the client credentials when both id and secret are known."""
        if self.client_id is None or self.client_secret is None:
            return None
        return ClientPassword(self.client_id, self.client_secret)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(client_id={self.client_id!r})"


class StringScopeWrapper(Provider):
    """Expose any provider with ``str`` scopes.

    Providers with different scope enums cannot share one typed map.  The
    wrapper normalizes the scope vocabulary at the boundary: ``scope_type``
    becomes ``str``, :meth:`scopes_default` returns wire tokens, and token
    responses parsed through the wrapper therefore carry string scopes.
    Every other attribute (grant facts and hooks) is delegated to the
    wrapped provider unchanged.

    Args:
        inner: The provider to wrap.
    """

    scope_type = str

    def __init__(self, inner: Provider) -> None:
        if isinstance(inner, StringScopeWrapper):
            inner = inner.inner
        self._inner = inner

    @property
    def inner(self) -> Provider:
        return self._inner

    @property
    def client_id(self) -> str | None:
        return self._inner.client_id

    @property
    def client_secret(self) -> str | None:
        return self._inner.client_secret

    @property
    def token_endpoint_url(self) -> str:
        return self._inner.token_endpoint_url

    def extra(self) -> dict[str, Any] | None:
        return self._inner.extra()

    def scopes_default(self) -> list[str] | None:
        scopes_default = getattr(self._inner, "scopes_default", None)
        if scopes_default is None:
            return None
        scopes = scopes_default()
        if scopes is None:
            return None
        return [scope_to_str(scope) for scope in scopes]

    def __getattr__(self, name: str) -> Any:
        # Only reached for attributes not defined on the wrapper itself.
        if name == "_inner":
            raise AttributeError(name)
        return getattr(self._inner, name)

    def __repr__(self) -> str:
        return f"StringScopeWrapper({self._inner!r})"
