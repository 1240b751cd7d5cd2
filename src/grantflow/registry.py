"""Provider registry -- one map for providers with different scope vocabularies.

Applications usually hold every provider they support in one
process-lifetime map keyed by name (``"github"``, ``"google"``, ...) and
pick one per request.  :class:`ProviderRegistry` is that map.  Providers
are stored behind :class:`~grantflow.provider.StringScopeWrapper`, so
callers see uniform ``str`` scopes whatever enum a provider declares.

See Also:
    :class:`~grantflow.config.ProviderConfig` for declaring providers as data.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from grantflow.config import ProviderConfig
from grantflow.exceptions import ConfigError
from grantflow.provider import Provider, StringScopeWrapper


class ProviderRegistry:
    """Name-keyed map of providers.

    Example::

        registry = ProviderRegistry()
        registry.register("github", GitHubProvider(...))
        provider = registry.get("github")
        url = AuthorizationCodeFlow(client).build_authorization_url(provider)
    """

    def __init__(self) -> None:
        self._providers: dict[str, StringScopeWrapper] = {}

    def register(self, name: str, provider: Provider) -> StringScopeWrapper:
        """Register *provider* under *name*.

        If a provider with the same name is already registered it is
        replaced.

        Returns:
            The stored, string-scoped wrapper.
        """
        wrapped = StringScopeWrapper(provider)
        self._providers[name] = wrapped
        return wrapped

    def get(self, name: str) -> StringScopeWrapper:
        """Retrieve a provider by name.

        Raises:
            ConfigError: If no provider is registered under *name*.
        """
        provider = self._providers.get(name)
        if provider is None:
            available = ", ".join(sorted(self._providers)) or "(none)"
            raise ConfigError(
                f"No provider registered as '{name}'. Available providers: {available}"
            )
        return provider

    def names(self) -> list[str]:
        return sorted(self._providers)

    def __contains__(self, name: object) -> bool:
        return name in self._providers

    def __len__(self) -> int:
        return len(self._providers)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    @classmethod
    def from_configs(cls, configs: Iterable[ProviderConfig]) -> ProviderRegistry:
        """Build every config and register it under its ``name``.

        Raises:
            ConfigError: If a credential source cannot be resolved.
        """
        registry = cls()
        for config in configs:
            registry.register(config.name, config.build())
        return registry
