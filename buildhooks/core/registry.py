"""Provider registry.

Maps service identifiers to provider implementations. Built once in
the composition root and read-only for the lifetime of the process.
"""

from collections.abc import Mapping
from types import MappingProxyType

from .ports import ProviderPort


class ProviderRegistry:
    """Immutable mapping from service id to ProviderPort."""

    def __init__(self, providers: Mapping[str, ProviderPort]):
        for service_id, provider in providers.items():
            if not service_id or not service_id.strip():
                raise ValueError("service id must be a non-empty string")
            if not isinstance(provider, ProviderPort):
                raise TypeError(
                    f"provider for {service_id!r} must implement ProviderPort"
                )
        self._providers: Mapping[str, ProviderPort] = MappingProxyType(dict(providers))

    def lookup(self, service_id: str) -> ProviderPort | None:
        """Return the provider registered for service_id, or None."""
        return self._providers.get(service_id)

    def service_ids(self) -> list[str]:
        return sorted(self._providers)

    def __contains__(self, service_id: object) -> bool:
        return service_id in self._providers

    def __len__(self) -> int:
        return len(self._providers)
