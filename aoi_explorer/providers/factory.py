"""Search provider factory: selects the geocoding adapter by name.

The factory maintains a registry of known adapters. Built-in adapters
are registered lazily so that their dependencies are only imported when
that adapter is selected.

Usage::

    from aoi_explorer.providers.factory import get_provider

    provider = get_provider("nominatim", config)
    result = await provider.search("Pune")

The provider name is read from ``AOI_SEARCH_PROVIDER`` via
``ExplorerConfig.search_provider``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from aoi_explorer.core.config import ExplorerConfig
from aoi_explorer.providers.base import ProviderError, SearchProvider

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

NOMINATIM = "nominatim"

# Maps a provider name to a zero-argument callable returning the adapter class.
_ADAPTER_REGISTRY: dict[str, Callable[[], type[SearchProvider]]] = {}


def _register_builtin_adapters() -> None:
    """Register the built-in search adapters (lazy import thunks)."""

    def _nominatim() -> type[SearchProvider]:
        from aoi_explorer.providers.nominatim import NominatimSearchProvider

        return NominatimSearchProvider

    _ADAPTER_REGISTRY[NOMINATIM] = _nominatim


def _ensure_registry() -> None:
    """Initialise the adapter registry once (idempotent)."""
    if not _ADAPTER_REGISTRY:
        _register_builtin_adapters()


def register_provider(
    name: str,
    loader: Callable[[], type[SearchProvider]],
) -> None:
    """Register a custom search adapter.

    The adapter class is instantiated with the ``ExplorerConfig`` as its
    only argument.

    Raises:
        ValueError: If the name is empty.
    """
    if not name:
        msg = "Provider name must be non-empty"
        raise ValueError(msg)
    _ensure_registry()
    _ADAPTER_REGISTRY[name] = loader
    logger.debug("Registered search provider: %s", name)


def get_provider(
    name: str,
    config: ExplorerConfig | None = None,
) -> SearchProvider:
    """Create and return a search provider instance.

    Args:
        name: Provider identifier (e.g. ``"nominatim"``).
        config: Explorer configuration; defaults to ``ExplorerConfig()``.

    Raises:
        ProviderError: If the named provider is not registered.
    """
    _ensure_registry()

    loader = _ADAPTER_REGISTRY.get(name)
    if loader is None:
        available = ", ".join(sorted(_ADAPTER_REGISTRY))
        msg = f"Unknown search provider: {name!r}. Available: {available}"
        raise ProviderError(provider=name, message=msg)

    adapter_cls = loader()
    logger.info("Creating search provider: %s", name)
    return adapter_cls(config or ExplorerConfig())  # type: ignore[call-arg]


def list_providers() -> list[str]:
    """Return the names of all registered search adapters."""
    _ensure_registry()
    return sorted(_ADAPTER_REGISTRY)
