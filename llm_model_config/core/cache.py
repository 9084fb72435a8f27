"""Thread-safe per-provider memoization of loaded configuration documents."""

from __future__ import annotations

import threading
from typing import Callable, Dict, Iterable, Optional

from llm_model_config.core.loader import ProviderLoadResult
from llm_model_config.core.providers import Provider
from llm_model_config.utils.log import get_logger

logger = get_logger()

Loader = Callable[[Provider], ProviderLoadResult]


class ConfigCache:
    """Lazy, invalidatable cache of :class:`ProviderLoadResult` per provider.

    Results without a config are cached too, so a provider with no document
    is not probed again until the next invalidation. Loads run outside the
    lock; the lock only guards table creation, insertion and replacement.
    """

    def __init__(self, loader: Loader, providers: Iterable[Provider] = tuple(Provider)) -> None:
        self._loader = loader
        self._providers = tuple(providers)
        self._table: Optional[Dict[Provider, ProviderLoadResult]] = None
        self._lock = threading.Lock()

    @property
    def providers(self) -> tuple[Provider, ...]:
        return self._providers

    def _ensure_table(self) -> Dict[Provider, ProviderLoadResult]:
        table = self._table
        if table is None:
            with self._lock:
                if self._table is None:
                    self._table = {}
                table = self._table
        return table

    def get(self, provider: Provider) -> ProviderLoadResult:
        """Return the cached result for ``provider``, loading it on first use."""
        table = self._ensure_table()
        cached = table.get(provider)
        if cached is not None:
            return cached

        result = self._loader(provider)

        with self._lock:
            if self._table is not table:
                # The table was replaced mid-load; hand back the result uncached.
                logger.debug(
                    "[model_config] Cache invalidated during load; skipping store",
                    extra={"provider": provider.value},
                )
                return result
            return table.setdefault(provider, result)

    def peek(self, provider: Provider) -> Optional[ProviderLoadResult]:
        """Return the cached result without loading."""
        table = self._table
        if table is None:
            return None
        return table.get(provider)

    def invalidate_all(self) -> None:
        """Atomically replace the table with an empty one."""
        with self._lock:
            dropped = len(self._table) if self._table is not None else 0
            self._table = {}
        logger.debug("[model_config] Cache invalidated", extra={"dropped": dropped})

    def warm_all(self) -> Dict[Provider, ProviderLoadResult]:
        """Load every known provider into the cache."""
        results = {provider: self.get(provider) for provider in self._providers}
        logger.debug(
            "[model_config] Cache warmed",
            extra={
                "providers": len(results),
                "found": sum(1 for result in results.values() if result.found),
            },
        )
        return results

    def snapshot(self) -> Dict[Provider, ProviderLoadResult]:
        """Shallow copy of the current table."""
        table = self._table
        return dict(table) if table is not None else {}

    def __contains__(self, provider: object) -> bool:
        table = self._table
        return table is not None and provider in table

    def __len__(self) -> int:
        table = self._table
        return len(table) if table is not None else 0
