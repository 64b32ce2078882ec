"""Public entry points for RequireJS setup generation."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence

from locator import PackageRegistry, ResourceStore
from .aggregator import Aggregator
from .cache import ResolutionCache
from .dispatcher import FormatDispatcher
from .models import Aggregate, PrefixChain, PrefixSpec, prefix_chain

logger = logging.getLogger(__name__)

_KIND_JSON = "json"
_KIND_JAVASCRIPT = "javascript"


def default_chain(
    url_prefix: str,
    cdn_prefix: Optional[str] = None,
    include_version: bool = True,
) -> PrefixChain:
    """CDN first (when given), then the local URL prefix."""
    specs = []
    if cdn_prefix:
        specs.append(PrefixSpec(cdn_prefix, include_version))
    specs.append(PrefixSpec(url_prefix, include_version))
    return prefix_chain(*specs)


class RequireJS:
    """RequireJS config generator for the webjars of one classpath.

    ``setup_json`` and ``setup_javascript`` compute once per prefix chain and
    return the same object afterwards; treat their results as read-only.
    The ``generate_*`` methods always recompute.
    """

    def __init__(self, store: ResourceStore, max_workers: int = 1):
        self.store = store
        self.registry = PackageRegistry(store)
        self.dispatcher = FormatDispatcher(store)
        self.aggregator = Aggregator(self.registry, self.dispatcher, store, max_workers=max_workers)
        self.cache = ResolutionCache()

    @classmethod
    def from_classpath(cls, paths: Sequence[str], max_workers: int = 1) -> "RequireJS":
        return cls(ResourceStore.from_paths(paths), max_workers=max_workers)

    @classmethod
    def from_settings(cls, settings) -> "RequireJS":
        """Build from a ``settings.Settings`` instance."""
        return cls.from_classpath(settings.classpath, max_workers=settings.max_workers)

    def webjars(self) -> "Dict[str, str]":
        """Installed webjars, ``id -> version`` in id order."""
        return self.registry.get_webjars()

    def aggregate(self, prefixes: Sequence[PrefixSpec], legacy_scripts: bool = True) -> Aggregate:
        return self.aggregator.aggregate(prefix_chain(*prefixes), legacy_scripts=legacy_scripts)

    def generate_setup_json(self, prefixes: Sequence[PrefixSpec]) -> Dict[str, Dict[str, Any]]:
        """Per-webjar RequireJS config objects; unresolved webjars are left out."""
        return self.aggregate(prefixes, legacy_scripts=False).to_json()

    def generate_setup_javascript(self, prefixes: Sequence[PrefixSpec]) -> str:
        """The full setup script for ``prefixes``."""
        aggregate = self.aggregate(prefixes)
        return self.aggregator.render_javascript(aggregate)

    def setup_json(
        self, url_prefix: str, cdn_prefix: Optional[str] = None, include_version: bool = True
    ) -> Dict[str, Dict[str, Any]]:
        """Cached ``generate_setup_json`` for the CDN-then-local chain.

        Args:
            url_prefix: Local URL prefix with a trailing slash, e.g. ``/webjars/``.
            cdn_prefix: Optional CDN prefix tried before the local one.
            include_version: Put the webjar version in every URL.
        """
        chain = default_chain(url_prefix, cdn_prefix, include_version)
        return self.cache.get_or_compute(
            (_KIND_JSON, chain), lambda: self.generate_setup_json(chain)
        )

    def setup_javascript(
        self, url_prefix: str, cdn_prefix: Optional[str] = None, include_version: bool = True
    ) -> str:
        """Cached ``generate_setup_javascript`` for the CDN-then-local chain."""
        chain = default_chain(url_prefix, cdn_prefix, include_version)
        return self.cache.get_or_compute(
            (_KIND_JAVASCRIPT, chain), lambda: self.generate_setup_javascript(chain)
        )

    def close(self) -> None:
        self.store.close()
