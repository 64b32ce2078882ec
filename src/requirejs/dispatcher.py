"""Descriptor format detection and dispatch."""

from __future__ import annotations

import logging
from typing import Dict, Optional, Sequence, Tuple

from common.logging_utils import extra_context, is_debug_enabled
from .models import (
    DescriptorFormat,
    PackageRef,
    PrefixSpec,
    ResolutionOutcome,
    Unresolved,
    UnresolvedReason,
)
from .resolvers import BowerResolver, DescriptorResolver, LegacyResolver, NpmResolver

logger = logging.getLogger(__name__)


class FormatDispatcher:
    """Classify a webjar by its Maven marker and route it to a resolver.

    Markers are checked npm first, then Bower, then classic; the first one
    present decides the format.
    """

    def __init__(self, store):
        self.store = store
        self._resolvers: Tuple[DescriptorResolver, ...] = (
            NpmResolver(store),
            BowerResolver(store),
            LegacyResolver(store),
        )
        self._by_format: Dict[DescriptorFormat, DescriptorResolver] = {
            resolver.format: resolver for resolver in self._resolvers
        }

    def classify(self, webjar_id: str) -> Optional[DescriptorFormat]:
        """Return the webjar's descriptor format, or None when no marker exists."""
        for resolver in self._resolvers:
            if resolver.has_marker(webjar_id):
                return resolver.format
        return None

    def resolver_for(self, fmt: DescriptorFormat) -> DescriptorResolver:
        return self._by_format[fmt]

    def resolve(self, ref: PackageRef, prefixes: Sequence[PrefixSpec]) -> ResolutionOutcome:
        """Classify ``ref`` and resolve it with the matching resolver."""
        fmt = self.classify(ref.id)
        if is_debug_enabled(logger):
            logger.debug(
                "Classified webjar",
                extra=extra_context(
                    event="decision", component="dispatcher", action="classify",
                    package=ref.id, version=ref.version,
                    outcome=fmt.value if fmt else "no_descriptor"
                )
            )
        if fmt is None:
            return Unresolved(UnresolvedReason.NO_DESCRIPTOR, "no Maven marker for " + ref.id)
        return self.resolver_for(fmt).resolve(ref, prefixes)
