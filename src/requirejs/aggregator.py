"""Whole-classpath aggregation of RequireJS configs."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterator, List, Optional, Sequence

from constants import Constants
from common.logging_utils import Timer, extra_context, is_debug_enabled
from .models import (
    Aggregate,
    PackageRef,
    PrefixSpec,
    ResolutionOutcome,
    Resolved,
    refs_from_mapping,
)
from .render import build_context, compact_json, render_setup_script

logger = logging.getLogger(__name__)


def legacy_script_header(webjar_id: str) -> str:
    return f"// WebJar config for {webjar_id}\n"


class Aggregator:
    """Resolve every installed webjar against one prefix chain.

    Args:
        registry: Source of the installed ``id -> version`` mapping.
        dispatcher: Routes each webjar to its format resolver.
        store: Resource store used to load legacy setup scripts.
        max_workers: Resolve packages on a thread pool when greater than 1.
    """

    def __init__(self, registry, dispatcher, store, max_workers: int = 1):
        self.registry = registry
        self.dispatcher = dispatcher
        self.store = store
        self.max_workers = max(1, int(max_workers or 1))

    def aggregate(self, prefixes: Sequence[PrefixSpec], legacy_scripts: bool = True) -> Aggregate:
        """Resolve all installed webjars, keeping registry order.

        ``legacy_scripts=False`` skips loading the ``webjars-requirejs.js``
        fallbacks, which only the setup script uses.
        """
        prefixes = tuple(prefixes)
        webjars = self.registry.get_webjars()
        result = Aggregate(prefixes=prefixes)
        if not webjars:
            logger.warning(
                "Can't find any WebJars in the classpath, RequireJS configuration will be empty."
            )
            return result

        refs = refs_from_mapping(webjars)
        with Timer() as timer:
            outcomes = list(self._resolve_all(refs, prefixes))

        for ref, outcome in zip(refs, outcomes):
            result.versions[ref.id] = ref.version
            result.outcomes[ref.id] = outcome
            if legacy_scripts and not outcome.is_resolved:
                script = self.legacy_script(ref)
                if script is not None:
                    result.legacy_scripts[ref.id] = script

        if is_debug_enabled(logger):
            logger.debug(
                "Aggregated RequireJS configs",
                extra=extra_context(
                    event="function_exit", component="aggregator", action="aggregate",
                    count=len(refs), resolved=len(result.configs()),
                    duration_ms=timer.duration_ms()
                )
            )
        return result

    def _resolve_all(
        self, refs: List[PackageRef], prefixes: Sequence[PrefixSpec]
    ) -> Iterator[ResolutionOutcome]:
        if self.max_workers > 1 and len(refs) > 1:
            with ThreadPoolExecutor(max_workers=min(self.max_workers, len(refs))) as pool:
                # map() yields in submission order
                yield from pool.map(lambda ref: self.dispatcher.resolve(ref, prefixes), refs)
        else:
            for ref in refs:
                yield self.dispatcher.resolve(ref, prefixes)

    def legacy_script(self, ref: PackageRef) -> Optional[str]:
        """The webjar's hand-written ``webjars-requirejs.js`` with its header."""
        path = f"{Constants.WEBJARS_PATH_PREFIX}/{ref.id}/{ref.version}/{Constants.LEGACY_SCRIPT_FILE}"
        text = self.store.read_text(path)
        if text is None:
            return None
        logger.warning(
            "The %s %s WebJar is using the legacy RequireJS config.\n"
            "Please try a new version of the WebJar or file an issue at:\n"
            "http://github.com/webjars/%s/issues/new",
            ref.id, ref.version, ref.id,
        )
        # only CR, LF and CRLF end a line; other separators belong to the script
        body = text.replace("\r\n", "\n").replace("\r", "\n")
        if body.endswith("\n"):
            body = body[:-1]
        return legacy_script_header(ref.id) + body

    def render_javascript(self, aggregate: Aggregate, prefixes: Optional[Sequence[PrefixSpec]] = None) -> str:
        """Render ``aggregate`` into the setup script.

        Resolved webjars contribute a ``requirejs.config(...)`` call, unresolved
        ones their legacy script when they ship one.
        """
        if prefixes is None:
            prefixes = aggregate.prefixes
        blocks: List[str] = []
        for webjar_id, outcome in aggregate.outcomes.items():
            if isinstance(outcome, Resolved):
                blocks.append("\n" + "requirejs.config(" + compact_json(outcome.config.to_dict()) + ");")
            elif webjar_id in aggregate.legacy_scripts:
                blocks.append("\n" + aggregate.legacy_scripts[webjar_id])
        context = build_context(aggregate.versions, tuple(prefixes), blocks)
        return render_setup_script(context)
