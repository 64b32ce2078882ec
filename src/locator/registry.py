"""Discovery of installed webjars on the resource classpath.

Every webjar ships its assets under
``META-INF/resources/webjars/<id>/<version>/``; the registry walks that tree
and reports one version per id.
"""
from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Dict, List, Optional

import semantic_version

from constants import Constants
from common.logging_utils import Timer, extra_context, is_debug_enabled

logger = logging.getLogger(__name__)


def _coerce_version(value: str) -> Optional[semantic_version.Version]:
    """Parse a webjar version, tolerating Maven-style forms like ``3.1.1-1``."""
    try:
        return semantic_version.Version(value)
    except ValueError:
        pass
    try:
        return semantic_version.Version.coerce(value)
    except ValueError:
        return None


def pick_highest(versions: List[str]) -> str:
    """Return the highest of ``versions``.

    Versions that cannot be parsed never beat a parseable one; when nothing
    parses the first version seen is kept.
    """
    best = versions[0]
    best_parsed = _coerce_version(best)
    for candidate in versions[1:]:
        parsed = _coerce_version(candidate)
        if parsed is None:
            continue
        if best_parsed is None or parsed > best_parsed:
            best, best_parsed = candidate, parsed
    return best


class PackageRegistry:
    """Produces the ordered ``id -> version`` mapping of installed webjars."""

    def __init__(self, store):
        self._store = store

    def scan(self) -> Dict[str, List[str]]:
        """Return every version seen per webjar id, in discovery order."""
        found: Dict[str, List[str]] = {}
        prefix = Constants.WEBJARS_PATH_PREFIX + "/"
        for path in self._store.iter_paths(Constants.WEBJARS_PATH_PREFIX):
            rest = path[len(prefix):] if path.startswith(prefix) else None
            if not rest:
                continue
            parts = rest.split("/")
            # need <id>/<version>/<file...>
            if len(parts) < 3 or not parts[0] or not parts[1]:
                continue
            webjar_id, version = parts[0], parts[1]
            versions = found.setdefault(webjar_id, [])
            if version not in versions:
                versions.append(version)
        return found

    def get_webjars(self) -> "OrderedDict[str, str]":
        """Return installed webjars ordered by id."""
        with Timer() as timer:
            scanned = self.scan()
            webjars: "OrderedDict[str, str]" = OrderedDict()
            for webjar_id in sorted(scanned):
                versions = scanned[webjar_id]
                if len(versions) > 1:
                    chosen = pick_highest(versions)
                    logger.warning(
                        "Found %d versions of the %s WebJar (%s); using %s",
                        len(versions), webjar_id, ", ".join(versions), chosen,
                    )
                else:
                    chosen = versions[0]
                webjars[webjar_id] = chosen
        if is_debug_enabled(logger):
            logger.debug(
                "Scanned classpath for WebJars",
                extra=extra_context(
                    event="function_exit", component="registry", action="get_webjars",
                    count=len(webjars), duration_ms=timer.duration_ms()
                )
            )
        return webjars
