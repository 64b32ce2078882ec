"""Shared resolver for descriptors that declare a ``main`` entry script.

Bower (``bower.json``) and npm (``package.json``) webjars are handled the
same way: the descriptor gives a ``name`` and a ``main`` entry, and the
generated config maps the module name to the entry script under every
prefix of the chain.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Any, Dict, Sequence

from constants import Constants
from common import lenient_json
from common.logging_utils import extra_context, is_debug_enabled
from errors import DescriptorError, IncompleteMetadataError, MalformedDescriptorError
from ..models import (
    ModuleConfig,
    PackageRef,
    PrefixSpec,
    ResolutionOutcome,
    Resolved,
    Unresolved,
    UnresolvedReason,
)
from ..paths import rewrite
from ..selector import select_main
from .base import DescriptorResolver

logger = logging.getLogger(__name__)


def module_name(name: str) -> str:
    """RequireJS module name for a package name (dots become dashes)."""
    return name.replace(".", "-")


def normalize_entry(entry: str) -> str:
    """Drop one trailing ``.js`` then one leading ``./``."""
    if entry.endswith(".js"):
        entry = entry[: -len(".js")]
    if entry.startswith("./"):
        entry = entry[len("./"):]
    return entry


class MainConfigResolver(DescriptorResolver):
    """Base for Bower-style and NPM-style resolvers.

    Subclasses set ``descriptor_file`` and ``maven_prefix``.
    """

    descriptor_file: str = ""

    def descriptor_path(self, ref: PackageRef) -> str:
        return self.webjar_path(ref, self.descriptor_file)

    def resolve(self, ref: PackageRef, prefixes: Sequence[PrefixSpec]) -> ResolutionOutcome:
        path = self.descriptor_path(ref)
        text = self.store.read_text(path)
        if text is None:
            logger.warning(
                "Could not find %s for the %s %s WebJar", path, ref.id, ref.version
            )
            return Unresolved(UnresolvedReason.MISSING_RESOURCE, path, self.format)

        try:
            config = self._build(ref, prefixes, text, path)
        except DescriptorError as exc:
            reason = (
                UnresolvedReason.MALFORMED_DESCRIPTOR
                if isinstance(exc, MalformedDescriptorError)
                else UnresolvedReason.INCOMPLETE_METADATA
            )
            logger.warning(
                "Could not create the RequireJS config for the %s %s WebJar from %s: %s",
                ref.id, ref.version, exc.path or path, exc,
            )
            return Unresolved(reason, str(exc), self.format)

        if is_debug_enabled(logger):
            logger.debug(
                "RequireJS config resolved from descriptor",
                extra=extra_context(
                    event="function_exit", component="main_config_resolver", action="resolve",
                    outcome="resolved", package=ref.id, version=ref.version,
                    descriptor=self.descriptor_file
                )
            )
        return Resolved(config, self.format)

    def _build(
        self, ref: PackageRef, prefixes: Sequence[PrefixSpec], text: str, path: str
    ) -> ModuleConfig:
        try:
            descriptor = lenient_json.loads(text)
        except lenient_json.LenientJsonError as exc:
            raise MalformedDescriptorError(str(exc), path) from exc
        if not isinstance(descriptor, dict):
            raise MalformedDescriptorError("descriptor is not a JSON object", path)

        name = descriptor.get("name")
        if not isinstance(name, str) or not name:
            raise IncompleteMetadataError("missing 'name'", path)

        entry = normalize_entry(self._entry_point(ref, descriptor, name, path))

        config = ModuleConfig()
        config.paths = OrderedDict()
        config.paths[module_name(name)] = rewrite(ref.id, ref.version, entry, prefixes)
        return config

    def _entry_point(self, ref: PackageRef, descriptor: Dict[str, Any], name: str, path: str) -> str:
        main = descriptor.get("main")
        if main is None:
            if self.store.exists(self.webjar_path(ref, Constants.INDEX_JS_FILE)):
                return Constants.INDEX_JS_FILE
            raise IncompleteMetadataError("no usable entry point ('main' absent, no index.js)", path)
        if isinstance(main, str):
            if not main.strip():
                raise IncompleteMetadataError("empty 'main'", path)
            return main
        if isinstance(main, list):
            candidates = [item for item in main if isinstance(item, str) and item.strip()]
            if not candidates:
                raise IncompleteMetadataError("'main' lists no entry files", path)
            return select_main(candidates, name)
        raise IncompleteMetadataError(f"unsupported 'main' of type {type(main).__name__}", path)
