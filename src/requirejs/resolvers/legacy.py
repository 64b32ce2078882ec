"""Resolver for classic webjars carrying their config in pom.xml.

Classic (``org.webjars``) webjars embed a RequireJS config object in the
``<properties><requirejs>`` element of their pom. The object is
hand-written JavaScript, so it is read with the lenient JSON reader; its
``paths`` and ``packages`` locations are relative to the webjar and get
rewritten to absolute URLs.
"""

from __future__ import annotations

import copy
import json
import logging
import xml.etree.ElementTree as ET
from collections import OrderedDict
from typing import Any, List, Optional, Sequence

from constants import Constants
from common import lenient_json
from common.logging_utils import extra_context, is_debug_enabled
from ..models import (
    DescriptorFormat,
    ModuleConfig,
    PackageRef,
    PrefixSpec,
    ResolutionOutcome,
    Resolved,
    Unresolved,
    UnresolvedReason,
)
from ..paths import rewrite, rewrite_last
from .base import DescriptorResolver, config_error_message

logger = logging.getLogger(__name__)


def _local_name(tag: Any) -> Optional[str]:
    if not isinstance(tag, str):
        return None
    return tag.rsplit("}", 1)[-1]


def extract_requirejs_property(pom_xml: bytes) -> Optional[str]:
    """Return the text of ``<properties><requirejs>`` or None when absent.

    Namespaces are ignored and ``properties`` elements are searched at any
    depth (profiles can carry their own).

    Raises:
        ET.ParseError: when ``pom_xml`` is not well-formed.
    """
    root = ET.fromstring(pom_xml)
    for element in root.iter():
        if _local_name(element.tag) != "properties":
            continue
        for child in element:
            if _local_name(child.tag) == Constants.REQUIREJS_PROPERTY:
                return "".join(child.itertext())
    return None


class LegacyResolver(DescriptorResolver):
    """Resolver for the pom-embedded RequireJS config."""

    maven_prefix = Constants.WEBJARS_MAVEN_PREFIX

    @property
    def format(self) -> DescriptorFormat:
        return DescriptorFormat.LEGACY

    def raw_config(self, ref: PackageRef) -> str:
        """The raw ``<requirejs>`` text of the webjar's pom, or ``""``."""
        pom_path = self.marker_path(ref.id)
        data = self.store.read_bytes(pom_path)
        if data is None:
            logger.warning(config_error_message(ref))
            return ""
        try:
            raw = extract_requirejs_property(data)
        except ET.ParseError:
            logger.warning(config_error_message(ref))
            return ""
        return raw or ""

    def resolve(self, ref: PackageRef, prefixes: Sequence[PrefixSpec]) -> ResolutionOutcome:
        raw = self.raw_config(ref)
        try:
            parsed = lenient_json.loads(raw)
        except lenient_json.LenientJsonError as exc:
            logger.warning(config_error_message(ref))
            if raw.strip():
                # only worth showing when there was a config to parse
                logger.error("%s", exc)
            return Unresolved(UnresolvedReason.MALFORMED_DESCRIPTOR, str(exc), self.format)

        if not isinstance(parsed, dict):
            logger.error(config_error_message(ref))
            return Unresolved(
                UnresolvedReason.MALFORMED_DESCRIPTOR,
                "RequireJS config is not an object",
                self.format,
            )

        config = ModuleConfig()
        config.paths = self._rewrite_paths(ref, parsed.get("paths"), prefixes)
        config.packages = self._rewrite_packages(ref, parsed.get("packages"), prefixes)
        for key, value in parsed.items():
            if key not in ("paths", "packages"):
                config.extras[key] = copy.deepcopy(value)

        if config.is_empty():
            return Unresolved(UnresolvedReason.EMPTY_CONFIG, "RequireJS config is empty", self.format)

        if is_debug_enabled(logger):
            logger.debug(
                "Legacy RequireJS config resolved",
                extra=extra_context(
                    event="function_exit", component="legacy_resolver", action="resolve",
                    package=ref.id, version=ref.version, count=len(config.paths)
                )
            )
        return Resolved(config, self.format)

    @staticmethod
    def _original_path(value: Any) -> Optional[str]:
        if isinstance(value, list):
            # only the first location is taken from the webjar
            if not value:
                return None
            value = value[0]
        if isinstance(value, str):
            return value
        if isinstance(value, (bool, int, float)):
            # scalars keep their JSON spelling, e.g. 1 -> "1", true -> "true"
            return json.dumps(value)
        return None

    def _rewrite_paths(
        self, ref: PackageRef, paths: Any, prefixes: Sequence[PrefixSpec]
    ) -> "OrderedDict[str, List[str]]":
        rewritten: "OrderedDict[str, List[str]]" = OrderedDict()
        if paths is None:
            return rewritten
        if not isinstance(paths, dict):
            logger.error(
                "The paths of the %s %s WebJar are not an object: %s",
                ref.id, ref.version, json.dumps(paths),
            )
            return rewritten
        for module_name, value in paths.items():
            original = self._original_path(value)
            if original is None:
                logger.error(
                    "Strange... The path could not be parsed.  Here is what was provided: %s",
                    json.dumps(value),
                )
                continue
            rewritten[module_name] = rewrite(ref.id, ref.version, original, prefixes) + [original]
        return rewritten

    def _rewrite_packages(
        self, ref: PackageRef, packages: Any, prefixes: Sequence[PrefixSpec]
    ) -> List[Any]:
        if packages is None:
            return []
        if not isinstance(packages, list):
            logger.error(
                "The packages of the %s %s WebJar are not an array: %s",
                ref.id, ref.version, json.dumps(packages),
            )
            return []
        rewritten: List[Any] = []
        for entry in packages:
            location = entry.get("location") if isinstance(entry, dict) else None
            if isinstance(location, str) and prefixes:
                updated = copy.deepcopy(entry)
                # Only the last (local) prefix: sub-resources of a package
                # should not be pointed at the CDN.
                updated["location"] = rewrite_last(ref.id, ref.version, location, prefixes)
                rewritten.append(updated)
            else:
                rewritten.append(copy.deepcopy(entry))
        return rewritten
