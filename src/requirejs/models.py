"""Data models for RequireJS config resolution."""

from __future__ import annotations

import copy
from collections import OrderedDict
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union


@dataclass(frozen=True)
class PackageRef:
    """One installed webjar."""
    id: str
    version: str


@dataclass(frozen=True)
class PrefixSpec:
    """One location a webjar can be fetched from.

    ``location_prefix`` is used verbatim (callers include the trailing
    slash); ``include_version`` adds the ``/<version>`` segment.
    """
    location_prefix: str
    include_version: bool = True


# Ordered, first entry is the most preferred location.
PrefixChain = Tuple[PrefixSpec, ...]


def prefix_chain(*specs: Union[PrefixSpec, str, Tuple[str, bool]]) -> PrefixChain:
    """Normalize prefixes into a hashable chain.

    Plain strings get the version segment; ``(prefix, flag)`` pairs keep
    their flag.
    """
    chain: List[PrefixSpec] = []
    for spec in specs:
        if isinstance(spec, PrefixSpec):
            chain.append(spec)
        elif isinstance(spec, str):
            chain.append(PrefixSpec(spec, True))
        else:
            prefix, include_version = spec
            chain.append(PrefixSpec(prefix, bool(include_version)))
    return tuple(chain)


class DescriptorFormat(Enum):
    """Metadata formats a webjar can ship its loader config in."""
    LEGACY = "legacy"
    BOWER = "bower"
    NPM = "npm"


class UnresolvedReason(Enum):
    """Why a webjar produced no usable config."""
    NO_DESCRIPTOR = "no_descriptor"
    MISSING_RESOURCE = "missing_resource"
    MALFORMED_DESCRIPTOR = "malformed_descriptor"
    INCOMPLETE_METADATA = "incomplete_metadata"
    EMPTY_CONFIG = "empty_config"


def _has_entries(value: Any) -> bool:
    if isinstance(value, (dict, list)):
        return bool(value)
    return value is not None


@dataclass
class ModuleConfig:
    """Canonical per-webjar RequireJS config."""
    paths: "OrderedDict[str, List[str]]" = field(default_factory=OrderedDict)
    packages: List[Any] = field(default_factory=list)
    extras: "OrderedDict[str, Any]" = field(default_factory=OrderedDict)

    def is_empty(self) -> bool:
        """True when no substructure carries an entry."""
        if self.paths or self.packages:
            return False
        return not any(_has_entries(value) for value in self.extras.values())

    def to_dict(self) -> Dict[str, Any]:
        """JSON shape handed to ``requirejs.config``."""
        result: Dict[str, Any] = OrderedDict()
        result["paths"] = OrderedDict((name, list(urls)) for name, urls in self.paths.items())
        if self.packages:
            result["packages"] = copy.deepcopy(self.packages)
        for key, value in self.extras.items():
            result[key] = copy.deepcopy(value)
        return result


@dataclass(frozen=True)
class Resolved:
    """A webjar that produced a usable config."""
    config: ModuleConfig
    format: Optional[DescriptorFormat] = None

    @property
    def is_resolved(self) -> bool:
        return True


@dataclass(frozen=True)
class Unresolved:
    """A webjar that produced no usable config."""
    reason: UnresolvedReason
    detail: Optional[str] = None
    format: Optional[DescriptorFormat] = None

    @property
    def is_resolved(self) -> bool:
        return False


ResolutionOutcome = Union[Resolved, Unresolved]


@dataclass
class Aggregate:
    """Resolution results for every installed webjar of one prefix chain."""
    prefixes: PrefixChain
    versions: "OrderedDict[str, str]" = field(default_factory=OrderedDict)
    outcomes: "OrderedDict[str, ResolutionOutcome]" = field(default_factory=OrderedDict)
    legacy_scripts: "OrderedDict[str, str]" = field(default_factory=OrderedDict)

    def configs(self) -> "OrderedDict[str, ModuleConfig]":
        """Resolved configs in registry order."""
        return OrderedDict(
            (webjar_id, outcome.config)
            for webjar_id, outcome in self.outcomes.items()
            if isinstance(outcome, Resolved)
        )

    def unresolved(self) -> "OrderedDict[str, Unresolved]":
        return OrderedDict(
            (webjar_id, outcome)
            for webjar_id, outcome in self.outcomes.items()
            if isinstance(outcome, Unresolved)
        )

    def to_json(self) -> Dict[str, Dict[str, Any]]:
        """``id -> config`` for resolved webjars; unresolved ids are absent."""
        return OrderedDict(
            (webjar_id, config.to_dict()) for webjar_id, config in self.configs().items()
        )


def refs_from_mapping(webjars: Dict[str, str]) -> Sequence[PackageRef]:
    """Turn a registry mapping into package refs, keeping its order."""
    return [PackageRef(webjar_id, version) for webjar_id, version in webjars.items()]
