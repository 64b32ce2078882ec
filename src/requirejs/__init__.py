"""RequireJS config generation for webjars.

- models.py: package refs, prefix chains, module configs and outcomes
- paths.py: prefix-fallback URL rewriting
- selector.py: main-script heuristic for array ``main`` entries
- resolvers/: per-format descriptor resolvers (classic pom, Bower, npm)
- dispatcher.py: format detection by Maven marker
- aggregator.py / render.py: whole-classpath aggregation and setup script
- cache.py / facade.py: compute-once cache and the ``RequireJS`` entry point
"""

from .aggregator import Aggregator
from .cache import ResolutionCache
from .dispatcher import FormatDispatcher
from .facade import RequireJS, default_chain
from .models import (
    Aggregate,
    DescriptorFormat,
    ModuleConfig,
    PackageRef,
    PrefixChain,
    PrefixSpec,
    Resolved,
    ResolutionOutcome,
    Unresolved,
    UnresolvedReason,
    prefix_chain,
)
from .paths import rewrite, rewrite_last
from .selector import levenshtein, select_main

__all__ = [
    "Aggregate",
    "Aggregator",
    "DescriptorFormat",
    "FormatDispatcher",
    "ModuleConfig",
    "PackageRef",
    "PrefixChain",
    "PrefixSpec",
    "RequireJS",
    "ResolutionCache",
    "ResolutionOutcome",
    "Resolved",
    "Unresolved",
    "UnresolvedReason",
    "default_chain",
    "levenshtein",
    "prefix_chain",
    "rewrite",
    "rewrite_last",
    "select_main",
]
