"""Heuristic choice of a package's main script from an array ``main``.

Bower (and some npm) descriptors list several files in ``main``: scripts,
stylesheets, fonts. RequireJS needs exactly one module, so the selection
policy is:

1. a single candidate is returned as-is;
2. only ``.js`` candidates are considered, unless there are none, in which
   case every candidate is;
3. candidates are ranked by Levenshtein distance between the lowercased
   candidate and the lowercased package name (most scripts are named after
   their project);
4. the lowest distance wins and ties go to the earliest candidate.

The function is total for non-empty input: ambiguity always yields an answer.
"""

from __future__ import annotations

from typing import Dict, List, Sequence


def levenshtein(left: str, right: str) -> int:
    """Edit distance (insert/delete/substitute, each cost 1)."""
    if left == right:
        return 0
    if not left:
        return len(right)
    if not right:
        return len(left)
    if len(left) < len(right):
        left, right = right, left
    previous = list(range(len(right) + 1))
    for i, lch in enumerate(left, start=1):
        current = [i]
        for j, rch in enumerate(right, start=1):
            current.append(min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + (lch != rch),
            ))
        previous = current
    return previous[-1]


def select_main(candidates: Sequence[str], package_name: str) -> str:
    """Pick the most likely entry script among ``candidates``.

    Raises:
        ValueError: when ``candidates`` is empty.
    """
    if not candidates:
        raise ValueError("select_main needs at least one candidate")
    if len(candidates) == 1:
        return candidates[0]

    pool: List[str] = [item for item in candidates if item.lower().endswith(".js")]
    if not pool:
        pool = list(candidates)

    name = package_name.lower()
    distances: Dict[str, int] = {}

    def distance(value: str) -> int:
        key = value.lower()
        if key not in distances:
            distances[key] = levenshtein(name, key)
        return distances[key]

    # min() keeps the first of equal keys, so input order breaks ties
    return min(pool, key=distance)
