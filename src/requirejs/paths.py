"""Prefix-fallback path rewriting."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .models import PrefixSpec


def rewrite_one(package_id: str, version: str, relative_path: str, prefix: PrefixSpec) -> str:
    """Absolute URL of ``relative_path`` inside a webjar for one prefix."""
    url = prefix.location_prefix + package_id
    if prefix.include_version:
        url += "/" + version
    return url + "/" + relative_path


def rewrite(
    package_id: str,
    version: str,
    relative_path: str,
    prefixes: Sequence[PrefixSpec],
) -> List[str]:
    """Candidate URLs for ``relative_path``, one per prefix in chain order.

    Never fails and never re-orders: the chain order is the fallback order
    RequireJS will try. Validating ``relative_path`` is up to the caller.
    """
    return [rewrite_one(package_id, version, relative_path, prefix) for prefix in prefixes]


def rewrite_last(
    package_id: str,
    version: str,
    relative_path: str,
    prefixes: Sequence[PrefixSpec],
) -> Optional[str]:
    """Rewrite with only the last prefix of the chain (None for an empty chain)."""
    if not prefixes:
        return None
    return rewrite_one(package_id, version, relative_path, prefixes[-1])
