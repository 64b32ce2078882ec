"""Webjar discovery and resource access.

- resources.py: classpath-style resource store over directories and jar/zip archives
- registry.py: installed webjar discovery (id -> version)
"""

from .resources import ArchiveRoot, DirectoryRoot, ResourceStore
from .registry import PackageRegistry, pick_highest

__all__ = [
    "ArchiveRoot",
    "DirectoryRoot",
    "ResourceStore",
    "PackageRegistry",
    "pick_highest",
]
