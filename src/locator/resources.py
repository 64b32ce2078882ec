"""Read-only resource access over a webjar "classpath".

A classpath is an ordered list of roots. Each root is either a directory or a
``.jar``/``.zip`` archive; resource paths are always ``/``-separated and
relative to the root (e.g. ``META-INF/maven/org.webjars/jquery/pom.xml``).
Lookups walk the roots in order and the first root holding a path wins, the
same way a JVM class loader resolves resources.
"""
from __future__ import annotations

import logging
import os
import threading
import zipfile
from typing import Iterator, List, Optional, Sequence

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled

logger = logging.getLogger(__name__)


def _normalize(path: str) -> str:
    return path.replace("\\", "/").lstrip("/")


class DirectoryRoot:
    """Classpath root backed by a directory on disk."""

    def __init__(self, base: str):
        self.base = os.path.abspath(base)

    def _full(self, path: str) -> Optional[str]:
        full = os.path.normpath(os.path.join(self.base, *_normalize(path).split("/")))
        # Refuse paths escaping the root (e.g. "../../etc/passwd")
        if full != self.base and not full.startswith(self.base + os.sep):
            return None
        return full

    def exists(self, path: str) -> bool:
        full = self._full(path)
        return full is not None and os.path.isfile(full)

    def read_bytes(self, path: str) -> Optional[bytes]:
        full = self._full(path)
        if full is None or not os.path.isfile(full):
            return None
        with open(full, "rb") as fh:
            return fh.read()

    def iter_paths(self, prefix: str) -> Iterator[str]:
        start = self._full(prefix)
        if start is None or not os.path.isdir(start):
            return
        for dirpath, dirnames, filenames in os.walk(start):
            dirnames.sort()
            for filename in sorted(filenames):
                rel = os.path.relpath(os.path.join(dirpath, filename), self.base)
                yield rel.replace(os.sep, "/")

    def __repr__(self) -> str:
        return f"DirectoryRoot({self.base!r})"


class ArchiveRoot:
    """Classpath root backed by a jar/zip archive.

    The member index is read once; member bytes are read on demand under a
    lock because ``zipfile.ZipFile`` handles are not thread-safe.
    """

    def __init__(self, archive: str):
        self.archive = os.path.abspath(archive)
        self._lock = threading.Lock()
        self._zip = zipfile.ZipFile(self.archive)  # pylint: disable=consider-using-with
        self._names = frozenset(
            info.filename for info in self._zip.infolist() if not info.is_dir()
        )

    def exists(self, path: str) -> bool:
        return _normalize(path) in self._names

    def read_bytes(self, path: str) -> Optional[bytes]:
        name = _normalize(path)
        if name not in self._names:
            return None
        with self._lock:
            return self._zip.read(name)

    def iter_paths(self, prefix: str) -> Iterator[str]:
        wanted = _normalize(prefix).rstrip("/") + "/"
        for name in sorted(self._names):
            if name.startswith(wanted):
                yield name

    def close(self) -> None:
        with self._lock:
            self._zip.close()

    def __repr__(self) -> str:
        return f"ArchiveRoot({self.archive!r})"


class ResourceStore:
    """Ordered set of classpath roots with first-match-wins lookups."""

    def __init__(self, roots: Sequence[object]):
        self.roots: List[object] = list(roots)

    @classmethod
    def from_paths(cls, paths: Sequence[str]) -> "ResourceStore":
        """Build a store from directory and archive paths.

        Entries that do not exist or cannot be opened are skipped with a
        warning; the remaining roots stay usable.
        """
        roots: List[object] = []
        for entry in paths:
            if not entry:
                continue
            if os.path.isdir(entry):
                roots.append(DirectoryRoot(entry))
            elif os.path.isfile(entry) and entry.lower().endswith(Constants.ARCHIVE_SUFFIXES):
                try:
                    roots.append(ArchiveRoot(entry))
                except (zipfile.BadZipFile, OSError) as exc:
                    logger.warning("Skipping unreadable archive %s: %s", entry, exc)
            else:
                logger.warning("Skipping classpath entry %s: not a directory or jar/zip archive", entry)
        if is_debug_enabled(logger):
            logger.debug(
                "Resource store built",
                extra=extra_context(
                    event="function_exit", component="resources", action="from_paths",
                    count=len(roots)
                )
            )
        return cls(roots)

    def exists(self, path: str) -> bool:
        """Return True if any root holds ``path``."""
        return any(root.exists(path) for root in self.roots)

    def read_bytes(self, path: str) -> Optional[bytes]:
        """Return the bytes of ``path`` from the first root holding it."""
        for root in self.roots:
            data = root.read_bytes(path)
            if data is not None:
                return data
        return None

    def read_text(self, path: str, encoding: str = "utf-8") -> Optional[str]:
        """Return ``path`` decoded as text, or None when absent.

        A leading byte-order mark is dropped; undecodable bytes are replaced.
        """
        data = self.read_bytes(path)
        if data is None:
            return None
        return data.decode(encoding, errors="replace").lstrip("\ufeff")

    def iter_paths(self, prefix: str) -> Iterator[str]:
        """Yield every resource path under ``prefix`` across all roots.

        Roots are visited in order; a path shadowed by an earlier root is
        yielded only once.
        """
        seen = set()
        for root in self.roots:
            for path in root.iter_paths(prefix):
                if path not in seen:
                    seen.add(path)
                    yield path

    def close(self) -> None:
        """Release archive handles."""
        for root in self.roots:
            closer = getattr(root, "close", None)
            if callable(closer):
                closer()
