"""Base class for per-format RequireJS config resolvers."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Sequence

from constants import Constants
from ..models import DescriptorFormat, PackageRef, PrefixSpec, ResolutionOutcome

logger = logging.getLogger(__name__)


def config_error_message(ref: PackageRef) -> str:
    """Generic message for a webjar whose RequireJS config could not be read."""
    return (
        f"Could not read WebJar RequireJS config for: {ref.id} {ref.version}\n"
        f"Please file a bug at: http://github.com/webjars/{ref.id}/issues/new"
    )


class DescriptorResolver(ABC):
    """Turns one webjar's metadata into a ``ResolutionOutcome``.

    Subclasses are stateless apart from the resource store, so one instance
    can resolve many webjars, from several threads at once.
    """

    # Maven group directory whose pom.xml marks this format
    maven_prefix: str = ""

    def __init__(self, store):
        self.store = store

    @property
    @abstractmethod
    def format(self) -> DescriptorFormat:
        """The descriptor format handled by this resolver."""

    @abstractmethod
    def resolve(self, ref: PackageRef, prefixes: Sequence[PrefixSpec]) -> ResolutionOutcome:
        """Resolve ``ref`` for ``prefixes``; never raises for bad metadata."""

    def marker_path(self, webjar_id: str) -> str:
        """Path of the pom.xml that marks a webjar as using this format."""
        return f"{self.maven_prefix}/{webjar_id}/{Constants.POM_XML_FILE}"

    def has_marker(self, webjar_id: str) -> bool:
        return self.store.exists(self.marker_path(webjar_id))

    @staticmethod
    def webjar_path(ref: PackageRef, filename: str) -> str:
        """Path of ``filename`` inside the webjar's versioned asset root."""
        return f"{Constants.WEBJARS_PATH_PREFIX}/{ref.id}/{ref.version}/{filename}"
