"""Exception hierarchy for webjars-requirejs.

Descriptor errors never escape a resolver: they are raised while a single
package is being read and converted into an ``Unresolved`` outcome at the
resolver boundary, so one broken webjar cannot abort the batch.
"""

from __future__ import annotations


class WebJarsError(Exception):
    """Base class for all errors raised by this project."""


class DescriptorError(WebJarsError):
    """A package descriptor could not be turned into a loader config."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class MalformedDescriptorError(DescriptorError):
    """The descriptor could not be parsed or has the wrong top-level shape."""


class IncompleteMetadataError(DescriptorError):
    """The descriptor parsed but lacks a field needed to build a config."""


class ConfigError(WebJarsError):
    """A configuration file is unreadable or fails schema validation."""
