"""Per-format RequireJS config resolvers."""

from .base import DescriptorResolver
from .bower import BowerResolver
from .legacy import LegacyResolver
from .main_config import MainConfigResolver
from .npm import NpmResolver

__all__ = [
    "DescriptorResolver",
    "MainConfigResolver",
    "LegacyResolver",
    "BowerResolver",
    "NpmResolver",
]
