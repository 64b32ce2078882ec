"""Resolver for Bower-packaged webjars (``org.webjars.bower``)."""

from __future__ import annotations

from constants import Constants
from ..models import DescriptorFormat
from .main_config import MainConfigResolver


class BowerResolver(MainConfigResolver):
    maven_prefix = Constants.WEBJARS_MAVEN_BOWER_PREFIX
    descriptor_file = Constants.BOWER_JSON_FILE

    @property
    def format(self) -> DescriptorFormat:
        return DescriptorFormat.BOWER
