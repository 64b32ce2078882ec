"""Resolver for npm-packaged webjars (``org.webjars.npm``)."""

from __future__ import annotations

from constants import Constants
from ..models import DescriptorFormat
from .main_config import MainConfigResolver


class NpmResolver(MainConfigResolver):
    maven_prefix = Constants.WEBJARS_MAVEN_NPM_PREFIX
    descriptor_file = Constants.PACKAGE_JSON_FILE

    @property
    def format(self) -> DescriptorFormat:
        return DescriptorFormat.NPM
