# -*- coding: utf-8 -*-
"""
断言插件描述符与插件目录
"""

from .catalog import CONFLICT_RULES, SUPPORTED_PLUGINS, verify_catalog
from .descriptor import BundleSpec, MaterializationMode, OutputFormat, PluginDescriptor, TransformStep

__all__ = [
    "BundleSpec",
    "CONFLICT_RULES",
    "MaterializationMode",
    "OutputFormat",
    "PluginDescriptor",
    "SUPPORTED_PLUGINS",
    "TransformStep",
    "verify_catalog",
]
