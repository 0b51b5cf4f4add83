# -*- coding: utf-8 -*-
"""
插件依赖管理

提供依赖清单、版本范围求值、插件选择和冲突解析等功能。
"""

from .conflicts import ConflictRule, resolve, verify_rules
from .constraints import SemVer, parse_range, parse_version, satisfies
from .locator import PackageLocator, PackageNotFoundError
from .manifest import DependencyManifest, ManifestLoader
from .selector import select

__all__ = [
    "ConflictRule",
    "DependencyManifest",
    "ManifestLoader",
    "PackageLocator",
    "PackageNotFoundError",
    "SemVer",
    "parse_range",
    "parse_version",
    "resolve",
    "satisfies",
    "select",
    "verify_rules",
]
