# -*- coding: utf-8 -*-
"""
chai-vendor: 按使用方项目的依赖挑选 chai 断言插件并生成测试用 vendor 树
"""

__author__ = "chai-vendor"
__version__ = "1.0.0"

from .addon import ChaiVendorAddon, resolve_plugins
from .build import (
    AssetMaterializer,
    ComposedTree,
    ImportDeclaration,
    RollupBundler,
    TreeFragment,
    build_import_list,
    compose,
)
from .config import BuildConfig, load_config

# 异常
from .exceptions import (
    AssetNotFoundError,
    BuildError,
    BundleError,
    CatalogError,
    ChaiVendorError,
    ConfigurationError,
    ConflictRuleError,
    ManifestError,
    OutputCollisionError,
    PluginError,
    TornDependencyError,
)
from .plugins import CONFLICT_RULES, SUPPORTED_PLUGINS, PluginDescriptor
from .plugins.dependency import DependencyManifest, ManifestLoader, satisfies, select

__all__ = [
    "ChaiVendorAddon",
    "resolve_plugins",
    # 插件
    "PluginDescriptor",
    "SUPPORTED_PLUGINS",
    "CONFLICT_RULES",
    "DependencyManifest",
    "ManifestLoader",
    "satisfies",
    "select",
    # 构建
    "AssetMaterializer",
    "ComposedTree",
    "ImportDeclaration",
    "RollupBundler",
    "TreeFragment",
    "build_import_list",
    "compose",
    # 配置
    "BuildConfig",
    "load_config",
    # 异常
    "ChaiVendorError",
    "ConfigurationError",
    "ManifestError",
    "PluginError",
    "TornDependencyError",
    "AssetNotFoundError",
    "CatalogError",
    "ConflictRuleError",
    "BuildError",
    "OutputCollisionError",
    "BundleError",
]
