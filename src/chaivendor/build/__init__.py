# -*- coding: utf-8 -*-
"""
vendor 树构建

资源生成、脚本打包、片段合并和测试导入登记。
"""

from .bundler import RollupBundler
from .composer import ComposedTree, TreeFragment, compose
from .imports import ImportDeclaration, build_import_list, register_imports
from .materializer import AssetMaterializer

__all__ = [
    "AssetMaterializer",
    "ComposedTree",
    "ImportDeclaration",
    "RollupBundler",
    "TreeFragment",
    "build_import_list",
    "compose",
    "register_imports",
]
