# -*- coding: utf-8 -*-
"""
宿主构建集成

把插件选择、冲突解析、资源生成、树合并和导入登记串成宿主构建的几个钩子。
"""

import logging
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple, Union

from .build.bundler import RollupBundler
from .build.composer import ComposedTree, TreeFragment, compose
from .build.imports import ImportDeclaration, build_import_list, register_imports
from .build.materializer import AssetMaterializer
from .config.build_config import BuildConfig
from .plugins.catalog import CONFLICT_RULES, SUPPORTED_PLUGINS, verify_catalog
from .plugins.dependency.conflicts import ConflictRule, resolve, verify_rules
from .plugins.dependency.locator import PackageLocator
from .plugins.dependency.manifest import DependencyManifest, ManifestLoader
from .plugins.dependency.selector import select
from .plugins.descriptor import PluginDescriptor


def resolve_plugins(
    manifest: DependencyManifest,
    catalog: Sequence[PluginDescriptor] = SUPPORTED_PLUGINS,
    rules: Sequence[ConflictRule] = CONFLICT_RULES,
) -> Tuple[PluginDescriptor, ...]:
    """选择插件并移除冲突插件"""
    return resolve(select(catalog, manifest), rules)


class ChaiVendorAddon:
    """
    chai 断言库的 vendor 构建

    构造时读取一次依赖清单并确定启用的插件，此后插件集合不再变化，
    资源生成和导入登记都基于同一个插件集合。
    """

    name = "chai-vendor"

    def __init__(
        self,
        project_root: Union[str, Path],
        config: Optional[BuildConfig] = None,
        locator: Optional[PackageLocator] = None,
        bundler: Optional[RollupBundler] = None,
        catalog: Sequence[PluginDescriptor] = SUPPORTED_PLUGINS,
        rules: Sequence[ConflictRule] = CONFLICT_RULES,
    ):
        self.project_root = Path(project_root).resolve()
        self.config = config or BuildConfig()
        self.locator = locator or PackageLocator()
        self.bundler = bundler or RollupBundler(
            command=self.config.bundler_command, timeout=self.config.bundler_timeout
        )
        self._logger = logging.getLogger(__name__)

        if self.config.check_conflict_rules:
            verify_catalog(catalog)
            for chain in verify_rules({d.name for d in catalog}, rules):
                self._logger.warning(f"冲突规则结果依赖于规则顺序: {' -> '.join(chain)}")

        self.manifest = ManifestLoader(self.locator).load(self.project_root)
        self._plugins = resolve_plugins(self.manifest, catalog, rules)
        self._logger.info(f"启用的 chai 插件: {[str(p) for p in self._plugins] or '无'}")

    @property
    def plugins(self) -> Tuple[PluginDescriptor, ...]:
        return self._plugins

    def import_list(self) -> Tuple[ImportDeclaration, ...]:
        return build_import_list(self._plugins, vendor_prefix=self.config.vendor_prefix)

    def included(self, app: Any) -> None:
        """向宿主登记测试导入"""
        register_imports(app, self.import_list())

    def tree_for_addon(self, tree: Any, app: Any) -> Optional[Any]:
        """只有宿主启用了测试时才提供 addon 树"""
        if getattr(app, "tests", False):
            return tree
        return None

    def fragments(self) -> List[TreeFragment]:
        """按顺序生成核心库、shim 和各插件的片段"""
        materializer = AssetMaterializer(self.project_root, locator=self.locator, bundler=self.bundler)
        fragments = [
            materializer.core_fragment(self.config.chai_package, self.config.chai_file),
            materializer.shim_fragment(),
        ]
        fragments.extend(materializer.materialize_all(self._plugins))
        return fragments

    def tree_for_vendor(self, existing: Optional[TreeFragment] = None) -> ComposedTree:
        """
        生成 vendor 树

        Args:
            existing: 宿主已有的 vendor 片段，会最先合并

        Returns:
            合并后的输出树

        Raises:
            TornDependencyError: 插件包已声明但未安装
            BundleError: 打包失败
            OutputCollisionError: 输出路径冲突
        """
        fragments = self.fragments()
        if existing is not None:
            fragments.insert(0, existing)
        return compose(fragments)

    def build(self, output_dir: Union[str, Path]) -> ComposedTree:
        """生成 vendor 树并写入目录，任何失败都不会留下部分输出"""
        tree = self.tree_for_vendor()
        tree.write(output_dir)
        return tree
