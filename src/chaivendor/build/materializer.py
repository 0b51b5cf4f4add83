# -*- coding: utf-8 -*-
"""
插件资源生成

为每个启用的插件生成一个片段：直接复制包内文件，或调用打包器生成脚本。
"""

import logging
import posixpath
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from ..exceptions import AssetNotFoundError, TornDependencyError
from ..plugins.dependency.locator import PackageLocator, PackageNotFoundError
from ..plugins.descriptor import SUPPORT_DIR, MaterializationMode, PluginDescriptor
from ..utils.paths import ROLLUP_PATH, VENDOR_PATH
from .bundler import RollupBundler
from .composer import TreeFragment
from .imports import CORE_LIBRARY_PATH, SHIM_PATH

PathLike = Union[str, Path]

SHIM_DIR = posixpath.dirname(SHIM_PATH)


class AssetMaterializer:
    """
    插件资源生成器

    复制模式从插件的安装目录读取 asset_path；打包模式运行打包器。
    插件已通过选择阶段但包不在磁盘上时视为依赖损坏，直接失败。
    """

    def __init__(
        self,
        basedir: PathLike,
        locator: Optional[PackageLocator] = None,
        bundler: Optional[RollupBundler] = None,
        entry_dir: PathLike = ROLLUP_PATH,
        vendor_dir: PathLike = VENDOR_PATH,
    ):
        """
        Args:
            basedir: 使用方项目根目录，包查找从这里开始
            locator: 包定位器
            bundler: 打包器
            entry_dir: 打包入口文件目录
            vendor_dir: 随包发布的 vendor 文件目录
        """
        self.basedir = Path(basedir)
        self.locator = locator or PackageLocator()
        self.bundler = bundler or RollupBundler()
        self.entry_dir = Path(entry_dir)
        self.vendor_dir = Path(vendor_dir)
        self._logger = logging.getLogger(__name__)

    def materialize(self, descriptor: PluginDescriptor) -> TreeFragment:
        """为单个插件生成片段"""
        package_root = self._locate(descriptor.name, plugin=f"{descriptor.name}@{descriptor.constraint}")

        if descriptor.mode is MaterializationMode.BUNDLE:
            content = self.bundler.bundle(
                descriptor.bundle, self.entry_dir, self.basedir, plugin=descriptor.name
            )
        else:
            content = self._read_asset(package_root, descriptor.asset_path, descriptor.name)

        files = {descriptor.output_path: content}
        if descriptor.support_file is not None:
            files[descriptor.support_output_path] = self._read_asset(
                self.vendor_dir / SUPPORT_DIR, descriptor.support_file, descriptor.name
            )

        self._logger.info(f"已生成插件 {descriptor.name} ({descriptor.mode.value}): {descriptor.output_path}")
        return TreeFragment(name=descriptor.name, files=files)

    def materialize_all(self, plugins: Iterable[PluginDescriptor]) -> List[TreeFragment]:
        return [self.materialize(plugin) for plugin in plugins]

    def core_fragment(self, package: str = "chai", filename: str = "chai.js") -> TreeFragment:
        """核心断言库：优先取包入口文件所在目录下的 chai.js，其次取包根目录"""
        package_root = self._locate(package, plugin=package)
        main_dir = self.locator.main_file(package, self.basedir).parent
        root = main_dir if (main_dir / filename).is_file() else package_root
        content = self._read_asset(root, filename, package)
        return TreeFragment(
            name=package,
            files={posixpath.join(posixpath.dirname(CORE_LIBRARY_PATH), filename): content},
        )

    def shim_fragment(self) -> TreeFragment:
        """随包发布的 shim 文件，插件辅助文件由各插件的片段自己携带"""
        shim_dir = self.vendor_dir / SHIM_DIR
        files: Dict[str, bytes] = {}
        if shim_dir.is_dir():
            for path in sorted(shim_dir.rglob("*")):
                if path.is_file():
                    files[path.relative_to(self.vendor_dir).as_posix()] = path.read_bytes()
        if posixpath.normpath(SHIM_PATH) not in files:
            raise AssetNotFoundError(f"找不到 shim 文件: {self.vendor_dir / SHIM_PATH}")
        return TreeFragment(name="shims", files=files)

    def _locate(self, package: str, plugin: str) -> Path:
        try:
            return self.locator.resolve(package, self.basedir)
        except PackageNotFoundError as e:
            raise TornDependencyError(plugin, package, str(self.basedir)) from e

    def _read_asset(self, root: Path, relative: str, package: str) -> bytes:
        path = root / relative
        if not path.is_file():
            raise AssetNotFoundError(f"包 {package} 中找不到文件: {path}")
        return path.read_bytes()
