# -*- coding: utf-8 -*-
"""
项目依赖清单

从使用方项目的 package.json 读取直接依赖和开发依赖，
并为每个依赖解析出实际安装的版本。
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ...exceptions import ManifestError
from .locator import PackageLocator, read_package_json

DEPENDENCY_SECTIONS = ("dependencies", "devDependencies")


class DependencyManifest(BaseModel):
    """
    依赖清单

    只读输入：包名 -> 已安装版本，无法确定版本的依赖映射为 None。
    """

    model_config = ConfigDict(frozen=True)

    root: Path = Field(..., description="使用方项目根目录")
    packages: Dict[str, Optional[str]] = Field(default_factory=dict, description="已声明的依赖及其安装版本")

    def declares(self, name: str) -> bool:
        return name in self.packages

    def version_of(self, name: str) -> Optional[str]:
        return self.packages.get(name)

    def __contains__(self, name: str) -> bool:
        return self.declares(name)


class ManifestLoader:
    """
    依赖清单加载器

    负责读取 package.json 并借助包定位器查询已安装版本。
    """

    def __init__(self, locator: Optional[PackageLocator] = None):
        self.locator = locator or PackageLocator()
        self._logger = logging.getLogger(__name__)

    @staticmethod
    def declared_dependencies(package_data: Dict) -> Iterable[str]:
        """按声明顺序返回直接依赖和开发依赖的包名（去重）"""
        seen = {}
        for section in DEPENDENCY_SECTIONS:
            entries = package_data.get(section) or {}
            if not isinstance(entries, dict):
                raise ManifestError(f"package.json 中的 {section} 必须是对象")
            for name in entries:
                seen.setdefault(name, section)
        return list(seen)

    def load(self, project_root: Union[str, Path]) -> DependencyManifest:
        """
        加载项目的依赖清单

        Args:
            project_root: 包含 package.json 的项目根目录

        Returns:
            依赖清单

        Raises:
            ManifestError: package.json 不存在或格式错误
        """
        root = Path(project_root).resolve()
        package_json = root / "package.json"
        if not package_json.is_file():
            raise ManifestError(f"项目 package.json 不存在: {package_json}")

        data = read_package_json(package_json)
        packages: Dict[str, Optional[str]] = {}
        for name in self.declared_dependencies(data):
            version = self.locator.installed_version(name, root)
            if version is None:
                self._logger.debug(f"依赖 {name} 已声明但无法确定安装版本")
            packages[name] = version

        self._logger.info(f"已加载 {root.name} 的依赖清单，共 {len(packages)} 个依赖")
        return DependencyManifest(root=root, packages=packages)
