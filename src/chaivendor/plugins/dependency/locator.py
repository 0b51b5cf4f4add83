# -*- coding: utf-8 -*-
"""
已安装包定位

按照 node 的模块查找规则，从起始目录向上逐级查找 node_modules/<name>。
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ...exceptions import ManifestError

PathLike = Union[str, Path]


class PackageNotFoundError(LookupError):
    """在任何 node_modules 目录中都找不到指定的包"""

    def __init__(self, name: str, basedir: PathLike):
        self.name = name
        self.basedir = str(basedir)
        super().__init__(f"找不到包 '{name}' (查找起点: {basedir})")


def read_package_json(path: Path) -> Dict[str, Any]:
    """读取 package.json，文件损坏时抛出 ManifestError"""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ManifestError(f"读取 {path} 失败: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(f"{path} 的内容必须是 JSON 对象")
    return data


class PackageLocator:
    """
    已安装包定位器

    给定包名和起始目录，返回该包安装根目录的绝对路径。
    """

    def __init__(self):
        self._logger = logging.getLogger(__name__)

    def resolve(self, name: str, basedir: PathLike) -> Path:
        """
        定位包的安装根目录

        Args:
            name: 包名，可以带 scope，如 "@babel/core"
            basedir: 查找起点

        Returns:
            包根目录的绝对路径

        Raises:
            PackageNotFoundError: 找不到该包
        """
        start = Path(basedir).resolve()
        for directory in [start] + list(start.parents):
            if directory.name == "node_modules":
                continue
            candidate = directory / "node_modules" / name
            if (candidate / "package.json").is_file():
                self._logger.debug(f"包 {name} 定位于 {candidate}")
                return candidate

        raise PackageNotFoundError(name, start)

    def installed_version(self, name: str, basedir: PathLike) -> Optional[str]:
        """读取已安装包的版本号，找不到包或没有版本号时返回 None"""
        try:
            root = self.resolve(name, basedir)
        except PackageNotFoundError:
            return None

        try:
            version = read_package_json(root / "package.json").get("version")
        except ManifestError as e:
            self._logger.warning(f"无法读取包 {name} 的版本: {e}")
            return None

        return version if isinstance(version, str) else None

    def main_file(self, name: str, basedir: PathLike) -> Path:
        """返回包的入口文件路径（package.json 的 main 字段，默认 index.js）"""
        root = self.resolve(name, basedir)
        main = read_package_json(root / "package.json").get("main") or "index.js"
        return root / main
