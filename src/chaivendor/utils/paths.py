# -*- coding: utf-8 -*-
"""
路径管理

提供包内资源目录和使用方项目根目录的统一访问
"""

from pathlib import Path
from typing import Optional, Union

PACKAGE_ROOT = Path(__file__).resolve().parent.parent

# 随包发布的 vendor 文件（shim 和插件辅助文件）
VENDOR_PATH = PACKAGE_ROOT / "vendor"

# 打包模式插件的入口文件
ROLLUP_PATH = PACKAGE_ROOT / "rollup"


def find_project_root(start: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """从起始目录向上查找包含 package.json 的使用方项目根目录

    Args:
        start: 查找起点，默认为当前工作目录

    Returns:
        项目根目录，找不到时返回 None
    """
    current = Path(start or Path.cwd()).resolve()
    for parent in [current] + list(current.parents):
        if "node_modules" in parent.parts:
            continue
        if (parent / "package.json").is_file():
            return parent
    return None
