# -*- coding: utf-8 -*-
"""
chai-vendor 核心异常
"""

from typing import Optional, Tuple


class ChaiVendorError(Exception):
    """所有 chai-vendor 自定义异常的基类。"""

    pass


class ConfigurationError(ChaiVendorError, ValueError):
    """当构建配置无效时引发。"""

    pass


class ManifestError(ChaiVendorError, ValueError):
    """当项目的 package.json 无法读取或解析时引发。"""

    pass


# region 插件异常


class PluginError(ChaiVendorError):
    """与断言插件相关的错误的基类。"""

    pass


class TornDependencyError(PluginError, LookupError):
    """插件依赖已声明但在磁盘上找不到对应的包。"""

    def __init__(self, plugin: str, package: str, basedir: Optional[str] = None):
        self.plugin = plugin
        self.package = package
        self.basedir = basedir
        location = f" (查找起点: {basedir})" if basedir else ""
        super().__init__(f"插件 '{plugin}' 依赖的包 '{package}' 已声明但未安装{location}")


class AssetNotFoundError(PluginError, FileNotFoundError):
    """当插件包中找不到要复制的资源文件时引发。"""

    pass


class CatalogError(PluginError, ValueError):
    """当插件目录本身不一致时引发，例如同名插件的版本范围重叠。"""

    pass


class ConflictRuleError(PluginError, ValueError):
    """当冲突规则表无效时引发。"""

    pass


# endregion

# region 构建异常


class BuildError(ChaiVendorError):
    """与 vendor 树构建相关的错误的基类。"""

    pass


class OutputCollisionError(BuildError):
    """两个片段声明了同一个输出路径。"""

    def __init__(self, path: str, owners: Tuple[str, str]):
        self.path = path
        self.owners = owners
        super().__init__(
            f"输出路径冲突: '{path}' 同时由 '{owners[0]}' 和 '{owners[1]}' 生成"
        )


class BundleError(BuildError):
    """打包器执行失败，附带打包器的原始诊断信息。"""

    def __init__(self, message: str, diagnostic: str = "", plugin: Optional[str] = None):
        self.diagnostic = diagnostic
        self.plugin = plugin
        full = message if not diagnostic else f"{message}\n{diagnostic}"
        super().__init__(full)


# endregion
