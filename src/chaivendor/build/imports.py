# -*- coding: utf-8 -*-
"""
测试导入登记

生成需要在测试环境中加载的文件列表：核心库、shim，
然后是每个插件的主文件和（可选的）辅助文件。
"""

import logging
import posixpath
from dataclasses import dataclass
from typing import Any, Sequence, Tuple

from ..exceptions import BuildError
from ..plugins.descriptor import PluginDescriptor

logger = logging.getLogger(__name__)

CORE_LIBRARY_PATH = "chai/chai.js"
SHIM_PATH = "shims/chai.js"


@dataclass(frozen=True)
class ImportDeclaration:
    """一条导入声明"""

    path: str
    type: str = "test"


def build_import_list(
    plugins: Sequence[PluginDescriptor], vendor_prefix: str = "vendor"
) -> Tuple[ImportDeclaration, ...]:
    """
    生成有序的导入列表

    Args:
        plugins: 冲突解析后的插件
        vendor_prefix: vendor 树在宿主构建中的前缀

    Returns:
        导入声明，顺序即加载顺序
    """
    paths = [CORE_LIBRARY_PATH, SHIM_PATH]
    for plugin in plugins:
        paths.append(plugin.output_path)
        if plugin.support_output_path:
            paths.append(plugin.support_output_path)

    return tuple(ImportDeclaration(posixpath.join(vendor_prefix, p)) for p in paths)


def find_importer(app: Any) -> Any:
    """嵌套的宿主应用沿 app.app 向上查找，直到找到提供 import_asset 的对象"""
    while not callable(getattr(app, "import_asset", None)) and getattr(app, "app", None) is not None:
        app = app.app

    if not callable(getattr(app, "import_asset", None)):
        raise BuildError(f"宿主 {type(app).__name__} 不支持 import_asset")
    return app


def register_imports(app: Any, imports: Sequence[ImportDeclaration]) -> None:
    """把导入声明按顺序交给宿主构建"""
    importer = find_importer(app)
    for declaration in imports:
        importer.import_asset(declaration.path, type=declaration.type)
    logger.debug(f"已登记 {len(imports)} 个测试导入")
