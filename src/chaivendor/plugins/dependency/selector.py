# -*- coding: utf-8 -*-
"""
插件选择

按目录顺序挑选出使用方项目已声明且版本满足范围的插件。
"""

import logging
from typing import TYPE_CHECKING, Sequence, Tuple

from .constraints import satisfies
from .manifest import DependencyManifest

if TYPE_CHECKING:
    from ..descriptor import PluginDescriptor

logger = logging.getLogger(__name__)


def select(
    catalog: Sequence["PluginDescriptor"], manifest: DependencyManifest
) -> Tuple["PluginDescriptor", ...]:
    """
    选出启用的插件

    插件启用当且仅当依赖清单声明了同名包（直接依赖或开发依赖均可），
    并且已安装版本满足该插件的版本范围。无法确定版本的依赖不会启用插件。

    Args:
        catalog: 插件目录
        manifest: 使用方项目的依赖清单

    Returns:
        按目录顺序排列的启用插件
    """
    selected = []
    for descriptor in catalog:
        if not manifest.declares(descriptor.name):
            continue

        installed = manifest.version_of(descriptor.name)
        if installed is None:
            logger.debug(f"插件 {descriptor.name} 已声明但未找到安装版本，跳过")
            continue

        if satisfies(installed, descriptor.constraint):
            logger.debug(f"启用插件 {descriptor.name}@{installed} (范围 {descriptor.constraint})")
            selected.append(descriptor)
        else:
            logger.debug(f"插件 {descriptor.name}@{installed} 不满足范围 {descriptor.constraint}")

    logger.info(f"选中的插件: {[d.name for d in selected]}")
    return tuple(selected)
