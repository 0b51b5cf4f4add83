# -*- coding: utf-8 -*-
"""
插件描述符模型

每个描述符都是纯数据：目标包名、适用的版本范围，以及如何生成它的资源。
是否存在 bundle 决定了资源的生成方式（复制或打包）。
"""

import posixpath
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .dependency.constraints import is_valid_range

#: 插件自带的辅助文件在 vendor 树中的目录
SUPPORT_DIR = "chai-plugin-support"


class MaterializationMode(str, Enum):
    """资源生成方式"""

    COPY = "copy"
    BUNDLE = "bundle"


class OutputFormat(str, Enum):
    """打包输出格式"""

    IIFE = "iife"
    UMD = "umd"
    AMD = "amd"
    CJS = "cjs"
    ES = "es"
    SYSTEM = "system"


class TransformStep(BaseModel):
    """打包时按顺序应用的源码转换步骤（对应打包器的一个插件）"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1, description="打包器插件名称")
    options: Dict[str, Any] = Field(default_factory=dict, description="插件选项，必须可 JSON 序列化")


class BundleSpec(BaseModel):
    """打包配置"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    entry_file: str = Field(..., description="入口文件，相对于包内的 rollup 目录")
    output_path: str = Field(..., description="输出文件在 vendor 树中的路径")
    output_format: OutputFormat = Field(default=OutputFormat.IIFE, description="输出格式")
    transforms: Tuple[TransformStep, ...] = Field(default=(), description="转换步骤")

    @field_validator("output_path")
    @classmethod
    def validate_output_path(cls, v):
        """输出路径必须是 vendor 树内的相对路径"""
        normalized = posixpath.normpath(v)
        if normalized.startswith(("/", "..")) or normalized == ".":
            raise ValueError(f"输出路径必须位于 vendor 树内: {v}")
        return normalized


class PluginDescriptor(BaseModel):
    """
    断言插件描述符

    同一个包可以有多个描述符（不同的版本区间、不同的生成方式），
    但它们的版本范围必须互不重叠。
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1, description="对应的 npm 包名")
    constraint: str = Field(..., description="语义化版本范围")
    asset_path: str = Field(..., description="复制模式下要暴露的文件，相对于包根目录")
    bundle: Optional[BundleSpec] = Field(default=None, description="存在时切换为打包模式")
    support_file: Optional[str] = Field(default=None, description="随主资源一起导入的辅助文件")
    family: str = Field(default="chai", description="复制模式下资源所在的 vendor 子目录")

    @field_validator("constraint")
    @classmethod
    def validate_constraint(cls, v):
        """验证版本范围"""
        if not is_valid_range(v):
            raise ValueError(f"无效的版本范围: {v}")
        return v

    @property
    def mode(self) -> MaterializationMode:
        if self.bundle is not None:
            return MaterializationMode.BUNDLE
        return MaterializationMode.COPY

    @property
    def output_path(self) -> str:
        """主资源在 vendor 树中的路径"""
        if self.bundle is not None:
            return self.bundle.output_path
        return posixpath.join(self.family, posixpath.basename(self.asset_path))

    @property
    def support_output_path(self) -> Optional[str]:
        if self.support_file is None:
            return None
        return posixpath.join(SUPPORT_DIR, self.support_file)

    def __str__(self) -> str:
        return f"{self.name}@{self.constraint} ({self.mode.value})"
