# -*- coding: utf-8 -*-
"""
构建配置

插件目录不可配置；这里只包含构建环境相关的设置。
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "chaivendor.yaml"

# 分节配置文件中选择环境节的环境变量
ENV_SECTION_VARIABLE = "CHAIVENDOR_ENV"
DEFAULT_SECTION = "default"

# 打包器命令参数中的 ${VAR_NAME}
_ENV_VAR_RE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


class BuildConfig(BaseModel):
    """vendor 构建配置"""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    vendor_prefix: str = Field(default="vendor", description="vendor 树在宿主构建中的前缀")
    chai_package: str = Field(default="chai", description="核心断言库的包名")
    chai_file: str = Field(default="chai.js", description="核心断言库的浏览器构建文件")
    bundler_command: List[str] = Field(
        default_factory=lambda: ["npx", "--no-install", "rollup"], description="打包器命令"
    )
    bundler_timeout: Optional[float] = Field(default=120, description="打包超时（秒）")
    check_conflict_rules: bool = Field(default=True, description="启动时检查冲突规则表")

    @field_validator("bundler_command", mode="before")
    @classmethod
    def expand_bundler_command(cls, v):
        """展开命令参数中的 ${VAR_NAME}，引用未设置的环境变量时报错"""
        if not isinstance(v, list):
            return v

        def substitute(match: "re.Match[str]") -> str:
            value = os.getenv(match.group(1))
            if value is None:
                raise ValueError(f"环境变量 '{match.group(1)}' 未设置")
            return value

        return [_ENV_VAR_RE.sub(substitute, arg) if isinstance(arg, str) else arg for arg in v]

    @field_validator("bundler_command")
    @classmethod
    def validate_bundler_command(cls, v):
        if not v:
            raise ValueError("打包器命令不能为空")
        return v

    @field_validator("bundler_timeout")
    @classmethod
    def validate_bundler_timeout(cls, v):
        if v is not None and v <= 0:
            raise ValueError("打包超时必须大于0")
        return v

    @field_validator("vendor_prefix")
    @classmethod
    def validate_vendor_prefix(cls, v):
        return v.strip("/") or "vendor"

    @classmethod
    def from_sections(cls, data: Dict[str, Any], env: Optional[str] = None) -> "BuildConfig":
        """
        从分节配置创建

        default 节为基础设置，所选环境节中的字段逐项覆盖它。

        Args:
            data: 形如 {"default": {...}, "ci": {"bundler_timeout": 600}} 的配置
            env: 环境节名称，为 None 时读取 CHAIVENDOR_ENV，默认 development
        """
        if env is None:
            env = os.getenv(ENV_SECTION_VARIABLE, "development")

        settings: Dict[str, Any] = {}
        for section in (DEFAULT_SECTION, env):
            values = data.get(section) or {}
            if not isinstance(values, dict):
                raise ValueError(f"配置节 '{section}' 必须是映射")
            settings.update(values)
        return cls(**settings)


def load_config(
    path: Optional[Union[str, Path]] = None,
    project_root: Optional[Union[str, Path]] = None,
    env: Optional[str] = None,
) -> BuildConfig:
    """
    加载构建配置

    指定 path 时文件必须存在；否则在项目根目录查找 chaivendor.yaml，
    找不到则使用默认配置。文件可以是扁平结构，也可以按 default/环境 分节。

    Raises:
        ConfigurationError: 配置文件不存在、格式错误或验证失败
    """
    if path is not None:
        config_path = Path(path)
        if not config_path.is_file():
            raise ConfigurationError(f"配置文件不存在: {config_path}")
    else:
        config_path = Path(project_root or Path.cwd()) / DEFAULT_CONFIG_FILE
        if not config_path.is_file():
            return BuildConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data: Dict[str, Any] = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"解析配置文件失败 {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"配置文件的顶层必须是映射: {config_path}")

    try:
        if DEFAULT_SECTION in data:
            config = BuildConfig.from_sections(data, env=env)
        else:
            config = BuildConfig(**data)
    except (ValidationError, ValueError) as e:
        raise ConfigurationError(f"配置验证失败 {config_path}: {e}") from e

    logger.debug(f"已加载配置 {config_path}")
    return config
