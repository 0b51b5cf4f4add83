# -*- coding: utf-8 -*-
"""
chai-vendor 配置
"""

from .build_config import BuildConfig, load_config

__all__ = [
    "BuildConfig",
    "load_config",
]
