# -*- coding: utf-8 -*-
"""
支持的断言插件目录

目录是固定的、封闭的列表，顺序即插件的导入顺序，不能通过配置修改。
"""

from collections import defaultdict
from typing import Dict, List, Sequence

from ..exceptions import CatalogError
from .dependency.conflicts import ConflictRule
from .dependency.constraints import SemVer, parse_range, satisfies
from .descriptor import BundleSpec, OutputFormat, PluginDescriptor, TransformStep

JQUERY_PLUGIN = PluginDescriptor(
    name="chai-jquery",
    constraint="^2.0.0",
    asset_path="chai-jquery.js",
)

DOM_PLUGIN = PluginDescriptor(
    name="chai-dom",
    constraint="^1.0.0",
    asset_path="chai-dom.js",
)

AS_PROMISED_PLUGIN = PluginDescriptor(
    name="chai-as-promised",
    constraint="<6",
    asset_path="chai-as-promised.js",
)

# 6.x 起 chai-as-promised 只发布 CommonJS 源码，需要打包成浏览器可直接加载的脚本
AS_PROMISED_PLUGIN_6 = PluginDescriptor(
    name="chai-as-promised",
    constraint="^6 || ^7",
    asset_path="chai-as-promised.js",
    bundle=BundleSpec(
        entry_file="chai-as-promised.js",
        output_path="chai/chai-as-promised.js",
        output_format=OutputFormat.IIFE,
        transforms=(
            TransformStep(name="node-resolve"),
            TransformStep(name="commonjs"),
            TransformStep(
                name="babel",
                options={
                    "presets": [["@babel/preset-env", {"loose": True, "modules": False}]],
                },
            ),
        ),
    ),
)

SINON_PLUGIN = PluginDescriptor(
    name="sinon-chai",
    constraint=">=2.0.0",
    asset_path="sinon-chai.js",
)

TESTDOUBLE_PLUGIN = PluginDescriptor(
    name="testdouble-chai",
    constraint="^0.5.0",
    asset_path="testdouble-chai.js",
    support_file="testdouble-chai.js",
)

SUPPORTED_PLUGINS = (
    JQUERY_PLUGIN,
    DOM_PLUGIN,
    AS_PROMISED_PLUGIN,
    AS_PROMISED_PLUGIN_6,
    SINON_PLUGIN,
    TESTDOUBLE_PLUGIN,
)

CONFLICT_RULES = (
    ConflictRule(
        first="chai-jquery",
        second="chai-dom",
        loser="chai-dom",
        reason="chai-jquery 注册的链式属性与 chai-dom 冲突",
    ),
    ConflictRule(
        first="sinon-chai",
        second="testdouble-chai",
        loser="testdouble-chai",
        reason="两者提供相同的 spy 断言 API",
    ),
)


def _sample_versions(ranges: Sequence[str]) -> List[SemVer]:
    """收集范围边界附近的版本号，用于检测范围是否重叠"""
    samples = {SemVer.from_parts(0, 0, 0)}
    for expression in ranges:
        for comparators in parse_range(expression):
            for _, bound in comparators:
                major, minor, patch = bound.release
                samples.update(
                    {
                        SemVer.from_parts(major, minor, patch),
                        SemVer.from_parts(major, minor, patch + 1),
                        SemVer.from_parts(major, minor + 1, 0),
                        SemVer.from_parts(major + 1, 0, 0),
                    }
                )
                if patch > 0:
                    samples.add(SemVer.from_parts(major, minor, patch - 1))
                elif minor > 0:
                    samples.add(SemVer.from_parts(major, minor - 1, 999))
                elif major > 0:
                    samples.add(SemVer.from_parts(major - 1, 999, 999))
    return sorted(samples, key=SemVer.sort_key)


def verify_catalog(catalog: Sequence[PluginDescriptor] = SUPPORTED_PLUGINS) -> None:
    """
    检查目录的一致性

    同名插件的版本范围必须互不重叠，保证每个包最多选中一个描述符。
    重叠检测基于范围边界附近的采样版本。

    Raises:
        CatalogError: 同名插件的版本范围重叠，或输出路径重复
    """
    by_name: Dict[str, List[PluginDescriptor]] = defaultdict(list)
    for descriptor in catalog:
        by_name[descriptor.name].append(descriptor)

    for name, descriptors in by_name.items():
        if len(descriptors) < 2:
            continue
        samples = _sample_versions([d.constraint for d in descriptors])
        for sample in samples:
            matching = [d.constraint for d in descriptors if satisfies(str(sample), d.constraint)]
            if len(matching) > 1:
                raise CatalogError(f"插件 {name} 的版本范围重叠: {matching} 都匹配 {sample}")

    owners: Dict[str, str] = {}
    for descriptor in catalog:
        owner = owners.get(descriptor.output_path)
        if owner is not None and owner != descriptor.name:
            raise CatalogError(
                f"插件 {owner} 和 {descriptor.name} 的输出路径相同: {descriptor.output_path}"
            )
        owners[descriptor.output_path] = descriptor.name
