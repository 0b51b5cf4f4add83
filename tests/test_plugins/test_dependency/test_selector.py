# -*- coding: utf-8 -*-
"""
插件选择测试
"""

from pathlib import Path

import pytest

from chaivendor.plugins.catalog import (
    AS_PROMISED_PLUGIN,
    AS_PROMISED_PLUGIN_6,
    DOM_PLUGIN,
    JQUERY_PLUGIN,
    SINON_PLUGIN,
    SUPPORTED_PLUGINS,
    TESTDOUBLE_PLUGIN,
)
from chaivendor.plugins.dependency.manifest import DependencyManifest
from chaivendor.plugins.dependency.selector import select


def manifest_of(mapping):
    return DependencyManifest(root=Path("/project"), packages=mapping)


class TestSelect:
    """测试插件选择"""

    def test_empty_manifest_selects_nothing(self):
        """测试没有声明任何插件时结果为空"""
        assert select(SUPPORTED_PLUGINS, manifest_of({})) == ()

    def test_selects_declared_and_satisfied(self):
        """测试已声明且版本满足的插件被选中"""
        manifest = manifest_of({"chai-jquery": "2.1.0", "sinon-chai": "3.0.0"})
        assert select(SUPPORTED_PLUGINS, manifest) == (JQUERY_PLUGIN, SINON_PLUGIN)

    def test_unsatisfied_constraint_excluded(self):
        """测试版本不满足范围的插件被排除"""
        manifest = manifest_of({"chai-jquery": "1.9.0", "chai-dom": "2.0.0"})
        assert select(SUPPORTED_PLUGINS, manifest) == ()

    def test_unknown_version_fails_closed(self):
        """测试已声明但无法确定版本的插件被排除"""
        manifest = manifest_of({"chai-jquery": None, "sinon-chai": "garbage"})
        assert select(SUPPORTED_PLUGINS, manifest) == ()

    def test_unrelated_dependencies_ignored(self):
        """测试与插件无关的依赖不影响结果"""
        manifest = manifest_of({"ember-source": "3.28.0", "chai-dom": "1.2.0"})
        assert select(SUPPORTED_PLUGINS, manifest) == (DOM_PLUGIN,)

    @pytest.mark.parametrize(
        "version,expected",
        [
            ("5.1.0", AS_PROMISED_PLUGIN),
            ("6.0.0", AS_PROMISED_PLUGIN_6),
            ("7.1.1", AS_PROMISED_PLUGIN_6),
        ],
    )
    def test_version_bands_select_single_descriptor(self, version, expected):
        """测试同一个包的不同版本区间只会选中一个描述符"""
        selected = select(SUPPORTED_PLUGINS, manifest_of({"chai-as-promised": version}))
        assert selected == (expected,)

    def test_output_follows_catalog_order(self):
        """测试结果顺序与目录顺序一致，而不是依赖声明顺序"""
        manifest = manifest_of(
            {
                "testdouble-chai": "0.5.2",
                "chai-as-promised": "7.1.1",
                "chai-dom": "1.2.0",
                "chai-jquery": "2.1.0",
            }
        )
        selected = select(SUPPORTED_PLUGINS, manifest)
        assert selected == (JQUERY_PLUGIN, DOM_PLUGIN, AS_PROMISED_PLUGIN_6, TESTDOUBLE_PLUGIN)

        # 结果是目录的子序列
        indices = [SUPPORTED_PLUGINS.index(p) for p in selected]
        assert indices == sorted(indices)

    def test_deterministic(self):
        """测试相同输入总是得到相同输出"""
        manifest = manifest_of({"chai-jquery": "2.1.0", "chai-dom": "1.2.0", "sinon-chai": "3.0.0"})
        assert select(SUPPORTED_PLUGINS, manifest) == select(SUPPORTED_PLUGINS, manifest)

    def test_exactly_declared_and_satisfied(self):
        """测试选择结果恰好是已声明且满足范围的描述符"""
        manifest = manifest_of(
            {
                "chai-jquery": "2.1.0",
                "chai-dom": "0.9.0",
                "chai-as-promised": "5.3.0",
                "sinon-chai": "1.0.0",
                "testdouble-chai": "0.5.2",
            }
        )
        selected = select(SUPPORTED_PLUGINS, manifest)
        assert selected == (JQUERY_PLUGIN, AS_PROMISED_PLUGIN, TESTDOUBLE_PLUGIN)
