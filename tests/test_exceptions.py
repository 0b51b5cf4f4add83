# -*- coding: utf-8 -*-
"""
chai-vendor 异常系统测试

关注异常在构建失败时能否给出可诊断的信息，以及继承关系是否支持统一处理。
"""

import pytest

from chaivendor.exceptions import (
    AssetNotFoundError,
    BuildError,
    BundleError,
    CatalogError,
    ChaiVendorError,
    ConfigurationError,
    ConflictRuleError,
    ManifestError,
    OutputCollisionError,
    PluginError,
    TornDependencyError,
)


class TestBuildFailureDiagnostics:
    """测试构建失败时的错误信息"""

    def test_torn_dependency_names_plugin_and_package(self):
        """测试依赖损坏的错误信息包含插件和包名"""
        error = TornDependencyError("chai-jquery@^2.0.0", "chai-jquery", "/work/my-app")
        message = str(error)
        assert "chai-jquery@^2.0.0" in message
        assert "/work/my-app" in message
        assert error.package == "chai-jquery"
        assert isinstance(error, LookupError)

    def test_collision_names_path_and_owners(self):
        """测试输出冲突的错误信息包含路径和两个生成者"""
        error = OutputCollisionError("chai/chai-dom.js", ("chai-dom", "custom-dom"))
        message = str(error)
        assert "chai/chai-dom.js" in message
        assert "chai-dom" in message and "custom-dom" in message

    def test_bundle_error_keeps_original_diagnostic(self):
        """测试打包错误保留打包器的原始诊断信息"""
        diagnostic = "[!] Error: 'default' is not exported by node_modules/chai-as-promised/lib/chai-as-promised.js"
        error = BundleError("打包失败", diagnostic, plugin="chai-as-promised")
        assert error.diagnostic == diagnostic
        assert str(error).endswith(diagnostic)

    def test_bundle_error_without_diagnostic(self):
        """测试没有诊断信息时只保留消息"""
        assert str(BundleError("打包超时")) == "打包超时"


class TestExceptionHierarchy:
    """测试异常继承关系"""

    @pytest.mark.parametrize(
        "error,bases",
        [
            (ConfigurationError("x"), (ChaiVendorError, ValueError)),
            (ManifestError("x"), (ChaiVendorError, ValueError)),
            (TornDependencyError("p", "p"), (PluginError, ChaiVendorError)),
            (AssetNotFoundError("x"), (PluginError, FileNotFoundError)),
            (CatalogError("x"), (PluginError, ValueError)),
            (ConflictRuleError("x"), (PluginError, ValueError)),
            (OutputCollisionError("a", ("b", "c")), (BuildError, ChaiVendorError)),
            (BundleError("x"), (BuildError, ChaiVendorError)),
        ],
    )
    def test_bases(self, error, bases):
        for base in bases:
            assert isinstance(error, base)

    def test_single_handler_catches_all_fatal_errors(self):
        """测试一个 except 子句就能捕获所有致命构建错误"""
        for error in (
            TornDependencyError("chai-dom", "chai-dom"),
            OutputCollisionError("chai/x.js", ("a", "b")),
            BundleError("boom"),
        ):
            with pytest.raises(ChaiVendorError):
                raise error
