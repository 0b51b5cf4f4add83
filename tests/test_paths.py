# -*- coding: utf-8 -*-
"""
路径工具测试
"""

from chaivendor.utils.paths import ROLLUP_PATH, VENDOR_PATH, find_project_root


def test_packaged_resources_exist():
    """测试随包发布的资源目录存在"""
    assert (VENDOR_PATH / "shims" / "chai.js").is_file()
    assert (ROLLUP_PATH / "chai-as-promised.js").is_file()


def test_find_from_project_root(project):
    assert find_project_root(project.root) == project.root.resolve()


def test_find_from_nested_directory(project):
    """测试从子目录向上查找"""
    nested = project.root / "tests" / "unit"
    nested.mkdir(parents=True)
    assert find_project_root(nested) == project.root.resolve()


def test_skips_installed_packages(project):
    """测试不会把 node_modules 中的包当作项目根目录"""
    package_dir = project.install("chai-dom", "1.2.0")
    assert find_project_root(package_dir) == project.root.resolve()


def test_not_found(tmp_path):
    assert find_project_root(tmp_path / "empty") is None
