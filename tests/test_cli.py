# -*- coding: utf-8 -*-
"""
chai-vendor 命令行接口测试
"""

import pytest

from chaivendor.cli import main
from chaivendor.exceptions import BundleError


@pytest.fixture(autouse=True)
def no_bundler(mocker):
    """命令行测试中不运行真正的打包器"""
    return mocker.patch("chaivendor.build.bundler.RollupBundler.bundle", return_value=b"/* bundled */")


def test_cli_list(project, capsys):
    """测试列出启用的插件"""
    project.install("chai-jquery", "2.1.0")
    project.install("chai-dom", "1.2.0")

    assert main(["--project", str(project.root), "list"]) == 0

    out = capsys.readouterr().out
    assert "chai-jquery" in out
    assert "chai-dom" not in out


def test_cli_list_empty(project, capsys):
    """测试没有启用插件"""
    assert main(["--project", str(project.root), "list"]) == 0
    assert "没有启用的插件" in capsys.readouterr().out


def test_cli_imports(project, capsys):
    """测试输出导入列表"""
    project.install("sinon-chai", "3.0.0")

    assert main(["--project", str(project.root), "imports"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines == ["vendor/chai/chai.js", "vendor/shims/chai.js", "vendor/chai/sinon-chai.js"]


def test_cli_build(project, tmp_path, capsys):
    """测试生成 vendor 树"""
    project.install("chai-as-promised", "7.1.1")
    output = tmp_path / "out"

    assert main(["--project", str(project.root), "build", "--output", str(output)]) == 0

    assert (output / "chai" / "chai-as-promised.js").read_bytes() == b"/* bundled */"
    assert (output / "chai" / "chai.js").exists()


def test_cli_build_failure(project, tmp_path, capsys, no_bundler):
    """测试构建失败时返回非零退出码并输出错误"""
    project.install("chai-as-promised", "7.1.1")
    no_bundler.side_effect = BundleError("打包失败", "Error: boom")

    assert main(["--project", str(project.root), "build", "--output", str(tmp_path / "out")]) == 1

    err = capsys.readouterr().err
    assert "Error: boom" in err
    assert not (tmp_path / "out").exists()


def test_cli_missing_project(tmp_path, capsys):
    """测试项目没有 package.json"""
    assert main(["--project", str(tmp_path), "list"]) == 1
    assert "package.json" in capsys.readouterr().err


def test_cli_project_discovery(project, capsys, monkeypatch):
    """测试不指定 --project 时向上查找 package.json"""
    nested = project.root / "tests"
    nested.mkdir()
    monkeypatch.chdir(nested)

    assert main(["imports"]) == 0
    assert capsys.readouterr().out.splitlines()[0] == "vendor/chai/chai.js"


def test_cli_requires_command():
    """测试必须指定子命令"""
    with pytest.raises(SystemExit):
        main([])
