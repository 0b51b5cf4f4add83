# -*- coding: utf-8 -*-
"""
全局测试配置
提供模拟的使用方项目（package.json + node_modules）等共享fixture
"""

import json
from pathlib import Path
from typing import Dict, Optional

import pytest

from chaivendor.build.bundler import RollupBundler
from chaivendor.config.build_config import BuildConfig

CHAI_SOURCE = b"/* chai 4.3.7 */\n"


class FakeProject:
    """在临时目录中构造的使用方项目"""

    def __init__(self, root: Path):
        self.root = root
        self.sections: Dict[str, Dict[str, str]] = {"dependencies": {}, "devDependencies": {}}
        (root / "node_modules").mkdir(parents=True, exist_ok=True)
        self.write_package_json()
        # 核心断言库总是安装，但不需要在 package.json 中声明
        self.install(
            "chai",
            "4.3.7",
            files={"chai.js": CHAI_SOURCE, "index.js": b"module.exports = require('./lib/chai');\n"},
            main="./index",
            section=None,
        )

    def write_package_json(self) -> None:
        data = {"name": "my-app", "version": "0.0.0"}
        data.update({k: v for k, v in self.sections.items() if v})
        (self.root / "package.json").write_text(json.dumps(data, indent=2), encoding="utf-8")

    def declare(self, name: str, spec: str, section: str = "dependencies") -> None:
        self.sections[section][name] = spec
        self.write_package_json()

    def install(
        self,
        name: str,
        version: Optional[str],
        files: Optional[Dict[str, bytes]] = None,
        main: Optional[str] = None,
        section: Optional[str] = "devDependencies",
    ) -> Path:
        """把包安装到 node_modules，并可选地在 package.json 中声明"""
        package_dir = self.root / "node_modules" / name
        package_dir.mkdir(parents=True, exist_ok=True)

        package_json = {"name": name}
        if version is not None:
            package_json["version"] = version
        if main is not None:
            package_json["main"] = main
        (package_dir / "package.json").write_text(json.dumps(package_json), encoding="utf-8")

        if files is None:
            files = {f"{name.split('/')[-1]}.js": f"/* {name} {version} */\n".encode("utf-8")}
        for relative, content in files.items():
            path = package_dir / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)

        if section is not None:
            self.declare(name, f"^{version}" if version else "*", section)
        return package_dir


@pytest.fixture
def project(tmp_path):
    """空的使用方项目，只安装了 chai"""
    return FakeProject(tmp_path / "my-app")


@pytest.fixture
def mock_bundler(mocker):
    """模拟打包器"""
    bundler = mocker.Mock(spec=RollupBundler)
    bundler.bundle.return_value = b"/* bundled chai-as-promised */\n"
    return bundler


@pytest.fixture
def build_config():
    """关闭规则检查日志的构建配置"""
    return BuildConfig(check_conflict_rules=False)
