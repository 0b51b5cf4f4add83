# -*- coding: utf-8 -*-
"""
脚本打包

调用 rollup 命令行把插件入口文件及其依赖打包成可独立加载的单个脚本。
"""

import json
import logging
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import List, Optional, Sequence, Union

from ..exceptions import BundleError
from ..plugins.descriptor import BundleSpec

DEFAULT_COMMAND = ("npx", "--no-install", "rollup")


class RollupBundler:
    """
    rollup 打包器

    入口文件会先复制到 basedir 下的临时目录中，
    这样模块解析会从使用方项目的 node_modules 查找插件及其依赖。
    """

    def __init__(self, command: Sequence[str] = DEFAULT_COMMAND, timeout: Optional[float] = 120):
        if not command:
            raise ValueError("打包命令不能为空")
        self.command = tuple(command)
        self.timeout = timeout
        self._logger = logging.getLogger(__name__)

    def build_command(self, spec: BundleSpec, entry: Path, output: Path) -> List[str]:
        """生成 rollup 命令行参数"""
        args = list(self.command)
        args += ["--input", str(entry), "--file", str(output), "--format", spec.output_format.value]
        for step in spec.transforms:
            if step.options:
                args += ["--plugin", f"{step.name}={json.dumps(step.options)}"]
            else:
                args += ["--plugin", step.name]
        args.append("--silent")
        return args

    def bundle(
        self,
        spec: BundleSpec,
        entry_dir: Union[str, Path],
        basedir: Union[str, Path],
        plugin: Optional[str] = None,
    ) -> bytes:
        """
        打包单个入口文件

        Args:
            spec: 打包配置
            entry_dir: 入口文件所在目录
            basedir: 使用方项目根目录，模块解析从这里开始
            plugin: 插件名，仅用于错误信息

        Returns:
            打包后的脚本内容

        Raises:
            BundleError: 打包失败，附带打包器输出的诊断信息
        """
        entry_source = Path(entry_dir) / spec.entry_file
        if not entry_source.is_file():
            raise BundleError(f"打包入口文件不存在: {entry_source}", plugin=plugin)

        basedir = Path(basedir)
        with tempfile.TemporaryDirectory(dir=basedir, prefix=".chaivendor-") as staging:
            staging_path = Path(staging)
            entry = staging_path / spec.entry_file
            entry.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(entry_source, entry)
            output = staging_path / "out" / Path(spec.output_path).name

            args = self.build_command(spec, entry, output)
            self._logger.info(f"打包 {spec.entry_file} -> {spec.output_path}")
            self._logger.debug(f"打包命令: {' '.join(args)}")

            try:
                result = subprocess.run(
                    args,
                    cwd=str(basedir),
                    capture_output=True,
                    text=True,
                    timeout=self.timeout,
                )
            except FileNotFoundError as e:
                raise BundleError(f"无法执行打包命令 {self.command[0]}", str(e), plugin) from e
            except subprocess.TimeoutExpired as e:
                raise BundleError(f"打包超时 ({self.timeout}s): {spec.entry_file}", plugin=plugin) from e

            if result.returncode != 0:
                diagnostic = (result.stderr or result.stdout or "").strip()
                raise BundleError(
                    f"打包 {spec.entry_file} 失败 (退出码 {result.returncode})", diagnostic, plugin
                )

            if not output.is_file():
                raise BundleError(f"打包器没有生成输出文件: {spec.output_path}", plugin=plugin)

            return output.read_bytes()
