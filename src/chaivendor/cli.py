# -*- coding: utf-8 -*-
"""
chai-vendor 命令行接口
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .addon import ChaiVendorAddon
from .config.build_config import load_config
from .exceptions import ChaiVendorError
from .utils.paths import find_project_root


def _print_plugins(addon: ChaiVendorAddon) -> None:
    if not addon.plugins:
        print("没有启用的插件")
        return

    print(f"{'插件':<20} {'已安装版本':<12} {'范围':<12} {'模式':<8} 输出")
    print("-" * 80)
    for plugin in addon.plugins:
        installed = addon.manifest.version_of(plugin.name) or "-"
        print(
            f"{plugin.name:<20} {installed:<12} {plugin.constraint:<12} "
            f"{plugin.mode.value:<8} {plugin.output_path}"
        )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chaivendor",
        description="chai-vendor - 为测试构建挑选并打包 chai 断言插件",
    )
    parser.add_argument("--project", "-p", help="使用方项目根目录（默认向上查找 package.json）")
    parser.add_argument("--config", "-c", help="YAML 配置文件路径")
    parser.add_argument("--verbose", "-v", action="store_true", help="输出调试日志")

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("list", help="列出启用的插件")
    subparsers.add_parser("imports", help="列出测试导入")
    build = subparsers.add_parser("build", help="生成 vendor 树")
    build.add_argument("--output", "-o", required=True, help="输出目录")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """命令行主入口"""
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(message)s",
        force=True,
    )

    project_root = Path(args.project) if args.project else find_project_root()
    if project_root is None:
        print("找不到 package.json，请使用 --project 指定项目目录", file=sys.stderr)
        return 1

    try:
        config = load_config(args.config, project_root=project_root)
        addon = ChaiVendorAddon(project_root, config=config)

        if args.command == "list":
            _print_plugins(addon)
        elif args.command == "imports":
            for declaration in addon.import_list():
                print(declaration.path)
        elif args.command == "build":
            tree = addon.build(args.output)
            print(f"已生成 {len(tree.files)} 个文件: {Path(args.output).resolve()}")

    except ChaiVendorError as e:
        print(f"构建失败: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
