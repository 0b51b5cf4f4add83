# -*- coding: utf-8 -*-
"""
vendor 树合并

把核心库、shim 和各插件生成的片段合并成一棵输出树。
两个片段声明同一输出路径时直接失败，不会覆盖。
"""

import hashlib
import logging
import os
import posixpath
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Union

from ..exceptions import BuildError, OutputCollisionError

logger = logging.getLogger(__name__)


def normalize_path(path: str) -> str:
    """规范化片段内的相对路径，拒绝越出输出目录的路径"""
    normalized = posixpath.normpath(path.replace("\\", "/")).lstrip("/")
    if normalized in ("", ".") or normalized == ".." or normalized.startswith("../"):
        raise BuildError(f"无效的输出路径: {path}")
    return normalized


@dataclass(frozen=True)
class TreeFragment:
    """单个生成者产出的文件集合：输出路径 -> 内容"""

    name: str
    files: Mapping[str, bytes] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.files)


@dataclass
class ComposedTree:
    """合并后的输出树"""

    files: Dict[str, bytes] = field(default_factory=dict)
    owners: Dict[str, str] = field(default_factory=dict)

    def paths(self) -> List[str]:
        return list(self.files)

    def digest(self) -> str:
        """按路径排序计算整棵树的摘要"""
        sha = hashlib.sha256()
        for path in sorted(self.files):
            sha.update(path.encode("utf-8"))
            sha.update(b"\0")
            sha.update(self.files[path])
            sha.update(b"\0")
        return sha.hexdigest()

    def write(self, output_dir: Union[str, Path]) -> Path:
        """
        把输出树写入目录

        先写入同级临时目录，全部成功后再替换目标目录，
        不会留下写了一半的输出。

        Args:
            output_dir: 目标目录，已存在时会被整体替换

        Returns:
            目标目录路径
        """
        target = Path(output_dir).resolve()
        target.parent.mkdir(parents=True, exist_ok=True)
        staging = Path(tempfile.mkdtemp(dir=target.parent, prefix=f".{target.name}-"))

        try:
            for path, content in self.files.items():
                destination = staging / path
                destination.parent.mkdir(parents=True, exist_ok=True)
                destination.write_bytes(content)

            if target.exists():
                shutil.rmtree(target)
            os.replace(staging, target)
        except BaseException:
            shutil.rmtree(staging, ignore_errors=True)
            raise

        logger.info(f"已写入 {len(self.files)} 个文件到 {target}")
        return target


def compose(fragments: Iterable[TreeFragment]) -> ComposedTree:
    """
    合并片段

    Args:
        fragments: 按顺序排列的片段（核心库、shim、各插件）

    Returns:
        合并后的输出树

    Raises:
        OutputCollisionError: 两个片段声明了同一个输出路径
    """
    tree = ComposedTree()
    for fragment in fragments:
        for raw_path, content in fragment.files.items():
            path = normalize_path(raw_path)
            if path in tree.owners:
                raise OutputCollisionError(path, (tree.owners[path], fragment.name))
            tree.files[path] = content
            tree.owners[path] = fragment.name
        logger.debug(f"合并片段 {fragment.name}: {len(fragment)} 个文件")

    return tree
