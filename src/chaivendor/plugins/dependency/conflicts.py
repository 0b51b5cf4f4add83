# -*- coding: utf-8 -*-
"""
插件冲突解析

冲突规则是一个有序的数据表，每条规则声明两个插件不能同时启用以及谁被移除。
规则按声明顺序依次作用于当前启用集合，后面的规则能看到前面规则的结果。
"""

import logging
from typing import Iterable, List, Sequence, Tuple, TypeVar

import networkx as nx
from pydantic import BaseModel, ConfigDict, Field, model_validator

from ...exceptions import ConflictRuleError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ConflictRule(BaseModel):
    """冲突规则：first 与 second 同时启用时移除 loser"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    first: str = Field(..., min_length=1)
    second: str = Field(..., min_length=1)
    loser: str = Field(..., min_length=1)
    reason: str = Field(default="", description="冲突原因，仅用于日志")

    @model_validator(mode="after")
    def validate_loser(self):
        """被移除的插件必须是规则中的一方"""
        if self.first == self.second:
            raise ValueError(f"冲突规则不能指向同一个插件: {self.first}")
        if self.loser not in (self.first, self.second):
            raise ValueError(f"被移除的插件 {self.loser} 不在规则 ({self.first}, {self.second}) 中")
        return self

    @property
    def winner(self) -> str:
        return self.second if self.loser == self.first else self.first

    def applies_to(self, names: Iterable[str]) -> bool:
        present = set(names)
        return self.first in present and self.second in present


def resolve(selected: Sequence[T], rules: Sequence[ConflictRule]) -> Tuple[T, ...]:
    """
    按规则表移除冲突插件

    不修改输入，返回新的元组，剩余插件保持原有顺序。

    Args:
        selected: 选择阶段得到的插件（需要有 name 属性）
        rules: 有序的冲突规则

    Returns:
        移除冲突后的插件
    """
    active = tuple(selected)
    for rule in rules:
        if not rule.applies_to(p.name for p in active):
            continue

        logger.info(
            f"插件 {rule.first} 与 {rule.second} 冲突，移除 {rule.loser}"
            + (f": {rule.reason}" if rule.reason else "")
        )
        active = tuple(p for p in active if p.name != rule.loser)

    return active


def verify_rules(
    plugin_names: Iterable[str], rules: Sequence[ConflictRule]
) -> List[Tuple[str, str, str]]:
    """
    检查冲突规则表

    规则中的插件必须都在目录中，同一对插件不能出现两条规则，
    胜者 -> 败者 构成的图不能有环。

    Args:
        plugin_names: 目录中的插件名
        rules: 冲突规则

    Returns:
        依赖规则顺序的链 (a, b, c)：a 移除 b，而 b 本身又会移除 c。
        规则表扩充时需要重新确认这些链的结果。

    Raises:
        ConflictRuleError: 规则表无效
    """
    known = set(plugin_names)
    graph = nx.DiGraph()
    seen_pairs = set()

    for rule in rules:
        for name in (rule.first, rule.second):
            if name not in known:
                raise ConflictRuleError(f"冲突规则引用了未知插件: {name}")

        pair = frozenset((rule.first, rule.second))
        if pair in seen_pairs:
            raise ConflictRuleError(f"重复的冲突规则: {rule.first} / {rule.second}")
        seen_pairs.add(pair)

        graph.add_edge(rule.winner, rule.loser)

    if not nx.is_directed_acyclic_graph(graph):
        cycles = list(nx.simple_cycles(graph))
        raise ConflictRuleError(f"冲突规则存在环: {cycles}")

    chains = []
    for winner, loser in graph.edges():
        for _, downstream in graph.out_edges(loser):
            chains.append((winner, loser, downstream))
    return chains
