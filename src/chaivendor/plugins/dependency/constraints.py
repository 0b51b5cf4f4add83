# -*- coding: utf-8 -*-
"""
语义化版本范围求值

将 npm 风格的版本范围（比较器、X 范围、^/~ 范围、连字符范围、|| 并集）
展开为基础比较器集合再求值。版本的先后顺序遵循 semver 规则：
major.minor.patch 部分交给 packaging 比较，预发布标记按标识符逐个比较。
"""

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import List, NamedTuple, Optional, Tuple, Union

from packaging.version import Version

logger = logging.getLogger(__name__)

PrereleaseId = Union[int, str]


@dataclass(frozen=True)
class SemVer:
    """
    语义化版本号

    Attributes:
        core: major.minor.patch 部分
        prerelease: 预发布标识符，数字标识符存为 int
    """

    core: Version
    prerelease: Tuple[PrereleaseId, ...] = ()

    @classmethod
    def from_parts(cls, major: int, minor: int, patch: int, prerelease: str = "") -> "SemVer":
        """
        Raises:
            ValueError: 预发布标记中有空标识符
        """
        identifiers: List[PrereleaseId] = []
        if prerelease:
            for part in prerelease.split("."):
                if not part:
                    raise ValueError(f"无效的预发布标记: {prerelease}")
                identifiers.append(int(part) if part.isdigit() else part)
        return cls(Version(f"{major}.{minor}.{patch}"), tuple(identifiers))

    @property
    def release(self) -> Tuple[int, int, int]:
        return tuple((list(self.core.release) + [0, 0, 0])[:3])

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def sort_key(self) -> tuple:
        # 正式版排在同号预发布版之后；数字标识符排在字母标识符之前；
        # 前缀相同时标识符少的版本较小
        identifiers = tuple(
            (0, part, "") if isinstance(part, int) else (1, 0, part) for part in self.prerelease
        )
        return (self.core, not self.prerelease, identifiers)

    def __lt__(self, other: "SemVer") -> bool:
        return self.sort_key() < other.sort_key()

    def __le__(self, other: "SemVer") -> bool:
        return self.sort_key() <= other.sort_key()

    def __gt__(self, other: "SemVer") -> bool:
        return self.sort_key() > other.sort_key()

    def __ge__(self, other: "SemVer") -> bool:
        return self.sort_key() >= other.sort_key()

    def __str__(self) -> str:
        text = ".".join(str(n) for n in self.release)
        if self.prerelease:
            text += "-" + ".".join(str(part) for part in self.prerelease)
        return text


Comparator = Tuple[str, SemVer]
ComparatorSet = Tuple[Comparator, ...]

_WILDCARDS = ("*", "x", "X")

_VERSION_RE = re.compile(
    r"^[v=\s]*(\d+)\.(\d+)\.(\d+)(?:-?([0-9A-Za-z][0-9A-Za-z.-]*))?(?:\+[0-9A-Za-z.-]+)?$"
)
_PARTIAL_RE = re.compile(
    r"^v?(\*|x|X|\d+)"
    r"(?:\.(\*|x|X|\d+)"
    r"(?:\.(\*|x|X|\d+)"
    r"(?:-?([0-9A-Za-z][0-9A-Za-z.-]*))?)?)?"
    r"(?:\+[0-9A-Za-z.-]+)?$"
)
_HYPHEN_RE = re.compile(r"^(\S+)\s+-\s+(\S+)$")
_OPERATOR_SPACE_RE = re.compile(r"(<=|>=|<|>|=|\^|~>?)\s+")
_COMPARATOR_RE = re.compile(r"^(<=|>=|<|>|=|\^|~>|~)?(.+)$")

# 任何版本都不满足的比较器
_NEVER: Comparator = ("<", SemVer.from_parts(0, 0, 0, "0"))


class _Partial(NamedTuple):
    major: Optional[int]
    minor: Optional[int]
    patch: Optional[int]
    prerelease: str


def parse_version(text: Optional[str]) -> Optional[SemVer]:
    """
    解析已安装的版本号

    只接受完整的 major.minor.patch 形式（可带预发布标记和构建元数据），
    无法解析时返回 None 而不是抛出异常。
    """
    if not text:
        return None

    match = _VERSION_RE.match(text.strip())
    if not match:
        return None

    major, minor, patch, prerelease = match.groups()
    try:
        return _make_version(int(major), int(minor), int(patch), prerelease or "")
    except ValueError:
        return None


def _make_version(major: int, minor: int, patch: int, prerelease: str = "") -> SemVer:
    return SemVer.from_parts(major, minor, patch, prerelease)


def _parse_partial(text: str) -> _Partial:
    match = _PARTIAL_RE.match(text)
    if not match:
        raise ValueError(f"无效的版本: {text}")

    def number(group: Optional[str]) -> Optional[int]:
        if group is None or group in _WILDCARDS:
            return None
        return int(group)

    major, minor, patch = (number(match.group(i)) for i in (1, 2, 3))
    # 通配符之后的部分一律视为通配
    if major is None:
        minor = patch = None
    elif minor is None:
        patch = None
    return _Partial(major, minor, patch, match.group(4) or "")


def _lower_bound(p: _Partial) -> SemVer:
    return _make_version(p.major, p.minor or 0, p.patch or 0, p.prerelease)


def _desugar(operator: str, p: _Partial) -> List[Comparator]:
    """将单个 npm 比较器展开为基础比较器列表，空列表表示不限制"""
    if operator in ("", "="):
        if p.major is None:
            return []
        if p.minor is None:
            return [(">=", _make_version(p.major, 0, 0)), ("<", _make_version(p.major + 1, 0, 0))]
        if p.patch is None:
            return [
                (">=", _make_version(p.major, p.minor, 0)),
                ("<", _make_version(p.major, p.minor + 1, 0)),
            ]
        return [("==", _lower_bound(p))]

    if operator in ("~", "~>"):
        if p.major is None:
            return []
        if p.minor is None:
            upper = _make_version(p.major + 1, 0, 0)
        else:
            upper = _make_version(p.major, p.minor + 1, 0)
        return [(">=", _lower_bound(p)), ("<", upper)]

    if operator == "^":
        if p.major is None:
            return []
        if p.major > 0 or p.minor is None:
            upper = _make_version(p.major + 1, 0, 0)
        elif p.minor > 0 or p.patch is None:
            upper = _make_version(0, p.minor + 1, 0)
        else:
            upper = _make_version(0, 0, p.patch + 1)
        return [(">=", _lower_bound(p)), ("<", upper)]

    if operator == ">":
        if p.major is None:
            return [_NEVER]
        if p.minor is None:
            return [(">=", _make_version(p.major + 1, 0, 0))]
        if p.patch is None:
            return [(">=", _make_version(p.major, p.minor + 1, 0))]
        return [(">", _lower_bound(p))]

    if operator == ">=":
        if p.major is None:
            return []
        return [(">=", _lower_bound(p))]

    if operator == "<":
        if p.major is None:
            return [_NEVER]
        return [("<", _lower_bound(p))]

    if operator == "<=":
        if p.major is None:
            return []
        if p.minor is None:
            return [("<", _make_version(p.major + 1, 0, 0))]
        if p.patch is None:
            return [("<", _make_version(p.major, p.minor + 1, 0))]
        return [("<=", _lower_bound(p))]

    raise ValueError(f"未知的比较运算符: {operator}")


def _desugar_hyphen(lower_text: str, upper_text: str) -> List[Comparator]:
    lower, upper = _parse_partial(lower_text), _parse_partial(upper_text)
    comparators: List[Comparator] = []

    if lower.major is not None:
        comparators.append((">=", _lower_bound(lower)))

    if upper.major is None:
        pass
    elif upper.minor is None:
        comparators.append(("<", _make_version(upper.major + 1, 0, 0)))
    elif upper.patch is None:
        comparators.append(("<", _make_version(upper.major, upper.minor + 1, 0)))
    else:
        comparators.append(("<=", _lower_bound(upper)))
    return comparators


def _parse_comparator_set(text: str) -> ComparatorSet:
    text = text.strip()
    hyphen = _HYPHEN_RE.match(text)
    if hyphen:
        return tuple(_desugar_hyphen(hyphen.group(1), hyphen.group(2)))

    text = _OPERATOR_SPACE_RE.sub(r"\1", text)
    comparators: List[Comparator] = []
    for token in text.split():
        match = _COMPARATOR_RE.match(token)
        if not match:
            raise ValueError(f"无效的比较器: {token}")
        comparators.extend(_desugar(match.group(1) or "", _parse_partial(match.group(2))))
    return tuple(comparators)


@lru_cache(maxsize=256)
def parse_range(range_expression: str) -> Tuple[ComparatorSet, ...]:
    """
    解析版本范围表达式

    Args:
        range_expression: npm 风格的版本范围，如 "^6 || ^7"

    Returns:
        比较器集合的元组，集合之间为"或"关系，集合内部为"与"关系

    Raises:
        ValueError: 范围表达式无效
    """
    if range_expression is None:
        raise ValueError("版本范围不能为空")
    return tuple(_parse_comparator_set(part) for part in range_expression.split("||"))


def is_valid_range(range_expression: str) -> bool:
    """检查版本范围表达式是否可以解析"""
    try:
        parse_range(range_expression)
    except ValueError:
        return False
    return True


_OPERATORS = {
    "==": lambda version, bound: version.sort_key() == bound.sort_key(),
    ">": lambda version, bound: version > bound,
    ">=": lambda version, bound: version >= bound,
    "<": lambda version, bound: version < bound,
    "<=": lambda version, bound: version <= bound,
}


def _set_matches(comparators: ComparatorSet, version: SemVer) -> bool:
    if not all(_OPERATORS[op](version, bound) for op, bound in comparators):
        return False

    # 预发布版本只有在同一 major.minor.patch 上有预发布比较器时才满足
    if version.is_prerelease:
        return any(
            bound.is_prerelease and bound.release == version.release
            for _, bound in comparators
        )
    return True


def satisfies(installed_version: Optional[str], range_expression: str) -> bool:
    """
    检查已安装的版本是否满足版本范围

    无法解析的版本或范围一律视为不满足，不会抛出异常。

    Args:
        installed_version: 已安装的版本号，如 "7.1.1"
        range_expression: 版本范围，如 "^6 || ^7"

    Returns:
        是否满足
    """
    version = parse_version(installed_version)
    if version is None:
        if installed_version is not None:
            logger.warning(f"无法解析的版本号 '{installed_version}'，视为不满足 {range_expression}")
        return False

    try:
        comparator_sets = parse_range(range_expression)
        return any(_set_matches(comparators, version) for comparators in comparator_sets)
    except ValueError as e:
        logger.warning(f"无效的版本范围 '{range_expression}': {e}")
        return False
