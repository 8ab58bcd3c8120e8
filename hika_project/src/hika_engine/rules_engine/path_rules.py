"""
走法规则定义

以声明式路径树描述棋子的走法，并提供规则字典(内置规则 + 自定义扩展表)。

路径节点有两种:
- Leaf: 沿 direction 方向行进
- Branches: 若干分支的并集，分支可以是嵌套节点或对另一棋子类型整棵规则树的引用
"""

import math
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union, Iterable, Any

import yaml

from .vec import Vec
from .piece import FLAG_FIRST_MOVE, FLAG_CASTLE_LEFT, FLAG_CASTLE_RIGHT
from ..utils.exceptions import MissingRuleError, RuleDefinitionError

logger = logging.getLogger(__name__)

UNBOUNDED = math.inf  # 滑行: 不限步数


@dataclass(frozen=True)
class Condition:
    """
    路径前置条件

    所有设置了的检测项同时满足才算通过；inverted 只对本条件取反。
    piece / enemy 为相对 (起点 + 本节点方向) 的偏移。
    """
    team: Optional[int] = None
    flag: Optional[int] = None
    piece: Optional[Vec] = None     # 该格必须有棋子
    enemy: Optional[Vec] = None     # 该格必须有敌方棋子
    inverted: bool = False


@dataclass(frozen=True)
class PieceReference:
    """引用另一棋子类型的整棵规则树"""
    piece_id: str


@dataclass(frozen=True)
class PathNode:
    """路径节点基类，自身不产生走法"""
    repeat: Optional[float] = None
    attack: Optional[int] = None
    conditions: tuple = ()


@dataclass(frozen=True)
class Leaf(PathNode):
    """沿方向行进的叶子节点"""
    direction: Vec = field(default_factory=Vec)


@dataclass(frozen=True)
class Branches(PathNode):
    """分支节点，结果取各分支的并集"""
    branches: tuple = ()


Branch = Union[PathNode, PieceReference]


@dataclass(frozen=True)
class PieceRule:
    """棋子规则：若干根路径的有序列表"""
    path_tree: tuple

    @classmethod
    def from_dict(cls, piece_id: str, data: Dict[str, Any]) -> 'PieceRule':
        """
        从字典(例如YAML内容)创建规则

        Args:
            piece_id: 棋子类型，仅用于错误信息
            data: {"path_tree": [节点, ...]}

        Returns:
            PieceRule: 规则对象
        """
        if not isinstance(data, dict) or 'path_tree' not in data:
            raise RuleDefinitionError(piece_id, "缺少 path_tree")
        tree = data['path_tree']
        if not isinstance(tree, list):
            raise RuleDefinitionError(piece_id, "path_tree 必须是列表")
        return cls(tuple(_node_from_dict(piece_id, node) for node in tree))


def _vec_from_value(piece_id: str, value) -> Vec:
    if isinstance(value, Vec):
        return value
    if isinstance(value, str):
        return Vec.deserialize(value)
    if isinstance(value, (list, tuple)) and len(value) <= 4:
        return Vec(*value)
    raise RuleDefinitionError(piece_id, f"无效的向量: {value!r}")


def _repeat_from_value(piece_id: str, value) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, str):
        if value.lower() in ('inf', 'infinity', 'unbounded'):
            return UNBOUNDED
        raise RuleDefinitionError(piece_id, f"无效的 repeat: {value!r}")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise RuleDefinitionError(piece_id, f"无效的 repeat: {value!r}")
    return value


def _int_from_value(piece_id: str, name: str, value) -> Optional[int]:
    """可选的整数字段(attack/team/flag)"""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise RuleDefinitionError(piece_id, f"{name} 必须是整数: {value!r}")
    return value


def _condition_from_dict(piece_id: str, data: Dict[str, Any]) -> Condition:
    if not isinstance(data, dict):
        raise RuleDefinitionError(piece_id, f"无效的条件: {data!r}")
    return Condition(
        team=_int_from_value(piece_id, 'team', data.get('team')),
        flag=_int_from_value(piece_id, 'flag', data.get('flag')),
        piece=_vec_from_value(piece_id, data['piece']) if 'piece' in data else None,
        enemy=_vec_from_value(piece_id, data['enemy']) if 'enemy' in data else None,
        inverted=bool(data.get('inverted', False))
    )


def _node_from_dict(piece_id: str, data) -> Branch:
    if isinstance(data, str):
        return PieceReference(data.upper())
    if not isinstance(data, dict):
        raise RuleDefinitionError(piece_id, f"无效的路径节点: {data!r}")

    common = dict(
        repeat=_repeat_from_value(piece_id, data.get('repeat')),
        attack=_int_from_value(piece_id, 'attack', data.get('attack')),
        conditions=tuple(_condition_from_dict(piece_id, c)
                         for c in data.get('conditions', ()))
    )
    if 'direction' in data:
        return Leaf(direction=_vec_from_value(piece_id, data['direction']), **common)
    if 'branches' in data:
        return Branches(
            branches=tuple(_node_from_dict(piece_id, b) for b in data['branches']),
            **common
        )
    return PathNode(**common)


def load_rules_file(path: Union[str, Path]) -> Dict[str, PieceRule]:
    """
    从YAML文件加载自定义规则

    文件格式: {棋子类型: {path_tree: [...]}, ...}

    Args:
        path: 规则文件路径

    Returns:
        Dict[str, PieceRule]: 棋子类型 -> 规则
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise RuleDefinitionError(str(path), "规则文件顶层必须是映射")

    rules = {str(pid).upper(): PieceRule.from_dict(str(pid), rule)
             for pid, rule in data.items()}
    logger.info(f"从 {path} 加载了 {len(rules)} 条自定义规则")
    return rules


# ==================== 内置规则 ====================

def _leaves(directions: Iterable[tuple]) -> tuple:
    return tuple(Leaf(direction=Vec(*d)) for d in directions)


def _axis_pairs():
    return [(a, b) for a in range(4) for b in range(a + 1, 4)]


def _unit(axis_values: Dict[int, int]) -> tuple:
    values = [0, 0, 0, 0]
    for axis, value in axis_values.items():
        values[axis] = value
    return tuple(values)


def _rook_directions() -> List[tuple]:
    return [_unit({axis: sign}) for axis in range(4) for sign in (1, -1)]


def _bishop_directions() -> List[tuple]:
    return [_unit({a: sa, b: sb})
            for a, b in _axis_pairs()
            for sa in (1, -1) for sb in (1, -1)]


def _knight_directions() -> List[tuple]:
    directions = []
    for a, b in _axis_pairs():
        for sb in (1, -1):
            for sa in (1, -1):
                directions.append(_unit({a: 2 * sa, b: sb}))
                directions.append(_unit({a: sa, b: 2 * sb}))
    return directions


def _pawn_tree(team: int, forward: int) -> Branches:
    """单方兵的规则: forward 为 y/w 轴前进方向"""
    return Branches(
        repeat=1,
        conditions=(Condition(team=team),),
        branches=(
            Leaf(direction=Vec(0, forward), attack=0),
            Leaf(direction=Vec(0, 0, 0, forward), attack=0),
            Leaf(direction=Vec(1, forward), attack=1,
                 conditions=(Condition(enemy=Vec()),)),
            Leaf(direction=Vec(-1, forward), attack=1,
                 conditions=(Condition(enemy=Vec()),)),
            # 首步两格，中间格必须为空
            Leaf(direction=Vec(0, 2 * forward), attack=0,
                 conditions=(Condition(flag=FLAG_FIRST_MOVE),
                             Condition(piece=Vec(0, -forward), inverted=True))),
            Leaf(direction=Vec(1, forward), attack=1,
                 conditions=(Condition(flag=FLAG_CASTLE_LEFT),)),
            Leaf(direction=Vec(-1, forward), attack=1,
                 conditions=(Condition(flag=FLAG_CASTLE_RIGHT),)),
        )
    )


def build_default_rules() -> Dict[str, PieceRule]:
    """
    构建内置棋子规则 (R, B, Q, N, P, K)

    Returns:
        Dict[str, PieceRule]: 棋子类型 -> 规则
    """
    rook = PieceRule((Branches(repeat=UNBOUNDED, attack=1,
                               branches=_leaves(_rook_directions())),))
    bishop = PieceRule((Branches(repeat=UNBOUNDED, attack=1,
                                 branches=_leaves(_bishop_directions())),))
    queen = PieceRule((Branches(branches=(PieceReference('R'), PieceReference('B'))),))
    knight = PieceRule((Branches(repeat=1, attack=1,
                                 branches=_leaves(_knight_directions())),))
    pawn = PieceRule((_pawn_tree(0, 1), _pawn_tree(1, -1)))
    king = PieceRule((Branches(repeat=1, attack=1, branches=(PieceReference('Q'),)),))

    return {'R': rook, 'B': bishop, 'Q': queen, 'N': knight, 'P': pawn, 'K': king}


class RuleDictionary:
    """
    规则字典

    内置规则加上显式的自定义扩展表；同名自定义规则覆盖内置规则。
    构造后不再修改。
    """

    def __init__(self, custom_rules: Optional[Dict[str, PieceRule]] = None):
        self._builtin = build_default_rules()
        self._custom: Dict[str, PieceRule] = {}

        for piece_id, rule in (custom_rules or {}).items():
            if isinstance(rule, dict):
                rule = PieceRule.from_dict(piece_id, rule)
            if not isinstance(rule, PieceRule):
                raise RuleDefinitionError(piece_id, f"不支持的规则类型: {type(rule).__name__}")
            self._custom[piece_id.upper()] = rule

        if self._custom:
            logger.debug(f"合并自定义规则: {sorted(self._custom)}")

    def get(self, piece_id: str) -> PieceRule:
        """
        获取棋子规则

        Raises:
            MissingRuleError: 没有该棋子类型的规则
        """
        rule = self._custom.get(piece_id)
        if rule is None:
            rule = self._builtin.get(piece_id)
        if rule is None:
            raise MissingRuleError(piece_id)
        return rule

    def __contains__(self, piece_id: str) -> bool:
        return piece_id in self._custom or piece_id in self._builtin

    def piece_ids(self) -> List[str]:
        return sorted(set(self._builtin) | set(self._custom))

    def is_custom(self, piece_id: str) -> bool:
        return piece_id in self._custom
