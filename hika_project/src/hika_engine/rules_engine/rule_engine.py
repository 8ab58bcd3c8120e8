"""
走法规则引擎

解释声明式路径树生成候选走法，并过滤掉会让己方王被吃的走法。
"""

from typing import FrozenSet, Iterable, List, Optional

from .vec import Vec
from .move import Move
from .piece import Piece
from .game_board import GameBoard
from .path_rules import (
    RuleDictionary, PathNode, Leaf, Branches, PieceReference, Condition
)
from ..utils.logger import LoggerMixin


class RuleEngine(LoggerMixin):
    """
    规则引擎

    负责候选走法生成(路径求值)和将军检测。不持有棋盘状态。
    """

    def __init__(self, rules: Optional[RuleDictionary] = None,
                 royal_piece_ids: Iterable[str] = ('K',)):
        """
        初始化规则引擎

        Args:
            rules: 规则字典，None表示只用内置规则
            royal_piece_ids: 被吃即负的棋子类型
        """
        self.rules = rules if rules is not None else RuleDictionary()
        self.royal_piece_ids = frozenset(royal_piece_ids)

    # ==================== 候选走法生成 ====================

    def generate_piece_moves(self, board: GameBoard, pos: Vec) -> List[Move]:
        """
        生成指定位置棋子的所有候选走法(不做将军检测)

        Args:
            board: 当前棋盘
            pos: 棋子位置

        Returns:
            List[Move]: 候选走法，可能有重复

        Raises:
            MissingRuleError: 该棋子类型没有规则
        """
        piece = board.get_piece(pos)
        if piece is None:
            return []

        rule = self.rules.get(piece.id)
        expanding = frozenset((piece.id,))
        moves = []
        for root in rule.path_tree:
            moves.extend(self.evaluate_path(board, piece, pos, root, None, None, expanding))
        return moves

    def generate_team_moves(self, board: GameBoard, team: int) -> List[Move]:
        """生成指定队伍全部候选走法(不做将军检测)"""
        moves = []
        for poi in board.get_pois():
            if poi.piece.team == team:
                moves.extend(self.generate_piece_moves(board, poi.pos))
        return moves

    def evaluate_path(self, board: GameBoard, piece: Piece, pos: Vec, node,
                      repeat: Optional[float], attack: Optional[int],
                      expanding: FrozenSet[str]) -> List[Move]:
        """
        递归求值一个路径节点

        Args:
            board: 当前棋盘
            piece: 走子的棋子
            pos: 起点
            node: 路径节点或棋子引用
            repeat: 继承的步数上限，None表示尚未设定
            attack: 继承的吃子上限，None表示尚未设定
            expanding: 当前递归链上正在展开的棋子类型

        Returns:
            List[Move]: 该节点产生的候选走法
        """
        if isinstance(node, PieceReference):
            return self._evaluate_reference(board, piece, pos, node, repeat, attack, expanding)
        if not isinstance(node, PathNode):
            return []

        if not self._conditions_hold(board, piece, pos, node):
            return []

        # 外层先设定的预算不会被内层覆盖
        if repeat is None and node.repeat is not None and node.repeat >= 1:
            repeat = node.repeat
        if attack is None and node.attack is not None and node.attack >= 0:
            attack = node.attack

        if isinstance(node, Leaf):
            return self._walk_ray(board, piece, pos, node.direction, repeat, attack)

        if isinstance(node, Branches):
            moves = []
            for branch in node.branches:
                moves.extend(self.evaluate_path(board, piece, pos, branch,
                                                repeat, attack, expanding))
            return moves

        return []

    def _evaluate_reference(self, board, piece, pos, ref: PieceReference,
                            repeat, attack, expanding) -> List[Move]:
        # 引用自身或递归链上已展开的类型时不产生走法
        if ref.piece_id in expanding:
            return []

        rule = self.rules.get(ref.piece_id)
        expanding = expanding | {ref.piece_id}
        moves = []
        for root in rule.path_tree:
            moves.extend(self.evaluate_path(board, piece, pos, root, repeat, attack, expanding))
        return moves

    def _walk_ray(self, board: GameBoard, piece: Piece, pos: Vec, direction: Vec,
                  repeat: Optional[float], attack: Optional[int]) -> List[Move]:
        """沿方向逐步行进，遇己方棋子停止，遇敌方棋子视吃子预算记录后停止"""
        if repeat is None or attack is None:
            return []

        moves = []
        loc = pos
        captures = 0
        count = 0
        while count < repeat:
            count += 1
            loc = loc + direction
            if not board.is_in_bounds(loc):
                break

            target = board.get_piece(loc)
            if target is None:
                moves.append(Move(pos, loc))
                continue
            if target.team != piece.team and captures < attack:
                captures += 1
                moves.append(Move(pos, loc))
            break

        return moves

    def _conditions_hold(self, board: GameBoard, piece: Piece, pos: Vec,
                         node: PathNode) -> bool:
        """所有前置条件(各自取反后)都成立才返回True"""
        base = pos + node.direction if isinstance(node, Leaf) else pos
        for condition in node.conditions:
            result = self._test_condition(board, piece, base, condition)
            if condition.inverted:
                result = not result
            if not result:
                return False
        return True

    def _test_condition(self, board: GameBoard, piece: Piece, base: Vec,
                        condition: Condition) -> bool:
        if condition.team is not None and piece.team != condition.team:
            return False
        if condition.flag is not None and condition.flag not in piece.flags:
            return False

        if condition.piece is not None:
            loc = base + condition.piece
            if not board.is_in_bounds(loc) or board.get_piece(loc) is None:
                return False

        if condition.enemy is not None:
            loc = base + condition.enemy
            if not board.is_in_bounds(loc):
                return False
            target = board.get_piece(loc)
            if target is None or target.team == piece.team:
                return False

        return True

    # ==================== 将军检测 ====================

    def puts_king_in_check(self, board: GameBoard, move: Move, team: int) -> bool:
        """
        检查走法是否会让指定队伍的王处于可被吃的位置

        在实际棋盘上模拟走子，生成其他所有队伍的候选走法，
        然后无论结果如何(包括异常)都精确恢复棋盘。

        Args:
            board: 当前棋盘
            move: 要检查的走法
            team: 王所属的队伍

        Returns:
            bool: 走后己方王是否会被吃
        """
        if board.get_piece(move.src) is None:
            return False

        record = board.apply_undoable(move)
        try:
            kings = set(board.find_pieces(team, self.royal_piece_ids))
            if not kings:
                return False

            for opponent in board.teams():
                if opponent == team:
                    continue
                for reply in self.generate_team_moves(board, opponent):
                    if reply.dst in kings:
                        return True
            return False
        finally:
            board.undo(record)

    def filter_legal(self, board: GameBoard, moves: List[Move], team: int) -> List[Move]:
        """过滤掉会让己方王被吃的走法"""
        legal = [move for move in moves if not self.puts_king_in_check(board, move, team)]
        if len(legal) != len(moves):
            self.log_debug(f"将军检测过滤掉 {len(moves) - len(legal)} 个走法")
        return legal
