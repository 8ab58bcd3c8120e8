"""
对局接口

HikaGame 将布局解析、棋盘、规则字典、规则引擎和走法缓存组合在一起，
提供查询和修改棋局的统一入口。
"""

from typing import Callable, Dict, Iterator, List, Optional, Tuple

from .rules_engine import (
    Vec, Move, Piece, PieceVec, PieceRule, RuleDictionary, RuleEngine,
    GameBoard, MoveCache, BoardValidator, parse_layout, to_layout, load_rules_file
)
from .config import EngineConfig
from .utils.logger import LoggerMixin


class HikaGame(LoggerMixin):
    """
    多维棋局

    构造后棋盘、占位索引和规则字典就地修改，不会重建。
    所有修改入口都会清空走法缓存。
    """

    def __init__(self, layout: Optional[str] = None,
                 custom_rules: Optional[Dict[str, PieceRule]] = None,
                 config: Optional[EngineConfig] = None):
        """
        初始化棋局

        Args:
            layout: 布局字符串，None表示使用配置中的默认布局
            custom_rules: 自定义棋子规则，覆盖同名内置规则
            config: 引擎配置
        """
        self.config = config or EngineConfig()

        rules = {}
        if self.config.custom_rules_file:
            rules.update(load_rules_file(self.config.custom_rules_file))
        rules.update(custom_rules or {})

        self.rules = RuleDictionary(rules)
        self.engine = RuleEngine(self.rules, self.config.royal_piece_ids)
        self.cache = MoveCache(enabled=self.config.enable_move_cache)

        layout = layout if layout is not None else self.config.default_layout
        size, placements = parse_layout(layout)
        self.board = GameBoard.from_placements(size, placements, self.cache)

        self.log_debug(f"创建棋局: 尺寸 {size.serialize()}, 棋子 {len(placements)} 个")

    # ==================== 棋盘访问 ====================

    def get_size(self) -> Vec:
        return self.board.size

    def is_in_bounds(self, pos: Vec) -> bool:
        return self.board.is_in_bounds(pos)

    def get_piece(self, pos: Vec) -> Optional[Piece]:
        return self.board.get_piece(pos)

    def set_piece(self, pos: Vec, piece: Optional[Piece] = None) -> Optional[Piece]:
        """放置或移除棋子，返回原来的棋子"""
        return self.board.set_piece(pos, piece)

    def move(self, move: Move) -> Optional[Piece]:
        """无条件执行走法，返回被吃掉的棋子"""
        return self.board.move(move)

    def get_pois(self) -> List[PieceVec]:
        """所有有棋子的格子(副本)"""
        return self.board.get_pois()

    def get_teams(self) -> List[int]:
        return self.board.teams()

    def iter_cells(self) -> Iterator[Tuple[Vec, Optional[Piece]]]:
        return self.board.iter_cells()

    def for_each_cell(self, fn: Callable[[Vec, Optional[Piece]], None]):
        """按 w -> z -> y -> x 顺序对每个格子调用fn"""
        self.board.for_each_cell(fn)

    def to_layout(self) -> str:
        return to_layout(self.board)

    # ==================== 走法查询 ====================

    def get_moves(self, pos: Vec, king_check: bool = True) -> List[Move]:
        """
        获取指定位置棋子的走法

        Args:
            pos: 棋子位置
            king_check: 是否过滤会让己方王被吃的走法

        Returns:
            List[Move]: 走法列表，空格子返回空列表

        Raises:
            OutOfBoundsError: 坐标越界
            MissingRuleError: 该棋子类型没有规则
        """
        piece = self.board.get_piece(pos)
        if piece is None:
            return []

        if king_check:
            cached = self.cache.get(pos)
            if cached is not None:
                return cached

        moves = self.engine.generate_piece_moves(self.board, pos)

        if king_check:
            moves = self.engine.filter_legal(self.board, moves, piece.team)
            self.cache.store(pos, moves)

        return moves

    def get_moves_for_team(self, team: int, king_check: bool = True) -> List[Move]:
        """
        获取指定队伍的全部走法

        Args:
            team: 队伍
            king_check: 是否进行将军检测

        Returns:
            List[Move]: 走法列表
        """
        moves = []
        for poi in self.board.get_pois():
            if poi.piece.team == team:
                moves.extend(self.get_moves(poi.pos, king_check))
        return moves

    def is_valid_move(self, move: Move, king_check: bool = True) -> bool:
        """
        检查走法是否合法

        越界的走法视为非法，不抛出异常。
        """
        if not (self.board.is_in_bounds(move.src) and self.board.is_in_bounds(move.dst)):
            return False
        return move in self.get_moves(move.src, king_check)

    def move_if_valid(self, move: Move) -> Tuple[bool, Optional[Piece]]:
        """
        仅当走法合法时执行

        Returns:
            Tuple[bool, Optional[Piece]]: (是否执行, 被吃掉的棋子)
        """
        if not self.is_valid_move(move):
            self.log_debug(f"拒绝非法走法: {move.serialize()}")
            return False, None
        return True, self.board.move(move)

    def puts_king_in_check(self, move: Move, team: int) -> bool:
        """检查走法是否会让指定队伍的王可被吃"""
        return self.engine.puts_king_in_check(self.board, move, team)

    # ==================== 验证 ====================

    def validate(self) -> Tuple[bool, List[str]]:
        """验证棋盘与占位索引的一致性"""
        return BoardValidator(self.config.royal_piece_ids).full_validation(self.board)
